"""
Reducer - Applies actions to a game session.

The reducer is the single point of state change.
All transitions must go through apply_action().

Design principles:
- Pure function: (session, action) -> ActionResult
- Actions that don't apply in the current phase are ignored, not raised:
  late or duplicate UI events must never break a round
- Terminal sessions accept nothing but RESET
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import GameSession, GuessAttempt, SessionPhase, MAX_ATTEMPTS
from .action import Action, ActionType, ActionResult
from .matching import normalize_guess, is_match


@dataclass
class Reducer:
    """
    Reducer applies actions to game sessions.

    Stateless - all state is in GameSession.
    """

    def apply(self, state: GameSession, action: Action) -> ActionResult:
        """
        Apply an action to the session.

        Returns ActionResult with the new state, or the unchanged
        state if the action was ignored.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            return ActionResult.ignore(state, validation_error)

        handler = self._get_handler(action.action_type)
        return handler(state, action)

    def _validate_action(self, state: GameSession, action: Action) -> str | None:
        """
        Check the action is accepted in the current phase.

        Returns a reason if not, None if it is.
        """
        if action.action_type == ActionType.START:
            if state.phase != SessionPhase.IDLE:
                return f"Cannot start a game while {state.phase.value}"
            if action.payload.film is None:
                return "Start requires a film"

        elif action.action_type == ActionType.SUBMIT:
            if state.phase != SessionPhase.IN_PROGRESS:
                return f"Cannot guess while {state.phase.value}"
            if action.payload.raw_input is None:
                return "Submit requires input"

        elif action.action_type == ActionType.RESET:
            if not state.is_terminal:
                return f"Cannot reset while {state.phase.value}"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.START: self._handle_start,
            ActionType.SUBMIT: self._handle_submit,
            ActionType.RESET: self._handle_reset,
        }
        return handlers[action_type]

    def _handle_start(self, state: GameSession, action: Action) -> ActionResult:
        new_state = GameSession(
            phase=SessionPhase.IN_PROGRESS,
            target_film=action.payload.film,
            attempts=(),
        )
        return ActionResult.success_with_state(new_state)

    def _handle_submit(self, state: GameSession, action: Action) -> ActionResult:
        """Log the guess, then decide whether the round is over."""
        raw_input = action.payload.raw_input
        normalized = normalize_guess(raw_input)
        correct = is_match(normalized, state.target_film.title)

        attempt = GuessAttempt(
            index=state.attempts_count + 1,
            raw_input=raw_input,
            normalized_guess=normalized,
            is_correct=correct,
        )
        attempts = state.attempts + (attempt,)

        if correct:
            phase = SessionPhase.WON
        elif len(attempts) == MAX_ATTEMPTS:
            phase = SessionPhase.LOST
        else:
            phase = SessionPhase.IN_PROGRESS

        new_state = state._copy_with(phase=phase, attempts=attempts)
        return ActionResult.success_with_state(
            new_state,
            changes=[attempt.transcript_line],
            attempt=attempt,
        )

    def _handle_reset(self, state: GameSession, action: Action) -> ActionResult:
        return ActionResult.success_with_state(GameSession())


def apply_action(state: GameSession, action: Action) -> ActionResult:
    """Convenience function to apply an action."""
    return Reducer().apply(state, action)
