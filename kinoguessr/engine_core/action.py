"""
Action System - Session transitions as data.

Every change to a GameSession is one of three actions:
1. START a round with a fetched film
2. SUBMIT a guess
3. RESET a finished round
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state import Film, GameSession, GuessAttempt


class ActionType(Enum):
    """Types of session transitions."""
    START = "start"
    SUBMIT = "submit"
    RESET = "reset"


@dataclass
class ActionPayload:
    """Parameters for an action; which fields are set depends on the type."""
    film: Film | None = None  # START
    raw_input: str | None = None  # SUBMIT


@dataclass
class Action:
    """A transition to be applied by the reducer."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def start(cls, film: Film) -> Action:
        """Factory for starting a round."""
        return cls(action_type=ActionType.START, payload=ActionPayload(film=film))

    @classmethod
    def submit(cls, raw_input: str) -> Action:
        """Factory for a guess."""
        return cls(action_type=ActionType.SUBMIT, payload=ActionPayload(raw_input=raw_input))

    @classmethod
    def reset(cls) -> Action:
        """Factory for returning a finished round to idle."""
        return cls(action_type=ActionType.RESET)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    new_state is always set. When the action was ignored it is the
    input state, unchanged.
    """
    success: bool
    new_state: GameSession | None = None
    error: str | None = None
    error_code: str | None = None

    # For the presentation layer
    state_changes: list[str] = field(default_factory=list)  # Transcript lines added
    attempt: GuessAttempt | None = None  # Set for accepted guesses

    @property
    def ignored(self) -> bool:
        return not self.success and self.error_code == "INVALID_TRANSITION"

    @classmethod
    def ignore(cls, state: GameSession, reason: str) -> ActionResult:
        """The action does not apply in this phase; state is unchanged."""
        return cls(
            success=False,
            new_state=state,
            error=reason,
            error_code="INVALID_TRANSITION",
        )

    @classmethod
    def success_with_state(
        cls,
        state: GameSession,
        changes: list[str] | None = None,
        attempt: GuessAttempt | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            attempt=attempt,
        )
