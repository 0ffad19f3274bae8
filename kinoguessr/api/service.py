"""
API Service - Business logic layer between API and engine.

The service:
1. Forwards start / guess / reset to the session controller
2. Turns the session into a board view (reveal policy applied)
3. Serves guess suggestions

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
Errors from the controller propagate unchanged.
"""

from __future__ import annotations
from dataclasses import dataclass

from .schemas import (
    ActorSlot,
    GuessResponse,
    PosterSlot,
    SessionResponse,
    SessionStatus,
    SuggestionsResponse,
    TranscriptLine,
)
from ..engine_core.reveal import reveal_state
from ..engine_core.state import ACTOR_SLOTS, MAX_ATTEMPTS, GameSession, GuessAttempt
from ..session import SessionController


@dataclass
class APIService:
    """
    Main API service for the front end.

    Usage:
        service = APIService(controller)
        await service.start()
        response = service.guess("inception")
    """
    controller: SessionController

    async def load(self) -> None:
        await self.controller.load()

    async def start(self) -> SessionResponse:
        await self.controller.start()
        return self.get_session()

    def guess(self, raw_input: str) -> GuessResponse:
        result = self.controller.guess(raw_input)
        return GuessResponse(
            accepted=result.success,
            attempt=_attempt_line(result.attempt) if result.attempt else None,
            session=self.get_session(),
        )

    def reset(self) -> SessionResponse:
        self.controller.reset()
        return self.get_session()

    def get_session(self) -> SessionResponse:
        return self._session_to_response(self.controller.session)

    async def suggestions(self, prefix: str) -> SuggestionsResponse:
        # Retries a name index that failed to load at startup
        await self.controller.load_names()
        return SuggestionsResponse(
            prefix=prefix,
            suggestions=self.controller.suggestions(prefix),
        )

    def _session_to_response(self, session: GameSession) -> SessionResponse:
        reveal = reveal_state(session)
        film = session.target_film

        actors = []
        for slot in range(ACTOR_SLOTS):
            revealed = reveal.actor_slots[slot]
            image_url = None
            if revealed and film:
                image_url = film.actor_images[slot]
            actors.append(ActorSlot(slot=slot, revealed=revealed, image_url=image_url))

        return SessionResponse(
            status=SessionStatus(session.phase.value),
            attempts_used=session.attempts_count,
            attempts_remaining=session.attempts_remaining,
            max_attempts=MAX_ATTEMPTS,
            transcript=[_attempt_line(a) for a in session.attempts],
            actors=actors,
            poster=PosterSlot(
                revealed=reveal.poster,
                image_url=film.poster_image if reveal.poster and film else None,
            ),
            title=film.title if film and session.is_terminal else None,
            can_start_new_game=self.controller.can_start_new_game,
        )


def _attempt_line(attempt: GuessAttempt) -> TranscriptLine:
    return TranscriptLine(
        index=attempt.index,
        text=attempt.transcript_line,
        guess=attempt.normalized_guess,
        is_correct=attempt.is_correct,
    )
