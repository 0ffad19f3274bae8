"""
API Module - Front-end interface.

Exposes the game via REST API. The front end:
1. Loads the board (GET /session)
2. Starts a game
3. Submits guesses, using suggestions while typing
4. Resets when the round is over

There is exactly one session per running app.
"""

from .schemas import (
    # Requests
    GuessRequest,
    # Responses
    SessionResponse,
    GuessResponse,
    SuggestionsResponse,
    HealthResponse,
    ErrorResponse,
    # Shared
    ActorSlot,
    PosterSlot,
    TranscriptLine,
    SessionStatus,
    ErrorCode,
)
from .service import APIService
from .app import create_app, build_service

__all__ = [
    # Requests
    "GuessRequest",
    # Responses
    "SessionResponse",
    "GuessResponse",
    "SuggestionsResponse",
    "HealthResponse",
    "ErrorResponse",
    # Shared
    "ActorSlot",
    "PosterSlot",
    "TranscriptLine",
    "SessionStatus",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
    "build_service",
]
