"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between the front end and the engine.

Error Codes:
- FETCH_FAILED: The film catalog could not be reached or returned bad data
- POOL_EXHAUSTED: Every film has been played; no new game is possible
- START_IN_PROGRESS: A new game is already being fetched
- VALIDATION_ERROR: Request body is invalid
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


class ErrorCode(str, Enum):
    """Structured error codes."""
    FETCH_FAILED = "FETCH_FAILED"
    POOL_EXHAUSTED = "POOL_EXHAUSTED"
    START_IN_PROGRESS = "START_IN_PROGRESS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class ActorSlot(BaseModel):
    """One of the five actor portraits. image_url is withheld until revealed."""
    slot: int = Field(ge=0, description="0-based reveal position")
    revealed: bool = False
    image_url: Optional[str] = None


class PosterSlot(BaseModel):
    """The film poster, shown on a win or after the last attempt."""
    revealed: bool = False
    image_url: Optional[str] = None


class TranscriptLine(BaseModel):
    """One line of the attempt transcript, e.g. "2. Inception - Correct!"."""
    index: int = Field(ge=1)
    text: str
    guess: str
    is_correct: bool = False


# =============================================================================
# Request Models
# =============================================================================

class GuessRequest(BaseModel):
    """A guess. Blank input counts as a pass."""
    guess: str = Field(default="", description="Film title; empty to pass")


# =============================================================================
# Response Models
# =============================================================================

class SessionResponse(BaseModel):
    """Everything the front end needs to draw the board."""
    status: SessionStatus
    attempts_used: int = 0
    attempts_remaining: int = 0
    max_attempts: int = 5
    transcript: list[TranscriptLine] = Field(default_factory=list)
    actors: list[ActorSlot] = Field(default_factory=list)
    poster: PosterSlot = Field(default_factory=PosterSlot)
    title: Optional[str] = Field(default=None, description="Set once the round is over")
    can_start_new_game: bool = True


class GuessResponse(BaseModel):
    """Result of a guess."""
    accepted: bool = Field(description="False when no round was in progress")
    attempt: Optional[TranscriptLine] = None
    session: SessionResponse


class SuggestionsResponse(BaseModel):
    """Guess auto-completion."""
    prefix: str
    suggestions: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    version: str
    selection_mode: str


class ErrorResponse(BaseModel):
    """Standardized error response."""
    error: str = Field(description="Human-readable error message")
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None
