"""
FastAPI Application - REST API for the game front end.

Endpoints:
    GET    /api/v1/health               Health check
    GET    /api/v1/session              Current board
    POST   /api/v1/session/start        Start a new game
    POST   /api/v1/session/guess        Submit a guess
    POST   /api/v1/session/reset        Clear a finished game
    GET    /api/v1/suggestions          Title auto-completion

Requests that arrive in the wrong phase (a guess before the game starts,
a reset mid-round) are ignored and answered with the unchanged board.

Run with:
    uvicorn kinoguessr.api.app:create_app --factory
"""

from __future__ import annotations

import logging
import random
from contextlib import asynccontextmanager
from typing import Annotated, Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..catalog import HttpFilmCatalog
from ..config import Settings, get_settings
from ..errors import FetchFailure, KinoGuessrError, PoolExhausted, StartInProgress
from ..session import SessionController
from .schemas import (
    ErrorCode,
    ErrorResponse,
    GuessRequest,
    GuessResponse,
    HealthResponse,
    SessionResponse,
    SuggestionsResponse,
)
from .service import APIService

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    FetchFailure: 502,
    PoolExhausted: 409,
    StartInProgress: 409,
}


def build_service(settings: Settings) -> APIService:
    """Wire an HTTP catalog and controller from settings."""
    catalog = HttpFilmCatalog(
        settings.catalog_url,
        media_url=settings.media_url,
        timeout=settings.request_timeout,
    )
    controller = SessionController(
        catalog,
        mode=settings.selection_mode,
        rng=random.Random(settings.random_seed),
        suggestion_limit=settings.suggestion_limit,
    )
    return APIService(controller=controller)


def create_app(service: APIService | None = None, settings: Settings | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService (built from settings if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    settings = settings or get_settings()
    api_service = service or build_service(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Names and pool are fetched up front; later requests retry either load
        try:
            await api_service.load()
        except FetchFailure as exc:
            logger.warning("Initial catalog load failed: %s", exc)
        yield
        await api_service.controller.catalog.aclose()

    app = FastAPI(
        title="KinoGuessr API",
        description="Guess the film from its cast. Five attempts, one poster.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(KinoGuessrError)
    async def handle_game_error(request: Request, exc: KinoGuessrError) -> JSONResponse:
        details = None
        if isinstance(exc, FetchFailure):
            details = {"operation": exc.operation}
        return make_error_response(
            ErrorCode(exc.error_code),
            str(exc),
            status_code=ERROR_STATUS.get(type(exc), 500),
            details=details,
        )

    # =========================================================================
    # Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health() -> HealthResponse:
        return HealthResponse(
            version=__version__,
            selection_mode=api_service.controller.mode.value,
        )

    @app.get(
        "/api/v1/session",
        response_model=SessionResponse,
        tags=["Session"],
        summary="Get the current board",
    )
    async def get_session() -> SessionResponse:
        return api_service.get_session()

    @app.post(
        "/api/v1/session/start",
        response_model=SessionResponse,
        responses={
            409: {"model": ErrorResponse, "description": "No films left, or start already pending"},
            502: {"model": ErrorResponse, "description": "Film catalog unavailable"},
        },
        tags=["Session"],
        summary="Start a new game",
    )
    async def start_game() -> SessionResponse:
        """
        Fetch a film and start a round.

        Ignored if a round is already in progress or finished but not reset.
        """
        return await api_service.start()

    @app.post(
        "/api/v1/session/guess",
        response_model=GuessResponse,
        responses={422: {"model": ErrorResponse, "description": "Guess too long"}},
        tags=["Session"],
        summary="Submit a guess",
    )
    async def submit_guess(body: GuessRequest):
        """Submit a guess. An empty guess is logged as a pass."""
        if len(body.guess) > settings.guess_max_length:
            return make_error_response(
                ErrorCode.VALIDATION_ERROR,
                f"Guess longer than {settings.guess_max_length} characters",
                status_code=422,
            )
        return api_service.guess(body.guess)

    @app.post(
        "/api/v1/session/reset",
        response_model=SessionResponse,
        tags=["Session"],
        summary="Clear a finished game",
    )
    async def reset_game() -> SessionResponse:
        return api_service.reset()

    @app.get(
        "/api/v1/suggestions",
        response_model=SuggestionsResponse,
        tags=["Session"],
        summary="Title auto-completion",
    )
    async def suggestions(
        prefix: Annotated[str, Query(description="Start of a film title")] = "",
    ) -> SuggestionsResponse:
        return await api_service.suggestions(prefix)

    return app
