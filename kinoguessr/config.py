"""
Configuration - Settings loaded from the environment or a `.env` file.

Every variable takes the ``KINOGUESSR_`` prefix, e.g.::

    KINOGUESSR_CATALOG_URL=http://catalog.internal:8000
    KINOGUESSR_SELECTION_MODE=unbounded
    KINOGUESSR_RANDOM_SEED=7
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .session.controller import SelectionMode


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="KINOGUESSR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Film catalog / name index service
    catalog_url: str = "http://localhost:8000"
    media_url: str | None = Field(
        default=None,
        description="Prefix for relative image paths; defaults to catalog_url",
    )
    request_timeout: float = Field(default=10.0, gt=0)

    # Game
    selection_mode: SelectionMode = SelectionMode.POOL
    random_seed: int | None = None
    suggestion_limit: int = Field(default=3, ge=0)
    guess_max_length: int = Field(default=40, gt=0)

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    allowed_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
