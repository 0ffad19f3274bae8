"""HTTP film catalog backed by the catalog web service."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from ..engine_core.state import ACTOR_SLOTS, Film
from ..errors import FetchFailure
from .base import FilmCatalog

logger = logging.getLogger(__name__)

FILM_NAMES_PATH = "/api/get_film_names/"
FILM_INDEXES_PATH = "/api/get_film_indexes/"
FILM_DETAILS_PATH = "/api/get_film_details/{film_id}"
RANDOM_FILM_PATH = "/api/get_random_film/"

_names_adapter = TypeAdapter(list[str])
_identifiers_adapter = TypeAdapter(list[int | str])


class FilmPayload(BaseModel):
    """Film details as served by the catalog. Image paths are relative."""

    title: str = Field(min_length=1)
    actors: list[str] = Field(min_length=ACTOR_SLOTS, max_length=ACTOR_SLOTS)
    poster: str = Field(min_length=1)
    id: int | str | None = None

    @field_validator("actors")
    @classmethod
    def _no_blank_actors(cls, value: list[str]) -> list[str]:
        if any(not path for path in value):
            raise ValueError("actor image path must not be empty")
        return value


class HttpFilmCatalog(FilmCatalog):
    """
    Film catalog over HTTP.

    Usage::

        async with HttpFilmCatalog("http://localhost:8000") as catalog:
            film = await catalog.get_film_details("42")
    """

    def __init__(
        self,
        base_url: str,
        *,
        media_url: str | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.media_url = (media_url or base_url).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def __aenter__(self) -> HttpFilmCatalog:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def list_film_names(self) -> list[str]:
        data = await self._get_json("list_film_names", FILM_NAMES_PATH)
        try:
            return _names_adapter.validate_python(data)
        except ValidationError as exc:
            raise FetchFailure("list_film_names", f"malformed response: {exc}") from exc

    async def list_film_identifiers(self) -> list[str]:
        data = await self._get_json("list_film_identifiers", FILM_INDEXES_PATH)
        try:
            identifiers = _identifiers_adapter.validate_python(data)
        except ValidationError as exc:
            raise FetchFailure("list_film_identifiers", f"malformed response: {exc}") from exc
        return [str(identifier) for identifier in identifiers]

    async def get_film_details(self, film_id: str) -> Film:
        path = FILM_DETAILS_PATH.format(film_id=film_id)
        data = await self._get_json("get_film_details", path)
        return self._to_film("get_film_details", data, film_id=film_id)

    async def get_random_film(self) -> Film:
        data = await self._get_json("get_random_film", RANDOM_FILM_PATH)
        return self._to_film("get_random_film", data)

    async def _get_json(self, operation: str, path: str) -> Any:
        try:
            response = await self._client.get(path)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            logger.warning("Catalog request %s failed: %s", path, exc)
            raise FetchFailure(operation, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            logger.warning("Catalog returned invalid JSON for %s", path)
            raise FetchFailure(operation, "invalid JSON") from exc

    def _to_film(self, operation: str, data: Any, film_id: str | None = None) -> Film:
        try:
            payload = FilmPayload.model_validate(data)
        except ValidationError as exc:
            logger.warning("Catalog returned an incomplete film record: %s", exc)
            raise FetchFailure(operation, f"incomplete film record: {exc}") from exc

        if film_id is None and payload.id is not None:
            film_id = str(payload.id)
        return Film(
            title=payload.title,
            actor_images=tuple(self._media(path) for path in payload.actors),
            poster_image=self._media(payload.poster),
            film_id=film_id,
        )

    def _media(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        if not path.startswith("/"):
            path = "/" + path
        return self.media_url + path
