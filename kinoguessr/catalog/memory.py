"""
In-memory film catalog.

Serves a fixed set of films, for embedding the game without a catalog
service and for tests. Individual films can be marked unavailable to
simulate catalog failures.
"""

from __future__ import annotations
import random

from ..engine_core.state import Film
from ..errors import FetchFailure
from .base import FilmCatalog


class InMemoryFilmCatalog(FilmCatalog):
    """
    Catalog over a dict of film_id -> Film.

    Usage:
        catalog = InMemoryFilmCatalog({"1": Film(...), "2": Film(...)})
        film = await catalog.get_film_details("1")
    """

    def __init__(
        self,
        films: dict[str, Film],
        extra_names: list[str] | None = None,
        unavailable: set[str] | None = None,
        rng: random.Random | None = None,
    ):
        self.films = dict(films)
        self.extra_names = list(extra_names or [])
        self.unavailable = set(unavailable or ())
        self.rng = rng or random.Random()
        self.requested: list[str] = []

    async def list_film_names(self) -> list[str]:
        names = [film.title for film in self.films.values()]
        return names + [n for n in self.extra_names if n not in names]

    async def list_film_identifiers(self) -> list[str]:
        return list(self.films)

    async def get_film_details(self, film_id: str) -> Film:
        self.requested.append(film_id)
        if film_id in self.unavailable:
            raise FetchFailure("get_film_details", f"film {film_id} unavailable")
        film = self.films.get(film_id)
        if film is None:
            raise FetchFailure("get_film_details", f"film {film_id} not found")
        return film

    async def get_random_film(self) -> Film:
        available = [fid for fid in self.films if fid not in self.unavailable]
        if not available:
            raise FetchFailure("get_random_film", "no films available")
        return await self.get_film_details(self.rng.choice(available))
