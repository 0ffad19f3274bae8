"""
Film Catalog - Interface to the external film and name services.

Implementations:
- HttpFilmCatalog: talks to the catalog web service
- InMemoryFilmCatalog: fixed film list for demos and tests

Every method may fail. Failures are raised as FetchFailure and never
produce a partially built Film.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from ..engine_core.state import Film


class FilmCatalog(ABC):
    """Abstract base class for film catalogs."""

    @abstractmethod
    async def list_film_names(self) -> list[str]:
        """All valid titles, used for guess suggestions."""
        pass

    @abstractmethod
    async def list_film_identifiers(self) -> list[str]:
        """Identifiers of every film that can be an answer (pool mode)."""
        pass

    @abstractmethod
    async def get_film_details(self, film_id: str) -> Film:
        """Title, five actor images and poster for one film."""
        pass

    @abstractmethod
    async def get_random_film(self) -> Film:
        """One film chosen by the catalog (unbounded mode)."""
        pass

    async def aclose(self) -> None:
        """Release any held resources."""
        return None
