"""
Catalog Module - External film data.

The game consumes two external services:
- Film Catalog: film identifiers, film details, random film
- Name Index: every valid title, for guess suggestions
"""

from .base import FilmCatalog
from .http import HttpFilmCatalog, FilmPayload
from .memory import InMemoryFilmCatalog

__all__ = [
    "FilmCatalog",
    "HttpFilmCatalog",
    "FilmPayload",
    "InMemoryFilmCatalog",
]
