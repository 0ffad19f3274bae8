"""
Pytest fixtures for KinoGuessr tests.
"""

import random

import pytest

from ..catalog import InMemoryFilmCatalog
from ..engine_core.state import Film, GameSession
from ..engine_core.action import Action
from ..engine_core.reducer import apply_action
from ..session import SessionController, SelectionMode


def make_film(title: str, film_id: str | None = None) -> Film:
    """Film with five distinct actor images and a poster."""
    slug = title.lower().replace(" ", "_")
    return Film(
        title=title,
        actor_images=tuple(f"/media/{slug}/actor_{i}.jpg" for i in range(5)),
        poster_image=f"/media/{slug}/poster.jpg",
        film_id=film_id,
    )


@pytest.fixture
def inception() -> Film:
    return make_film("Inception", film_id="1")


@pytest.fixture
def films() -> dict[str, Film]:
    return {
        "1": make_film("Inception", "1"),
        "2": make_film("The Matrix", "2"),
        "3": make_film("X-men", "3"),
    }


@pytest.fixture
def idle_session() -> GameSession:
    return GameSession()


@pytest.fixture
def started_session(inception: Film) -> GameSession:
    """Session in progress with Inception as the target."""
    return apply_action(GameSession(), Action.start(inception)).new_state


@pytest.fixture
def catalog(films) -> InMemoryFilmCatalog:
    return InMemoryFilmCatalog(
        films,
        extra_names=["The Matrix Reloaded", "Interstellar"],
        rng=random.Random(1),
    )


@pytest.fixture
def pool_controller(catalog) -> SessionController:
    return SessionController(catalog, mode=SelectionMode.POOL, rng=random.Random(42))


@pytest.fixture
def unbounded_controller(catalog) -> SessionController:
    return SessionController(catalog, mode=SelectionMode.UNBOUNDED, rng=random.Random(42))
