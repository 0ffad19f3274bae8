"""
Tests for API layer.

Tests:
- Session lifecycle via HTTP
- Board view (reveal policy, title withheld until the end)
- Error responses
- Suggestions
"""

import asyncio
import random

import httpx
import pytest
from fastapi.testclient import TestClient

from ..api import APIService, create_app
from ..api.schemas import SessionStatus
from ..catalog import InMemoryFilmCatalog
from ..config import Settings
from ..session import SessionController, SelectionMode


@pytest.fixture
def settings():
    return Settings(catalog_url="http://catalog.test", guess_max_length=40)


def build_client(catalog, settings, mode=SelectionMode.POOL):
    controller = SessionController(catalog, mode=mode, rng=random.Random(0))
    app = create_app(service=APIService(controller=controller), settings=settings)
    return TestClient(app)


class HeldCatalog(InMemoryFilmCatalog):
    """Holds get_film_details until released."""

    def __init__(self, films):
        super().__init__(films)
        self.release = asyncio.Event()

    async def get_film_details(self, film_id):
        await self.release.wait()
        return await super().get_film_details(film_id)


@pytest.fixture
def client(inception, settings):
    catalog = InMemoryFilmCatalog({"1": inception}, extra_names=["Interstellar"])
    with build_client(catalog, settings) as test_client:
        yield test_client


class TestSessionEndpoints:
    """Tests for start / guess / reset."""

    def test_initial_board_is_idle(self, client):
        data = client.get("/api/v1/session").json()

        assert data["status"] == SessionStatus.IDLE.value
        assert data["attempts_remaining"] == 0
        assert [a["revealed"] for a in data["actors"]] == [False] * 5
        assert data["poster"] == {"revealed": False, "image_url": None}
        assert data["can_start_new_game"] is True

    def test_start_reveals_first_actor_only(self, client):
        response = client.post("/api/v1/session/start")
        data = response.json()

        assert response.status_code == 200
        assert data["status"] == "in_progress"
        assert data["attempts_remaining"] == 5
        assert [a["revealed"] for a in data["actors"]] == [True, False, False, False, False]
        assert data["actors"][0]["image_url"].startswith("/media/inception/")
        assert data["actors"][1]["image_url"] is None
        assert data["title"] is None

    def test_win_in_two(self, client):
        client.post("/api/v1/session/start")
        first = client.post("/api/v1/session/guess", json={"guess": "incept"}).json()
        second = client.post("/api/v1/session/guess", json={"guess": "Inception"}).json()

        assert first["accepted"] is True
        assert first["attempt"]["text"] == "1. Incept"
        assert second["attempt"]["text"] == "2. Inception - Correct!"

        board = second["session"]
        assert board["status"] == "won"
        assert [line["text"] for line in board["transcript"]] == [
            "1. Incept",
            "2. Inception - Correct!",
        ]
        assert all(a["revealed"] for a in board["actors"])
        assert board["poster"]["image_url"] == "/media/inception/poster.jpg"
        assert board["title"] == "Inception"
        # Only film in the pool has been used
        assert board["can_start_new_game"] is False

    def test_pass_and_loss(self, client):
        client.post("/api/v1/session/start")
        for _ in range(5):
            response = client.post("/api/v1/session/guess", json={"guess": ""})

        board = response.json()["session"]
        assert board["status"] == "lost"
        assert board["transcript"][0]["guess"] == "*Pass*"
        assert board["poster"]["revealed"] is True

        sixth = client.post("/api/v1/session/guess", json={"guess": "Inception"}).json()
        assert sixth["accepted"] is False
        assert sixth["attempt"] is None
        assert sixth["session"]["attempts_used"] == 5

    def test_guess_before_start_ignored(self, client):
        data = client.post("/api/v1/session/guess", json={"guess": "Inception"}).json()

        assert data["accepted"] is False
        assert data["session"]["status"] == "idle"

    def test_reset_after_finish(self, client):
        client.post("/api/v1/session/start")
        client.post("/api/v1/session/guess", json={"guess": "inception"})

        first = client.post("/api/v1/session/reset").json()
        second = client.post("/api/v1/session/reset").json()

        assert first == second
        assert first["status"] == "idle"
        assert first["transcript"] == []

    def test_guess_too_long(self, client):
        client.post("/api/v1/session/start")
        response = client.post("/api/v1/session/guess", json={"guess": "x" * 41})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        assert client.get("/api/v1/session").json()["attempts_used"] == 0


class TestErrors:
    """Controller errors become structured responses."""

    def test_pool_exhausted(self, client):
        client.post("/api/v1/session/start")
        client.post("/api/v1/session/guess", json={"guess": "inception"})
        client.post("/api/v1/session/reset")

        response = client.post("/api/v1/session/start")

        assert response.status_code == 409
        assert response.json()["error_code"] == "POOL_EXHAUSTED"

    def test_fetch_failure(self, inception, settings):
        catalog = InMemoryFilmCatalog({"1": inception}, unavailable={"1"})
        with build_client(catalog, settings, mode=SelectionMode.UNBOUNDED) as client:
            response = client.post("/api/v1/session/start")

            assert response.status_code == 502
            body = response.json()
            assert body["error_code"] == "FETCH_FAILED"
            assert body["details"] == {"operation": "get_random_film"}
            assert client.get("/api/v1/session").json()["status"] == "idle"

    @pytest.mark.asyncio
    async def test_start_in_progress(self, films, settings):
        catalog = HeldCatalog(films)
        controller = SessionController(catalog, rng=random.Random(0))
        app = create_app(service=APIService(controller=controller), settings=settings)
        transport = httpx.ASGITransport(app=app)

        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            first = asyncio.create_task(client.post("/api/v1/session/start"))
            for _ in range(100):
                if controller.is_starting:
                    break
                await asyncio.sleep(0)
            assert controller.is_starting

            second = await client.post("/api/v1/session/start")
            assert second.status_code == 409
            assert second.json()["error_code"] == "START_IN_PROGRESS"

            catalog.release.set()
            response = await first

        assert response.status_code == 200
        assert response.json()["status"] == "in_progress"
        assert len(catalog.requested) == 1


class TestMiscEndpoints:
    """Health and suggestions."""

    def test_health(self, client):
        data = client.get("/api/v1/health").json()
        assert data["status"] == "ok"
        assert data["selection_mode"] == "pool"

    def test_suggestions(self, client):
        data = client.get("/api/v1/suggestions", params={"prefix": "in"}).json()
        assert data == {"prefix": "in", "suggestions": ["Inception", "Interstellar"]}

    def test_suggestions_empty_prefix(self, client):
        data = client.get("/api/v1/suggestions").json()
        assert data["suggestions"] == []
