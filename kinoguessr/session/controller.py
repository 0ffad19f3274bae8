"""
Session Controller - Runs rounds against the film catalog.

LIFECYCLE:
1. start() picks a target film:
   - POOL: draw an identifier from the answer pool (removed immediately),
     then fetch its details
   - UNBOUNDED: ask the catalog for a random film
   The actor order is shuffled, then the session moves to IN_PROGRESS.
2. guess() submits attempts until the round is WON or LOST
3. reset() returns a finished round to IDLE; the pool is untouched

CONCURRENCY:
- One session, one event loop. Only start() awaits.
- A second start() while the first is waiting on the catalog is rejected
  with StartInProgress, so an identifier is never drawn twice and a stale
  fetch can never overwrite a newer round.
- A failed fetch leaves the session IDLE and is re-raised to the caller.
  Incomplete film records count as failed fetches.
- Name and pool loads run once, behind a lock, and are retried after a
  failure. A loaded pool is never replaced.
"""

from __future__ import annotations

import asyncio
import logging
import random
from enum import Enum

from ..catalog.base import FilmCatalog
from ..engine_core.action import Action, ActionResult
from ..engine_core.reducer import Reducer
from ..engine_core.reveal import shuffle_actors
from ..engine_core.state import Film, GameSession, SessionPhase
from ..errors import FetchFailure, PoolExhausted, StartInProgress
from .pool import AnswerPool

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION_LIMIT = 3


class SelectionMode(str, Enum):
    """How start() chooses the target film."""
    POOL = "pool"  # Finite, shrinking set of identifiers
    UNBOUNDED = "unbounded"  # Independent random film every round


class SessionController:
    """
    Owns the single game session and sequences catalog calls around it.

    Usage:
        controller = SessionController(catalog, mode=SelectionMode.POOL)
        await controller.start()
        result = controller.guess("the matrix")
        if controller.session.is_terminal:
            controller.reset()
    """

    def __init__(
        self,
        catalog: FilmCatalog,
        mode: SelectionMode = SelectionMode.POOL,
        rng: random.Random | None = None,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
    ):
        self.catalog = catalog
        self.mode = SelectionMode(mode)
        self.rng = rng or random.Random()
        self.suggestion_limit = suggestion_limit

        self.pool: AnswerPool | None = None
        self.film_names: list[str] = []

        self._session = GameSession()
        self._reducer = Reducer()
        self._start_in_flight = False
        self._names_loaded = False
        self._names_lock = asyncio.Lock()
        self._pool_lock = asyncio.Lock()

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def is_starting(self) -> bool:
        """True while start() is waiting on the catalog."""
        return self._start_in_flight

    @property
    def can_start_new_game(self) -> bool:
        """False only once a loaded pool has run dry."""
        if self.mode == SelectionMode.UNBOUNDED:
            return True
        return self.pool is None or not self.pool.is_exhausted

    # =========================================================================
    # Catalog loads
    # =========================================================================

    async def load_names(self) -> list[str]:
        """
        Fetch the name index used for guess suggestions.

        Loaded once. A failed load leaves the index empty and is retried
        on the next call.
        """
        async with self._names_lock:
            if not self._names_loaded:
                self.film_names = await self.catalog.list_film_names()
                self._names_loaded = True
                logger.debug("Loaded %d film names", len(self.film_names))
        return self.film_names

    async def load_pool(self) -> AnswerPool:
        """Fetch the answer pool once; later calls return the same pool."""
        # Concurrent callers wait on the first load instead of refetching
        async with self._pool_lock:
            if self.pool is None:
                identifiers = await self.catalog.list_film_identifiers()
                self.pool = AnswerPool(identifiers)
                logger.info("Answer pool loaded with %d films", len(self.pool))
        return self.pool

    async def load(self) -> None:
        """
        One-time loads done when the game is first shown.

        Names and pool are loaded independently; the first failure is
        re-raised once both have been tried.
        """
        loads = [self.load_names()]
        if self.mode == SelectionMode.POOL:
            loads.append(self.load_pool())
        results = await asyncio.gather(*loads, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result

    # =========================================================================
    # Session operations
    # =========================================================================

    async def start(self) -> GameSession:
        """
        Start a new round.

        Ignored unless the session is IDLE.

        Raises:
            StartInProgress: another start() is waiting on the catalog
            PoolExhausted: pool mode and no identifiers remain
            FetchFailure: the catalog call failed; the session stays IDLE
        """
        if self._start_in_flight:
            raise StartInProgress()
        if self._session.phase != SessionPhase.IDLE:
            logger.debug("Ignoring start while %s", self._session.phase.value)
            return self._session

        self._start_in_flight = True
        try:
            film = await self._fetch_target()
        except FetchFailure as exc:
            logger.warning("Could not start a game: %s", exc)
            raise
        except PoolExhausted:
            logger.info("Answer pool exhausted, no more new games")
            raise
        finally:
            self._start_in_flight = False

        film = film.with_actor_order(shuffle_actors(film.actor_images, self.rng))
        self._dispatch(Action.start(film))
        logger.info("Game started (film %s)", film.film_id or "random")
        return self._session

    def guess(self, raw_input: str) -> ActionResult:
        """Submit a guess. Ignored unless a round is in progress."""
        return self._dispatch(Action.submit(raw_input))

    def reset(self) -> GameSession:
        """Return a finished round to IDLE. Does not touch the pool."""
        self._dispatch(Action.reset())
        return self._session

    def suggestions(self, prefix: str, limit: int | None = None) -> list[str]:
        """Names starting with prefix, case-insensitive, in index order."""
        if not prefix:
            return []
        limit = self.suggestion_limit if limit is None else limit
        needle = prefix.lower()
        return [name for name in self.film_names if name.lower().startswith(needle)][:limit]

    # =========================================================================
    # Internals
    # =========================================================================

    async def _fetch_target(self) -> Film:
        if self.mode == SelectionMode.UNBOUNDED:
            operation = "get_random_film"
            pending = self.catalog.get_random_film()
        else:
            pool = await self.load_pool()
            film_id = pool.draw(self.rng)
            logger.debug("Drew film %s, %d left in pool", film_id, len(pool))
            operation = "get_film_details"
            pending = self.catalog.get_film_details(film_id)

        # Film rejects partial records with ValueError
        try:
            return await pending
        except ValueError as exc:
            raise FetchFailure(operation, f"incomplete film record ({exc})") from exc

    def _dispatch(self, action: Action) -> ActionResult:
        result = self._reducer.apply(self._session, action)
        if result.ignored:
            logger.debug("Ignored %s: %s", action.action_type.value, result.error)
        self._session = result.new_state
        return result
