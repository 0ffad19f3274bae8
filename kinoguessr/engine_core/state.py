"""
Game State - Immutable container for one guessing round.

Design principles:
- Immutable: every transition returns a new GameSession
- Self-consistent: phase, target film and attempt log are validated together
- Pure: no I/O, no randomness (shuffling happens before the film gets here)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


MAX_ATTEMPTS = 5
ACTOR_SLOTS = 5


class SessionPhase(Enum):
    """Lifecycle phases of a game session."""
    IDLE = "idle"  # No target film assigned
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class Film:
    """
    A film as returned by the catalog.

    actor_images is in reveal order: slot 0 is shown first.
    """
    title: str
    actor_images: tuple[str, ...]
    poster_image: str
    film_id: str | None = None

    def __post_init__(self):
        if not self.title:
            raise ValueError("Film title must not be empty")
        # Accept lists from callers but store a tuple
        object.__setattr__(self, "actor_images", tuple(self.actor_images))
        if len(self.actor_images) != ACTOR_SLOTS:
            raise ValueError(
                f"Film requires exactly {ACTOR_SLOTS} actor images, "
                f"got {len(self.actor_images)}"
            )
        if not all(self.actor_images):
            raise ValueError("Actor image paths must not be empty")
        if not self.poster_image:
            raise ValueError("Film poster image must not be empty")

    def with_actor_order(self, actor_images: tuple[str, ...] | list[str]) -> Film:
        """Return the same film with its actors in a different order."""
        if sorted(actor_images) != sorted(self.actor_images):
            raise ValueError("Reordered actors must be a permutation of the originals")
        return Film(
            title=self.title,
            actor_images=tuple(actor_images),
            poster_image=self.poster_image,
            film_id=self.film_id,
        )


@dataclass(frozen=True)
class GuessAttempt:
    """One submitted guess. Never mutated once logged."""
    index: int  # 1-based
    raw_input: str
    normalized_guess: str
    is_correct: bool

    @property
    def transcript_line(self) -> str:
        line = f"{self.index}. {self.normalized_guess}"
        if self.is_correct:
            line += " - Correct!"
        return line


@dataclass(frozen=True)
class GameSession:
    """
    Complete state of the current round.

    All changes go through the reducer. The invariants below are
    checked on construction, so an inconsistent session cannot exist.
    """
    phase: SessionPhase = SessionPhase.IDLE
    target_film: Film | None = None
    attempts: tuple[GuessAttempt, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "attempts", tuple(self.attempts))
        self._check_invariants()

    def _check_invariants(self):
        count = len(self.attempts)
        won = any(a.is_correct for a in self.attempts)

        if count > MAX_ATTEMPTS:
            raise ValueError(f"At most {MAX_ATTEMPTS} attempts allowed, got {count}")

        if self.phase == SessionPhase.IDLE:
            if self.target_film is not None or count:
                raise ValueError("Idle session cannot have a target film or attempts")
            return

        if self.target_film is None:
            raise ValueError(f"{self.phase.value} session requires a target film")

        if self.phase == SessionPhase.WON and not won:
            raise ValueError("Won session requires a correct attempt")
        if self.phase == SessionPhase.LOST and (won or count != MAX_ATTEMPTS):
            raise ValueError(f"Lost session requires {MAX_ATTEMPTS} wrong attempts")
        if self.phase == SessionPhase.IN_PROGRESS and (won or count >= MAX_ATTEMPTS):
            raise ValueError("Session in progress cannot be won or out of attempts")

    @property
    def attempts_count(self) -> int:
        return len(self.attempts)

    @property
    def attempts_remaining(self) -> int:
        if self.phase == SessionPhase.IDLE:
            return 0
        return MAX_ATTEMPTS - len(self.attempts)

    @property
    def is_correct(self) -> bool:
        """True once the film has been guessed."""
        return self.phase == SessionPhase.WON

    @property
    def is_terminal(self) -> bool:
        return self.phase in {SessionPhase.WON, SessionPhase.LOST}

    @property
    def transcript(self) -> list[str]:
        """Display lines for every attempt, oldest first."""
        return [a.transcript_line for a in self.attempts]

    def _copy_with(self, **kwargs) -> GameSession:
        """Create a copy with some fields replaced."""
        return GameSession(
            phase=kwargs.get("phase", self.phase),
            target_film=kwargs.get("target_film", self.target_film),
            attempts=kwargs.get("attempts", self.attempts),
        )
