"""
Reveal policy - which actor portraits and whether the poster are visible.

Slot i (0-based) opens once i wrong guesses have been made, so the
first actor is visible as soon as the round starts. A correct guess
opens everything. The poster opens on a win or after the last attempt.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, TypeVar
import random

from .state import GameSession, SessionPhase, ACTOR_SLOTS, MAX_ATTEMPTS

T = TypeVar("T")


def is_actor_revealed(slot: int, attempts_count: int, is_correct: bool) -> bool:
    return is_correct or attempts_count > slot


def is_poster_revealed(attempts_count: int, is_correct: bool) -> bool:
    return is_correct or attempts_count >= MAX_ATTEMPTS


@dataclass(frozen=True)
class RevealState:
    """Visibility of every reveal slot for one session."""
    actor_slots: tuple[bool, ...]
    poster: bool

    @property
    def revealed_count(self) -> int:
        return sum(self.actor_slots)


def reveal_state(session: GameSession) -> RevealState:
    """Nothing is visible before a round has started."""
    if session.phase == SessionPhase.IDLE:
        return RevealState(actor_slots=(False,) * ACTOR_SLOTS, poster=False)

    count = session.attempts_count
    correct = session.is_correct
    return RevealState(
        actor_slots=tuple(is_actor_revealed(i, count, correct) for i in range(ACTOR_SLOTS)),
        poster=is_poster_revealed(count, correct),
    )


def shuffle_actors(images: Sequence[T], rng: random.Random) -> list[T]:
    """
    Fisher-Yates shuffle returning a new list.

    Walks from the last index down to 1, swapping each position with
    a uniformly chosen index in [0, i].
    """
    shuffled = list(images)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
