"""
Answer Pool - Film identifiers not yet used in this process.

The pool only shrinks. An identifier is removed the moment it is
drawn, before its details are fetched, so a failed fetch loses it.
"""

from __future__ import annotations
from typing import Iterable
import random

from ..errors import PoolExhausted


class AnswerPool:
    """
    Finite set of answer candidates for pool mode.

    Order is kept (first occurrence wins on duplicates) so draws
    are reproducible under a seeded RNG.
    """

    def __init__(self, identifiers: Iterable[str]):
        self._remaining: list[str] = list(dict.fromkeys(identifiers))

    def __len__(self) -> int:
        return len(self._remaining)

    def __contains__(self, film_id: object) -> bool:
        return film_id in self._remaining

    @property
    def remaining(self) -> tuple[str, ...]:
        return tuple(self._remaining)

    @property
    def is_exhausted(self) -> bool:
        return not self._remaining

    def draw(self, rng: random.Random) -> str:
        """Remove and return one identifier chosen uniformly at random."""
        if not self._remaining:
            raise PoolExhausted()
        index = rng.randrange(len(self._remaining))
        return self._remaining.pop(index)
