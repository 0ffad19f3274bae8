"""
Session Module - The one active game session.

A session is one round of guessing:
- Started when the player asks for a new game
- Holds the target film and the attempt log
- Ends WON or LOST, then reset to IDLE

Sessions are EPHEMERAL:
- In-memory only
- The answer pool lives for the process lifetime
"""

from .controller import SessionController, SelectionMode
from .pool import AnswerPool

__all__ = [
    "SessionController",
    "SelectionMode",
    "AnswerPool",
]
