"""
Engine Core - Deterministic game session state and transitions.

The engine:
1. Holds the GameSession (target film, attempt log, phase)
2. Applies START / SUBMIT / RESET via the reducer
3. Normalizes and matches guesses
4. Decides which reveal slots are visible
"""

from .state import GameSession, SessionPhase, Film, GuessAttempt, MAX_ATTEMPTS, ACTOR_SLOTS
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, apply_action
from .matching import PASS_SENTINEL, to_title_case, normalize_guess, is_match
from .reveal import RevealState, reveal_state, is_actor_revealed, is_poster_revealed, shuffle_actors

__all__ = [
    "GameSession",
    "SessionPhase",
    "Film",
    "GuessAttempt",
    "MAX_ATTEMPTS",
    "ACTOR_SLOTS",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "apply_action",
    "PASS_SENTINEL",
    "to_title_case",
    "normalize_guess",
    "is_match",
    "RevealState",
    "reveal_state",
    "is_actor_revealed",
    "is_poster_revealed",
    "shuffle_actors",
]
