"""
Guess normalization and matching.

Guesses are title-cased for display and compared to the film title
case-insensitively. No partial or fuzzy matching.
"""

from __future__ import annotations


PASS_SENTINEL = "*Pass*"


def to_title_case(text: str) -> str:
    """
    Capitalize the first letter of each space-separated word.

    The rest of each word is lower-cased, so "X-MEN" becomes "X-men".
    Runs of spaces are kept as-is.
    """
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


def normalize_guess(raw_input: str) -> str:
    """Blank input is a pass; anything else is title-cased."""
    if not raw_input.strip():
        return PASS_SENTINEL
    return to_title_case(raw_input)


def is_match(normalized_guess: str, title: str) -> bool:
    return normalized_guess.lower() == title.lower()
