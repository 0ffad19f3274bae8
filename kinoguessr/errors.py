"""
Errors surfaced to callers of the session controller.

Invalid transitions are not errors: the reducer ignores them and
returns the unchanged state.
"""

from __future__ import annotations


class KinoGuessrError(Exception):
    """Base class for all KinoGuessr errors."""
    error_code = "INTERNAL_ERROR"


class FetchFailure(KinoGuessrError):
    """
    An external catalog call failed.

    The session stays in its pre-call state. Not retried.
    """
    error_code = "FETCH_FAILED"

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.message = message


class PoolExhausted(KinoGuessrError):
    """No film identifiers remain in the answer pool. Permanent."""
    error_code = "POOL_EXHAUSTED"

    def __init__(self, message: str = "No more new games"):
        super().__init__(message)


class StartInProgress(KinoGuessrError):
    """A start() is already waiting on the catalog."""
    error_code = "START_IN_PROGRESS"

    def __init__(self, message: str = "A new game is already being started"):
        super().__init__(message)
