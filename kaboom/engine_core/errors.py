"""
Engine exceptions.

InvalidMove never escapes the reducer; it becomes a failed ActionResult.
DeckExhaustedError is a broken invariant and is allowed to propagate.
"""

from __future__ import annotations

from .action import ErrorCode


class InvalidMove(Exception):
    """Raised by move handlers when a move breaks the rules."""

    def __init__(self, message: str, code: ErrorCode):
        self.code = code
        super().__init__(message)


class DeckExhaustedError(RuntimeError):
    """A draw was requested from an empty draw pile."""
