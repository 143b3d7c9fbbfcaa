"""
Exceptions raised by the Hooker engine.

Ordinary rule violations (wrong phase, wrong seat, illegal card) are never
raised: the action handlers return a failed ``Result`` instead. The classes
below cover programmer errors, i.e. states that cannot be reached through the
public entry points, plus ``IllegalActionError`` for callers that prefer
``Result.unwrap()``.
"""
from __future__ import annotations

INVARIANT_VIOLATION = "INVARIANT_VIOLATION"
SEAT_NOT_SEATED = "SEAT_NOT_SEATED"
BAD_DECK = "BAD_DECK"
ILLEGAL_ACTION = "ILLEGAL_ACTION"
BAD_PAYLOAD = "BAD_PAYLOAD"


class HookerError(Exception):
    """Base exception for engine errors."""

    code = INVARIANT_VIOLATION

    def __init__(self, message: str, code: str | None = None) -> None:
        self.code = code or self.code
        self.message = message
        super().__init__(f"[{self.code}] {message}")


class InvariantError(HookerError):
    """The engine was handed a state it can never produce itself."""


class SeatingError(InvariantError):
    code = SEAT_NOT_SEATED


class DeckError(InvariantError):
    code = BAD_DECK


class IllegalActionError(HookerError):
    """Raised by ``Result.unwrap()`` when an action was rejected."""

    code = ILLEGAL_ACTION


class PersistenceError(HookerError):
    code = BAD_PAYLOAD


__all__ = [
    "HookerError",
    "InvariantError",
    "SeatingError",
    "DeckError",
    "IllegalActionError",
    "PersistenceError",
]
