"""Exception types raised by the engine."""
from __future__ import annotations


class TTTError(Exception):
    """Base class for all engine errors."""


class InvalidMove(TTTError, ValueError):
    def __init__(self, position: object, reason: str = "not an unmarked position") -> None:
        super().__init__(f"Invalid move {position!r}: {reason}")
        self.position = position
        self.reason = reason


class ConfigurationError(TTTError, ValueError):
    pass


class MatchStateError(TTTError, RuntimeError):
    pass
