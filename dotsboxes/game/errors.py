"""
Exception types raised by the engine, agents and room store.
"""

from __future__ import annotations

from typing import Any


class DotsBoxesError(Exception):
    """Base class for all errors raised by this package."""


class InvalidConfiguration(DotsBoxesError, ValueError):
    """Bad match parameters (grid size, roster) or a malformed encoded state."""


class IllegalMove(DotsBoxesError):
    """
    A move that violates the rules.

    Attributes:
        reason: Short machine-friendly reason (e.g. 'owned', 'out_of_bounds')
        line: The offending line id (or raw input when it could not be parsed)
    """

    def __init__(self, reason: str, line: Any = None, message: str | None = None) -> None:
        self.reason = reason
        self.line = line
        super().__init__(message or f"Illegal move {line}: {reason}")


class AgentSelectionError(DotsBoxesError, RuntimeError):
    """An agent failed to produce a legal line. Indicates a broken invariant."""


class RoomError(DotsBoxesError):
    """Base class for room lifecycle errors."""


class RoomNotFound(RoomError):
    """No room exists with the given code."""


class RoomClosed(RoomError):
    """The room has already started or has no free seats."""
