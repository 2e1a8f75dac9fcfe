"""Engine error hierarchy.

Rejected moves are not errors: :class:`~rookery.core.move.MoveTransition`
reports them through its status.  The exceptions below signal corrupted
positions or misuse of the API.
"""

from __future__ import annotations


class ChessEngineError(Exception):
    """Base class for errors raised by the rules engine."""


class InvariantViolationError(ChessEngineError):
    """A position violates a construction precondition and cannot be used."""


class MissingKingError(InvariantViolationError):
    """An alliance does not have exactly one King among its active pieces."""


class NullMoveError(ChessEngineError):
    """The null-move sentinel was executed."""
