"""Exception hierarchy for the chess core."""

from __future__ import annotations


class ChessCoreError(Exception):
    """Base class for every error raised by chesscore."""


class FormatError(ChessCoreError, ValueError):
    """Raised when position notation does not match the expected grammar."""


class CorruptedIndexError(ChessCoreError, RuntimeError):
    """Raised when the piece-location index disagrees with the squares.

    This is an internal defect, not a user error; nothing in the package
    catches it.
    """


class IllegalMoveError(ChessCoreError, ValueError):
    """Raised when a move cannot be applied to the current position."""
