"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveFlag(IntEnum):
    """Special move classification."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @staticmethod
    def kingside(color: Color) -> CastlingRights:
        if color == Color.WHITE:
            return CastlingRights.WHITE_KINGSIDE
        return CastlingRights.BLACK_KINGSIDE

    @staticmethod
    def queenside(color: Color) -> CastlingRights:
        if color == Color.WHITE:
            return CastlingRights.WHITE_QUEENSIDE
        return CastlingRights.BLACK_QUEENSIDE

    @staticmethod
    def both(color: Color) -> CastlingRights:
        if color == Color.WHITE:
            return CastlingRights.WHITE_BOTH
        return CastlingRights.BLACK_BOTH


class GameResult(IntEnum):
    """Game status: still active, or the reason it ended.

    Per-color outcomes name the side that lost.
    """

    ACTIVE = 0
    DRAW_AGREEMENT = auto()
    DRAW_THREEFOLD = auto()
    DRAW_FIFTY_MOVES = auto()
    DRAW_INSUFFICIENT_MATERIAL = auto()
    DRAW_TIMEOUT_INSUFFICIENT_MATERIAL = auto()
    DRAW_STALEMATE = auto()
    WHITE_TIMEOUT = auto()
    BLACK_TIMEOUT = auto()
    WHITE_RESIGNED = auto()
    BLACK_RESIGNED = auto()
    WHITE_CHECKMATED = auto()
    BLACK_CHECKMATED = auto()

    @property
    def is_over(self) -> bool:
        return self != GameResult.ACTIVE

    @property
    def is_draw(self) -> bool:
        return self.name.startswith("DRAW_")

    @property
    def winner(self) -> Color | None:
        """Winning side, or None for an active or drawn game."""
        if self in _WHITE_LOSSES:
            return Color.BLACK
        if self in _BLACK_LOSSES:
            return Color.WHITE
        return None

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")


_WHITE_LOSSES = frozenset(
    {GameResult.WHITE_TIMEOUT, GameResult.WHITE_RESIGNED, GameResult.WHITE_CHECKMATED}
)
_BLACK_LOSSES = frozenset(
    {GameResult.BLACK_TIMEOUT, GameResult.BLACK_RESIGNED, GameResult.BLACK_CHECKMATED}
)
