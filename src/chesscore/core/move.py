"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesscore.core.enums import MoveFlag, PieceType
from chesscore.core.types import Square


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single candidate or played move.

    ``en_passant_target`` is the square this move offers the opponent for an
    en passant capture (set by double pawn advances only). ``promotion`` is
    the piece type a pawn becomes, or None.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None
    en_passant_target: Square | None = None

    @property
    def is_en_passant(self) -> bool:
        """The captured pawn is not on ``to_sq``."""
        return self.flag == MoveFlag.EN_PASSANT

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    @property
    def is_promotion(self) -> bool:
        return self.flag == MoveFlag.PROMOTION
