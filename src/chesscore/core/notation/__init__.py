"""Notation package: FEN parsing/serialization and the text board dump."""

from chesscore.core.notation.fen import (
    STARTING_FEN,
    castling_string,
    position_from_fen,
    position_to_fen,
)
from chesscore.core.notation.text import castling_slots, position_to_text

__all__ = [
    "STARTING_FEN",
    "castling_slots",
    "castling_string",
    "position_from_fen",
    "position_to_fen",
    "position_to_text",
]
