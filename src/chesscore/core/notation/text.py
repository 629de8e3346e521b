"""Human-readable board dump for debugging and inspection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesscore.core.enums import CastlingRights, Color
from chesscore.core.notation.fen import CASTLING_CHARS
from chesscore.core.piece import glyph

if TYPE_CHECKING:
    from chesscore.core.position import Position


def castling_slots(castling: CastlingRights) -> str:
    """Fixed-width rights string: 'KQkq' with '-' in each cleared slot."""
    return "".join(ch if castling & right else "-" for ch, right in CASTLING_CHARS)


def position_to_text(pos: Position) -> str:
    """One glyph per square, one line per rank, then a status line."""
    width = pos.shape.width
    squares = pos.squares
    lines = [
        "".join(glyph(p) for p in squares[start : start + width])
        for start in range(0, len(squares), width)
    ]
    side = "white" if pos.side_to_move == Color.WHITE else "black"
    lines.append(
        f"move {pos.fullmove_number} | {side} to play | {pos.result} | "
        f"castling {castling_slots(pos.castling)}"
    )
    return "\n".join(lines) + "\n"
