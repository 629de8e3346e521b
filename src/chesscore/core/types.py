"""Square type alias and board-shape coordinate helpers.

Board layout (rows printed top to bottom, as in FEN):
    a8=0, b8=1, ..., h8=7
    a7=8, b7=9, ..., h7=15
    ...
    a1=56, b1=57, ..., h1=63

Row 0 is the side printed first in notation. Every offset calculation goes
through :class:`BoardShape`, so boards wider or taller than 8x8 work too.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from chesscore.core.errors import FormatError

Square: TypeAlias = int  # 0 .. height*width - 1

_FILE_LETTERS = "abcdefghijklmnopqrstuvwxyz"


@dataclass(frozen=True, slots=True)
class BoardShape:
    """Board dimensions and the index arithmetic that depends on them."""

    height: int = 8
    width: int = 8

    def __post_init__(self) -> None:
        if not (1 <= self.width <= len(_FILE_LETTERS)) or self.height < 1:
            raise ValueError(f"Unsupported board shape: {self.height}x{self.width}")

    @property
    def size(self) -> int:
        return self.height * self.width

    def make_square(self, file: int, row: int) -> Square:
        """Square from file (0 = a) and row (0 = top row)."""
        return row * self.width + file

    def file_of(self, sq: Square) -> int:
        return sq % self.width

    def row_of(self, sq: Square) -> int:
        return sq // self.width

    def contains(self, file: int, row: int) -> bool:
        return 0 <= file < self.width and 0 <= row < self.height

    def square_name(self, sq: Square) -> str:
        """Human-readable name, e.g. 0 → 'a8' on a standard board."""
        return _FILE_LETTERS[self.file_of(sq)] + str(self.height - self.row_of(sq))

    def parse_square(self, name: str) -> Square:
        """Parse square name, e.g. 'e4' → 36 on a standard board."""
        rank_text = name[1:]
        if len(name) < 2 or not (rank_text.isascii() and rank_text.isdigit()):
            raise FormatError(f"Invalid square name: {name!r}")
        file = _FILE_LETTERS.find(name[0])
        rank = int(rank_text)
        if file < 0 or file >= self.width or not (1 <= rank <= self.height):
            raise FormatError(f"Invalid square name: {name!r}")
        return self.make_square(file, self.height - rank)


STANDARD_SHAPE = BoardShape(8, 8)


def file_of(sq: Square) -> int:
    """File index 0-7 on the standard board."""
    return STANDARD_SHAPE.file_of(sq)


def row_of(sq: Square) -> int:
    """Row index 0-7 on the standard board (0 = eighth rank)."""
    return STANDARD_SHAPE.row_of(sq)


def square_name(sq: Square) -> str:
    return STANDARD_SHAPE.square_name(sq)


def parse_square(name: str) -> Square:
    return STANDARD_SHAPE.parse_square(name)


# ── Named square constants (standard board) ─────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = range(0, 8)
A7, B7, C7, D7, E7, F7, G7, H7 = range(8, 16)
A6, B6, C6, D6, E6, F6, G6, H6 = range(16, 24)
A5, B5, C5, D5, E5, F5, G5, H5 = range(24, 32)
A4, B4, C4, D4, E4, F4, G4, H4 = range(32, 40)
A3, B3, C3, D3, E3, F3, G3, H3 = range(40, 48)
A2, B2, C2, D2, E2, F2, G2, H2 = range(48, 56)
A1, B1, C1, D1, E1, F1, G1, H1 = range(56, 64)
