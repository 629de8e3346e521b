"""Board - piece placement plus the piece-location index."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import NoReturn

from chesscore.core.enums import Color, PieceType
from chesscore.core.errors import CorruptedIndexError
from chesscore.core.piece import Piece, glyph
from chesscore.core.types import STANDARD_SHAPE, BoardShape, Square

_LOGGER = logging.getLogger(__name__)

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _empty_index() -> dict[PieceType, set[Square]]:
    return {pt: set() for pt in PieceType}


class Board:
    """Mutable board with an incrementally maintained piece-location index.

    The index maps each piece type (either color) to the squares holding
    it. ``board[sq] = piece`` is the only way to change a square and keeps
    both structures in step.
    """

    __slots__ = ("shape", "_squares", "_index")

    def __init__(self, shape: BoardShape = STANDARD_SHAPE) -> None:
        self.shape = shape
        self._squares: list[Piece | None] = [None] * shape.size
        self._index: dict[PieceType, set[Square]] = _empty_index()

    @classmethod
    def from_squares(
        cls, squares: Iterable[Piece | None], shape: BoardShape = STANDARD_SHAPE
    ) -> Board:
        """Install a full placement and build the index with one scan."""
        b = cls(shape)
        placed = list(squares)
        if len(placed) != shape.size:
            raise ValueError(
                f"Expected {shape.size} squares for a {shape.height}x{shape.width} "
                f"board, got {len(placed)}"
            )
        b._squares = placed
        b.rebuild_index()
        return b

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old_piece = self._squares[sq]
        if old_piece == piece:
            return
        if old_piece is not None:
            self._index[old_piece.piece_type].discard(sq)
        self._squares[sq] = piece
        if piece is not None:
            self._index[piece.piece_type].add(sq)

    def __len__(self) -> int:
        return len(self._squares)

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    @property
    def squares(self) -> tuple[Piece | None, ...]:
        """Read-only view of every square, in index order."""
        return tuple(self._squares)

    # -- Index queries ------------------------------------------------------

    @property
    def piece_location_index(self) -> Mapping[PieceType, frozenset[Square]]:
        """Snapshot of the index; mutating the board does not change it."""
        return {pt: frozenset(squares) for pt, squares in self._index.items()}

    def pieces(self, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *piece_type* of either color, ascending."""
        return sorted(self._index[piece_type])

    def pieces_of(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*, ascending."""
        found: list[Square] = []
        squares = self._squares
        for sq in sorted(self._index[piece_type]):
            piece = squares[sq]
            if piece is None or piece.piece_type != piece_type:
                self._corrupted(
                    f"index lists {piece_type.name} on square {sq}, board holds {piece}"
                )
            if piece.color == color:
                found.append(sq)
        return found

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [
            sq
            for sq, piece in enumerate(self._squares)
            if piece is not None and piece.color == color
        ]

    def king_squares(self, color: Color) -> list[Square]:
        return self.pieces_of(color, PieceType.KING)

    # -- Index maintenance --------------------------------------------------

    def rebuild_index(self) -> None:
        """Recompute the index from a full scan of the squares."""
        index = _empty_index()
        for sq, piece in enumerate(self._squares):
            if piece is not None:
                index[piece.piece_type].add(sq)
        self._index = index

    def verify_index(self) -> None:
        """Raise :class:`CorruptedIndexError` unless index and squares agree."""
        for sq, piece in enumerate(self._squares):
            for pt, squares in self._index.items():
                holds = piece is not None and piece.piece_type == pt
                if holds != (sq in squares):
                    self._corrupted(
                        f"square {sq} holds {piece}, index "
                        f"{'omits' if holds else 'lists'} it under {pt.name}"
                    )

    @staticmethod
    def _corrupted(detail: str) -> NoReturn:
        _LOGGER.error("Piece-location index corrupted: %s", detail)
        raise CorruptedIndexError(f"Piece-location index corrupted: {detail}")

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board(self.shape)
        b._squares = self._squares.copy()
        b._index = {pt: squares.copy() for pt, squares in self._index.items()}
        return b

    def clear(self) -> None:
        self._squares = [None] * self.shape.size
        self._index = _empty_index()

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        shape = STANDARD_SHAPE
        b = cls(shape)
        for f, pt in enumerate(_BACK_RANK):
            b[shape.make_square(f, 0)] = Piece(Color.BLACK, pt)
            b[shape.make_square(f, 1)] = Piece(Color.BLACK, PieceType.PAWN)
            b[shape.make_square(f, 6)] = Piece(Color.WHITE, PieceType.PAWN)
            b[shape.make_square(f, 7)] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.shape == other.shape and self._squares == other._squares

    def __repr__(self) -> str:
        width = self.shape.width
        rows = [
            "".join(glyph(p) for p in self._squares[start : start + width])
            for start in range(0, len(self._squares), width)
        ]
        return "\n".join(rows)
