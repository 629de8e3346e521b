"""Position: complete game state (board + metadata) and move application."""

from __future__ import annotations

from functools import lru_cache

from chesscore.core.board import Board
from chesscore.core.config import DEFAULT_CONFIG, RulesConfig
from chesscore.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceType
from chesscore.core.errors import IllegalMoveError
from chesscore.core.move import Move
from chesscore.core.piece import Piece
from chesscore.core.types import BoardShape, Square


def home_row(shape: BoardShape, color: Color) -> int:
    """Row holding *color*'s back rank at the start of a game."""
    return shape.height - 1 if color == Color.WHITE else 0


@lru_cache(maxsize=None)
def rook_corners(shape: BoardShape) -> dict[Square, CastlingRights]:
    """Rook home squares and the castling right each one carries."""
    corners: dict[Square, CastlingRights] = {}
    for color in Color:
        row = home_row(shape, color)
        corners[shape.make_square(0, row)] = CastlingRights.queenside(color)
        corners[shape.make_square(shape.width - 1, row)] = CastlingRights.kingside(color)
    return corners


class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    :meth:`make_move` mutates in place; :meth:`after` applies a move to a
    copy and leaves the receiver untouched.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "result",
        "config",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
        result: GameResult = GameResult.ACTIVE,
        config: RulesConfig = DEFAULT_CONFIG,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self.result = result
        self.config = config

    @property
    def shape(self) -> BoardShape:
        return self.board.shape

    @property
    def squares(self) -> tuple[Piece | None, ...]:
        return self.board.squares

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Apply *move* in place.

        The move is not checked for legality; callers obtain it from
        :class:`~chesscore.core.move_generator.MoveGenerator`.
        """
        board = self.board
        shape = board.shape
        piece = board[move.from_sq]
        if piece is None:
            raise IllegalMoveError(f"No piece on {shape.square_name(move.from_sq)}")

        if move.flag == MoveFlag.PROMOTION and move.promotion is None:
            raise IllegalMoveError(
                f"Promotion on {shape.square_name(move.to_sq)} names no piece"
            )

        rook_from: Square | None = None
        if move.is_castle:
            rook_file = shape.width - 1 if move.flag == MoveFlag.CASTLE_KINGSIDE else 0
            rook_from = shape.make_square(rook_file, shape.row_of(move.from_sq))
            rook = board[rook_from]
            if rook is None or rook.piece_type != PieceType.ROOK:
                raise IllegalMoveError(
                    f"Castling without a rook on {shape.square_name(rook_from)}"
                )

        captured = board[move.to_sq]
        capture_sq = move.to_sq

        # En passant: the captured pawn sits beside the origin, not on to_sq
        if move.flag == MoveFlag.EN_PASSANT:
            capture_sq = shape.make_square(
                shape.file_of(move.to_sq), shape.row_of(move.from_sq)
            )
            captured = board[capture_sq]

        board[move.from_sq] = None
        if captured is not None:
            board[capture_sq] = None

        placed_piece = piece
        if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
            placed_piece = Piece(piece.color, move.promotion)
        board[move.to_sq] = placed_piece

        # Slide the rook onto the square the king crossed
        if rook_from is not None:
            board[(move.from_sq + move.to_sq) // 2] = board[rook_from]
            board[rook_from] = None

        # En passant target for the opponent: set or cleared on every move
        self.en_passant = move.en_passant_target

        self._update_castling(move, piece)

        # Clocks
        if piece.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
            if (
                self.halfmove_clock >= self.config.fifty_move_limit
                and self.result == GameResult.ACTIVE
            ):
                self.result = GameResult.DRAW_FIFTY_MOVES

        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = self.side_to_move.opposite

        if self.config.verify_index:
            board.verify_index()

    def after(self, move: Move) -> Position:
        """Return a copy with *move* applied; ``self`` is not modified."""
        pos = self.copy()
        pos.make_move(move)
        return pos

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def _update_castling(self, move: Move, piece: Piece) -> None:
        if not self.castling:
            return
        next_castling = self.castling
        if piece.piece_type == PieceType.KING:
            next_castling &= ~CastlingRights.both(piece.color)

        corners = rook_corners(self.board.shape)
        for sq in (move.from_sq, move.to_sq):
            right = corners.get(sq)
            if right is not None:
                next_castling &= ~right
        self.castling = next_castling

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Deep copy; the board and its index are cloned together."""
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
            result=self.result,
            config=self.config,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
            and self.result == other.result
        )

    def __str__(self) -> str:
        from chesscore.core.notation.text import position_to_text

        return position_to_text(self)
