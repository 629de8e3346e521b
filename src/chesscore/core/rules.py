"""High-level chess rules: checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesscore.core.enums import Color, GameResult, PieceType
from chesscore.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chesscore.core.position import Position

_MINOR_PIECES = (PieceType.KNIGHT, PieceType.BISHOP)
_MATING_PIECES = (PieceType.PAWN, PieceType.ROOK, PieceType.QUEEN)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Repetition draws are not detected; DRAW_THREEFOLD is never produced here.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position)
        return len(gen.generate_legal_moves()) == 0

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position)
        return len(gen.generate_legal_moves()) == 0

    @staticmethod
    def has_mating_material(position: Position, color: Color) -> bool:
        """Whether *color* keeps anything beyond a king and one minor piece."""
        board = position.board
        if any(board.pieces_of(color, pt) for pt in _MATING_PIECES):
            return True
        minors = sum(len(board.pieces_of(color, pt)) for pt in _MINOR_PIECES)
        return minors >= 2

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-color bishops)."""
        board = position.board
        if board.pieces(PieceType.PAWN) or board.pieces(PieceType.ROOK):
            return False
        if board.pieces(PieceType.QUEEN):
            return False

        knights = board.pieces(PieceType.KNIGHT)
        bishops = board.pieces(PieceType.BISHOP)
        minors = len(knights) + len(bishops)

        # K vs K, K+minor vs K
        if minors <= 1:
            return True

        # K+B vs K+B with same-colour bishops
        if minors == 2 and len(bishops) == 2:
            w_bishops = board.pieces_of(Color.WHITE, PieceType.BISHOP)
            if len(w_bishops) != 1:
                return False
            shape = board.shape
            colors = {
                (shape.file_of(sq) + shape.row_of(sq)) % 2 for sq in bishops
            }
            return len(colors) == 1

        return False

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= position.config.fifty_move_limit

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the current game result."""
        # Checkmate on the ply that hits the fifty-move limit still wins.
        if position.result.is_over and position.result != GameResult.DRAW_FIFTY_MOVES:
            return position.result

        gen = MoveGenerator(position)
        legal_moves = gen.generate_legal_moves()

        if not legal_moves:
            if gen.is_in_check(position.side_to_move):
                return (
                    GameResult.WHITE_CHECKMATED
                    if position.side_to_move == Color.WHITE
                    else GameResult.BLACK_CHECKMATED
                )
            return GameResult.DRAW_STALEMATE

        if Rules.is_insufficient_material(position):
            return GameResult.DRAW_INSUFFICIENT_MATERIAL

        if Rules.is_fifty_move_rule(position):
            return GameResult.DRAW_FIFTY_MOVES

        return GameResult.ACTIVE
