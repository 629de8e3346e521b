"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from chesscore.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chesscore.core.move import Move
from chesscore.core.position import home_row
from chesscore.core.types import BoardShape, Square

if TYPE_CHECKING:
    from chesscore.core.position import Position


# Offsets are (file delta, row delta); row 0 is the top of the board.
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

_SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


# -- Precomputed lookup tables (per board shape) ----------------------------


@lru_cache(maxsize=None)
def _targets(
    shape: BoardShape, offsets: tuple[tuple[int, int], ...]
) -> tuple[tuple[Square, ...], ...]:
    """On-board destinations of each fixed offset, for every square."""
    targets: list[tuple[Square, ...]] = []
    for sq in range(shape.size):
        file_idx = shape.file_of(sq)
        row_idx = shape.row_of(sq)
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = row_idx + dr
            if shape.contains(af, ar):
                moves.append(shape.make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


@lru_cache(maxsize=None)
def _rays(
    shape: BoardShape, directions: tuple[tuple[int, int], ...]
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    """Per square, one ray per direction running to the board edge."""
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(shape.size):
        file_idx = shape.file_of(sq)
        row_idx = shape.row_of(sq)
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = row_idx + dr
            ray: list[Square] = []
            while shape.contains(af, ar):
                ray.append(shape.make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


@lru_cache(maxsize=None)
def _pawn_captures(shape: BoardShape, color: Color) -> tuple[tuple[Square, ...], ...]:
    """Diagonal capture squares of a *color* pawn standing on each square."""
    forward = -1 if color == Color.WHITE else 1
    return _targets(shape, ((-1, forward), (1, forward)))


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    Origins are always read from the board's piece-location index. Legality
    is decided by applying each candidate to a copy of the position, so the
    position passed in is never modified.
    """

    __slots__ = ("_pos", "_board", "_shape")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board
        self._shape = position.board.shape

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        legal: list[Move] = []
        moving_color = self._pos.side_to_move

        for move in self.generate_pseudo_legal_moves():
            probe = self._pos.after(move)
            if not MoveGenerator(probe).is_in_check(moving_color):
                legal.append(move)
        return legal

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check), pawns included."""
        color = self._pos.side_to_move
        moves: list[Move] = []
        moves.extend(self.generate_king_moves(color))
        moves.extend(self.generate_queen_moves(color))
        moves.extend(self.generate_bishop_moves(color))
        moves.extend(self.generate_rook_moves(color))
        moves.extend(self.generate_knight_moves(color))
        moves.extend(self.generate_pawn_moves(color))
        return moves

    # -- Per-family generators ------------------------------------------------

    def generate_pawn_moves(self, color: Color | None = None) -> list[Move]:
        color = self._side(color)
        moves: list[Move] = []
        for sq in self._board.pieces_of(color, PieceType.PAWN):
            self._gen_pawn(sq, color, moves)
        return moves

    def generate_knight_moves(self, color: Color | None = None) -> list[Move]:
        color = self._side(color)
        moves: list[Move] = []
        targets = _targets(self._shape, KNIGHT_OFFSETS)
        for sq in self._board.pieces_of(color, PieceType.KNIGHT):
            self._gen_step(sq, color, targets[sq], moves)
        return moves

    def generate_bishop_moves(self, color: Color | None = None) -> list[Move]:
        return self._gen_slider_family(PieceType.BISHOP, self._side(color))

    def generate_rook_moves(self, color: Color | None = None) -> list[Move]:
        return self._gen_slider_family(PieceType.ROOK, self._side(color))

    def generate_queen_moves(self, color: Color | None = None) -> list[Move]:
        return self._gen_slider_family(PieceType.QUEEN, self._side(color))

    def generate_king_moves(
        self, color: Color | None = None, *, castling: bool = True
    ) -> list[Move]:
        color = self._side(color)
        moves: list[Move] = []
        targets = _targets(self._shape, KING_OFFSETS)
        for sq in self._board.king_squares(color):
            self._gen_step(sq, color, targets[sq], moves)
            if castling:
                self._gen_castling(sq, color, moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def attacked_squares(self, by_color: Color) -> set[Square]:
        """Squares *by_color* could capture on if an enemy piece stood there.

        Pawn pushes and castling never capture, so they are left out; pawn
        diagonals count whether or not the square is occupied.
        """
        attacked: set[Square] = set()
        for move in self.generate_king_moves(by_color, castling=False):
            attacked.add(move.to_sq)
        for piece_type in (PieceType.QUEEN, PieceType.BISHOP, PieceType.ROOK):
            for move in self._gen_slider_family(piece_type, by_color):
                attacked.add(move.to_sq)
        for move in self.generate_knight_moves(by_color):
            attacked.add(move.to_sq)
        captures = _pawn_captures(self._shape, by_color)
        for sq in self._board.pieces_of(by_color, PieceType.PAWN):
            attacked.update(captures[sq])
        return attacked

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return sq in self.attacked_squares(by_color)

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent? False without a king."""
        kings = self._board.king_squares(color)
        if not kings:
            return False
        attacked = self.attacked_squares(color.opposite)
        return any(sq in attacked for sq in kings)

    # -- Piece-specific generators (private) -------------------------------

    def _side(self, color: Color | None) -> Color:
        return self._pos.side_to_move if color is None else color

    def _gen_slider_family(self, piece_type: PieceType, color: Color) -> list[Move]:
        moves: list[Move] = []
        rays = _rays(self._shape, _SLIDER_DIRS[piece_type])
        for sq in self._board.pieces_of(color, piece_type):
            self._gen_sliding(sq, color, rays[sq], moves)
        return moves

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_step(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        shape = self._shape
        file_idx = shape.file_of(sq)
        row_idx = shape.row_of(sq)
        if color == Color.WHITE:
            forward, start_row, last_row = -1, shape.height - 2, 0
        else:
            forward, start_row, last_row = 1, 1, shape.height - 1

        next_row = row_idx + forward
        if not (0 <= next_row < shape.height):
            return
        promotes = next_row == last_row

        one_step = shape.make_square(file_idx, next_row)
        if board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, promotes, moves)
            two_row = next_row + forward
            # A double advance never lands on the promotion row.
            if (
                row_idx == start_row
                and 0 <= two_row < shape.height
                and two_row != last_row
            ):
                two_step = shape.make_square(file_idx, two_row)
                if board.is_empty(two_step):
                    moves.append(
                        Move(
                            sq,
                            two_step,
                            MoveFlag.DOUBLE_PAWN,
                            en_passant_target=one_step,
                        )
                    )

        for cap_sq in _pawn_captures(shape, color)[sq]:
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, cap_sq, promotes, moves)
            elif cap_sq == self._pos.en_passant:
                moves.append(Move(sq, cap_sq, MoveFlag.EN_PASSANT))

    @staticmethod
    def _add_pawn_move(
        sq: Square, to_sq: Square, promotes: bool, moves: list[Move]
    ) -> None:
        if promotes:
            for pt in _PROMOTION_TYPES:
                moves.append(Move(sq, to_sq, MoveFlag.PROMOTION, pt))
        else:
            moves.append(Move(sq, to_sq))

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        castling = self._pos.castling & CastlingRights.both(color)
        if not castling:
            return

        shape = self._shape
        row = home_row(shape, color)
        if shape.row_of(king_sq) != row:
            return
        king_file = shape.file_of(king_sq)

        sides = (
            (CastlingRights.kingside(color), 1, shape.width - 1, MoveFlag.CASTLE_KINGSIDE),
            (CastlingRights.queenside(color), -1, 0, MoveFlag.CASTLE_QUEENSIDE),
        )
        attacked: set[Square] | None = None
        for right, step, rook_file, flag in sides:
            if not castling & right:
                continue
            dest_file = king_file + 2 * step
            # Destination must stay off the corner files.
            if not (0 < dest_file < shape.width - 1):
                continue
            if not self._home_rook(shape.make_square(rook_file, row), color):
                continue
            between = range(min(king_file, rook_file) + 1, max(king_file, rook_file))
            if any(not self._board.is_empty(shape.make_square(f, row)) for f in between):
                continue
            if attacked is None:
                attacked = self.attacked_squares(color.opposite)
            path = (king_sq, king_sq + step, king_sq + 2 * step)
            if any(sq in attacked for sq in path):
                continue
            moves.append(Move(king_sq, king_sq + 2 * step, flag))

    def _home_rook(self, sq: Square, color: Color) -> bool:
        piece = self._board[sq]
        return (
            piece is not None
            and piece.color == color
            and piece.piece_type == PieceType.ROOK
        )
