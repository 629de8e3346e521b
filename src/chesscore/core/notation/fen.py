"""FEN parsing and serialization."""

from __future__ import annotations

import logging
import re

from chesscore.core.board import Board
from chesscore.core.config import DEFAULT_CONFIG, RulesConfig
from chesscore.core.enums import CastlingRights, Color
from chesscore.core.errors import FormatError
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.types import STANDARD_SHAPE, BoardShape, Square

_LOGGER = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_U16_MAX = 0xFFFF
_RANK_TOKEN = re.compile(r"[1-9][0-9]*|[A-Za-z]")
_CASTLING_FIELD = re.compile(r"-|(?=.)K?Q?k?q?")
_COUNTER_FIELD = re.compile(r"[0-9]+")

CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def position_from_fen(
    fen: str,
    shape: BoardShape | None = None,
    config: RulesConfig = DEFAULT_CONFIG,
) -> Position:
    """Parse a FEN string into a :class:`Position`.

    Either a complete position is returned or :class:`FormatError` is
    raised; nothing is partially built.
    """
    shape = shape or STANDARD_SHAPE
    parts = fen.split()
    if len(parts) != 6:
        raise FormatError(f"Invalid FEN (need 6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part, half_part, full_part = parts

    # 1. Piece placement
    board = Board.from_squares(_parse_placement(placement, shape, fen), shape)

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise FormatError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    if not _CASTLING_FIELD.fullmatch(castling_part):
        raise FormatError(f"Invalid FEN castling field: {castling_part!r}")
    castling = CastlingRights.NONE
    for ch, right in CASTLING_CHARS:
        if ch in castling_part:
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        ep = shape.parse_square(ep_part)
        expected_row = 2 if side == Color.WHITE else shape.height - 3
        if shape.row_of(ep) != expected_row:
            raise FormatError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    # 5-6. Clocks
    halfmove = _parse_counter(half_part, "halfmove clock", minimum=0)
    fullmove = _parse_counter(full_part, "fullmove number", minimum=1)

    _LOGGER.debug("Parsed FEN %r on a %dx%d board", fen, shape.height, shape.width)
    return Position(board, side, castling, ep, halfmove, fullmove, config=config)


def _parse_placement(
    placement: str, shape: BoardShape, fen: str
) -> list[Piece | None]:
    ranks = placement.split("/")
    if len(ranks) != shape.height:
        raise FormatError(
            f"Invalid FEN board (must contain {shape.height} ranks): {fen!r}"
        )
    squares: list[Piece | None] = []
    for rank_text in ranks:
        width = 0
        pos = 0
        while pos < len(rank_text):
            token = _RANK_TOKEN.match(rank_text, pos)
            if token is None:
                raise FormatError(
                    f"Invalid FEN character {rank_text[pos]!r}: {fen!r}"
                )
            text = token.group()
            pos = token.end()
            run = int(text) if text.isdigit() else 1
            width += run
            if width > shape.width:
                raise FormatError(f"Invalid FEN rank width: {fen!r}")
            if text.isdigit():
                squares.extend([None] * run)
            else:
                squares.append(Piece.from_char(text))
        if width != shape.width:
            raise FormatError(f"Invalid FEN rank width: {fen!r}")
    return squares


def _parse_counter(text: str, name: str, *, minimum: int) -> int:
    if not _COUNTER_FIELD.fullmatch(text):
        raise FormatError(f"Invalid FEN {name}: {text!r}")
    value = int(text)
    if not (minimum <= value <= _U16_MAX):
        raise FormatError(f"Invalid FEN {name}: {text!r}")
    return value


def castling_string(castling: CastlingRights) -> str:
    """FEN castling field, e.g. 'KQkq', or '-' when no right remains."""
    text = "".join(ch for ch, right in CASTLING_CHARS if castling & right)
    return text or "-"


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    shape = pos.board.shape

    # 1. Board
    rows: list[str] = []
    for row_idx in range(shape.height):
        empty = 0
        row = ""
        for file in range(shape.width):
            piece = pos.board[shape.make_square(file, row_idx)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    # 3-4. Castling, en passant
    castling_str = castling_string(pos.castling)
    ep_str = shape.square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} {pos.halfmove_clock} {pos.fullmove_number}"
