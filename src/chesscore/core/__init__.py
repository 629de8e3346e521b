"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from chesscore.core import MoveGenerator, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    gen = MoveGenerator(pos)
    for move in gen.generate_legal_moves():
        print(move)
"""

from chesscore.core.board import Board
from chesscore.core.config import DEFAULT_CONFIG, RulesConfig
from chesscore.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceType
from chesscore.core.errors import (
    ChessCoreError,
    CorruptedIndexError,
    FormatError,
    IllegalMoveError,
)
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.notation import (
    STARTING_FEN,
    position_from_fen,
    position_to_fen,
    position_to_text,
)
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.rules import Rules
from chesscore.core.types import (
    STANDARD_SHAPE,
    BoardShape,
    Square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "BoardShape",
    "STANDARD_SHAPE",
    "Square",
    "parse_square",
    "square_name",
    # Errors / config
    "ChessCoreError",
    "CorruptedIndexError",
    "FormatError",
    "IllegalMoveError",
    "DEFAULT_CONFIG",
    "RulesConfig",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Notation
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
    "position_to_text",
]
