"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chesscore.core.config import RulesConfig
from chesscore.core.notation import STARTING_FEN, position_from_fen
from chesscore.core.position import Position

CHECKED_CONFIG = RulesConfig(verify_index=True)


@pytest.fixture
def start_position() -> Position:
    """Standard initial position with the index verified after every move."""
    return position_from_fen(STARTING_FEN, config=CHECKED_CONFIG)


@pytest.fixture
def castling_position() -> Position:
    """Both sides may castle either way; only kings, rooks and pawns remain."""
    return position_from_fen(
        "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1", config=CHECKED_CONFIG
    )
