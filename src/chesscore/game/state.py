"""Game session: validated move entry, history and game-ending events."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chesscore.core.enums import Color, GameResult
from chesscore.core.errors import IllegalMoveError
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chesscore.core.position import Position
from chesscore.core.rules import Rules

_LOGGER = logging.getLogger(__name__)


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    fen_after: str
    was_check: bool = False
    was_capture: bool = False


@dataclass
class GameState:
    """Owns one position and only lets legal moves through.

    Pure data and logic: no threading, no UI.
    """

    position: Position = field(init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    start_fen: str = field(default=STARTING_FEN, init=False)
    _snapshots: list[Position] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.setup()

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the game."""
        self.start_fen = fen or STARTING_FEN
        self.position = position_from_fen(self.start_fen)
        self.move_history.clear()
        self._snapshots.clear()

    # ── Move application ─────────────────────────────────────────────────

    def play(self, move: Move) -> MoveRecord:
        """Apply *move* if it is legal here and return the history record."""
        if self.is_game_over:
            raise IllegalMoveError(f"Game is over: {self.result}")
        if move not in self.legal_moves():
            raise IllegalMoveError(f"Illegal move: {move}")

        pos = self.position
        was_capture = pos.board[move.to_sq] is not None or move.is_en_passant

        self._snapshots.append(pos.copy())
        pos.make_move(move)

        gen = MoveGenerator(pos)
        record = MoveRecord(
            move=move,
            fen_after=position_to_fen(pos),
            was_check=gen.is_in_check(pos.side_to_move),
            was_capture=was_capture,
        )
        self.move_history.append(record)
        _LOGGER.debug("Played %s -> %s", move, record.fen_after)

        self._check_game_over()
        return record

    def undo_last_move(self) -> Move | None:
        """Undo the last move. Returns the undone Move, or None if empty."""
        if not self.move_history:
            return None
        record = self.move_history.pop()
        self.position = self._snapshots.pop()
        return record.move

    # ── Resignation / draw / flag fall ───────────────────────────────────

    def resign(self, color: Color) -> None:
        self._finish(
            GameResult.WHITE_RESIGNED if color == Color.WHITE else GameResult.BLACK_RESIGNED
        )

    def agree_draw(self) -> None:
        self._finish(GameResult.DRAW_AGREEMENT)

    def flag_fall(self, color: Color) -> None:
        """Time ran out for *color*."""
        if not Rules.has_mating_material(self.position, color.opposite):
            self._finish(GameResult.DRAW_TIMEOUT_INSUFFICIENT_MATERIAL)
            return
        self._finish(
            GameResult.WHITE_TIMEOUT if color == Color.WHITE else GameResult.BLACK_TIMEOUT
        )

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def result(self) -> GameResult:
        return self.position.result

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.position.result.is_over

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        if self.is_game_over:
            return []
        gen = MoveGenerator(self.position)
        return gen.generate_legal_moves()

    # ── Internal ─────────────────────────────────────────────────────────

    def _finish(self, result: GameResult) -> None:
        if self.is_game_over:
            raise IllegalMoveError(f"Game is already over: {self.result}")
        self.position.result = result
        _LOGGER.info("Game over: %s", result)

    def _check_game_over(self) -> None:
        result = Rules.game_result(self.position)
        if result != self.position.result:
            self.position.result = result
            _LOGGER.info("Game over: %s", result)
