"""Rule configuration shared by positions and their clones."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Tunable rule parameters.

    Args:
        fifty_move_limit: Plies without a capture or pawn move after which
            the game is drawn (100 plies = 50 full moves).
        verify_index: Run the full-board index consistency check after
            every applied move. Slow; meant for tests and debugging.
    """

    fifty_move_limit: int = 100
    verify_index: bool = False

    def __post_init__(self) -> None:
        if self.fifty_move_limit < 1:
            raise ValueError("fifty_move_limit must be >= 1")


DEFAULT_CONFIG = RulesConfig()
