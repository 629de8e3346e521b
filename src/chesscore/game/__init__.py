"""Game management layer: a validated session around one position.

Quick start::

    from chesscore.game import GameState

    game = GameState()
    move = game.legal_moves()[0]
    game.play(move)
"""

from chesscore.game.state import GameState, MoveRecord

__all__ = [
    "GameState",
    "MoveRecord",
]
