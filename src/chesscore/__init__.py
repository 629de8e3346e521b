"""chesscore: chess position model, FEN codec and legal move generation."""

__version__ = "0.1.0"
