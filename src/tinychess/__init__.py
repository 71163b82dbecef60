"""tinychess, a chess rules engine for legal moves, move application and game end."""

__version__ = "0.1.0"
