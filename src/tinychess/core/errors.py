"""Exceptions raised by the rules engine.

All of them describe bad caller input and leave the game untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tinychess.core.types import square_name

if TYPE_CHECKING:
    from tinychess.core.enums import GameStatus
    from tinychess.core.types import Square


class ChessError(Exception):
    """Base class for rule violations reported to the caller."""


class NoPieceAtPosition(ChessError):
    """A query or move named an empty square."""

    def __init__(self, square: Square) -> None:
        super().__init__(f"No piece on {square_name(square)}")
        self.square = square


class IllegalMove(ChessError):
    """The destination is not among the piece's current legal moves."""

    def __init__(self, source: Square, destination: Square) -> None:
        super().__init__(
            f"Illegal move {square_name(source)} -> {square_name(destination)}"
        )
        self.source = source
        self.destination = destination


class InvalidPromotion(ChessError):
    """Missing or unusable promotion choice."""

    def __init__(self, promotion: object, reason: str) -> None:
        super().__init__(reason)
        self.promotion = promotion


class GameOver(ChessError):
    """A move was attempted after checkmate or a draw."""

    def __init__(self, status: GameStatus) -> None:
        super().__init__(f"Game is over: {status.name.lower()}")
        self.status = status
