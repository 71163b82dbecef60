"""Functional entry points used by presentation layers.

Every failure is raised as a :class:`~tinychess.core.errors.ChessError`
subclass and leaves the game exactly as it was.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tinychess.core.errors import GameOver, IllegalMove, NoPieceAtPosition
from tinychess.core.game import Game
from tinychess.core.move_generator import MoveGenerator
from tinychess.core.rules import Rules
from tinychess.core.types import as_square, in_bounds

if TYPE_CHECKING:
    from tinychess.core.config import RulesConfig
    from tinychess.core.enums import GameStatus, PieceType
    from tinychess.core.move import Move
    from tinychess.core.types import Square


def new_game(config: RulesConfig | None = None) -> Game:
    """Standard 32-piece setup, White to move."""
    return Game.new(config)


def legal_moves(game: Game, square: Square) -> list[Move]:
    """Legal moves of the piece on *square*, in generation order.

    Squares may be plain ``(file, rank)`` pairs.  Raises
    :class:`NoPieceAtPosition` for an empty or off-board square; returns an
    empty list for the side not on move or a finished game.
    """
    square = as_square(square)
    if not in_bounds(square):
        raise NoPieceAtPosition(square)
    return MoveGenerator(game).legal_moves(square)


def apply_move(
    game: Game,
    square: Square,
    destination: Square,
    promotion: PieceType | None = None,
) -> Move:
    """Play *square* → *destination* and return the applied move."""
    if game.is_over:
        raise GameOver(Rules.status(game))
    square = as_square(square)
    destination = as_square(destination)
    if not in_bounds(square) or game.board[square] is None:
        raise NoPieceAtPosition(square)
    if not in_bounds(destination):
        raise IllegalMove(square, destination)

    applied = game.make_move(square, destination, promotion=promotion)
    if applied is None:
        raise IllegalMove(square, destination)
    return applied


def status(game: Game) -> GameStatus:
    return Rules.status(game)
