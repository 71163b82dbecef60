"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from tinychess.core import Game, MoveGenerator
    from tinychess.core.types import E2

    game = Game.new()
    for move in MoveGenerator(game).legal_moves(E2):
        print(move)
"""

from tinychess.core.board import Board
from tinychess.core.config import RulesConfig
from tinychess.core.enums import PROMOTION_TYPES, Color, GameStatus, PieceType
from tinychess.core.errors import (
    ChessError,
    GameOver,
    IllegalMove,
    InvalidPromotion,
    NoPieceAtPosition,
)
from tinychess.core.game import Game, is_promotion
from tinychess.core.move import Move
from tinychess.core.move_generator import MoveGenerator
from tinychess.core.piece import Piece
from tinychess.core.rules import Rules
from tinychess.core.types import (
    Square,
    as_square,
    in_bounds,
    make_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "PROMOTION_TYPES",
    "PieceType",
    # Types / helpers
    "Square",
    "as_square",
    "in_bounds",
    "make_square",
    "parse_square",
    "square_name",
    # Errors
    "ChessError",
    "GameOver",
    "IllegalMove",
    "InvalidPromotion",
    "NoPieceAtPosition",
    # Domain objects
    "Board",
    "Game",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    "RulesConfig",
    "is_promotion",
]
