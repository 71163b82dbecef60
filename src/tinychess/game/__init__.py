"""Game layer: functional API and the interactive session controller.

Quick start::

    from tinychess.game import apply_move, legal_moves, new_game, status
    from tinychess.core.types import E2, E4

    game = new_game()
    apply_move(game, E2, E4)
"""

from tinychess.game.api import apply_move, legal_moves, new_game, status
from tinychess.game.controller import GameController, GameEvents
from tinychess.game.interfaces import GamePhase

__all__ = [
    # Functional API
    "apply_move",
    "legal_moves",
    "new_game",
    "status",
    # Session
    "GameController",
    "GameEvents",
    "GamePhase",
]
