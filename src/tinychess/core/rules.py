"""High-level chess rules: check, checkmate, stalemate, draw detection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tinychess.core.enums import Color, GameStatus, PieceType
from tinychess.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from tinychess.core.game import Game
    from tinychess.core.move import Move
    from tinychess.core.piece import Piece

_LOGGER = logging.getLogger(__name__)


class Rules:
    """Static rule-checker that operates on a :class:`Game`."""

    @staticmethod
    def is_in_check(game: Game) -> bool:
        gen = MoveGenerator(game)
        return gen.is_in_check(game.turn)

    @staticmethod
    def repetition_count(game: Game) -> int:
        """Stored snapshots equal to the current board.

        With ``strict_repetition`` boards must match piece for piece,
        move flags included; otherwise placement and side to move decide.
        """
        history = game.repetition_history
        if game.config.strict_repetition:
            return sum(1 for board in history if board == game.board)

        key = game.board.placement_key()
        n = len(history)
        # One snapshot per ply: an even distance means the same side to move.
        return sum(
            1
            for i, board in enumerate(history)
            if (n - i) % 2 == 0 and board.placement_key() == key
        )

    @staticmethod
    def update_after_move(game: Game, piece: Piece, move: Move) -> None:
        """Termination bookkeeping after *piece* made *move* and the turn flipped."""
        gen = MoveGenerator(game)
        in_check = gen.is_in_check(game.turn)

        if not gen.has_legal_moves():
            if in_check:
                game.checkmate = True
            else:
                game.declare_draw(GameStatus.STALEMATE)
            _LOGGER.debug("No legal moves for %s: %s", game.turn, Rules.status(game).name)
            return

        config = game.config
        is_pawn = piece.piece_type == PieceType.PAWN

        # Fifty-move rule, counted in plies
        if is_pawn or (config.capture_resets_halfmove_clock and move.is_capture):
            game.halfmove_clock = 0
        else:
            game.halfmove_clock += 1
            if game.halfmove_clock >= config.halfmove_limit:
                game.declare_draw(GameStatus.DRAW_FIFTY_MOVE)

        # Repetition; captures and pawn moves cannot be undone
        if is_pawn or move.is_capture:
            game.repetition_history.clear()
        else:
            if Rules.repetition_count(game) + 1 >= config.repetition_limit:
                game.declare_draw(GameStatus.DRAW_REPETITION)
            game.repetition_history.append(game.board.copy())

        if game.draw:
            _LOGGER.debug("Draw: %s", Rules.status(game).name)

    @staticmethod
    def status(game: Game) -> GameStatus:
        """Current status from the point of view of the side to move."""
        if game.checkmate:
            return GameStatus.CHECKMATE
        if game.draw_reason is not None:
            return game.draw_reason
        if Rules.is_in_check(game):
            return GameStatus.CHECK
        return GameStatus.IN_PROGRESS

    @staticmethod
    def winner(game: Game) -> Color | None:
        """The mating side, or ``None`` when nobody has won."""
        if game.checkmate:
            return game.turn.opposite
        return None
