"""GameController: interactive session around a single :class:`Game`.

Turns square selections (clicks, taps, typed coordinates) into moves,
holds a promoting move until the piece is chosen, and notifies listeners
via simple callbacks so a UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from tinychess.core.config import RulesConfig
from tinychess.core.enums import GameStatus, PieceType
from tinychess.core.errors import ChessError
from tinychess.core.game import Game, is_promotion
from tinychess.core.move import Move
from tinychess.core.types import Square, as_square, square_name
from tinychess.game import api
from tinychess.game.interfaces import GamePhase

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Square, Move, Game], None]  # source, move, game
GameOverCallback = Callable[[GameStatus], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Owns one game for the life of a session.

    Not thread-safe: call it from the thread that handles user input.
    """

    __slots__ = ("_game", "_config", "_selected", "_pending", "events")

    def __init__(self, config: RulesConfig | None = None) -> None:
        self._config = config
        self._game = api.new_game(config)
        self._selected: Square | None = None
        self._pending: Move | None = None
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def game(self) -> Game:
        return self._game

    @property
    def selected(self) -> Square | None:
        return self._selected

    @property
    def pending_promotion(self) -> Move | None:
        return self._pending

    @property
    def phase(self) -> GamePhase:
        if self._game.is_over:
            return GamePhase.GAME_OVER
        if self._pending is not None:
            return GamePhase.AWAITING_PROMOTION
        return GamePhase.AWAITING_MOVE

    @property
    def status(self) -> GameStatus:
        return api.status(self._game)

    # ── Session lifecycle ────────────────────────────────────────────────

    def new_game(self, game: Game | None = None) -> None:
        """Start over from the opening position, or continue *game*."""
        self._game = game if game is not None else api.new_game(self._config)
        self._selected = None
        self._pending = None

    # ── Input ────────────────────────────────────────────────────────────

    def select(self, square: Square) -> list[Move]:
        """Handle a click on *square*; return the moves to highlight."""
        square = as_square(square)
        if self._pending is not None or self._game.is_over:
            return []

        selected = self._selected
        if selected == square:
            self._selected = None
            return []

        if selected is None:
            return self._select_piece(square)

        move = self._find_move(selected, square)
        if move is None:
            # Not a destination: treat the click as a new selection.
            self._selected = None
            return self._select_piece(square)

        piece = self._game.board[selected]
        if piece is not None and is_promotion(piece, square):
            self._pending = move
            return []

        self._selected = None
        self.submit_move(selected, square)
        return []

    def choose_promotion(self, piece_type: PieceType) -> bool:
        """Complete the pending promotion with *piece_type*."""
        pending = self._pending
        source = self._selected
        if pending is None or source is None:
            return False
        if not self.submit_move(source, pending.destination, piece_type):
            return False
        self._pending = None
        self._selected = None
        return True

    def cancel_promotion(self) -> None:
        self._pending = None
        self._selected = None

    def submit_move(
        self,
        source: Square,
        destination: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        """Submit a move. Returns True if legal and applied."""
        source = as_square(source)
        try:
            move = api.apply_move(self._game, source, destination, promotion)
        except ChessError as exc:
            _LOGGER.warning("Rejected move: %s", exc)
            return False

        self._emit_move(source, move)
        if self._game.is_over:
            status = api.status(self._game)
            _LOGGER.info(
                "Game over after %s -> %s: %s",
                square_name(source),
                move,
                status.name,
            )
            self._emit_game_over(status)
        return True

    # ── Internal ─────────────────────────────────────────────────────────

    def _select_piece(self, square: Square) -> list[Move]:
        if self._game.board[square] is None:
            return []
        moves = api.legal_moves(self._game, square)
        if moves:
            self._selected = square
        return moves

    def _find_move(self, source: Square, destination: Square) -> Move | None:
        for move in api.legal_moves(self._game, source):
            if move.destination == destination:
                return move
        return None

    def _emit_move(self, source: Square, move: Move) -> None:
        for cb in self.events.on_move:
            cb(source, move, self._game)

    def _emit_game_over(self, status: GameStatus) -> None:
        for cb in self.events.on_game_over:
            cb(status)
