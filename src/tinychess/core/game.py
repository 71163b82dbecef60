"""Game: complete game state (board + turn + draw bookkeeping) and moves."""

from __future__ import annotations

import logging
from dataclasses import replace

from tinychess.core.board import Board
from tinychess.core.config import RulesConfig
from tinychess.core.enums import PROMOTION_TYPES, Color, GameStatus, PieceType
from tinychess.core.errors import GameOver, InvalidPromotion, NoPieceAtPosition
from tinychess.core.move import Move
from tinychess.core.move_generator import MoveGenerator
from tinychess.core.piece import Piece
from tinychess.core.rules import Rules
from tinychess.core.types import Square, as_square, square_name

_LOGGER = logging.getLogger(__name__)


def is_promotion(piece: Piece, destination: Square) -> bool:
    """Whether *piece* moving to *destination* reaches the farthest rank."""
    return (
        piece.piece_type == PieceType.PAWN
        and destination.rank == piece.color.opposite.back_rank
    )


class Game:
    """Full game state: board + side to move + move gating + draw counters.

    ``last_moved`` is the destination square of the previous move; it is a
    key into :attr:`board`, never a piece copy.  ``repetition_history`` holds
    one board snapshot per ply since the last capture or pawn move.
    """

    __slots__ = (
        "board",
        "turn",
        "last_moved",
        "checkmate",
        "draw_reason",
        "halfmove_clock",
        "repetition_history",
        "config",
    )

    def __init__(
        self,
        board: Board | None = None,
        turn: Color = Color.WHITE,
        last_moved: Square | None = None,
        halfmove_clock: int = 0,
        config: RulesConfig | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.turn = turn
        self.last_moved = last_moved
        self.checkmate = False
        self.draw_reason: GameStatus | None = None
        self.halfmove_clock = halfmove_clock
        self.repetition_history: list[Board] = []
        self.config = config if config is not None else RulesConfig()

    @classmethod
    def new(cls, config: RulesConfig | None = None) -> Game:
        """Standard starting position, White to move."""
        return cls(Board.initial(), Color.WHITE, config=config)

    # ── State queries ────────────────────────────────────────────────────

    @property
    def draw(self) -> bool:
        return self.draw_reason is not None

    @property
    def is_over(self) -> bool:
        return self.checkmate or self.draw

    def declare_draw(self, reason: GameStatus) -> None:
        """Mark the game drawn; the first reason recorded wins."""
        if self.draw_reason is None:
            self.draw_reason = reason

    # ── Core move operation ──────────────────────────────────────────────

    def make_move(
        self,
        source: Square,
        destination: Square,
        move: Move | None = None,
        *,
        promotion: PieceType | None = None,
        simulation: bool = False,
    ) -> Move | None:
        """Move the piece on *source* to *destination*.

        Pass *move* only when it already came out of the legality filter;
        without it the legal moves of *source* are searched and ``None`` is
        returned (game untouched) when *destination* is not among them.
        Raises :class:`GameOver` once the game has ended.

        In *simulation* mode only the board, flags and turn change: no
        promotion, no draw or mate bookkeeping.  The legality filter uses it
        on copies of the game.
        """
        source = as_square(source)
        destination = as_square(destination)
        piece = self.board[source]
        if piece is None:
            raise NoPieceAtPosition(source)

        if simulation:
            if move is None:
                raise ValueError("Simulated moves must come from the legality filter")
            self._apply(source, piece, move, None)
            return move

        if self.is_over:
            raise GameOver(Rules.status(self))

        if move is None:
            move = MoveGenerator(self).find_legal_move(source, destination)
            if move is None:
                return None
        elif move.destination != destination:
            raise ValueError(
                f"Move to {square_name(move.destination)} does not match "
                f"destination {square_name(destination)}"
            )

        self._check_promotion(piece, destination, promotion)
        applied = self._apply(source, piece, move, promotion)
        _LOGGER.debug(
            "%s %s %s -> %s",
            piece.color,
            piece.piece_type.name.lower(),
            square_name(source),
            applied,
        )
        Rules.update_after_move(self, piece, applied)
        return applied

    def _apply(
        self,
        source: Square,
        piece: Piece,
        move: Move,
        promotion: PieceType | None,
    ) -> Move:
        board = self.board

        rook_from = move.castle_rook_from
        rook = board[rook_from] if rook_from is not None else None
        if move.is_castle and rook is None:
            raise ValueError(f"No rook on {square_name(rook_from)} to castle with")

        if move.captured is not None:
            board.remove(move.captured)

        # Only the piece that moved last may keep its double-step flag.
        if self.last_moved is not None:
            previous = board[self.last_moved]
            if previous is not None and previous.pawn_double_moved:
                board[self.last_moved] = previous.moved()

        double_step = (
            piece.piece_type == PieceType.PAWN
            and abs(move.destination.rank - source.rank) == 2
        )
        placed = piece.moved(double_step=double_step)
        if promotion is not None:
            placed = piece.promoted(promotion)

        board[move.destination] = placed
        board.remove(source)

        if rook is not None:
            board.remove(rook_from)  # type: ignore[arg-type]
            board[move.castle_rook_to] = rook.moved()  # type: ignore[index]

        self.last_moved = move.destination
        self.turn = self.turn.opposite

        if promotion is not None:
            return replace(move, promotion=promotion)
        return move

    @staticmethod
    def _check_promotion(
        piece: Piece, destination: Square, promotion: object
    ) -> None:
        if is_promotion(piece, destination):
            if promotion is None:
                raise InvalidPromotion(None, "Promotion piece required")
            if not isinstance(promotion, PieceType):
                raise InvalidPromotion(promotion, f"Not a piece kind: {promotion!r}")
            if promotion not in PROMOTION_TYPES:
                raise InvalidPromotion(
                    promotion, f"Cannot promote to {promotion.name.lower()}"
                )
        elif promotion is not None:
            raise InvalidPromotion(promotion, "Move does not promote")

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Game:
        """Deep copy; stored snapshots are never mutated, so they are shared."""
        game = Game(
            board=self.board.copy(),
            turn=self.turn,
            last_moved=self.last_moved,
            halfmove_clock=self.halfmove_clock,
            config=self.config,
        )
        game.checkmate = self.checkmate
        game.draw_reason = self.draw_reason
        game.repetition_history = self.repetition_history.copy()
        return game

    def __repr__(self) -> str:
        return f"{self.board!r}\n{self.turn} to move"
