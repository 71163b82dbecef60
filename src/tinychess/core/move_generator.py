"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tinychess.core.enums import Color, PieceType
from tinychess.core.errors import NoPieceAtPosition
from tinychess.core.move import Move
from tinychess.core.types import Square, in_bounds

if TYPE_CHECKING:
    from tinychess.core.game import Game
    from tinychess.core.piece import Piece


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# (direction toward the rook, rook file): kingside first.
_CASTLE_SIDES: tuple[tuple[int, int], ...] = ((1, 7), (-1, 0))


class MoveGenerator:
    """Generates moves for single squares of a :class:`Game`.

    Legality is decided by simulating each candidate on a copy of the game;
    the wrapped game is never mutated.
    """

    __slots__ = ("_game", "_board")

    def __init__(self, game: Game) -> None:
        self._game = game
        self._board = game.board

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, sq: Square) -> list[Move]:
        """Moves of the piece on *sq* that do not leave its own king attacked."""
        piece = self._piece_at(sq)
        if self._game.is_over:
            return []

        return [
            move
            for move in self.pseudo_legal_moves(sq)
            if not self._leaves_king_attacked(sq, piece, move)
        ]

    def pseudo_legal_moves(self, sq: Square) -> list[Move]:
        """Moves obeying piece geometry only (may leave own king in check)."""
        piece = self._piece_at(sq)
        if piece.color != self._game.turn or self._game.is_over:
            return []
        return self._piece_moves(sq, piece)

    def find_legal_move(self, sq: Square, destination: Square) -> Move | None:
        for move in self.legal_moves(sq):
            if move.destination == destination:
                return move
        return None

    def all_legal_moves(self) -> dict[Square, list[Move]]:
        """Legal moves of every piece of the side to move, in scan order."""
        result: dict[Square, list[Move]] = {}
        for sq in self._board.pieces(self._game.turn):
            moves = self.legal_moves(sq)
            if moves:
                result[sq] = moves
        return result

    def has_legal_moves(self) -> bool:
        return any(self.legal_moves(sq) for sq in self._board.pieces(self._game.turn))

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Could any piece of the opponent capture a king of *color*?"""
        board = self._board
        for sq in board.pieces(color.opposite):
            for move in self._piece_moves(sq, board[sq]):  # type: ignore[arg-type]
                if move.captured is None:
                    continue
                target = board[move.captured]
                if (
                    target is not None
                    and target.piece_type == PieceType.KING
                    and target.color == color
                ):
                    return True
        return False

    # -- Legality filter (private) -----------------------------------------

    def _leaves_king_attacked(self, sq: Square, piece: Piece, move: Move) -> bool:
        clone = self._game.copy()
        clone.make_move(sq, move.destination, move, simulation=True)
        if MoveGenerator(clone).is_in_check(piece.color):
            return True

        if move.is_castle:
            # The king stays on its origin square too, so both squares are
            # tested against the opponent's captures.
            clone = self._game.copy()
            clone.board[move.castle_rook_to] = piece  # type: ignore[index]
            return MoveGenerator(clone).is_in_check(piece.color)

        return False

    # -- Piece-specific generators (private) -------------------------------

    def _piece_at(self, sq: Square) -> Piece:
        piece = self._board[sq]
        if piece is None:
            raise NoPieceAtPosition(sq)
        return piece

    def _piece_moves(self, sq: Square, piece: Piece) -> list[Move]:
        moves: list[Move] = []
        pt = piece.piece_type
        if pt == PieceType.PAWN:
            self._gen_pawn(sq, piece, moves)
        elif pt == PieceType.KNIGHT:
            self._gen_steps(sq, piece, KNIGHT_OFFSETS, moves)
        elif pt == PieceType.BISHOP:
            self._gen_sliding(sq, piece, BISHOP_DIRS, moves)
        elif pt == PieceType.ROOK:
            self._gen_sliding(sq, piece, ROOK_DIRS, moves)
        elif pt == PieceType.QUEEN:
            self._gen_sliding(sq, piece, QUEEN_DIRS, moves)
        else:
            self._gen_steps(sq, piece, KING_OFFSETS, moves)
            self._gen_castling(sq, piece, moves)
        return moves

    def _gen_pawn(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        board = self._board
        step = piece.color.forward

        one_step = sq.offset(0, step)
        if in_bounds(one_step) and board.is_empty(one_step):
            moves.append(Move(one_step))
            two_step = sq.offset(0, 2 * step)
            if (
                not piece.has_moved
                and in_bounds(two_step)
                and board.is_empty(two_step)
            ):
                moves.append(Move(two_step))

        last_moved = self._game.last_moved
        for df in (-1, 1):
            cap_sq = sq.offset(df, step)
            if not in_bounds(cap_sq):
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != piece.color:
                    moves.append(Move(cap_sq, captured=cap_sq))
                continue

            # En passant: the pawn that just double-stepped sits beside us.
            beside = sq.offset(df, 0)
            neighbour = board[beside]
            if (
                neighbour is not None
                and neighbour.color != piece.color
                and neighbour.piece_type == PieceType.PAWN
                and neighbour.pawn_double_moved
                and beside == last_moved
            ):
                moves.append(Move(cap_sq, captured=beside))

    def _gen_steps(
        self,
        sq: Square,
        piece: Piece,
        offsets: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for df, dr in offsets:
            to_sq = sq.offset(df, dr)
            if not in_bounds(to_sq):
                continue
            target = board[to_sq]
            if target is None:
                moves.append(Move(to_sq))
            elif target.color != piece.color:
                moves.append(Move(to_sq, captured=to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        piece: Piece,
        directions: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for df, dr in directions:
            to_sq = sq.offset(df, dr)
            while in_bounds(to_sq):
                target = board[to_sq]
                if target is None:
                    moves.append(Move(to_sq))
                    to_sq = to_sq.offset(df, dr)
                    continue
                if target.color != piece.color:
                    moves.append(Move(to_sq, captured=to_sq))
                break

    def _gen_castling(self, king_sq: Square, king: Piece, moves: list[Move]) -> None:
        if king.has_moved:
            return

        board = self._board
        rank = king_sq.rank
        for direction, rook_file in _CASTLE_SIDES:
            rook_sq = Square(rook_file, rank)
            rook = board[rook_sq]
            if (
                rook is None
                or rook.piece_type != PieceType.ROOK
                or rook.color != king.color
                or rook.has_moved
            ):
                continue

            low, high = sorted((king_sq.file, rook_file))
            if any(not board.is_empty(Square(f, rank)) for f in range(low + 1, high)):
                continue

            king_to = king_sq.offset(2 * direction, 0)
            if in_bounds(king_to) and board.is_empty(king_to):
                moves.append(
                    Move(
                        king_to,
                        castle_rook_from=rook_sq,
                        castle_rook_to=king_sq.offset(direction, 0),
                    )
                )
