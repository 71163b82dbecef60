"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from tinychess.core.enums import Color, PieceType

_FEN_CHARS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece.

    ``has_moved`` gates castling and the pawn double step;
    ``pawn_double_moved`` is only true right after the pawn's own two-square
    advance and gates en passant.
    """

    color: Color
    piece_type: PieceType
    has_moved: bool = False
    pawn_double_moved: bool = False

    def moved(self, *, double_step: bool = False) -> Piece:
        """Copy of this piece after it made a move."""
        return replace(self, has_moved=True, pawn_double_moved=double_step)

    def promoted(self, piece_type: PieceType) -> Piece:
        return Piece(self.color, piece_type, has_moved=True)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Letter (uppercase = white, lowercase = black)."""
        char = _FEN_CHARS[self.piece_type]
        return char.upper() if self.color == Color.WHITE else char

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]
