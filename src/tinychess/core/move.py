"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from tinychess.core.enums import PieceType
from tinychess.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object for one candidate destination of a piece.

    ``captured`` is set for every capture and only differs from
    ``destination`` for en passant.  Castling moves carry the rook's start
    square and the square it lands on.
    """

    destination: Square
    captured: Square | None = None
    castle_rook_from: Square | None = None
    castle_rook_to: Square | None = None
    promotion: PieceType | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_en_passant(self) -> bool:
        return self.captured is not None and self.captured != self.destination

    @property
    def is_castle(self) -> bool:
        return self.castle_rook_from is not None and self.castle_rook_to is not None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = square_name(self.destination)
        if self.is_capture:
            base = "x" + base
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base
