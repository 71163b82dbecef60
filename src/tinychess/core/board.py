"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator

from tinychess.core.enums import Color, PieceType
from tinychess.core.piece import Piece
from tinychess.core.types import Square, as_square, in_bounds, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _scan_order(sq: Square) -> tuple[int, int]:
    return (sq.rank, sq.file)


class Board:
    """Mutable square → piece mapping; unoccupied squares are absent."""

    __slots__ = ("_pieces",)

    def __init__(self, pieces: dict[Square, Piece] | None = None) -> None:
        self._pieces: dict[Square, Piece] = {}
        if pieces:
            for sq, piece in pieces.items():
                self[sq] = piece

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._pieces.get(sq)

    def __setitem__(self, sq: Square, piece: Piece) -> None:
        sq = as_square(sq)
        if not in_bounds(sq):
            raise ValueError(f"Square off the board: {tuple(sq)}")
        self._pieces[sq] = piece

    def __delitem__(self, sq: Square) -> None:
        del self._pieces[sq]

    def __contains__(self, sq: object) -> bool:
        return sq in self._pieces

    def __len__(self) -> int:
        return len(self._pieces)

    def __iter__(self) -> Iterator[Square]:
        return iter(self.squares())

    def remove(self, sq: Square) -> Piece | None:
        """Clear *sq*, returning whatever stood there."""
        return self._pieces.pop(sq, None)

    def is_empty(self, sq: Square) -> bool:
        return sq not in self._pieces

    # -- Query helpers ------------------------------------------------------

    def squares(self) -> list[Square]:
        """Occupied squares in ascending (rank, file) order."""
        return sorted(self._pieces, key=_scan_order)

    def pieces(self, color: Color) -> list[Square]:
        """Squares occupied by *color*, in scan order."""
        return [sq for sq in self.squares() if self._pieces[sq].color == color]

    def king_squares(self, color: Color) -> list[Square]:
        return [
            sq
            for sq in self.pieces(color)
            if self._pieces[sq].piece_type == PieceType.KING
        ]

    def placement_key(self) -> frozenset[tuple[Square, Color, PieceType]]:
        """Placement only, ignoring the per-piece move flags."""
        return frozenset(
            (sq, piece.color, piece.piece_type) for sq, piece in self._pieces.items()
        )

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        # Pieces are frozen, so a shallow copy of the mapping is a snapshot.
        b = Board()
        b._pieces = self._pieces.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f in range(8):
            b[make_square(f, 6)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(f, 1)] = Piece(Color.BLACK, PieceType.PAWN)

        for f, pt in enumerate(_BACK_RANK):
            b[make_square(f, 7)] = Piece(Color.WHITE, pt)
            b[make_square(f, 0)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._pieces == other._pieces

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(8):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{8 - rank} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
