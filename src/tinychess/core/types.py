"""Square type and coordinate helpers.

Board layout (file, rank), rank 0 is Black's back rank:
    a8=(0, 0), b8=(1, 0), ..., h8=(7, 0)
    ...
    a1=(0, 7), b1=(1, 7), ..., h1=(7, 7)
"""

from __future__ import annotations

from typing import NamedTuple

_FILES = "abcdefgh"


class Square(NamedTuple):
    """Board coordinate: file 0–7 (a–h), rank 0–7 (8–1)."""

    file: int
    rank: int

    def offset(self, df: int, dr: int) -> Square:
        return Square(self.file + df, self.rank + dr)

    def __str__(self) -> str:
        return square_name(self)


def make_square(file: int, rank: int) -> Square:
    """Create square from file (0–7) and rank (0–7)."""
    return Square(file, rank)


def as_square(sq: tuple[int, int]) -> Square:
    """Accept a plain ``(file, rank)`` pair wherever a square is expected."""
    return sq if isinstance(sq, Square) else Square(*sq)


def in_bounds(sq: tuple[int, int]) -> bool:
    """Whether *sq* lies on the 8x8 board."""
    file, rank = sq
    return 0 <= file <= 7 and 0 <= rank <= 7


def square_name(sq: tuple[int, int]) -> str:
    """Human-readable name, e.g. (4, 7) → 'e1'; off-board squares print as pairs."""
    if not in_bounds(sq):
        return str(tuple(sq))
    file, rank = sq
    return _FILES[file] + str(8 - rank)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → (4, 4)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(_FILES.index(name[0]), 8 - int(name[1]))


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Square(f, 0) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(f, 1) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(f, 2) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(f, 3) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(f, 4) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(f, 5) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(f, 6) for f in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Square(f, 7) for f in range(8))
