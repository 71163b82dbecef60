"""Rule settings attached to every game."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Tunable draw rules.

    The defaults keep the engine's historical behaviour: only pawn moves
    reset the halfmove clock, and repetition compares the full piece state
    (including ``has_moved`` / ``pawn_double_moved``).
    """

    # Draw rules
    halfmove_limit: int = 100  # 50 full moves
    repetition_limit: int = 3

    # Standard-chess variants of the draw rules
    capture_resets_halfmove_clock: bool = False
    strict_repetition: bool = True

    def __post_init__(self) -> None:
        if self.halfmove_limit < 1:
            raise ValueError(f"halfmove_limit must be positive: {self.halfmove_limit}")
        if self.repetition_limit < 2:
            raise ValueError(
                f"repetition_limit must be at least 2: {self.repetition_limit}"
            )

    @classmethod
    def standard(cls) -> RulesConfig:
        """FIDE-style clock and repetition handling."""
        return cls(capture_resets_halfmove_clock=True, strict_repetition=False)
