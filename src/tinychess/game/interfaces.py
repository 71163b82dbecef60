"""Session states for the interactive game layer."""

from __future__ import annotations

from enum import IntEnum, auto


class GamePhase(IntEnum):
    """Finite-state-machine states of an interactive session."""

    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()  # a promoting move waits for the piece choice
    GAME_OVER = auto()
