"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from tinychess.core.board import Board
from tinychess.core.config import RulesConfig
from tinychess.core.enums import Color
from tinychess.core.game import Game
from tinychess.core.move import Move
from tinychess.core.piece import Piece
from tinychess.core.types import Square
from tinychess.game.api import apply_move

GameFactory = Callable[..., Game]
Player = Callable[..., list[Move]]


@pytest.fixture
def game() -> Game:
    """Fresh game from the standard starting position."""
    return Game.new()


@pytest.fixture
def setup_game() -> GameFactory:
    """Build a game from an explicit ``{square: piece}`` placement."""

    def _make(
        pieces: dict[Square, Piece],
        turn: Color = Color.WHITE,
        *,
        last_moved: Square | None = None,
        halfmove_clock: int = 0,
        config: RulesConfig | None = None,
    ) -> Game:
        return Game(
            Board(pieces),
            turn,
            last_moved=last_moved,
            halfmove_clock=halfmove_clock,
            config=config,
        )

    return _make


@pytest.fixture
def play() -> Player:
    """Apply ``(source, destination)`` pairs in order through the public API."""

    def _play(game: Game, *moves: tuple[Square, Square]) -> list[Move]:
        return [apply_move(game, src, dst) for src, dst in moves]

    return _play
