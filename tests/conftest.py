"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chessrules.core.board import Board
from chessrules.game.controller import GameController
from chessrules.game.state import GameState


@pytest.fixture
def initial_board() -> Board:
    return Board.initial()


@pytest.fixture
def state() -> GameState:
    """A fresh game from the standard starting position."""
    return GameState()


@pytest.fixture
def controller() -> GameController:
    """A controller with a standard game already started."""
    ctrl = GameController()
    ctrl.new_game()
    return ctrl
