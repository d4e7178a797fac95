"""Game management layer — state machine, controller, settings.

Quick start::

    from chessrules.core import Move
    from chessrules.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    ctrl.submit_move(Move(4, 4), (4, 6))  # e2-e4
"""

from chessrules.game.controller import GameController, GameEvents, GamePhase
from chessrules.game.settings import RuleSettings
from chessrules.game.state import EnPassantWindow, GameState

__all__ = [
    "EnPassantWindow",
    "GameController",
    "GameEvents",
    "GamePhase",
    "GameState",
    "RuleSettings",
]
