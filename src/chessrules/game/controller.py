"""GameController — the entry point surrounding interfaces talk to.

Wraps a :class:`GameState`, turns rule violations into ``False`` results and
emits events via simple callbacks so a UI or tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum, auto

from chessrules.core.enums import Color, GameResult, PieceType
from chessrules.core.errors import RuleViolation
from chessrules.core.move import Move, MoveRecord
from chessrules.core.types import Square
from chessrules.game.settings import RuleSettings
from chessrules.game.state import GameState

_LOGGER = logging.getLogger(__name__)


class GamePhase(IntEnum):
    """Finite-state-machine states for a game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()
    GAME_OVER = auto()


# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Color, MoveRecord, GameState], None]  # mover, record, state
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Validates submissions, applies them to the state, notifies listeners.

    Methods are meant to be called from a single thread; a controller and its
    state must never be shared between workers.
    """

    __slots__ = ("_state", "_phase", "_settings", "events")

    def __init__(self, settings: RuleSettings | None = None) -> None:
        self._settings = settings or RuleSettings()
        self._state = GameState(settings=self._settings)
        self._phase = GamePhase.NOT_STARTED
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def turn(self) -> Color:
        return self._state.turn

    def legal_moves(self, sq: Square) -> list[Move]:
        return self._state.legal_moves(*sq)

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        if fen is None:
            self._state = GameState(settings=self._settings)
        else:
            self._state = GameState.from_fen(fen, self._settings)
        self._set_phase(GamePhase.AWAITING_MOVE)
        if self._state.is_game_over:
            self._finish()

    # ── Submissions ──────────────────────────────────────────────────────

    def submit_move(self, move: Move, from_sq: Square) -> bool:
        if not self._accepting_moves():
            return False
        mover = self._state.turn
        try:
            record = self._state.apply_move(move, *from_sq)
        except RuleViolation as exc:
            _LOGGER.info("Move rejected: %s", exc)
            return False
        self._after_turn(mover, record)
        return True

    def submit_castle(self, direction: int) -> bool:
        if not self._accepting_moves():
            return False
        mover = self._state.turn
        try:
            record = self._state.make_castle(mover, direction)
        except RuleViolation as exc:
            _LOGGER.info("Castling rejected: %s", exc)
            return False
        self._after_turn(mover, record)
        return True

    def submit_en_passant(self, from_sq: Square) -> bool:
        if not self._accepting_moves():
            return False
        mover = self._state.turn
        try:
            record = self._state.capture_en_passant(mover, *from_sq)
        except RuleViolation as exc:
            _LOGGER.info("En passant rejected: %s", exc)
            return False
        self._after_turn(mover, record)
        return True

    def submit_promotion(self, kind: PieceType) -> bool:
        if self._phase != GamePhase.AWAITING_PROMOTION:
            return False
        try:
            self._state.promote(kind, self._state.turn.opposite)
        except RuleViolation as exc:
            _LOGGER.info("Promotion rejected: %s", exc)
            return False
        if self._state.is_game_over:
            self._finish()
        else:
            self._set_phase(GamePhase.AWAITING_MOVE)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _accepting_moves(self) -> bool:
        return self._phase == GamePhase.AWAITING_MOVE

    def _after_turn(self, mover: Color, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(mover, record, self._state)

        if self._state.pending_promotion(mover) is not None:
            self._set_phase(GamePhase.AWAITING_PROMOTION)
        elif self._state.is_game_over:
            self._finish()

    def _finish(self) -> None:
        self._set_phase(GamePhase.GAME_OVER)
        result = self._state.result
        for cb in self.events.on_game_over:
            cb(result)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
