"""Game state — owns the board, whose turn it is and every derived flag."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from typing import TypeVar

from chessrules.core.board import Board
from chessrules.core.enums import Color, GameResult, PieceType
from chessrules.core.errors import (
    CastlingUnavailable,
    EnPassantUnavailable,
    IllegalMove,
    InvalidPromotion,
    NoPromotionPending,
    NotYourPiece,
    OutOfBounds,
)
from chessrules.core.move import Move, MoveRecord
from chessrules.core.move_generator import (
    CASTLE_PATHS,
    KING_HOME_FILE,
    KINGSIDE,
    NO_CASTLING,
    CastlingRights,
    MoveGenerator,
)
from chessrules.core.notation import board_to_fen, parse_fen
from chessrules.core.piece import Piece
from chessrules.core.rules import Rules
from chessrules.core.types import Square, in_bounds, square_name
from chessrules.game.settings import RuleSettings

_LOGGER = logging.getLogger(__name__)
_T = TypeVar("_T")

COLORS: tuple[Color, Color] = (Color.WHITE, Color.BLACK)

_PROMOTION_TYPES: frozenset[PieceType] = frozenset(
    (PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN)
)


@dataclass(frozen=True, slots=True)
class EnPassantWindow:
    """An en-passant capture open to *capturer* for exactly one turn."""

    capturer: Color
    victim: Square  # pawn that just advanced two squares
    landing: Square  # square it passed over
    attackers: tuple[Square, ...]  # capturer pawns standing beside the victim


def _per_color(factory: Callable[[], _T]) -> dict[Color, _T]:
    return {color: factory() for color in COLORS}


def _require_on_board(x: int, y: int) -> None:
    if not in_bounds(x, y):
        raise OutOfBounds(f"({x}, {y}) is off the board")


@dataclass
class GameState:
    """Single source of truth for a game in progress.

    Only :meth:`apply_move`, :meth:`make_castle`, :meth:`capture_en_passant` and
    :meth:`promote` change the board; only the first three flip ``turn``.
    Every rejected call raises a :class:`RuleViolation` before touching
    anything.
    """

    board: Board = field(default_factory=Board.initial)
    turn: Color = Color.WHITE
    settings: RuleSettings = field(default_factory=RuleSettings)

    castling: dict[Color, CastlingRights] = field(init=False)
    in_check: dict[Color, bool] = field(init=False)
    promotion: dict[Color, Square | None] = field(init=False)
    captures: dict[Color, list[PieceType]] = field(init=False)
    moves: dict[Color, list[MoveRecord]] = field(init=False)
    en_passant: dict[Color, bool] = field(init=False)
    checkmate: dict[Color, bool] = field(init=False)
    repetitions: dict[Color, int] = field(init=False)
    stalemate: bool = field(default=False, init=False)

    _window: EnPassantWindow | None = field(default=None, init=False, repr=False)
    _positions: Counter[Hashable] = field(
        default_factory=Counter, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self.castling = _per_color(lambda: NO_CASTLING)
        self.in_check = _per_color(bool)
        self.promotion = _per_color(lambda: None)
        self.captures = _per_color(list)
        self.moves = _per_color(list)
        self.en_passant = _per_color(bool)
        self.checkmate = _per_color(bool)
        self.repetitions = _per_color(int)
        self._refresh()
        self._positions[self._position_key()] += 1

    @classmethod
    def from_fen(cls, fen: str, settings: RuleSettings | None = None) -> GameState:
        board, turn = parse_fen(fen)
        return cls(board, turn, settings or RuleSettings())

    def to_fen(self) -> str:
        return board_to_fen(self.board, self.turn)

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self, x: int, y: int) -> list[Move]:
        """Legal destinations for the piece on ``(x, y)`` (castling excluded)."""
        _require_on_board(x, y)
        return MoveGenerator(self.board).legal_moves(x, y)

    def castling_rights(self, color: Color) -> CastlingRights:
        return self.castling[color]

    def is_in_check(self, color: Color) -> bool:
        return self.in_check[color]

    def is_checkmate(self, color: Color) -> bool:
        return self.checkmate[color]

    def pending_promotion(self, color: Color) -> Square | None:
        return self.promotion[color]

    def captures_of(self, color: Color) -> list[PieceType]:
        """Kinds of the pieces *color* has captured, in capture order."""
        return list(self.captures[color])

    def moves_of(self, color: Color) -> list[MoveRecord]:
        """*color*'s moves, most recent first."""
        return list(self.moves[color])

    def en_passant_available(self, color: Color) -> bool:
        return self.en_passant[color]

    def en_passant_target(self, color: Color) -> Square | None:
        """Square a pawn of *color* would land on when capturing en passant."""
        window = self._window
        if window is None or window.capturer != color:
            return None
        return window.landing

    def game_over(self) -> Color | None:
        """The winner, or ``None`` while nobody has won."""
        for color in COLORS:
            if self.checkmate[color]:
                return color.opposite
        if self.settings.track_repetitions:
            for color in COLORS:
                if self.repetitions[color] >= self.settings.repetition_limit:
                    return color.opposite
        return None

    @property
    def result(self) -> GameResult:
        winner = self.game_over()
        if winner == Color.WHITE:
            return GameResult.WHITE_WINS
        if winner == Color.BLACK:
            return GameResult.BLACK_WINS
        if self.stalemate:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    # ── Mutations ────────────────────────────────────────────────────────

    def apply_move(self, move: Move, from_x: int, from_y: int) -> MoveRecord:
        """Move the side to move's piece on ``(from_x, from_y)`` to *move*."""
        _require_on_board(from_x, from_y)
        _require_on_board(move.x, move.y)

        origin = (from_x, from_y)
        piece = self.board[origin]
        if piece.is_empty or piece.color != self.turn:
            raise NotYourPiece(
                f"{self.board.describe(origin)} is not {self.turn}'s to move"
            )
        if move not in MoveGenerator(self.board).legal_moves(from_x, from_y):
            raise IllegalMove(
                f"{self.board.describe(origin)} cannot move to {move}"
            )

        mover = self.turn
        captured = self.board.move_piece(origin, move.square)
        if not captured.is_empty:
            self.captures[mover].append(captured.piece_type)

        window = None
        if piece.piece_type == PieceType.PAWN and abs(move.y - from_y) == 2:
            passed = (from_x, (from_y + move.y) // 2)
            window = self._open_window(mover, move.square, passed)

        record = MoveRecord(move, piece.piece_type)
        _LOGGER.debug(
            "%s %s %s-%s%s",
            mover,
            piece.piece_type.name.lower(),
            square_name(origin),
            move,
            "" if captured.is_empty else f" takes {captured.piece_type.name.lower()}",
        )
        self._finish_turn(mover, record, window)
        return record

    def promote(self, new_kind: PieceType, color: Color) -> None:
        """Replace *color*'s pawn on the far back rank with *new_kind*."""
        sq = self.promotion[color]
        if sq is None:
            raise NoPromotionPending(f"{color} has no pawn to promote")
        if new_kind not in _PROMOTION_TYPES:
            raise InvalidPromotion(f"cannot promote to {new_kind.name.lower()}")

        self.board[sq] = Piece(color, new_kind)
        _LOGGER.debug(
            "%s promotes on %s to %s", color, square_name(sq), new_kind.name.lower()
        )
        self._refresh()
        self._log_if_over()

    def make_castle(self, color: Color, direction: int) -> MoveRecord:
        """Castle kingside (``+1``) or queenside (``-1``)."""
        path = CASTLE_PATHS.get(direction)
        if path is None:
            raise ValueError(f"castling direction must be +1 or -1: {direction!r}")
        if color != self.turn:
            raise NotYourPiece(f"it is {self.turn}'s turn, not {color}'s")

        rights = MoveGenerator(self.board).castling_rights(color)
        allowed = rights.kingside if direction == KINGSIDE else rights.queenside
        if not allowed:
            side = "kingside" if direction == KINGSIDE else "queenside"
            raise CastlingUnavailable(f"{color} cannot castle {side}")

        rank = color.back_rank
        self.board.move_piece((KING_HOME_FILE, rank), (path.king_to, rank))
        self.board.move_piece((path.rook_file, rank), (path.rook_to, rank))

        record = MoveRecord(Move(path.king_to, rank), PieceType.KING)
        _LOGGER.debug("%s castles to %s", color, record.move)
        self._finish_turn(color, record, None)
        return record

    def capture_en_passant(
        self, color: Color, from_x: int, from_y: int
    ) -> MoveRecord:
        """Capture en passant with *color*'s pawn on ``(from_x, from_y)``."""
        _require_on_board(from_x, from_y)
        if color != self.turn:
            raise NotYourPiece(f"it is {self.turn}'s turn, not {color}'s")

        origin = (from_x, from_y)
        pawn = self.board[origin]
        if pawn.color != color or pawn.piece_type != PieceType.PAWN:
            raise NotYourPiece(f"{self.board.describe(origin)} is not {color}'s pawn")

        window = self._window
        if window is None or window.capturer != color:
            raise EnPassantUnavailable(f"{color} has no en-passant capture")
        if origin not in window.attackers:
            raise EnPassantUnavailable(
                f"pawn on {square_name(origin)} is not beside "
                f"{square_name(window.victim)}"
            )

        scratch = self.board.copy()
        _capture_en_passant(scratch, origin, window)
        if MoveGenerator(scratch).is_in_check(color):
            raise IllegalMove(
                f"en passant from {square_name(origin)} exposes the king"
            )

        _capture_en_passant(self.board, origin, window)
        self.captures[color].append(PieceType.PAWN)

        record = MoveRecord(Move.to(window.landing), PieceType.PAWN)
        _LOGGER.debug(
            "%s pawn %s takes en passant on %s",
            color,
            square_name(origin),
            square_name(window.victim),
        )
        self._finish_turn(color, record, None)
        return record

    # ── Internal helpers ─────────────────────────────────────────────────

    def _open_window(
        self, mover: Color, victim: Square, landing: Square
    ) -> EnPassantWindow | None:
        capturer = mover.opposite
        pawn = Piece(capturer, PieceType.PAWN)
        vx, vy = victim
        attackers = tuple(
            (ax, vy)
            for ax in (vx - 1, vx + 1)
            if in_bounds(ax, vy) and self.board[ax, vy].same_kind(pawn)
        )
        if not attackers:
            return None
        return EnPassantWindow(capturer, victim, landing, attackers)

    def _finish_turn(
        self, mover: Color, record: MoveRecord, window: EnPassantWindow | None
    ) -> None:
        # Any move closes the previous window.
        self._window = window
        self.turn = mover.opposite
        self.moves[mover].insert(0, record)
        self._refresh()
        if self.settings.track_repetitions:
            key = self._position_key()
            self._positions[key] += 1
            self.repetitions[mover] = self._positions[key]
        self._log_if_over()

    def _refresh(self) -> None:
        gen = MoveGenerator(self.board)
        for color in COLORS:
            self.promotion[color] = Rules.pending_promotion(self.board, color)
            self.castling[color] = gen.castling_rights(color)
            self.in_check[color] = gen.is_in_check(color)
            self.en_passant[color] = (
                self._window is not None and self._window.capturer == color
            )
        for color in COLORS:
            self.checkmate[color] = self.in_check[color] and not self._can_move(color)
        self.stalemate = not self.in_check[self.turn] and not self._can_move(self.turn)

    def _can_move(self, color: Color) -> bool:
        if Rules.has_legal_moves(self.board, color):
            return True
        window = self._window
        if window is None or window.capturer != color:
            return False
        for origin in window.attackers:
            scratch = self.board.copy()
            _capture_en_passant(scratch, origin, window)
            if not MoveGenerator(scratch).is_in_check(color):
                return True
        return False

    def _position_key(self) -> Hashable:
        window = self._window
        return (
            self.board.placement(),
            self.turn,
            self.castling[Color.WHITE],
            self.castling[Color.BLACK],
            None if window is None else (window.capturer, window.landing),
        )

    def _log_if_over(self) -> None:
        result = self.result
        if result != GameResult.IN_PROGRESS:
            _LOGGER.info("Game over: %s", result.name)


def _capture_en_passant(
    board: Board, origin: Square, window: EnPassantWindow
) -> None:
    board.move_piece(origin, window.landing)
    board[window.victim] = Piece.empty()
