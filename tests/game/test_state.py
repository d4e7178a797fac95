"""Tests for GameState — move application and derived flags."""

import logging

import pytest

from chessrules.core.enums import Color, GameResult, PieceType
from chessrules.core.errors import (
    CastlingUnavailable,
    EnPassantUnavailable,
    IllegalMove,
    InvalidPromotion,
    NoPromotionPending,
    NotYourPiece,
    OutOfBounds,
    RuleViolation,
)
from chessrules.core.move import Move, MoveRecord
from chessrules.core.move_generator import CastlingRights
from chessrules.core.piece import Piece
from chessrules.game.settings import RuleSettings
from chessrules.game.state import GameState

PROMOTION_FEN = "r3kbnr/1PQ1pppp/1pnp4/p3P3/2B5/7N/P1PP1PPP/RNB1K2R"
CASTLING_FEN = "rnbqkbnr/2p1pppp/1p1p4/p3P2Q/8/7N/PPPP1PPP/RNB1KB1R"
EN_PASSANT_FEN = "rnbqkbnr/pppppppp/8/4P3/8/8/PPPP1PPP/RNBQKBNR b"


class TestInitialState:
    def test_defaults(self, state: GameState) -> None:
        assert state.turn == Color.WHITE
        assert state.result == GameResult.IN_PROGRESS
        assert state.game_over() is None
        assert not state.is_in_check(Color.WHITE)
        assert state.castling_rights(Color.WHITE) == CastlingRights(False, False)
        assert state.captures_of(Color.WHITE) == []
        assert state.moves_of(Color.BLACK) == []
        assert state.repetitions == {Color.WHITE: 0, Color.BLACK: 0}

    def test_from_fen(self) -> None:
        state = GameState.from_fen("4k3/8/8/8/8/8/8/4K3 b")
        assert state.turn == Color.BLACK
        assert state.to_fen() == "4k3/8/8/8/8/8/8/4K3 b"

    def test_legal_moves_out_of_bounds(self, state: GameState) -> None:
        with pytest.raises(OutOfBounds):
            state.legal_moves(8, 0)


class TestApplyMove:
    def test_pawn_double_step(self, state: GameState) -> None:
        record = state.apply_move(Move(4, 4), 4, 6)
        assert record == MoveRecord(Move(4, 4), PieceType.PAWN)
        assert state.board[4, 4] == Piece(Color.WHITE, PieceType.PAWN, has_moved=True)
        assert state.board[4, 6].is_empty
        assert state.turn == Color.BLACK
        assert state.moves_of(Color.WHITE) == [record]

    def test_history_most_recent_first(self, state: GameState) -> None:
        first = state.apply_move(Move(4, 4), 4, 6)
        state.apply_move(Move(4, 3), 4, 1)
        second = state.apply_move(Move(5, 5), 6, 7)
        assert state.moves_of(Color.WHITE) == [second, first]

    def test_not_your_piece(self, state: GameState) -> None:
        with pytest.raises(NotYourPiece):
            state.apply_move(Move(1, 2), 1, 1)
        with pytest.raises(NotYourPiece):
            state.apply_move(Move(7, 7), 4, 4)  # empty square

    def test_illegal_leaves_state_untouched(self, state: GameState) -> None:
        before = state.board.copy()
        with pytest.raises(IllegalMove):
            state.apply_move(Move(4, 3), 4, 6)
        assert state.board == before
        assert state.turn == Color.WHITE
        assert state.moves_of(Color.WHITE) == []

    @pytest.mark.parametrize(
        ("move", "origin"),
        [(Move(4, 4), (4, 8)), (Move(4, -1), (4, 6)), (Move(8, 8), (0, 0))],
    )
    def test_out_of_bounds(
        self, state: GameState, move: Move, origin: tuple[int, int]
    ) -> None:
        with pytest.raises(OutOfBounds):
            state.apply_move(move, *origin)

    def test_violations_are_value_errors(self, state: GameState) -> None:
        with pytest.raises(ValueError):
            state.apply_move(Move(4, 3), 4, 6)
        assert issubclass(IllegalMove, RuleViolation)

    def test_capture_goes_to_mover(self, state: GameState) -> None:
        state.apply_move(Move(4, 4), 4, 6)  # e4
        state.apply_move(Move(3, 3), 3, 1)  # d5
        state.apply_move(Move(3, 3), 4, 4)  # exd5
        assert state.captures_of(Color.WHITE) == [PieceType.PAWN]
        assert state.captures_of(Color.BLACK) == []

    def test_debug_log(
        self, state: GameState, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="chessrules.game.state"):
            state.apply_move(Move(4, 4), 4, 6)
        assert "e2-e4" in caplog.text


class TestPromotion:
    def test_promotion_flow(self) -> None:
        state = GameState.from_fen(PROMOTION_FEN)
        state.apply_move(Move(1, 0), 1, 1)
        assert state.pending_promotion(Color.WHITE) == (1, 0)
        assert not state.is_in_check(Color.BLACK)

        with pytest.raises(NoPromotionPending):
            state.promote(PieceType.QUEEN, Color.BLACK)
        with pytest.raises(InvalidPromotion):
            state.promote(PieceType.KING, Color.WHITE)
        with pytest.raises(InvalidPromotion):
            state.promote(PieceType.PAWN, Color.WHITE)

        state.promote(PieceType.QUEEN, Color.WHITE)
        assert state.board[1, 0] == Piece(Color.WHITE, PieceType.QUEEN)
        assert state.pending_promotion(Color.WHITE) is None
        assert state.is_in_check(Color.BLACK)
        assert state.turn == Color.BLACK

    def test_underpromotion(self) -> None:
        state = GameState.from_fen("4k3/1P6/8/8/8/8/8/4K3")
        state.apply_move(Move(1, 0), 1, 1)
        state.promote(PieceType.KNIGHT, Color.WHITE)
        assert state.board[1, 0].piece_type == PieceType.KNIGHT


class TestCastling:
    def _prepared(self) -> GameState:
        state = GameState.from_fen(CASTLING_FEN)
        state.apply_move(Move(4, 6), 5, 7)  # Bf1-e2
        return state

    def test_wrong_turn(self) -> None:
        state = self._prepared()
        with pytest.raises(NotYourPiece):
            state.make_castle(Color.WHITE, 1)

    def test_kingside(self) -> None:
        state = self._prepared()
        state.apply_move(Move(0, 4), 0, 3)  # a5-a4
        assert state.castling_rights(Color.WHITE) == CastlingRights(True, False)

        with pytest.raises(CastlingUnavailable):
            state.make_castle(Color.WHITE, -1)

        record = state.make_castle(Color.WHITE, 1)
        assert record == MoveRecord(Move(6, 7), PieceType.KING)
        assert state.board[6, 7].piece_type == PieceType.KING
        assert state.board[5, 7].piece_type == PieceType.ROOK
        assert state.board[4, 7].is_empty
        assert state.board[7, 7].is_empty
        assert state.board[6, 7].has_moved and state.board[5, 7].has_moved
        assert state.castling_rights(Color.WHITE) == CastlingRights(False, False)
        assert state.turn == Color.BLACK
        assert state.moves_of(Color.WHITE)[0] == record

    def test_queenside(self) -> None:
        state = GameState.from_fen("r3k2r/8/8/8/8/8/8/R3K2R")
        state.make_castle(Color.WHITE, -1)
        assert state.board[2, 7].piece_type == PieceType.KING
        assert state.board[3, 7].piece_type == PieceType.ROOK
        assert state.board[0, 7].is_empty

    def test_bad_direction(self, state: GameState) -> None:
        with pytest.raises(ValueError, match="direction"):
            state.make_castle(Color.WHITE, 0)


class TestEnPassant:
    def _opened(self) -> GameState:
        state = GameState.from_fen(EN_PASSANT_FEN)
        state.apply_move(Move(3, 3), 3, 1)  # d7-d5 beside the e5 pawn
        return state

    def test_window_opens(self) -> None:
        state = self._opened()
        assert state.en_passant_available(Color.WHITE)
        assert not state.en_passant_available(Color.BLACK)
        assert state.en_passant_target(Color.WHITE) == (3, 2)

    def test_capture(self) -> None:
        state = self._opened()
        record = state.capture_en_passant(Color.WHITE, 4, 3)
        assert record == MoveRecord(Move(3, 2), PieceType.PAWN)
        assert state.board[3, 2] == Piece(Color.WHITE, PieceType.PAWN, has_moved=True)
        assert state.board[3, 3].is_empty
        assert state.board[4, 3].is_empty
        assert state.captures_of(Color.WHITE) == [PieceType.PAWN]
        assert state.turn == Color.BLACK
        assert not state.en_passant_available(Color.WHITE)

    def test_wrong_pawn(self) -> None:
        state = self._opened()
        with pytest.raises(EnPassantUnavailable):
            state.capture_en_passant(Color.WHITE, 0, 6)

    def test_not_a_pawn(self) -> None:
        state = self._opened()
        with pytest.raises(NotYourPiece):
            state.capture_en_passant(Color.WHITE, 1, 7)

    def test_window_lapses(self) -> None:
        state = self._opened()
        state.apply_move(Move(0, 5), 0, 6)  # a2-a3
        state.apply_move(Move(0, 2), 0, 1)  # a7-a6
        assert not state.en_passant_available(Color.WHITE)
        with pytest.raises(EnPassantUnavailable):
            state.capture_en_passant(Color.WHITE, 4, 3)

    def test_no_neighbour_no_window(self, state: GameState) -> None:
        state.apply_move(Move(4, 4), 4, 6)
        assert not state.en_passant_available(Color.BLACK)

    def test_capture_exposing_king(self) -> None:
        state = GameState.from_fen("8/4p3/8/K2P3r/8/8/8/4k3 b")
        state.apply_move(Move(4, 3), 4, 1)  # e7-e5 beside d5
        assert state.en_passant_available(Color.WHITE)
        before = state.board.copy()
        with pytest.raises(IllegalMove):
            state.capture_en_passant(Color.WHITE, 3, 3)
        assert state.board == before
        assert state.turn == Color.WHITE


class TestGameOver:
    def test_black_mates(self) -> None:
        state = GameState.from_fen("rnbqkbnr/pppp1ppp/4p3/8/6P1/5P2/PPPPP2P/RNBQKBNR b")
        state.apply_move(Move(7, 4), 3, 0)
        assert state.is_checkmate(Color.WHITE)
        assert state.game_over() == Color.BLACK
        assert state.result == GameResult.BLACK_WINS

    def test_white_mates(self) -> None:
        state = GameState.from_fen("rnbqkbnr/ppppp2p/5p2/6p1/8/4P3/PPPP1PPP/RNBQKBNR")
        state.apply_move(Move(7, 3), 3, 7)
        assert state.game_over() == Color.WHITE
        assert state.is_game_over

    def test_stalemate_is_draw(self) -> None:
        state = GameState.from_fen("7k/8/5K2/6Q1/8/8/8/8")
        state.apply_move(Move(6, 2), 6, 3)
        assert state.stalemate
        assert state.game_over() is None
        assert state.result == GameResult.DRAW

    def test_game_over_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        state = GameState.from_fen("7k/8/5K2/6Q1/8/8/8/8")
        with caplog.at_level(logging.INFO, logger="chessrules.game.state"):
            state.apply_move(Move(6, 2), 6, 3)
        assert "Game over: DRAW" in caplog.text

    def test_en_passant_escapes_mate(self) -> None:
        state = GameState.from_fen("7k/1p6/p1n5/2P5/K7/7r/8/8 b")
        state.apply_move(Move(1, 3), 1, 1)  # b7-b5+ beside c5
        assert state.is_in_check(Color.WHITE)
        assert not state.is_checkmate(Color.WHITE)
        assert state.game_over() is None
        assert state.legal_moves(0, 4) == []

        state.capture_en_passant(Color.WHITE, 2, 3)
        assert state.board[1, 2] == Piece(Color.WHITE, PieceType.PAWN, has_moved=True)
        assert state.board[1, 3].is_empty
        assert not state.is_in_check(Color.WHITE)


KNIGHT_SHUFFLE = [
    (Move(5, 5), (6, 7)),  # Ng1-f3
    (Move(5, 2), (6, 0)),  # Ng8-f6
    (Move(6, 7), (5, 5)),  # Nf3-g1
    (Move(6, 0), (5, 2)),  # Nf6-g8
]


class TestRepetition:
    def test_threefold(self, state: GameState) -> None:
        for move, origin in KNIGHT_SHUFFLE * 2:
            state.apply_move(move, *origin)
        assert state.repetitions == {Color.WHITE: 2, Color.BLACK: 3}
        assert state.game_over() == Color.WHITE
        assert state.result == GameResult.WHITE_WINS

    def test_one_cycle_is_not_enough(self, state: GameState) -> None:
        for move, origin in KNIGHT_SHUFFLE:
            state.apply_move(move, *origin)
        assert state.repetitions[Color.BLACK] == 2
        assert state.game_over() is None

    def test_disabled(self) -> None:
        state = GameState(settings=RuleSettings(track_repetitions=False))
        for move, origin in KNIGHT_SHUFFLE * 2:
            state.apply_move(move, *origin)
        assert state.repetitions == {Color.WHITE: 0, Color.BLACK: 0}
        assert state.game_over() is None

    def test_custom_limit(self) -> None:
        state = GameState(settings=RuleSettings(repetition_limit=2))
        for move, origin in KNIGHT_SHUFFLE:
            state.apply_move(move, *origin)
        assert state.game_over() == Color.WHITE

    def test_limit_validated(self) -> None:
        with pytest.raises(ValueError, match="repetition_limit"):
            RuleSettings(repetition_limit=1)
