"""High-level chess rules: check, checkmate, stalemate, promotion."""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.types import Square


class Rules:
    """Static rule-checker that operates on a :class:`Board` snapshot."""

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def has_legal_moves(board: Board, color: Color) -> bool:
        gen = MoveGenerator(board)
        return any(gen.legal_moves(x, y, color) for x, y in list(board.squares(color)))

    @staticmethod
    def is_checkmate(board: Board, color: Color) -> bool:
        if not Rules.is_in_check(board, color):
            return False
        return not Rules.has_legal_moves(board, color)

    @staticmethod
    def is_stalemate(board: Board, color: Color) -> bool:
        if Rules.is_in_check(board, color):
            return False
        return not Rules.has_legal_moves(board, color)

    @staticmethod
    def pending_promotion(board: Board, color: Color) -> Square | None:
        """A pawn of *color* standing on the opponent's back rank, if any."""
        rank = color.opposite.back_rank
        for sq in board.pieces(color, PieceType.PAWN):
            if sq[1] == rank:
                return sq
        return None
