"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import MoveGenerator, board_from_fen, STARTING_FEN

    board = board_from_fen(STARTING_FEN)
    gen = MoveGenerator(board)
    for move in gen.legal_moves(6, 7):  # white knight on g1
        print(move)
"""

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
    RuleViolation,
)
from chessrules.core.geometry import cartesian_product
from chessrules.core.move import Move, MoveRecord
from chessrules.core.move_generator import (
    KINGSIDE,
    QUEENSIDE,
    CastlingRights,
    MoveGenerator,
    generate_moves,
)
from chessrules.core.notation import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    parse_fen,
)
from chessrules.core.piece import Piece
from chessrules.core.rules import Rules
from chessrules.core.types import Square, in_bounds, square_name

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "PieceType",
    # Types / helpers
    "Square",
    "cartesian_product",
    "in_bounds",
    "square_name",
    # Domain objects
    "Board",
    "CastlingRights",
    "Move",
    "MoveGenerator",
    "MoveRecord",
    "Piece",
    "Rules",
    "generate_moves",
    "KINGSIDE",
    "QUEENSIDE",
    # Errors
    "CastlingUnavailable",
    "EnPassantUnavailable",
    "IllegalMove",
    "InvalidPromotion",
    "NoPromotionPending",
    "NotYourPiece",
    "OutOfBounds",
    "RuleViolation",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "parse_fen",
]
