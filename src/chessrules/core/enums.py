"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color. ``EMPTY`` marks an unoccupied square, not a player."""

    WHITE = 0
    BLACK = 1
    EMPTY = 2

    @property
    def opposite(self) -> Color:
        if self == Color.EMPTY:
            return Color.EMPTY
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Row step of a pawn advance (row 0 is rank 8)."""
        return -1 if self == Color.WHITE else 1

    @property
    def back_rank(self) -> int:
        return 7 if self == Color.WHITE else 0

    @property
    def pawn_rank(self) -> int:
        """Row pawns start on."""
        return 6 if self == Color.WHITE else 1

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    EMPTY = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
