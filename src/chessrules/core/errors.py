"""Rule violations raised by state-changing operations.

Every violation is detected before the board is touched, so catching one
leaves the game exactly as it was.
"""

from __future__ import annotations


class RuleViolation(ValueError):
    """Base class for a rejected move, promotion, castle or capture."""


class OutOfBounds(RuleViolation):
    """A coordinate lies outside the 8×8 board."""


class NotYourPiece(RuleViolation):
    """The piece to move does not belong to the side to move."""


class IllegalMove(RuleViolation):
    """The destination is not among the piece's legal moves."""


class NoPromotionPending(RuleViolation):
    """No pawn of that color is waiting on the far back rank."""


class InvalidPromotion(RuleViolation):
    """A pawn may only become a knight, bishop, rook or queen."""


class CastlingUnavailable(RuleViolation):
    """Castling to the requested side is not currently allowed."""


class EnPassantUnavailable(RuleViolation):
    """No en-passant capture is open for that pawn."""
