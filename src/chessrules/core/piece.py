"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chessrules.core.enums import Color, PieceType

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object for the occupant of a square.

    An unoccupied square holds ``Piece(Color.EMPTY, PieceType.EMPTY)``; its
    ``has_moved`` flag is always ``False``.
    """

    color: Color
    piece_type: PieceType
    has_moved: bool = False

    @classmethod
    def empty(cls) -> Piece:
        return _EMPTY

    @property
    def is_empty(self) -> bool:
        return self.piece_type == PieceType.EMPTY

    def moved(self) -> Piece:
        """Copy of this piece with ``has_moved`` set."""
        if self.is_empty or self.has_moved:
            return self
        return replace(self, has_moved=True)

    def same_kind(self, other: Piece) -> bool:
        """Equal color and type, ignoring move history."""
        return self.color == other.color and self.piece_type == other.piece_type

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black, '.' = empty)."""
        if self.is_empty:
            return "."
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str, has_moved: bool = False) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype, has_moved)


_EMPTY = Piece(Color.EMPTY, PieceType.EMPTY)
