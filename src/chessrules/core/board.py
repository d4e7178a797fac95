"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from chessrules.core.enums import Color, PieceType
from chessrules.core.errors import OutOfBounds
from chessrules.core.piece import Piece
from chessrules.core.types import Square, in_bounds, square_name

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8×8 grid of :class:`Piece`, indexed ``board[x, y]``.

    Pieces are immutable, so :meth:`copy` only duplicates the rows. The
    legality filter relies on that to simulate moves on scratch boards.
    """

    __slots__ = ("_rows",)

    def __init__(self) -> None:
        empty = Piece.empty()
        self._rows: list[list[Piece]] = [[empty] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece:
        x, y = sq
        if not in_bounds(x, y):
            raise OutOfBounds(f"({x}, {y}) is off the board")
        return self._rows[y][x]

    def __setitem__(self, sq: Square, piece: Piece) -> None:
        x, y = sq
        if not in_bounds(x, y):
            raise OutOfBounds(f"({x}, {y}) is off the board")
        self._rows[y][x] = piece

    def is_empty(self, sq: Square) -> bool:
        return self[sq].is_empty

    # -- Query helpers ------------------------------------------------------

    def squares(self, color: Color) -> Iterator[Square]:
        """Squares occupied by *color*, scanned row by row."""
        for y, row in enumerate(self._rows):
            for x, piece in enumerate(row):
                if piece.color == color:
                    yield (x, y)

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return [sq for sq in self.squares(color) if self[sq].piece_type == piece_type]

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` if it is not on the board."""
        for sq in self.squares(color):
            if self[sq].piece_type == PieceType.KING:
                return sq
        return None

    def placement(self) -> tuple[tuple[tuple[Color, PieceType], ...], ...]:
        """Color and type per square, ignoring ``has_moved``."""
        return tuple(
            tuple((piece.color, piece.piece_type) for piece in row)
            for row in self._rows
        )

    # -- Mutation / copying -------------------------------------------------

    def move_piece(self, from_sq: Square, to_sq: Square) -> Piece:
        """Move the occupant of *from_sq* onto *to_sq* and return what was there.

        The moving piece is marked as moved and the origin is cleared.
        """
        captured = self[to_sq]
        self[to_sq] = self[from_sq].moved()
        self[from_sq] = Piece.empty()
        return captured

    def copy(self) -> Board:
        b = Board.__new__(Board)
        b._rows = [row.copy() for row in self._rows]
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for color in (Color.WHITE, Color.BLACK):
            for x, pt in enumerate(_BACK_RANK):
                b[x, color.back_rank] = Piece(color, pt)
                b[x, color.pawn_rank] = Piece(color, PieceType.PAWN)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._rows == other._rows

    def __repr__(self) -> str:
        rows: list[str] = []
        for y, row in enumerate(self._rows):
            rows.append(f"{8 - y} {' '.join(str(p) for p in row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)

    def describe(self, sq: Square) -> str:
        piece = self[sq]
        if piece.is_empty:
            return f"empty {square_name(sq)}"
        return f"{piece.color} {piece.piece_type.name.lower()} on {square_name(sq)}"
