"""Position string parsing and serialization.

Only the placement field is required; the side-to-move and castling fields
of a full FEN are honoured when present.
"""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.move_generator import (
    CASTLE_PATHS,
    KING_HOME_FILE,
    KINGSIDE,
    QUEENSIDE,
)
from chessrules.core.piece import Piece
from chessrules.core.types import Square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# castling letter -> (color, direction)
_CASTLING_LETTERS: dict[str, tuple[Color, int]] = {
    "K": (Color.WHITE, KINGSIDE),
    "Q": (Color.WHITE, QUEENSIDE),
    "k": (Color.BLACK, KINGSIDE),
    "q": (Color.BLACK, QUEENSIDE),
}


def parse_fen(fen: str) -> tuple[Board, Color]:
    """Parse a position string into a board and the side to move."""
    parts = fen.split()
    if not parts:
        raise ValueError(f"Invalid FEN (empty): {fen!r}")

    # 1. Piece placement
    ranks = parts[0].split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for y, rank_text in enumerate(ranks):
        x = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                x += step
            else:
                if x >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                piece = Piece.from_char(ch)
                if piece.piece_type == PieceType.PAWN:
                    # A pawn away from its home row has already moved.
                    has_moved = y != piece.color.pawn_rank
                    piece = Piece(piece.color, piece.piece_type, has_moved)
                board[x, y] = piece
                x += 1
            if x > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if x != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    side = Color.WHITE
    if len(parts) > 1:
        if parts[1] == "w":
            side = Color.WHITE
        elif parts[1] == "b":
            side = Color.BLACK
        else:
            raise ValueError(f"Invalid FEN side-to-move field: {parts[1]!r}")

    # 3. Castling
    if len(parts) > 2:
        _apply_castling_field(board, parts[2])

    return board, side


def board_from_fen(fen: str) -> Board:
    """Parse a position string into a :class:`Board`."""
    board, _ = parse_fen(fen)
    return board


def _apply_castling_field(board: Board, field: str) -> None:
    granted: set[tuple[Color, int]] = set()
    if field != "-":
        for ch in field:
            right = _CASTLING_LETTERS.get(ch)
            if right is None or right in granted:
                raise ValueError(f"Invalid FEN castling field: {field!r}")
            granted.add(right)

    for color in (Color.WHITE, Color.BLACK):
        rank = color.back_rank
        sides = [d for c, d in granted if c == color]
        if not sides:
            _mark_moved(board, (KING_HOME_FILE, rank), color, PieceType.KING)
        for direction, path in CASTLE_PATHS.items():
            if direction not in sides:
                _mark_moved(board, (path.rook_file, rank), color, PieceType.ROOK)


def _mark_moved(
    board: Board, sq: Square, color: Color, piece_type: PieceType
) -> None:
    piece = board[sq]
    if piece.same_kind(Piece(color, piece_type)):
        board[sq] = piece.moved()


def board_to_fen(board: Board, turn: Color | None = None) -> str:
    """Serialise *board* to a placement field, plus the side when *turn* is given."""
    rows: list[str] = []
    for y in range(8):
        empty = 0
        row = ""
        for x in range(8):
            piece = board[x, y]
            if piece.is_empty:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    placement = "/".join(rows)

    if turn is None:
        return placement
    return f"{placement} {'w' if turn == Color.WHITE else 'b'}"
