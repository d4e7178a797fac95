"""Legal and pseudo-legal move generation + attack detection.

Check detection only ever looks at pseudo-legal moves. The legality filter
builds on check detection, never the other way round.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import NamedTuple

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.geometry import (
    BISHOP_DIRECTIONS,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    QUEEN_DIRECTIONS,
    ROOK_DIRECTIONS,
)
from chessrules.core.move import Move
from chessrules.core.types import Square, in_bounds

KINGSIDE = 1
QUEENSIDE = -1
KING_HOME_FILE = 4


class CastlingRights(NamedTuple):
    """Per-color castling availability."""

    kingside: bool
    queenside: bool


class CastlePath(NamedTuple):
    """Files involved in castling to one side."""

    rook_file: int
    between: tuple[int, ...]  # must be empty
    king_path: tuple[int, ...]  # must not be attacked, start included
    king_to: int
    rook_to: int


CASTLE_PATHS: dict[int, CastlePath] = {
    KINGSIDE: CastlePath(7, (5, 6), (4, 5, 6), 6, 5),
    QUEENSIDE: CastlePath(0, (1, 2, 3), (4, 3, 2), 2, 3),
}

NO_CASTLING = CastlingRights(False, False)


# -- Per-piece generators ---------------------------------------------------


def pawn_moves(x: int, y: int, board: Board, color: Color) -> list[Move]:
    moves: list[Move] = []
    step = color.forward
    ny = y + step
    if not in_bounds(x, ny):
        return moves

    if board.is_empty((x, ny)):
        moves.append(Move(x, ny))
        two_y = ny + step
        if (
            not board[x, y].has_moved
            and in_bounds(x, two_y)
            and board.is_empty((x, two_y))
        ):
            moves.append(Move(x, two_y))

    for cx, cy in pawn_attacks(x, y, color):
        target = board[cx, cy]
        if not target.is_empty and target.color != color:
            moves.append(Move(cx, cy))
    return moves


def pawn_attacks(x: int, y: int, color: Color) -> list[Square]:
    """Diagonal squares a pawn of *color* on ``(x, y)`` attacks."""
    ny = y + color.forward
    return [(cx, ny) for cx in (x - 1, x + 1) if in_bounds(cx, ny)]


def _step_moves(
    x: int,
    y: int,
    board: Board,
    color: Color,
    offsets: tuple[tuple[int, int], ...],
) -> list[Move]:
    moves: list[Move] = []
    for dx, dy in offsets:
        tx = x + dx
        ty = y + dy
        if in_bounds(tx, ty) and board[tx, ty].color != color:
            moves.append(Move(tx, ty))
    return moves


def _ray_moves(
    x: int,
    y: int,
    board: Board,
    color: Color,
    directions: tuple[tuple[int, int], ...],
) -> list[Move]:
    moves: list[Move] = []
    for dx, dy in directions:
        tx = x + dx
        ty = y + dy
        while in_bounds(tx, ty):
            target = board[tx, ty]
            if target.is_empty:
                moves.append(Move(tx, ty))
            else:
                if target.color != color:
                    moves.append(Move(tx, ty))
                break
            tx += dx
            ty += dy
    return moves


def knight_moves(x: int, y: int, board: Board, color: Color) -> list[Move]:
    return _step_moves(x, y, board, color, KNIGHT_OFFSETS)


def bishop_moves(x: int, y: int, board: Board, color: Color) -> list[Move]:
    return _ray_moves(x, y, board, color, BISHOP_DIRECTIONS)


def rook_moves(x: int, y: int, board: Board, color: Color) -> list[Move]:
    return _ray_moves(x, y, board, color, ROOK_DIRECTIONS)


def queen_moves(x: int, y: int, board: Board, color: Color) -> list[Move]:
    return _ray_moves(x, y, board, color, QUEEN_DIRECTIONS)


def king_moves(x: int, y: int, board: Board, color: Color) -> list[Move]:
    """Single steps only; castling comes from :meth:`MoveGenerator.castling_rights`."""
    return _step_moves(x, y, board, color, KING_OFFSETS)


def empty_moves(x: int, y: int, board: Board, color: Color) -> list[Move]:
    return []


_GENERATORS: dict[PieceType, Callable[[int, int, Board, Color], list[Move]]] = {
    PieceType.EMPTY: empty_moves,
    PieceType.PAWN: pawn_moves,
    PieceType.KNIGHT: knight_moves,
    PieceType.BISHOP: bishop_moves,
    PieceType.ROOK: rook_moves,
    PieceType.QUEEN: queen_moves,
    PieceType.KING: king_moves,
}


def generate_moves(
    kind: PieceType, x: int, y: int, board: Board, color: Color
) -> list[Move]:
    """Pseudo-legal destinations for a *kind* of *color* standing on ``(x, y)``."""
    return _GENERATORS[kind](x, y, board, color)


# -- Generator over a board snapshot ----------------------------------------


class MoveGenerator:
    """Move generation, check detection and castling evaluation for a board.

    The generator never mutates its board; legality is tested on copies.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(
        self, x: int, y: int, color: Color | None = None
    ) -> list[Move]:
        """Moves obeying the piece's pattern; may leave its own king in check."""
        piece = self._board[x, y]
        if color is None:
            color = piece.color
        return generate_moves(piece.piece_type, x, y, self._board, color)

    def legal_moves(self, x: int, y: int, color: Color | None = None) -> list[Move]:
        """Pseudo-legal moves that do not leave *color*'s king in check."""
        board = self._board
        if color is None:
            color = board[x, y].color

        legal: list[Move] = []
        for move in self.pseudo_legal_moves(x, y, color):
            scratch = board.copy()
            scratch.move_piece((x, y), move.square)
            if not MoveGenerator(scratch).is_in_check(color):
                legal.append(move)
        return legal

    def all_legal_moves(self, color: Color) -> dict[Square, list[Move]]:
        """Legal moves of every *color* piece that has at least one."""
        result: dict[Square, list[Move]] = {}
        for x, y in list(self._board.squares(color)):
            moves = self.legal_moves(x, y, color)
            if moves:
                result[(x, y)] = moves
        return result

    # -- Attack detection ---------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Can any opposing pseudo-legal move land on *color*'s king?"""
        board = self._board
        king = board.king_square(color)
        if king is None:
            return False
        opponent = color.opposite
        for x, y in board.squares(opponent):
            for move in generate_moves(board[x, y].piece_type, x, y, board, opponent):
                if move.square == king:
                    return True
        return False

    def attacks_any(self, color: Color, squares: Iterable[Square]) -> bool:
        """Does the opponent of *color* attack any of *squares*?

        Pawns count their diagonals even when empty; their pushes never count.
        """
        board = self._board
        targets = set(squares)
        opponent = color.opposite
        for x, y in board.squares(opponent):
            kind = board[x, y].piece_type
            if kind == PieceType.PAWN:
                if targets.intersection(pawn_attacks(x, y, opponent)):
                    return True
                continue
            for move in generate_moves(kind, x, y, board, opponent):
                if move.square in targets:
                    return True
        return False

    # -- Castling -----------------------------------------------------------

    def castling_rights(self, color: Color) -> CastlingRights:
        """Which sides *color* may castle to right now."""
        board = self._board
        rank = color.back_rank
        king = board[KING_HOME_FILE, rank]
        if king.color != color or king.piece_type != PieceType.KING or king.has_moved:
            return NO_CASTLING
        if self.is_in_check(color):
            return NO_CASTLING
        return CastlingRights(
            kingside=self._can_castle(color, CASTLE_PATHS[KINGSIDE]),
            queenside=self._can_castle(color, CASTLE_PATHS[QUEENSIDE]),
        )

    def _can_castle(self, color: Color, path: CastlePath) -> bool:
        board = self._board
        rank = color.back_rank
        rook = board[path.rook_file, rank]
        if (
            rook.color != color
            or rook.piece_type != PieceType.ROOK
            or rook.has_moved
        ):
            return False
        if not all(board.is_empty((f, rank)) for f in path.between):
            return False
        return not self.attacks_any(color, [(f, rank) for f in path.king_path])
