"""Offset sets and ray directions used by the move generators."""

from __future__ import annotations

from collections.abc import Iterable


def cartesian_product(a: Iterable[int], b: Iterable[int]) -> list[tuple[int, int]]:
    """All ``(i, j)`` pairs with ``i`` from *a* and ``j`` from *b*."""
    b = tuple(b)
    return [(i, j) for i in a for j in b]


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = tuple(
    cartesian_product((-1, 1), (-2, 2)) + cartesian_product((-2, 2), (-1, 1))
)

KING_OFFSETS: tuple[tuple[int, int], ...] = tuple(
    offset
    for offset in cartesian_product((-1, 0, 1), (-1, 0, 1))
    if offset != (0, 0)
)

BISHOP_DIRECTIONS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRECTIONS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRECTIONS: tuple[tuple[int, int], ...] = BISHOP_DIRECTIONS + ROOK_DIRECTIONS
