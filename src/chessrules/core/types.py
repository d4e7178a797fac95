"""Square type alias and coordinate helpers.

Board layout (row 0 is rank 8, matching the order of a position string)::

    (0, 0)=a8  (1, 0)=b8  ...  (7, 0)=h8
    ...
    (0, 7)=a1  (1, 7)=b1  ...  (7, 7)=h1
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = tuple[int, int]  # (x, y) = (file, row)

_FILES = "abcdefgh"


def in_bounds(x: int, y: int) -> bool:
    """Whether ``(x, y)`` lies on the board."""
    return 0 <= x < 8 and 0 <= y < 8


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (4, 7) → 'e1'."""
    x, y = sq
    return _FILES[x] + str(8 - y)


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ((f, 0) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = ((f, 1) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = ((f, 2) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = ((f, 3) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = ((f, 4) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = ((f, 5) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = ((f, 6) for f in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = ((f, 7) for f in range(8))
