"""Move value object.

A move names only its destination. The origin square is always supplied
alongside it, so the same ``Move`` can be simulated from any square.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from chessrules.core.enums import PieceType
from chessrules.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable destination square ``(x, y)``."""

    x: int
    y: int

    @property
    def square(self) -> Square:
        return (self.x, self.y)

    @classmethod
    def to(cls, sq: Square) -> Move:
        return cls(sq[0], sq[1])

    def __str__(self) -> str:
        return square_name(self.square)


class MoveRecord(NamedTuple):
    """History entry: where a piece went and what it was."""

    move: Move
    piece_type: PieceType
