"""Rule options for a game session."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RuleSettings:
    """All configurable rule options."""

    # Repetition
    track_repetitions: bool = True
    repetition_limit: int = 3  # counter value that ends the game

    def __post_init__(self) -> None:
        if self.repetition_limit < 2:
            raise ValueError("repetition_limit must be >= 2")
