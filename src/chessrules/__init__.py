"""Chess rules engine: legal moves, check detection and game state."""

__version__ = "0.1.0"
