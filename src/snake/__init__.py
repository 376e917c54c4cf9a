# src/snake/__init__.py
"""Snake simulation core, tick driver and pygame front end."""

from .config import Config
from .game import Direction, GameStatus, Snapshot, SnakeEngine, TickResult
from .scheduler import TickScheduler
from .session import SnakeSession

__all__ = [
    "Config",
    "Direction",
    "GameStatus",
    "Snapshot",
    "SnakeEngine",
    "TickResult",
    "TickScheduler",
    "SnakeSession",
]
