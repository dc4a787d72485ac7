"""API services."""

from .storage import MemoryStorage
from .game_service import GameService

__all__ = [
    "MemoryStorage",
    "GameService",
]
