"""Glitch Snake: a grid snake arcade game with a playlist widget."""

from .config import Difficulty
from .grid import Direction
from .session import Command, GameSession, GameStatus, Snapshot

__all__ = [
    "Command",
    "Difficulty",
    "Direction",
    "GameSession",
    "GameStatus",
    "Snapshot",
]
