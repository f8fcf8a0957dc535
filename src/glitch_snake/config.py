"""Centralized configuration, tuning tables and palette for Glitch Snake."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import pygame

BASE_DIR = Path(__file__).resolve().parent


def _default_data_dir() -> Path:
    """Return a platform-appropriate user data directory for music files."""

    if sys.platform.startswith("win"):
        base = Path(os.getenv("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    return base / "glitch-snake"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


DATA_DIR = Path(os.getenv("GLITCH_SNAKE_DATA_DIR") or _default_data_dir())
MUSIC_DIR = Path(os.getenv("GLITCH_SNAKE_MUSIC_DIR") or DATA_DIR / "music")
LOG_LEVEL: str = (os.getenv("GLITCH_SNAKE_LOG_LEVEL") or "INFO").upper()

# --- Board ---------------------------------------------------------------

GRID_SIZE: int = 20
CELL_SIZE: int = 20  # 20 cells * 20 px => 400 px board
BOARD_SIZE: int = GRID_SIZE * CELL_SIZE
PANEL_HEIGHT: int = 150
WINDOW_WIDTH: int = BOARD_SIZE
WINDOW_HEIGHT: int = BOARD_SIZE + PANEL_HEIGHT
FONT_NAME: str = "consolas"
FONT_SIZE: int = 20
SMALL_FONT_SIZE: int = 14
FPS: int = _env_int("GLITCH_SNAKE_FPS", 120)

# --- Rules ---------------------------------------------------------------

SCORE_PER_FOOD: int = 10
MIN_TICK_MS: int = 40
PARTICLE_LIFE: float = 0.45


class Difficulty(Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


@dataclass(frozen=True, slots=True)
class DifficultyConfig:
    """Tuning record resolved once per game from the difficulty table."""

    label: str
    tick_ms: int
    length: int
    increment: int


DIFFICULTY_CONFIG: dict[Difficulty, DifficultyConfig] = {
    Difficulty.EASY: DifficultyConfig(label="EASY", tick_ms=400, length=3, increment=1),
    Difficulty.MEDIUM: DifficultyConfig(
        label="MEDIUM", tick_ms=130, length=5, increment=2
    ),
    Difficulty.HARD: DifficultyConfig(label="HARD", tick_ms=80, length=8, increment=4),
}
DEFAULT_DIFFICULTY = Difficulty.MEDIUM

# --- Playlist ------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Track:
    id: int
    title: str
    artist: str
    filename: str

    @property
    def path(self) -> Path:
        return MUSIC_DIR / self.filename


TRACKS: tuple[Track, ...] = (
    Track(1, "Neural Network Beats", "AI Composer Alpha", "neural-network-beats.ogg"),
    Track(2, "Synthwave Dreams", "Cybernetic Orchestra", "synthwave-dreams.ogg"),
    Track(3, "Algorithmic Soul", "Deep Learning Unit 7", "algorithmic-soul.ogg"),
)
VOLUME_STEPS: tuple[float, ...] = (0.2, 0.4, 0.6, 0.8, 1.0)
DEFAULT_VOLUME: float = 0.5
VISUALIZER_BARS: int = 30

# --- Palette -------------------------------------------------------------

PALETTE = {
    "bg": pygame.Color(10, 10, 10),
    "grid": pygame.Color(26, 26, 26),
    "panel": pygame.Color(6, 6, 12),
    "cyan": pygame.Color(0, 255, 255),
    "magenta": pygame.Color(255, 0, 255),
    "yellow": pygame.Color(255, 230, 0),
    "red": pygame.Color(239, 68, 68),
    "text": pygame.Color(216, 239, 255),
    "dim": pygame.Color(107, 114, 128),
    "overlay": pygame.Color(0, 0, 0, 230),
    "snake_light": pygame.Color(74, 222, 128),
    "snake_dark": pygame.Color(22, 101, 52),
    "head_dark": pygame.Color(21, 128, 61),
    "mouse": pygame.Color(156, 163, 175),
    "mouse_ear": pygame.Color(244, 114, 182),
    "tongue": pygame.Color(239, 68, 68),
}

BURST_COLORS = [
    pygame.Color(0, 255, 255),
    pygame.Color(255, 0, 255),
    pygame.Color(255, 230, 0),
    pygame.Color(156, 163, 175),
]

PARTICLE_DIRECTIONS = [
    (1.0, 0.0),
    (-1.0, 0.0),
    (0.0, 1.0),
    (0.0, -1.0),
    (0.7, 0.7),
    (-0.7, 0.7),
    (0.7, -0.7),
    (-0.7, -0.7),
]
