"""Centralized configuration and palette definitions for the snake engine."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

import pygame


def _default_data_dir() -> Path:
    """Return a platform-appropriate user data directory for saves."""

    if sys.platform.startswith("win"):
        base = Path(os.getenv("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    return base / "snake-engine"


DATA_DIR = Path(os.getenv("SNAKE_ENGINE_DATA_DIR") or _default_data_dir())
LOG_LEVEL: str = os.getenv("SNAKE_ENGINE_LOG_LEVEL", "WARNING").upper()
HIGHSCORE_KEY: str = "snakeHighScore"


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Tuning values for the grid and the difficulty curve (times in ms)."""

    grid_size: int = 20
    initial_speed: int = 150
    max_speed: int = 50
    speed_increment: int = 10
    score_per_food: int = 10


GAME_CONFIG = GameConfig()

# rejection-sampling attempts before falling back to the free-cell list
MAX_SAMPLE_ATTEMPTS: int = 64
SWIPE_THRESHOLD: int = 30

INITIAL_SNAKE: tuple[tuple[int, int], ...] = ((10, 10), (9, 10), (8, 10))
INITIAL_DIRECTION: str = "RIGHT"

DIRECTIONS: dict[str, tuple[int, int]] = {
    "UP": (0, -1),
    "DOWN": (0, 1),
    "LEFT": (-1, 0),
    "RIGHT": (1, 0),
}
OPPOSITE: dict[str, str] = {
    "UP": "DOWN",
    "DOWN": "UP",
    "LEFT": "RIGHT",
    "RIGHT": "LEFT",
}

CELL: int = 24
WINDOW_SIZE: int = GAME_CONFIG.grid_size * CELL
FONT_NAME: str = "consolas"
FONT_SIZE: int = 22
FPS: int = 60

PARTICLE_COUNT: int = 8
PARTICLE_LIFE: float = 1.0  # 60 frames at 60 FPS
PARTICLE_GRAVITY: float = 360.0

PALETTE = {
    "bg_top": pygame.Color(7, 10, 18),
    "bg_bottom": pygame.Color(2, 24, 43),
    "grid": pygame.Color(10, 40, 60),
    "food": pygame.Color(255, 84, 138),
    "food_glow": pygame.Color(255, 84, 138, 90),
    "text": pygame.Color(216, 239, 255),
    "hud": pygame.Color(10, 10, 10, 150),
    "snake_head": pygame.Color(57, 255, 233),
    "snake_body": pygame.Color(0, 200, 170),
}
