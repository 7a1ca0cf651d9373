"""Keyboard and swipe input mapped onto engine commands."""

from __future__ import annotations

import pygame

from .config import SWIPE_THRESHOLD
from .engine import GameEngine, Phase
from .rules import Direction

KEY_TO_DIRECTION = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}
PAUSE_KEYS = frozenset({pygame.K_SPACE})
START_KEYS = frozenset({pygame.K_RETURN, pygame.K_SPACE})
RESTART_KEYS = frozenset({pygame.K_r})
QUIT_KEYS = frozenset({pygame.K_q, pygame.K_ESCAPE})
MENU_KEYS = frozenset({pygame.K_m, pygame.K_BACKSPACE})


def swipe_direction(
    start: tuple[float, float],
    end: tuple[float, float],
    threshold: float = SWIPE_THRESHOLD,
) -> Direction | None:
    """Map a drag from ``start`` to ``end`` onto a heading.

    Drags shorter than ``threshold`` on both axes are ignored; otherwise
    the larger axis wins, with ties going to the vertical axis.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if abs(dx) < threshold and abs(dy) < threshold:
        return None
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


def dispatch_key(engine: GameEngine, key: int) -> bool:
    """Apply one key press to ``engine``. Returns False when quitting."""
    if key in QUIT_KEYS:
        return False

    phase = engine.phase
    if key in MENU_KEYS and phase in (Phase.PAUSED, Phase.GAME_OVER):
        engine.reset()
        return True

    if phase is Phase.MENU:
        if key in START_KEYS:
            engine.start()
        return True

    if phase is Phase.GAME_OVER:
        if key in RESTART_KEYS or key in START_KEYS:
            engine.start()
        return True

    if key in PAUSE_KEYS:
        engine.toggle_pause()
        return True

    direction = KEY_TO_DIRECTION.get(key)
    if direction is not None:
        engine.change_direction(direction)
    return True
