"""Pure grid geometry and scoring rules. Nothing here holds state."""

from __future__ import annotations

import math
import random
from enum import Enum
from typing import Collection, Iterable, NamedTuple

from .config import DIRECTIONS, GAME_CONFIG, MAX_SAMPLE_ATTEMPTS, OPPOSITE


class Direction(str, Enum):
    """Heading names; members are usable as keys of ``DIRECTIONS``/``OPPOSITE``."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def vector(self) -> tuple[int, int]:
        return DIRECTIONS[self.value]

    @property
    def opposite(self) -> "Direction":
        return Direction(OPPOSITE[self.value])


class Position(NamedTuple):
    """Grid cell coordinates; compares equal to a plain ``(x, y)`` tuple."""

    x: int
    y: int


def positions_equal(a: tuple[int, int], b: tuple[int, int]) -> bool:
    return a[0] == b[0] and a[1] == b[1]


def step(position: tuple[int, int], direction: str) -> Position:
    """Return the cell one unit away from ``position`` along ``direction``."""
    dx, dy = DIRECTIONS[Direction(direction).value]
    return Position(position[0] + dx, position[1] + dy)


def is_valid_direction(current: str, new: str) -> bool:
    return Direction(current).opposite is not Direction(new)


def is_out_of_bounds(position: tuple[int, int]) -> bool:
    size = GAME_CONFIG.grid_size
    return not (0 <= position[0] < size and 0 <= position[1] < size)


def self_collision(head: tuple[int, int], body: Iterable[tuple[int, int]]) -> bool:
    """True when ``head`` lands exactly on any segment of ``body``."""
    return any(positions_equal(head, segment) for segment in body)


def speed_for_level(level: int) -> int:
    """Milliseconds per tick for ``level``, floored at the max speed."""
    speed = GAME_CONFIG.initial_speed - level * GAME_CONFIG.speed_increment
    return max(speed, GAME_CONFIG.max_speed)


def score_for_food(food_count: int, level: int) -> int:
    multiplier = max(1, math.floor(level / 2))
    return food_count * GAME_CONFIG.score_per_food * multiplier


def level_for_score(score: int) -> int:
    return score // (GAME_CONFIG.score_per_food * 5) + 1


def random_position(
    exclude: Collection[tuple[int, int]] = (),
    rng: random.Random | None = None,
) -> Position | None:
    """Pick a uniformly random cell not in ``exclude``.

    Rejection sampling is tried first since the snake normally covers a
    small part of the grid. After ``MAX_SAMPLE_ATTEMPTS`` misses the choice
    is made directly from the free cells, so a nearly full board still
    terminates. Returns ``None`` when no cell is free.
    """
    rng = rng or random
    size = GAME_CONFIG.grid_size
    blocked = {(p[0], p[1]) for p in exclude}

    for _ in range(MAX_SAMPLE_ATTEMPTS):
        candidate = (rng.randrange(size), rng.randrange(size))
        if candidate not in blocked:
            return Position(*candidate)

    free = [
        (x, y) for y in range(size) for x in range(size) if (x, y) not in blocked
    ]
    if not free:
        return None
    return Position(*rng.choice(free))
