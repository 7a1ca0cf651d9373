"""Game engine: owns the live round state and advances it on a frame loop."""

from __future__ import annotations

import logging
import random
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from .config import GAME_CONFIG, INITIAL_DIRECTION, INITIAL_SNAKE
from .events import EventChannel, GameEvent, Handler
from .rules import (
    Direction,
    Position,
    is_out_of_bounds,
    is_valid_direction,
    level_for_score,
    positions_equal,
    random_position,
    score_for_food,
    self_collision,
    speed_for_level,
    step,
)
from .scheduler import FrameScheduler
from .storage import FileStorage, HighScoreStore, KeyValueStorage

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    MENU = "MENU"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Read-only copy of the engine state handed to observers."""

    snake: tuple[Position, ...]
    food: Position | None
    direction: Direction
    next_direction: Direction
    phase: Phase
    score: int
    high_score: int
    level: int
    speed: int
    food_count: int
    is_paused: bool
    death_reason: str | None = None

    @property
    def head(self) -> Position:
        return self.snake[0]


@dataclass(slots=True)
class _RoundState:
    snake: deque[Position]
    food: Position | None
    direction: Direction = Direction(INITIAL_DIRECTION)
    next_direction: Direction = Direction(INITIAL_DIRECTION)
    phase: Phase = Phase.MENU
    score: int = 0
    high_score: int = 0
    level: int = 1
    speed: int = GAME_CONFIG.initial_speed
    food_count: int = 0
    death_reason: str | None = None


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class GameEngine:
    """Snake state machine: MENU -> PLAYING <-> PAUSED -> GAME_OVER.

    Commands that do not apply to the current phase are ignored rather than
    raising, because input can race the loop. Ticks are gated on elapsed
    time (``clock`` milliseconds) reaching the current speed, and run only
    from the frame callback registered with ``scheduler``.
    """

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        scheduler: FrameScheduler | None = None,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.high_scores = HighScoreStore(
            storage if storage is not None else FileStorage()
        )
        self.scheduler = scheduler or FrameScheduler()
        self.events = EventChannel()
        self._clock = clock or _monotonic_ms
        self._rng = rng
        self._frame_handle: int | None = None
        self._last_update: float = 0.0
        self._destroyed = False
        self._callbacks: dict[GameEvent, Callable[[], None]] = {}
        self._state = self._initial_state(Phase.MENU)

    # --- Observers -----------------------------------------------------

    def subscribe(self, event: GameEvent, handler: Handler) -> Callable[[], None]:
        return self.events.subscribe(event, handler)

    def _set_callback(self, event: GameEvent, handler: Handler) -> None:
        previous = self._callbacks.pop(event, None)
        if previous:
            previous()
        self._callbacks[event] = self.events.subscribe(event, handler)

    def set_state_change_callback(self, handler: Callable[[GameSnapshot], Any]) -> None:
        self._set_callback(GameEvent.STATE_CHANGED, handler)

    def set_game_over_callback(self, handler: Callable[[int], Any]) -> None:
        self._set_callback(GameEvent.GAME_OVER, handler)

    def set_food_eaten_callback(self, handler: Callable[[Position], Any]) -> None:
        self._set_callback(GameEvent.FOOD_EATEN, handler)

    # --- Queries -------------------------------------------------------

    def get_state(self) -> GameSnapshot:
        state = self._state
        return GameSnapshot(
            snake=tuple(state.snake),
            food=state.food,
            direction=state.direction,
            next_direction=state.next_direction,
            phase=state.phase,
            score=state.score,
            high_score=state.high_score,
            level=state.level,
            speed=state.speed,
            food_count=state.food_count,
            is_paused=state.phase is Phase.PAUSED,
            death_reason=state.death_reason,
        )

    @property
    def phase(self) -> Phase:
        return self._state.phase

    def is_tick_due(self, now: float) -> bool:
        return now - self._last_update >= self._state.speed

    # --- Commands ------------------------------------------------------

    def start(self) -> None:
        if self._destroyed:
            return
        self._stop_loop()
        self._state = self._initial_state(Phase.PLAYING)
        logger.debug("Round started (high score %d)", self._state.high_score)
        self._start_loop()
        self._notify_state_change()

    def pause(self) -> None:
        if self._destroyed or self._state.phase is not Phase.PLAYING:
            return
        self._state.phase = Phase.PAUSED
        self._stop_loop()
        self._notify_state_change()

    def resume(self) -> None:
        if self._destroyed or self._state.phase is not Phase.PAUSED:
            return
        self._state.phase = Phase.PLAYING
        self._start_loop()
        self._notify_state_change()

    def toggle_pause(self) -> None:
        if self._state.phase is Phase.PLAYING:
            self.pause()
        elif self._state.phase is Phase.PAUSED:
            self.resume()

    def reset(self) -> None:
        if self._destroyed:
            return
        self._stop_loop()
        self._state = self._initial_state(Phase.MENU)
        self._notify_state_change()

    def change_direction(self, direction: Direction | str) -> None:
        """Queue a turn for the next tick; reversals of the current heading are dropped."""
        if self._destroyed or self._state.phase is not Phase.PLAYING:
            return
        try:
            direction = Direction(direction)
        except ValueError:
            return
        if not is_valid_direction(self._state.direction, direction):
            return
        self._state.next_direction = direction

    def cleanup(self) -> None:
        self._stop_loop()
        self.events.clear()
        self._callbacks.clear()
        self._destroyed = True

    # --- Loop ----------------------------------------------------------

    def _start_loop(self) -> None:
        self._last_update = self._clock()
        self._frame_handle = self.scheduler.request(self._on_frame)

    def _stop_loop(self) -> None:
        self.scheduler.cancel(self._frame_handle)
        self._frame_handle = None

    def _on_frame(self, now: float) -> None:
        self._frame_handle = None
        if self._destroyed or self._state.phase is not Phase.PLAYING:
            return

        if self.is_tick_due(now):
            self._last_update = now
            self._tick()

        # an observer may have restarted the loop or torn the engine down mid-tick
        if (
            not self._destroyed
            and self._state.phase is Phase.PLAYING
            and self._frame_handle is None
        ):
            self._frame_handle = self.scheduler.request(self._on_frame)

    def _tick(self) -> None:
        state = self._state
        state.direction = state.next_direction

        head = step(state.snake[0], state.direction)
        if is_out_of_bounds(head):
            self._end_round("wall")
            return
        if self_collision(head, state.snake):
            self._end_round("self")
            return

        state.snake.appendleft(head)
        if state.food is not None and positions_equal(head, state.food):
            if not self._eat_food():
                return
        else:
            state.snake.pop()

        self._notify_state_change()

    def _eat_food(self) -> bool:
        state = self._state
        state.food_count += 1
        state.score = score_for_food(state.food_count, state.level)

        new_level = level_for_score(state.score)
        if new_level > state.level:
            state.level = new_level
            state.speed = speed_for_level(new_level)
            logger.info("Level %d reached, tick every %d ms", new_level, state.speed)

        food = random_position(state.snake, self._rng)
        state.food = food
        if food is None:
            self._end_round("board_full")
            return False

        self.events.emit(GameEvent.FOOD_EATEN, food)
        return True

    def _end_round(self, reason: str) -> None:
        state = self._state
        state.phase = Phase.GAME_OVER
        state.death_reason = reason
        self._stop_loop()

        if state.score > state.high_score:
            state.high_score = state.score
            self.high_scores.save(state.score)
        logger.debug("Round over (%s) with score %d", reason, state.score)

        self.events.emit(GameEvent.GAME_OVER, state.score)
        # a game-over observer that starts or resets has already reported the new round
        if self._state is state:
            self._notify_state_change()

    # --- Helpers -------------------------------------------------------

    def _initial_state(self, phase: Phase) -> _RoundState:
        snake = deque(Position(*cell) for cell in INITIAL_SNAKE)
        return _RoundState(
            snake=snake,
            food=random_position(snake, self._rng),
            phase=phase,
            high_score=self.high_scores.load(),
        )

    def _notify_state_change(self) -> None:
        self.events.emit(GameEvent.STATE_CHANGED, self.get_state())
