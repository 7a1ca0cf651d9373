"""Notification channel between the engine and its observers."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class GameEvent(str, Enum):
    STATE_CHANGED = "state_changed"  # payload: GameSnapshot
    FOOD_EATEN = "food_eaten"  # payload: new food Position
    GAME_OVER = "game_over"  # payload: final score


class EventChannel:
    """Fan-out of engine events to any number of subscribers.

    Handlers run synchronously, in subscription order, inside whatever
    command or tick emitted the event. A failing handler is logged and
    does not stop the others.
    """

    def __init__(self) -> None:
        self._handlers: dict[GameEvent, list[Handler]] = {
            event: [] for event in GameEvent
        }

    def subscribe(self, event: GameEvent, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` and return a callable that removes it again."""
        self._handlers[event].append(handler)

        def unsubscribe() -> None:
            self.unsubscribe(event, handler)

        return unsubscribe

    def unsubscribe(self, event: GameEvent, handler: Handler) -> None:
        try:
            self._handlers[event].remove(handler)
        except ValueError:
            pass

    def emit(self, event: GameEvent, payload: Any) -> None:
        for handler in list(self._handlers[event]):
            try:
                handler(payload)
            except Exception:
                logger.exception("Observer for %s failed", event.value)

    def has_subscribers(self, event: GameEvent) -> bool:
        return bool(self._handlers[event])

    def clear(self) -> None:
        for handlers in self._handlers.values():
            handlers.clear()
