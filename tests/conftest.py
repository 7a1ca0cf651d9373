"""Shared fixtures for the engine tests."""

import os
import random

import pytest

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from snake_engine.engine import GameEngine
from snake_engine.scheduler import FrameScheduler
from snake_engine.storage import MemoryStorage


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def engine(storage, scheduler, clock):
    return GameEngine(
        storage=storage, scheduler=scheduler, clock=clock, rng=random.Random(1234)
    )
