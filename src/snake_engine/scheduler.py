"""Frame-callback scheduling used to drive the engine's tick loop."""

from __future__ import annotations

import itertools
from typing import Callable

FrameCallback = Callable[[float], None]


class FrameScheduler:
    """One-shot per-frame callbacks, pumped by the host's render loop.

    ``request`` queues a callback for the next frame and returns a handle;
    ``cancel`` removes it synchronously so it can never fire afterwards.
    The host calls ``run_frame(now_ms)`` once per displayed frame. Callbacks
    requested while a frame is running are deferred to the following frame,
    which is what keeps a self-rescheduling loop from spinning.
    """

    def __init__(self) -> None:
        self._pending: dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)

    def request(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int | None) -> None:
        if handle is not None:
            self._pending.pop(handle, None)

    def run_frame(self, now: float) -> int:
        """Run the callbacks due this frame and return how many ran."""
        due = list(self._pending)
        ran = 0
        for handle in due:
            # an earlier callback in this frame may have cancelled this one
            callback = self._pending.pop(handle, None)
            if callback is None:
                continue
            callback(now)
            ran += 1
        return ran

    @property
    def pending(self) -> int:
        return len(self._pending)
