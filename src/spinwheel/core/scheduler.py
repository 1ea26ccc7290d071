"""Timer scheduling for spin phase transitions.

The engine never touches ambient timers. It asks a Scheduler for a
cancellable TimerHandle and keeps the handle for as long as a phase is in
flight. Two schedulers are provided:

    FrameScheduler   - advanced by tick(delta_ms) from the host's frame loop
                       (deterministic, the default and what tests use)
    AsyncioScheduler - backed by loop.call_later on a running event loop
"""

import asyncio
import heapq
import itertools
import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

TimerCallback = Callable[[], None]


class TimerHandle(Protocol):
    @property
    def cancelled(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_ms: float, callback: TimerCallback) -> TimerHandle: ...

    def tick(self, delta_ms: float) -> None: ...


class FrameTimer:
    """Handle for a FrameScheduler timer."""

    __slots__ = ("due_ms", "callback", "_cancelled", "_fired")

    def __init__(self, due_ms: float, callback: TimerCallback):
        self.due_ms = due_ms
        self.callback = callback
        self._cancelled = False
        self._fired = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    def cancel(self) -> None:
        """Prevent the callback from ever running."""
        self._cancelled = True


class FrameScheduler:
    """Timers measured in the host's frame time.

    ``tick(delta_ms)`` advances the clock and fires every due timer in due
    order (ties in scheduling order). A timer scheduled from inside a
    callback fires in the same tick if it is already due.
    """

    def __init__(self) -> None:
        self._now_ms = 0.0
        self._queue: list[tuple[float, int, FrameTimer]] = []
        self._counter = itertools.count()

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def pending(self) -> int:
        """Number of live (not cancelled, not fired) timers."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def call_later(self, delay_ms: float, callback: TimerCallback) -> FrameTimer:
        timer = FrameTimer(self._now_ms + max(0.0, delay_ms), callback)
        heapq.heappush(self._queue, (timer.due_ms, next(self._counter), timer))
        return timer

    def tick(self, delta_ms: float) -> None:
        target = self._now_ms + max(0.0, delta_ms)
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now_ms = due
            timer._fired = True
            timer.callback()
        self._now_ms = target


class AsyncioTimer:
    """Handle wrapping an asyncio.TimerHandle."""

    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()

    def cancel(self) -> None:
        self._handle.cancel()


class AsyncioScheduler:
    """Timers on an asyncio event loop. The loop drives time, so tick() is a no-op."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay_ms: float, callback: TimerCallback) -> AsyncioTimer:
        loop = self._loop or asyncio.get_running_loop()
        return AsyncioTimer(loop.call_later(max(0.0, delay_ms) / 1000.0, callback))

    def tick(self, delta_ms: float) -> None:
        pass
