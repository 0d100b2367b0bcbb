"""Concrete timer sources: asyncio event loop, background threads, manual clock."""

import asyncio
import heapq
import itertools
import threading
from dataclasses import dataclass, field
from typing import Any, override

from pydantic import Field, PrivateAttr

from ..settings import FNKIT_SETTINGS
from .base import BaseTimerSource, TimerCallback

_COMPACT_MIN_SIZE = 64


@BaseTimerSource.register("asyncio")
class AsyncioTimerSource(BaseTimerSource):
    """Schedule callbacks on the running asyncio event loop with ``call_later``.

    Must be used from inside a running event loop; callbacks run on that loop.
    Exceptions raised by a callback go to the loop's exception handler.
    """

    @override
    def schedule(self, callback: TimerCallback, delay: float) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(delay, callback)

    @override
    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


@BaseTimerSource.register("thread")
class ThreadTimerSource(BaseTimerSource):
    """Run each callback on its own daemon ``threading.Timer``.

    A cancel() that races with a timer already running its callback cannot
    stop it; callers that need exactly-once semantics must discard stale
    firings themselves.
    """

    daemon: bool = True

    @override
    def schedule(self, callback: TimerCallback, delay: float) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = self.daemon
        timer.start()
        return timer

    @override
    def cancel(self, handle: threading.Timer) -> None:
        handle.cancel()


@dataclass(order=True)
class ManualTimerHandle:
    deadline: float
    sequence: int
    callback: TimerCallback = field(compare=False)
    cancelled: bool = field(default=False, compare=False)


class _ManualClockState:
    """Mutable clock state for ManualTimerSource: current time and timer heap."""

    now: float
    queue: list[ManualTimerHandle]
    counter: itertools.count

    def __init__(self, start: float):
        self.now = start
        self.queue = []
        self.counter = itertools.count()


@BaseTimerSource.register("manual")
class ManualTimerSource(BaseTimerSource):
    """Virtual clock that only moves when advance() is called.

    Timers fire in deadline order, ties in the order they were scheduled.
    Timers scheduled by a callback during advance() fire in the same call if
    their deadline falls inside the advanced span.

    Examples
    --------
    >>> clock = ManualTimerSource()
    >>> fired = []
    >>> _ = clock.schedule(lambda: fired.append(clock.now), 0.1)
    >>> clock.advance(0.25)
    >>> fired
    [0.1]
    """

    start: float = Field(default=0.0, ge=0)

    _state: _ManualClockState = PrivateAttr()

    @override
    def model_post_init(self, context: Any, /) -> None:
        self._state = _ManualClockState(self.start)
        super().model_post_init(context)

    @property
    def now(self) -> float:
        return self._state.now

    @property
    def pending_count(self) -> int:
        return sum(1 for handle in self._state.queue if not handle.cancelled)

    @override
    def schedule(self, callback: TimerCallback, delay: float) -> ManualTimerHandle:
        if delay < 0:
            raise ValueError("Delay must be greater than or equal to 0")

        handle = ManualTimerHandle(
            deadline=self._state.now + delay,
            sequence=next(self._state.counter),
            callback=callback,
        )
        heapq.heappush(self._state.queue, handle)
        return handle

    @override
    def cancel(self, handle: ManualTimerHandle) -> None:
        handle.cancelled = True

        # Drop cancelled handles once they outnumber the live ones.
        queue = self._state.queue
        live = [queued for queued in queue if not queued.cancelled]
        if len(queue) > _COMPACT_MIN_SIZE and len(live) * 2 < len(queue):
            heapq.heapify(live)
            self._state.queue = live

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running every timer that becomes due.

        Parameters
        ----------
        seconds : float
            How far to move the clock. Must not be negative.

        Raises
        ------
        ValueError
            If seconds is negative.
        """
        if seconds < 0:
            raise ValueError("Cannot advance the clock backwards")

        state = self._state
        target = state.now + seconds
        while state.queue and state.queue[0].deadline <= target:
            handle = heapq.heappop(state.queue)
            if handle.cancelled:
                continue
            state.now = handle.deadline
            handle.cancelled = True
            handle.callback()

        state.now = target

    def advance_to(self, timestamp: float) -> None:
        """Move the clock to an absolute time, see advance()."""
        self.advance(timestamp - self._state.now)


def default_timer_source() -> BaseTimerSource:
    """Timer source used when a throttle is created without an explicit one.

    Follows ``FNKIT_TIMER_SOURCE``. With ``auto`` (the default), returns an
    AsyncioTimerSource when called from a running event loop and a
    ThreadTimerSource otherwise.
    """
    match FNKIT_SETTINGS.timer_source:
        case "asyncio":
            return AsyncioTimerSource()
        case "thread":
            return ThreadTimerSource()

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return ThreadTimerSource()

    return AsyncioTimerSource()
