"""Cancelable timer abstractions that drive the engine."""

from __future__ import annotations

import asyncio
import heapq
import itertools
from collections.abc import Callable
from typing import Protocol

Callback = Callable[[], None]


class TimerHandle(Protocol):
    """A scheduled callback that can be cancelled."""

    def cancel(self) -> None: ...

    def cancelled(self) -> bool: ...


class Clock(Protocol):
    """Scheduling primitives the engine relies on.

    Delays and intervals are in seconds.
    """

    def call_later(self, delay: float, callback: Callback) -> TimerHandle: ...

    def call_every(self, interval: float, callback: Callback) -> TimerHandle: ...


class _ManualTimer:
    __slots__ = ("due", "interval", "callback", "_cancelled")

    def __init__(self, due: float, interval: float | None, callback: Callback) -> None:
        self.due = due
        self.interval = interval
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class ManualClock:
    """Deterministic virtual clock advanced explicitly by the caller.

    Used for headless simulation and tests. Callbacks fire in due-time
    order, ties in scheduling order, and only from inside :meth:`advance`.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, _ManualTimer]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callback) -> _ManualTimer:
        if delay < 0:
            raise ValueError("delay must be >= 0.")
        timer = _ManualTimer(self.now + delay, None, callback)
        self._push(timer)
        return timer

    def call_every(self, interval: float, callback: Callback) -> _ManualTimer:
        if interval <= 0:
            raise ValueError("interval must be positive.")
        timer = _ManualTimer(self.now + interval, interval, callback)
        self._push(timer)
        return timer

    @property
    def pending(self) -> int:
        """Number of live timers still waiting to fire."""
        return sum(1 for _, _, t in self._queue if not t.cancelled())

    def advance(self, seconds: float) -> int:
        """Move time forward, firing every callback that falls due.

        Returns the number of callbacks run.
        """
        if seconds < 0:
            raise ValueError("Cannot advance a clock backwards.")
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            _, _, timer = heapq.heappop(self._queue)
            if timer.cancelled():
                continue
            self.now = timer.due
            if timer.interval is not None:
                timer.due += timer.interval
                self._push(timer)
            timer.callback()
            fired += 1
        self.now = target
        return fired

    def _push(self, timer: _ManualTimer) -> None:
        heapq.heappush(self._queue, (timer.due, next(self._seq), timer))


class _PeriodicHandle:
    """Re-arms itself at fixed due times on an asyncio loop."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval: float,
        callback: Callback,
    ) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._cancelled = False
        self._due = loop.time() + interval
        self._handle = loop.call_at(self._due, self._run)

    def _run(self) -> None:
        if self._cancelled:
            return
        self._due += self._interval
        # Skip missed slots rather than firing a burst to catch up.
        now = self._loop.time()
        if self._due < now:
            self._due = now + self._interval
        self._handle = self._loop.call_at(self._due, self._run)
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        self._handle.cancel()

    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioClock:
    """Clock backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop if loop is not None else asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callback) -> asyncio.TimerHandle:
        return self._loop.call_later(delay, callback)

    def call_every(self, interval: float, callback: Callback) -> _PeriodicHandle:
        if interval <= 0:
            raise ValueError("interval must be positive.")
        return _PeriodicHandle(self._loop, interval, callback)
