"""Deferred callbacks for the single-threaded game loop.

The engine never sleeps; every wait is a callback scheduled through a
``Scheduler``. The Qt build plugs in ``QtScheduler``; tests and headless
drivers use ``ManualScheduler``, which runs on a virtual millisecond clock.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, List, Protocol, Tuple


class Handle(Protocol):
    def cancel(self) -> None: ...

    @property
    def active(self) -> bool: ...


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Handle: ...


class ManualHandle:
    """Handle for a callback queued on a ``ManualScheduler``."""

    def __init__(self, due: int, callback: Callable[[], None]) -> None:
        self.due = due
        self._callback = callback
        self._cancelled = False
        self._fired = False

    @property
    def active(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self) -> None:
        self._cancelled = True

    def _fire(self) -> None:
        if not self.active:
            return
        self._fired = True
        self._callback()


class ManualScheduler:
    """Virtual clock. Nothing fires until ``advance`` is called."""

    def __init__(self) -> None:
        self._now = 0
        self._seq = itertools.count()
        self._queue: List[Tuple[int, int, ManualHandle]] = []

    @property
    def now(self) -> int:
        """Current virtual time in milliseconds."""
        return self._now

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self._now + max(0, int(delay_ms)), callback)
        heapq.heappush(self._queue, (handle.due, next(self._seq), handle))
        return handle

    def pending(self) -> int:
        """Number of callbacks still waiting to fire."""
        return sum(1 for _, _, h in self._queue if h.active)

    def advance(self, ms: int) -> None:
        """Move the clock forward, firing due callbacks in schedule order.

        Callbacks scheduled while advancing fire within the same call if
        they fall due before the target time.
        """
        target = self._now + max(0, int(ms))
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            self._now = due
            handle._fire()
        self._now = target
