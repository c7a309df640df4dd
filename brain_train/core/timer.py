from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from brain_train.core.scheduler import Handle, Scheduler

logger = logging.getLogger(__name__)

TICK_MS = 1000


@dataclass(frozen=True)
class TimerState:
    remaining_seconds: int
    expired: bool


def display_bucket(remaining_seconds: int, warn_seconds: int = 10, danger_seconds: int = 5) -> str:
    """Classify the countdown for display: ``danger``, ``warn`` or ``ok``."""
    if remaining_seconds <= danger_seconds:
        return "danger"
    if remaining_seconds <= warn_seconds:
        return "warn"
    return "ok"


class LevelTimer:
    """Per-level countdown ticking once a second on a ``Scheduler``.

    Only one countdown runs at a time: ``start`` cancels any pending tick
    before arming a new one. On reaching zero the timer stops, marks itself
    expired and calls ``on_expired``; it stays expired until restarted.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_tick: Optional[Callable[[int], None]] = None,
        on_expired: Optional[Callable[[], None]] = None,
        default_seconds: int = 30,
    ) -> None:
        self._scheduler = scheduler
        self._on_tick = on_tick
        self._on_expired = on_expired
        self._default_seconds = default_seconds
        self._remaining = default_seconds
        self._expired = False
        self._handle: Optional[Handle] = None

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def expired(self) -> bool:
        return self._expired

    @property
    def running(self) -> bool:
        return self._handle is not None and self._handle.active

    def state(self) -> TimerState:
        return TimerState(remaining_seconds=self._remaining, expired=self._expired)

    def start(self, seconds: Optional[int] = None) -> None:
        self.cancel()
        self._remaining = self._default_seconds if seconds is None else int(seconds)
        self._expired = False
        self._handle = self._scheduler.call_later(TICK_MS, self._tick)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self) -> None:
        self._handle = None
        self._remaining = max(0, self._remaining - 1)
        if self._remaining == 0:
            self._expired = True
            logger.info("Level timer expired")
            if self._on_tick is not None:
                self._on_tick(self._remaining)
            if self._on_expired is not None:
                self._on_expired()
            return
        self._handle = self._scheduler.call_later(TICK_MS, self._tick)
        if self._on_tick is not None:
            self._on_tick(self._remaining)
