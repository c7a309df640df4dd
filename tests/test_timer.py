"""Tests for brain_train.core.timer – the level countdown."""

from __future__ import annotations

import pytest

from brain_train.core.scheduler import ManualScheduler
from brain_train.core.timer import LevelTimer, TimerState, display_bucket


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


class Recorder:
    def __init__(self) -> None:
        self.ticks: list[int] = []
        self.expired = 0

    def on_tick(self, remaining: int) -> None:
        self.ticks.append(remaining)

    def on_expired(self) -> None:
        self.expired += 1


@pytest.fixture()
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture()
def timer(scheduler: ManualScheduler, recorder: Recorder) -> LevelTimer:
    return LevelTimer(scheduler, on_tick=recorder.on_tick, on_expired=recorder.on_expired)


# ---------------------------------------------------------------------------
# display_bucket
# ---------------------------------------------------------------------------

class TestDisplayBucket:
    @pytest.mark.parametrize(
        "remaining, bucket",
        [(30, "ok"), (11, "ok"), (10, "warn"), (6, "warn"), (5, "danger"), (0, "danger")],
    )
    def test_thresholds(self, remaining: int, bucket: str):
        assert display_bucket(remaining) == bucket


# ---------------------------------------------------------------------------
# LevelTimer
# ---------------------------------------------------------------------------

class TestLevelTimer:
    def test_initial_state(self, timer: LevelTimer):
        assert timer.state() == TimerState(remaining_seconds=30, expired=False)
        assert not timer.running

    def test_ticks_once_per_second(self, timer, scheduler, recorder):
        timer.start(5)
        scheduler.advance(999)
        assert recorder.ticks == []
        scheduler.advance(1)
        assert recorder.ticks == [4]
        scheduler.advance(2000)
        assert recorder.ticks == [4, 3, 2]

    def test_expires_at_zero(self, timer, scheduler, recorder):
        timer.start(3)
        scheduler.advance(3000)
        assert timer.remaining_seconds == 0
        assert timer.expired
        assert recorder.expired == 1
        assert not timer.running

    def test_no_ticks_after_expiry(self, timer, scheduler, recorder):
        timer.start(2)
        scheduler.advance(10000)
        assert recorder.ticks == [1, 0]
        assert recorder.expired == 1

    def test_cancel_stops_ticking(self, timer, scheduler, recorder):
        timer.start(10)
        scheduler.advance(2000)
        timer.cancel()
        scheduler.advance(10000)
        assert timer.remaining_seconds == 8
        assert not timer.expired
        assert recorder.expired == 0

    def test_restart_cancels_previous_countdown(self, timer, scheduler, recorder):
        timer.start(10)
        scheduler.advance(500)
        timer.start(10)
        scheduler.advance(1000)
        # only the second countdown ticks
        assert recorder.ticks == [9]
        assert scheduler.pending() == 1

    def test_start_clears_expired_flag(self, timer, scheduler):
        timer.start(1)
        scheduler.advance(1000)
        assert timer.expired
        timer.start()
        assert not timer.expired
        assert timer.remaining_seconds == 30

    def test_default_seconds(self, scheduler):
        timer = LevelTimer(scheduler, default_seconds=12)
        timer.start()
        assert timer.remaining_seconds == 12
