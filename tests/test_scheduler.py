"""Tests for brain_train.core.scheduler – the virtual-clock scheduler."""

from __future__ import annotations

from brain_train.core.scheduler import ManualScheduler


class TestManualScheduler:
    def test_nothing_fires_without_advance(self):
        s = ManualScheduler()
        fired = []
        s.call_later(0, lambda: fired.append(1))
        assert fired == []
        assert s.pending() == 1

    def test_fires_when_due(self):
        s = ManualScheduler()
        fired = []
        s.call_later(100, lambda: fired.append(s.now))
        s.advance(99)
        assert fired == []
        s.advance(1)
        assert fired == [100]

    def test_same_due_time_fires_in_schedule_order(self):
        s = ManualScheduler()
        fired = []
        for name in "abc":
            s.call_later(50, lambda n=name: fired.append(n))
        s.advance(50)
        assert fired == ["a", "b", "c"]

    def test_cancelled_handle_does_not_fire(self):
        s = ManualScheduler()
        fired = []
        handle = s.call_later(10, lambda: fired.append(1))
        handle.cancel()
        assert not handle.active
        s.advance(100)
        assert fired == []
        assert s.pending() == 0

    def test_chained_callbacks_fire_within_one_advance(self):
        s = ManualScheduler()
        fired = []

        def first() -> None:
            fired.append(("first", s.now))
            s.call_later(200, lambda: fired.append(("second", s.now)))

        s.call_later(100, first)
        s.advance(1000)
        assert fired == [("first", 100), ("second", 300)]
        assert s.now == 1000

    def test_handle_inactive_after_firing(self):
        s = ManualScheduler()
        handle = s.call_later(5, lambda: None)
        s.advance(5)
        assert not handle.active
