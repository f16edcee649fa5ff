"""
Tests for the timer queue and manual clock.
"""

import pytest

from furigana_match.game.timers import ManualClock, TimerQueue


class TestManualClock:

    def test_advance(self):
        clock = ManualClock(start_ms=5)
        clock.advance(10)
        assert clock() == 15

    def test_cannot_go_backwards(self):
        with pytest.raises(ValueError):
            ManualClock().advance(-1)


class TestTimerQueue:
    """Unit tests for TimerQueue."""

    def test_nothing_runs_before_due(self, clock, timers):
        calls = []
        timers.call_later(800, lambda: calls.append("a"))

        assert timers.run_due() == 0
        clock.advance(799)
        assert timers.run_due() == 0
        assert timers.next_due_in() == 1
        assert calls == []

    def test_runs_in_due_then_schedule_order(self, clock, timers):
        calls = []
        timers.call_later(200, lambda: calls.append("late"))
        timers.call_later(100, lambda: calls.append("first"))
        timers.call_later(100, lambda: calls.append("second"))

        clock.advance(500)
        assert timers.run_due() == 3
        assert calls == ["first", "second", "late"]
        assert timers.pending == 0
        assert timers.next_due_in() is None

    def test_each_callback_runs_once(self, clock, timers):
        calls = []
        timers.call_later(10, lambda: calls.append(1))
        clock.advance(10)
        timers.run_due()
        timers.run_due()
        assert calls == [1]

    def test_callback_can_schedule_more(self, clock, timers):
        calls = []

        def chain():
            calls.append("outer")
            timers.call_later(0, lambda: calls.append("inner"))

        timers.call_later(5, chain)
        clock.advance(5)
        assert timers.run_due() == 2
        assert calls == ["outer", "inner"]

    def test_run_until_idle_sleeps_to_each_deadline(self, clock, timers):
        calls = []
        slept = []

        def fake_sleep(seconds):
            slept.append(seconds)
            clock.advance(seconds * 1000)

        timers.call_later(800, lambda: calls.append("reset"))
        timers.call_later(1800, lambda: calls.append("finish"))

        assert timers.run_until_idle(sleep=fake_sleep) == 2
        assert calls == ["reset", "finish"]
        assert slept == pytest.approx([0.8, 1.0])

    def test_negative_delay_runs_immediately(self, timers):
        calls = []
        timers.call_later(-5, lambda: calls.append(1))
        assert timers.run_due() == 1
