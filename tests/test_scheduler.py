"""
Tests for the cooperative callback scheduler.

Tests cover:
- One-shot and periodic callbacks
- Due order and ties
- Cancellation, including from inside a callback
- Argument validation
"""

import pytest

from hopkit.scheduler import Scheduler


class TestCallLater:
    """Tests for one-shot callbacks."""

    def test_fires_once_when_due(self):
        scheduler = Scheduler()
        calls = []
        scheduler.call_later(0.5, lambda: calls.append('x'))

        assert scheduler.advance(0.4) == 0
        assert scheduler.advance(0.1) == 1
        assert scheduler.advance(1.0) == 0
        assert calls == ['x']
        assert len(scheduler) == 0

    def test_zero_delay_fires_on_next_advance(self):
        scheduler = Scheduler()
        calls = []
        scheduler.call_later(0, lambda: calls.append(1))

        scheduler.advance(0)

        assert calls == [1]

    def test_negative_delay_rejected(self):
        scheduler = Scheduler()
        with pytest.raises(ValueError):
            scheduler.call_later(-0.1, lambda: None)

    def test_handle_inactive_after_firing(self):
        scheduler = Scheduler()
        handle = scheduler.call_later(0.1, lambda: None)

        scheduler.advance(0.1)

        assert handle.active is False


class TestCallEvery:
    """Tests for periodic callbacks."""

    def test_first_run_is_one_interval_away(self):
        scheduler = Scheduler()
        calls = []
        scheduler.call_every(1.0, lambda: calls.append(scheduler.now))

        scheduler.advance(0.99)
        assert calls == []

        scheduler.advance(0.01)
        assert calls == [pytest.approx(1.0)]

    def test_fires_for_every_interval_in_window(self):
        """A long frame catches up on every missed tick."""
        scheduler = Scheduler()
        calls = []
        scheduler.call_every(0.016, lambda: calls.append(1))

        assert scheduler.advance(0.05) == 3
        assert len(calls) == 3

    def test_accumulated_float_steps_do_not_drop_ticks(self):
        scheduler = Scheduler()
        calls = []
        scheduler.call_every(0.1, lambda: calls.append(1))

        for _ in range(10):
            scheduler.advance(0.1)

        assert len(calls) == 10

    def test_non_positive_interval_rejected(self):
        scheduler = Scheduler()
        with pytest.raises(ValueError):
            scheduler.call_every(0, lambda: None)
        with pytest.raises(ValueError):
            scheduler.call_every(-1.0, lambda: None)

    def test_callback_can_cancel_itself(self):
        scheduler = Scheduler()
        calls = []
        handle = None

        def once():
            calls.append(1)
            scheduler.cancel(handle)

        handle = scheduler.call_every(0.1, once)
        scheduler.advance(1.0)

        assert calls == [1]
        assert len(scheduler) == 0


class TestOrdering:
    """Tests for due order across callbacks."""

    def test_runs_in_due_order(self):
        scheduler = Scheduler()
        calls = []
        scheduler.call_later(0.3, lambda: calls.append('c'))
        scheduler.call_later(0.1, lambda: calls.append('a'))
        scheduler.call_later(0.2, lambda: calls.append('b'))

        scheduler.advance(1.0)

        assert calls == ['a', 'b', 'c']

    def test_ties_run_in_scheduling_order(self):
        scheduler = Scheduler()
        calls = []
        scheduler.call_later(0.5, lambda: calls.append('first'))
        scheduler.call_later(0.5, lambda: calls.append('second'))

        scheduler.advance(0.5)

        assert calls == ['first', 'second']

    def test_clock_reports_due_time_inside_callback(self):
        scheduler = Scheduler()
        seen = []
        scheduler.call_later(0.25, lambda: seen.append(scheduler.now))

        scheduler.advance(1.0)

        assert seen == [pytest.approx(0.25)]
        assert scheduler.now == pytest.approx(1.0)

    def test_callback_scheduled_during_advance_runs_if_due(self):
        scheduler = Scheduler()
        calls = []
        scheduler.call_later(0.1, lambda: scheduler.call_later(0.1, lambda: calls.append('inner')))

        scheduler.advance(0.5)

        assert calls == ['inner']

    def test_negative_advance_rejected(self):
        scheduler = Scheduler()
        with pytest.raises(ValueError):
            scheduler.advance(-0.01)


class TestCancellation:
    """Tests for cancel() and cancel_all()."""

    def test_cancelled_callback_never_runs(self):
        scheduler = Scheduler()
        calls = []
        handle = scheduler.call_later(0.1, lambda: calls.append(1))

        scheduler.cancel(handle)
        scheduler.advance(1.0)

        assert calls == []
        assert handle.active is False

    def test_cancel_is_idempotent(self):
        scheduler = Scheduler()
        handle = scheduler.call_every(0.1, lambda: None)

        scheduler.cancel(handle)
        scheduler.cancel(handle)
        scheduler.cancel(None)

        assert len(scheduler) == 0

    def test_cancel_all(self):
        scheduler = Scheduler()
        handles = [scheduler.call_later(0.1, lambda: None),
                   scheduler.call_every(0.1, lambda: None)]

        scheduler.cancel_all()

        assert len(scheduler) == 0
        assert not any(h.active for h in handles)

    def test_pending_filters_by_name(self):
        scheduler = Scheduler()
        scheduler.call_every(0.016, lambda: None, name='tick')
        scheduler.call_later(1.0, lambda: None, name='first_spawn')
        scheduler.call_every(2.0, lambda: None, name='spawn')

        assert [s.name for s in scheduler.pending()] == ['tick', 'first_spawn', 'spawn']
        assert len(scheduler.pending('tick')) == 1
        assert scheduler.pending('missing') == []
