"""
Cooperative callback scheduler driven by a virtual clock.

Games run on a single thread: the host loop calls ``advance(dt)`` once per
frame and every callback that fell due inside that window runs to
completion, in due order, before the next one is considered. Nothing runs
between calls to ``advance``.

Usage:
    scheduler = Scheduler()
    tick = scheduler.call_every(0.016, controller.tick, name='tick')
    scheduler.call_later(1.0, field.spawn_first, name='first_spawn')

    # In game loop:
    scheduler.advance(dt)

    scheduler.cancel(tick)   # safe to repeat
"""
import itertools
from typing import Callable, List, Optional

from hopkit.logging import get_logger

log = get_logger('scheduler')

# Tolerance when comparing due times accumulated in floating point
_EPSILON = 1e-9


class ScheduledCallback:
    """A callback scheduled to run after a delay, optionally repeating."""

    def __init__(
        self,
        due: float,
        callback: Callable[[], None],
        interval: Optional[float] = None,
        name: str = '',
        order: int = 0,
    ):
        self.due = due
        self.callback = callback
        self.interval = interval
        self.name = name
        self.order = order
        self.active = True

    @property
    def repeating(self) -> bool:
        """True for callbacks created with call_every()."""
        return self.interval is not None

    def __repr__(self) -> str:
        kind = f"every {self.interval:.3f}s" if self.repeating else "once"
        return f"ScheduledCallback({self.name or self.callback!r}, due={self.due:.3f}, {kind})"


class Scheduler:
    """Single-threaded timer service with periodic and one-shot callbacks."""

    def __init__(self, start_time: float = 0.0):
        self.now = start_time
        self._scheduled: List[ScheduledCallback] = []
        self._order = itertools.count()

    def call_later(
        self,
        delay: float,
        callback: Callable[[], None],
        name: str = '',
    ) -> ScheduledCallback:
        """Run callback once, delay seconds from now.

        Raises:
            ValueError: If delay is negative
        """
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay}")
        scheduled = ScheduledCallback(self.now + delay, callback, None, name, next(self._order))
        self._scheduled.append(scheduled)
        log.trace("scheduled %r", scheduled)
        return scheduled

    def call_every(
        self,
        interval: float,
        callback: Callable[[], None],
        name: str = '',
    ) -> ScheduledCallback:
        """Run callback every interval seconds; the first run is one interval from now.

        Raises:
            ValueError: If interval is not positive
        """
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        scheduled = ScheduledCallback(self.now + interval, callback, interval, name, next(self._order))
        self._scheduled.append(scheduled)
        log.trace("scheduled %r", scheduled)
        return scheduled

    def cancel(self, scheduled: Optional[ScheduledCallback]) -> None:
        """Cancel a scheduled callback. Cancelling twice, or None, is a no-op."""
        if scheduled is None:
            return
        scheduled.active = False
        if scheduled in self._scheduled:
            self._scheduled.remove(scheduled)
            log.trace("cancelled %r", scheduled)

    def cancel_all(self) -> None:
        """Cancel every pending callback."""
        for scheduled in self._scheduled:
            scheduled.active = False
        self._scheduled.clear()

    def pending(self, name: Optional[str] = None) -> List[ScheduledCallback]:
        """Get pending callbacks in due order, optionally filtered by name."""
        pending = sorted(self._scheduled, key=lambda s: (s.due, s.order))
        if name is None:
            return pending
        return [s for s in pending if s.name == name]

    def advance(self, dt: float) -> int:
        """Move the clock forward by dt seconds, running every callback that falls due.

        Periodic callbacks are re-armed before they run, so a callback may
        cancel itself. Callbacks scheduled while advancing run in this same
        call if they fall due inside the window.

        Args:
            dt: Time delta in seconds

        Returns:
            Number of callbacks run

        Raises:
            ValueError: If dt is negative
        """
        if dt < 0:
            raise ValueError(f"Time delta must be non-negative, got {dt}")

        target = self.now + dt
        fired = 0

        while True:
            due = [s for s in self._scheduled if s.due <= target + _EPSILON]
            if not due:
                break
            scheduled = min(due, key=lambda s: (s.due, s.order))
            self.now = max(self.now, scheduled.due)

            if scheduled.repeating:
                scheduled.due += scheduled.interval
            else:
                self._scheduled.remove(scheduled)
                scheduled.active = False

            scheduled.callback()
            fired += 1

        self.now = target
        return fired

    def __len__(self) -> int:
        return len(self._scheduled)
