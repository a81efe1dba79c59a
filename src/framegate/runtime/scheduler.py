"""Retry polling for discovery passes.

The scheduler owns a single repeating timer. Timers come from a
``TimerHost``: anything with ``call_later(delay, callback)`` returning a
handle with ``cancel()``. An asyncio event loop qualifies as-is;
``SchedTimerHost`` provides the same surface for synchronous programs.

Usage::

    timers = SchedTimerHost()
    scheduler = RetryScheduler(timers, widget.discover, interval=1.0)
    scheduler.start()
    timers.run_until(lambda: not scheduler.active, timeout=30)
"""

from __future__ import annotations

import logging
import sched
import time
from collections.abc import Callable
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TimerHost(Protocol):
    """Source of one-shot timers."""

    def call_later(self, delay: float, callback: Callable[[], object]) -> TimerHandle: ...


class SchedulerState(str, Enum):
    IDLE = "idle"
    POLLING = "polling"


class RetryScheduler:
    """Idle/Polling state machine with at most one live timer.

    Args:
        timers: Where timers are armed.
        callback: Invoked once per tick; usually a full discovery pass.
        interval: Seconds between ticks.
    """

    def __init__(
        self,
        timers: TimerHost,
        callback: Callable[[], object],
        *,
        interval: float = 1.0,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._timers = timers
        self._callback = callback
        self._interval = interval
        self._handle: TimerHandle | None = None
        self.ticks = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def active(self) -> bool:
        return self._handle is not None

    @property
    def state(self) -> SchedulerState:
        return SchedulerState.POLLING if self.active else SchedulerState.IDLE

    def start(self) -> bool:
        """Begin polling. Returns False (no-op) when already polling."""
        if self._handle is not None:
            return False
        self._handle = self._timers.call_later(self._interval, self._tick)
        logger.debug("Retry polling started (every %.2fs)", self._interval)
        return True

    def stop(self) -> bool:
        """Stop polling. Returns False (no-op) when idle."""
        if self._handle is None:
            return False
        handle, self._handle = self._handle, None
        handle.cancel()
        logger.debug("Retry polling stopped after %d ticks", self.ticks)
        return True

    def _tick(self) -> None:
        if self._handle is None:
            return
        # Re-arm first so a stop() from inside the callback cancels the next tick
        self._handle = self._timers.call_later(self._interval, self._tick)
        self.ticks += 1
        try:
            self._callback()
        except Exception:
            logger.exception("Retry callback raised; polling continues")


class _SchedHandle:
    def __init__(self, scheduler: sched.scheduler, event: sched.Event) -> None:
        self._scheduler = scheduler
        self._event = event

    def cancel(self) -> None:
        try:
            self._scheduler.cancel(self._event)
        except ValueError:
            pass  # already ran


class SchedTimerHost:
    """``TimerHost`` over ``sched.scheduler`` for single-threaded synchronous code.

    Args:
        clock: Monotonic time source.
        sleep: Blocking delay used between due timers.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], object] = time.sleep,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._scheduler = sched.scheduler(clock, sleep)

    def call_later(self, delay: float, callback: Callable[[], object]) -> _SchedHandle:
        event = self._scheduler.enter(delay, 0, callback)
        return _SchedHandle(self._scheduler, event)

    @property
    def pending(self) -> int:
        return len(self._scheduler.queue)

    def run_until(self, predicate: Callable[[], bool], timeout: float) -> bool:
        """Run due timers until *predicate* holds, nothing is pending, or *timeout* elapses.

        Returns:
            The final value of *predicate*.
        """
        deadline = self._clock() + timeout
        while not predicate():
            delay = self._scheduler.run(blocking=False)
            if predicate() or delay is None:
                break
            remaining = deadline - self._clock()
            if remaining <= 0:
                break
            self._sleep(min(delay, remaining))
        return predicate()
