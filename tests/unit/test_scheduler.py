"""Unit tests for retry polling."""

from __future__ import annotations

import asyncio

import pytest

from framegate.runtime.scheduler import RetryScheduler, SchedTimerHost, SchedulerState


class TestRetryScheduler:
    def test_starts_idle(self, timers) -> None:
        scheduler = RetryScheduler(timers, lambda: None)
        assert scheduler.state is SchedulerState.IDLE
        assert not scheduler.active
        assert timers.pending == 0

    def test_one_tick_per_interval(self, timers) -> None:
        calls: list[float] = []
        scheduler = RetryScheduler(timers, lambda: calls.append(timers.now), interval=1.0)
        assert scheduler.start() is True
        assert scheduler.state is SchedulerState.POLLING
        timers.advance(3.5)
        assert calls == [1.0, 2.0, 3.0]
        assert scheduler.ticks == 3

    def test_double_start_keeps_one_timer(self, timers) -> None:
        calls: list[int] = []
        scheduler = RetryScheduler(timers, lambda: calls.append(1))
        scheduler.start()
        assert scheduler.start() is False
        assert timers.pending == 1
        timers.advance(1.0)
        assert len(calls) == 1
        assert timers.pending == 1

    def test_stop_cancels_pending_timer(self, timers) -> None:
        calls: list[int] = []
        scheduler = RetryScheduler(timers, lambda: calls.append(1))
        scheduler.start()
        assert scheduler.stop() is True
        assert scheduler.state is SchedulerState.IDLE
        timers.advance(5.0)
        assert calls == []
        assert timers.pending == 0

    def test_stop_while_idle_is_noop(self, timers) -> None:
        scheduler = RetryScheduler(timers, lambda: None)
        assert scheduler.stop() is False
        assert scheduler.state is SchedulerState.IDLE

    def test_stop_from_callback(self, timers) -> None:
        holder: dict[str, RetryScheduler] = {}

        def callback() -> None:
            if holder["s"].ticks == 2:
                holder["s"].stop()

        scheduler = holder["s"] = RetryScheduler(timers, callback)
        scheduler.start()
        timers.advance(10.0)
        assert scheduler.ticks == 2
        assert scheduler.state is SchedulerState.IDLE
        assert timers.pending == 0

    def test_restart_after_stop(self, timers) -> None:
        scheduler = RetryScheduler(timers, lambda: None)
        scheduler.start()
        scheduler.stop()
        assert scheduler.start() is True
        assert timers.pending == 1

    def test_callback_errors_do_not_stop_polling(self, timers, caplog) -> None:
        def callback() -> None:
            raise RuntimeError("boom")

        scheduler = RetryScheduler(timers, callback)
        scheduler.start()
        timers.advance(2.0)
        assert scheduler.ticks == 2
        assert scheduler.active
        assert "Retry callback raised" in caplog.text

    @pytest.mark.parametrize("interval", [0, -1.0])
    def test_interval_must_be_positive(self, timers, interval: float) -> None:
        with pytest.raises(ValueError):
            RetryScheduler(timers, lambda: None, interval=interval)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.slept: list[float] = []

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.slept.append(seconds)
        self.now += seconds


class TestSchedTimerHost:
    def test_runs_until_predicate(self) -> None:
        clock = FakeClock()
        host = SchedTimerHost(clock=clock.time, sleep=clock.sleep)
        calls: list[float] = []
        scheduler = RetryScheduler(host, lambda: calls.append(clock.now), interval=1.0)
        scheduler.start()

        done = host.run_until(lambda: len(calls) >= 3, timeout=10.0)
        assert done is True
        assert calls == [1.0, 2.0, 3.0]

    def test_timeout(self) -> None:
        clock = FakeClock()
        host = SchedTimerHost(clock=clock.time, sleep=clock.sleep)
        scheduler = RetryScheduler(host, lambda: None, interval=1.0)
        scheduler.start()

        assert host.run_until(lambda: False, timeout=2.5) is False
        assert clock.now == pytest.approx(2.5)
        assert scheduler.ticks == 2

    def test_returns_when_nothing_pending(self) -> None:
        clock = FakeClock()
        host = SchedTimerHost(clock=clock.time, sleep=clock.sleep)
        assert host.run_until(lambda: False, timeout=100.0) is False
        assert clock.slept == []

    def test_cancel_after_run_is_harmless(self) -> None:
        clock = FakeClock()
        host = SchedTimerHost(clock=clock.time, sleep=clock.sleep)
        fired: list[int] = []
        handle = host.call_later(1.0, lambda: fired.append(1))
        host.run_until(lambda: bool(fired), timeout=5.0)
        handle.cancel()
        assert fired == [1]
        assert host.pending == 0


class TestAsyncioTimers:
    @pytest.mark.anyio
    async def test_event_loop_is_a_timer_host(self) -> None:
        loop = asyncio.get_running_loop()
        calls: list[int] = []
        scheduler = RetryScheduler(loop, lambda: calls.append(1), interval=0.01)
        scheduler.start()
        while len(calls) < 3:
            await asyncio.sleep(0.005)
        scheduler.stop()
        assert scheduler.state is SchedulerState.IDLE
        ticks = scheduler.ticks
        await asyncio.sleep(0.05)
        assert scheduler.ticks == ticks
