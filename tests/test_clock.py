"""Tests for the manual and asyncio clocks."""

from __future__ import annotations

import asyncio

import pytest

from snake_arcade.clock import AsyncioClock, ManualClock


class TestManualClockOneShot:
    def test_fires_when_due(self):
        clock = ManualClock()
        calls: list[float] = []
        clock.call_later(0.5, lambda: calls.append(clock.now))
        clock.advance(0.4)
        assert calls == []
        clock.advance(0.1)
        assert calls == [0.5]

    def test_fires_only_once(self):
        clock = ManualClock()
        calls: list[int] = []
        clock.call_later(0.1, lambda: calls.append(1))
        clock.advance(5)
        assert calls == [1]
        assert clock.pending == 0

    def test_cancelled_never_fires(self):
        clock = ManualClock()
        calls: list[int] = []
        handle = clock.call_later(0.1, lambda: calls.append(1))
        handle.cancel()
        assert handle.cancelled()
        assert clock.advance(1) == 0
        assert calls == []

    def test_order_by_due_time_then_schedule_order(self):
        clock = ManualClock()
        calls: list[str] = []
        clock.call_later(0.3, lambda: calls.append("c"))
        clock.call_later(0.1, lambda: calls.append("a"))
        clock.call_later(0.1, lambda: calls.append("b"))
        clock.advance(1)
        assert calls == ["a", "b", "c"]

    def test_callbacks_scheduled_by_callbacks_fire_in_same_advance(self):
        clock = ManualClock()
        calls: list[float] = []

        def first() -> None:
            calls.append(clock.now)
            clock.call_later(0.2, lambda: calls.append(clock.now))

        clock.call_later(0.1, first)
        clock.advance(1)
        assert calls == [pytest.approx(0.1), pytest.approx(0.3)]
        assert clock.now == 1

    def test_negative_values_rejected(self):
        clock = ManualClock()
        with pytest.raises(ValueError):
            clock.call_later(-1, lambda: None)
        with pytest.raises(ValueError):
            clock.advance(-1)


class TestManualClockPeriodic:
    def test_repeats_until_cancelled(self):
        clock = ManualClock()
        calls: list[int] = []
        handle = clock.call_every(0.1, lambda: calls.append(1))
        clock.advance(0.35)
        assert len(calls) == 3
        handle.cancel()
        clock.advance(1)
        assert len(calls) == 3

    def test_cancel_from_inside_callback(self):
        clock = ManualClock()
        calls: list[int] = []
        handle = None

        def tick() -> None:
            calls.append(1)
            if len(calls) == 2:
                handle.cancel()

        handle = clock.call_every(1, tick)
        clock.advance(10)
        assert len(calls) == 2
        assert clock.pending == 0

    def test_interval_must_be_positive(self):
        with pytest.raises(ValueError, match="positive"):
            ManualClock().call_every(0, lambda: None)


class TestAsyncioClock:
    @pytest.mark.asyncio
    async def test_call_later(self):
        clock = AsyncioClock()
        fired = asyncio.Event()
        clock.call_later(0.01, fired.set)
        await asyncio.wait_for(fired.wait(), timeout=1.0)

    @pytest.mark.asyncio
    async def test_call_later_cancel(self):
        clock = AsyncioClock()
        calls: list[int] = []
        handle = clock.call_later(0.01, lambda: calls.append(1))
        handle.cancel()
        await asyncio.sleep(0.05)
        assert calls == []
        assert handle.cancelled()

    @pytest.mark.asyncio
    async def test_call_every_repeats_and_cancels(self):
        clock = AsyncioClock()
        calls: list[int] = []
        handle = clock.call_every(0.01, lambda: calls.append(1))
        for _ in range(100):
            await asyncio.sleep(0.01)
            if len(calls) >= 3:
                break
        handle.cancel()
        count = len(calls)
        assert count >= 3
        await asyncio.sleep(0.05)
        assert len(calls) == count
        assert handle.cancelled()
