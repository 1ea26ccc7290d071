"""Tests for frame and asyncio timer scheduling."""
import asyncio

import pytest

from spinwheel.core.scheduler import AsyncioScheduler, FrameScheduler


def test_timer_fires_when_due(scheduler):
    fired = []
    scheduler.call_later(100, lambda: fired.append(scheduler.now_ms))

    scheduler.tick(99)
    assert fired == []
    assert scheduler.pending == 1

    scheduler.tick(1)
    assert fired == [100]
    assert scheduler.pending == 0


def test_timers_fire_in_due_then_schedule_order(scheduler):
    order = []
    scheduler.call_later(300, lambda: order.append("c"))
    scheduler.call_later(100, lambda: order.append("a"))
    scheduler.call_later(100, lambda: order.append("b"))

    scheduler.tick(1000)
    assert order == ["a", "b", "c"]
    assert scheduler.now_ms == 1000


def test_cancelled_timer_never_fires(scheduler):
    fired = []
    timer = scheduler.call_later(50, lambda: fired.append(True))
    timer.cancel()

    scheduler.tick(500)
    assert fired == []
    assert timer.cancelled
    assert not timer.fired


def test_timer_scheduled_from_callback_fires_same_tick(scheduler):
    fired = []

    def first():
        fired.append(("first", scheduler.now_ms))
        scheduler.call_later(50, lambda: fired.append(("second", scheduler.now_ms)))

    scheduler.call_later(100, first)
    scheduler.tick(200)

    assert fired == [("first", 100), ("second", 150)]


def test_negative_delays_clamp_to_now():
    scheduler = FrameScheduler()
    fired = []
    scheduler.call_later(-10, lambda: fired.append(True))
    scheduler.tick(0)
    assert fired == [True]


@pytest.mark.asyncio
async def test_asyncio_scheduler_fires():
    fired = asyncio.Event()
    AsyncioScheduler().call_later(10, fired.set)
    await asyncio.wait_for(fired.wait(), timeout=1.0)


@pytest.mark.asyncio
async def test_asyncio_scheduler_cancel():
    fired = []
    timer = AsyncioScheduler().call_later(10, lambda: fired.append(True))
    timer.cancel()
    await asyncio.sleep(0.05)
    assert fired == []
    assert timer.cancelled
