from __future__ import annotations

import asyncio
import contextlib
import time

import pytest

from routewatch.engine.poll import PeriodicPollEngine
from routewatch.exceptions import DecodeError


class FakePlanner:
    def __init__(self) -> None:
        self.call_times: list[float] = []
        self.failures: set[int] = set()

    async def plan(self) -> list[str]:
        self.call_times.append(time.monotonic())
        cycle = len(self.call_times)
        if cycle in self.failures:
            raise DecodeError("unexpected response shape")
        return [f"itinerary-{cycle}"]


async def _stop(task: asyncio.Task[None]) -> None:
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_first_fetch_is_immediate() -> None:
    planner = FakePlanner()
    engine = PeriodicPollEngine(planner.plan, interval=10.0)
    task = asyncio.create_task(engine.run())
    await asyncio.sleep(0.01)

    assert len(planner.call_times) == 1
    assert engine.store.read().items == ("itinerary-1",)
    await _stop(task)


@pytest.mark.asyncio
async def test_fetches_repeat_at_fixed_interval() -> None:
    planner = FakePlanner()
    engine = PeriodicPollEngine(planner.plan, interval=0.1)
    started = time.monotonic()
    task = asyncio.create_task(engine.run())
    await asyncio.sleep(0.25)
    await _stop(task)

    offsets = [t - started for t in planner.call_times]
    assert len(offsets) == 3
    assert offsets[0] == pytest.approx(0.0, abs=0.03)
    assert offsets[1] == pytest.approx(0.1, abs=0.03)
    assert offsets[2] == pytest.approx(0.2, abs=0.03)
    assert engine.store.version == 3
    assert engine.store.read().items == ("itinerary-3",)


@pytest.mark.asyncio
async def test_failed_cycle_is_skipped_and_polling_continues() -> None:
    planner = FakePlanner()
    planner.failures = {2}
    engine = PeriodicPollEngine(planner.plan, interval=0.05)
    task = asyncio.create_task(engine.run())

    await asyncio.sleep(0.07)
    after_failure = engine.store.read()
    assert len(planner.call_times) == 2
    assert after_failure.items == ("itinerary-1",)
    assert after_failure.version == 1
    assert not after_failure.is_fetching

    await asyncio.sleep(0.05)
    assert engine.store.read().items == ("itinerary-3",)
    assert engine.store.version == 2
    await _stop(task)


@pytest.mark.asyncio
async def test_no_writes_after_cancellation() -> None:
    planner = FakePlanner()
    engine = PeriodicPollEngine(planner.plan, interval=0.02)
    task = asyncio.create_task(engine.run())
    await asyncio.sleep(0.05)
    await _stop(task)

    version = engine.store.version
    calls = len(planner.call_times)
    await asyncio.sleep(0.1)

    assert engine.store.version == version
    assert len(planner.call_times) == calls
