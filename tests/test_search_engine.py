from __future__ import annotations

import asyncio
import contextlib

import pytest

from routewatch.engine.search import DebouncedSearchEngine, InputBuffer
from routewatch.exceptions import TransportError


class FakeGeocoder:
    def __init__(self) -> None:
        self.calls: list[str] = []
        self.fail_on: set[str] = set()
        self.gate: asyncio.Event | None = None

    async def search(self, text: str) -> list[str]:
        self.calls.append(text)
        if self.gate is not None:
            await self.gate.wait()
        if text in self.fail_on:
            raise TransportError(f"boom for {text}", status_code=503)
        return [f"{text}-1", f"{text}-2"]


async def _stop(task: asyncio.Task[None]) -> None:
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task


def _type(buffer: InputBuffer, engine: DebouncedSearchEngine[str], text: str) -> None:
    for char in text:
        buffer.append(char)
        engine.notify()


def test_input_buffer_edits() -> None:
    buffer = InputBuffer("Ka")
    buffer.append("m")
    assert buffer.text == "Kam"
    assert buffer.backspace() is True
    assert buffer.text == "Ka"
    assert buffer.backspace() and buffer.backspace()
    assert buffer.backspace() is False
    assert len(buffer) == 0


def test_notify_is_single_slot() -> None:
    engine: DebouncedSearchEngine[str] = DebouncedSearchEngine(FakeGeocoder().search, InputBuffer(), cooldown=1.0)
    assert not engine.pending
    engine.notify()
    engine.notify()
    assert engine.pending


@pytest.mark.asyncio
async def test_rapid_edits_issue_one_search_for_latest_text() -> None:
    geocoder = FakeGeocoder()
    buffer = InputBuffer()
    engine = DebouncedSearchEngine(geocoder.search, buffer, cooldown=0.2)
    task = asyncio.create_task(engine.run())
    await asyncio.sleep(0)

    _type(buffer, engine, "Ke")
    await asyncio.sleep(0.05)

    assert geocoder.calls == ["Ke"]
    snapshot = engine.store.read()
    assert snapshot.items == ("Ke-1", "Ke-2")
    assert snapshot.version == 1
    assert not snapshot.is_fetching
    await _stop(task)


@pytest.mark.asyncio
async def test_at_most_one_search_per_cooldown() -> None:
    geocoder = FakeGeocoder()
    buffer = InputBuffer()
    engine = DebouncedSearchEngine(geocoder.search, buffer, cooldown=0.2)
    task = asyncio.create_task(engine.run())
    await asyncio.sleep(0)

    _type(buffer, engine, "K")
    await asyncio.sleep(0.02)
    _type(buffer, engine, "e")
    await asyncio.sleep(0.02)
    _type(buffer, engine, "mp")
    await asyncio.sleep(0.05)

    assert geocoder.calls == ["K"]

    await asyncio.sleep(0.25)

    assert geocoder.calls == ["K", "Kemp"]
    assert engine.store.read().items[0] == "Kemp-1"
    await _stop(task)


@pytest.mark.asyncio
async def test_search_uses_buffer_at_dispatch_not_at_signal() -> None:
    geocoder = FakeGeocoder()
    buffer = InputBuffer()
    engine = DebouncedSearchEngine(geocoder.search, buffer, cooldown=0.1)
    task = asyncio.create_task(engine.run())
    await asyncio.sleep(0)

    _type(buffer, engine, "A")
    await asyncio.sleep(0.02)
    # Signalled with "Ab", but the text changes again before the cooldown ends.
    _type(buffer, engine, "b")
    buffer.append("c")
    await asyncio.sleep(0.15)

    assert geocoder.calls == ["A", "Abc"]
    await _stop(task)


@pytest.mark.asyncio
async def test_no_signal_means_no_search() -> None:
    geocoder = FakeGeocoder()
    engine = DebouncedSearchEngine(geocoder.search, InputBuffer("ignored"), cooldown=0.01)
    task = asyncio.create_task(engine.run())
    await asyncio.sleep(0.05)

    assert geocoder.calls == []
    assert engine.store.version == 0
    await _stop(task)


@pytest.mark.asyncio
async def test_failed_search_keeps_previous_results_and_engine_continues() -> None:
    geocoder = FakeGeocoder()
    geocoder.fail_on = {"Kab"}
    buffer = InputBuffer()
    engine = DebouncedSearchEngine(geocoder.search, buffer, cooldown=0.05)
    task = asyncio.create_task(engine.run())
    await asyncio.sleep(0)

    _type(buffer, engine, "Ka")
    await asyncio.sleep(0.02)
    assert engine.store.read().items == ("Ka-1", "Ka-2")

    await asyncio.sleep(0.08)
    _type(buffer, engine, "b")
    await asyncio.sleep(0.02)

    failed = engine.store.read()
    assert geocoder.calls == ["Ka", "Kab"]
    assert failed.items == ("Ka-1", "Ka-2")
    assert failed.version == 1
    assert not failed.is_fetching
    assert not task.done()

    await asyncio.sleep(0.08)
    _type(buffer, engine, "i")
    await asyncio.sleep(0.02)

    assert engine.store.read().items == ("Kabi-1", "Kabi-2")
    assert engine.store.version == 2
    await _stop(task)


@pytest.mark.asyncio
async def test_status_is_fetching_while_request_is_in_flight() -> None:
    geocoder = FakeGeocoder()
    geocoder.gate = asyncio.Event()
    buffer = InputBuffer()
    engine = DebouncedSearchEngine(geocoder.search, buffer, cooldown=0.05)
    task = asyncio.create_task(engine.run())
    await asyncio.sleep(0)

    _type(buffer, engine, "x")
    await asyncio.sleep(0.01)
    assert engine.store.read().is_fetching

    geocoder.gate.set()
    await asyncio.sleep(0.01)
    snapshot = engine.store.read()
    assert not snapshot.is_fetching
    assert snapshot.items == ("x-1", "x-2")
    await _stop(task)


@pytest.mark.asyncio
async def test_cancel_during_request_never_writes_results() -> None:
    geocoder = FakeGeocoder()
    geocoder.gate = asyncio.Event()
    buffer = InputBuffer()
    engine = DebouncedSearchEngine(geocoder.search, buffer, cooldown=0.05)
    task = asyncio.create_task(engine.run())
    await asyncio.sleep(0)

    _type(buffer, engine, "x")
    await asyncio.sleep(0.01)
    await _stop(task)
    geocoder.gate.set()
    await asyncio.sleep(0.05)

    snapshot = engine.store.read()
    assert snapshot.version == 0
    assert not snapshot.is_fetching
