"""Periodic itinerary polling."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Generic, TypeVar

from routewatch.engine._cycle import run_fetch_cycle
from routewatch.state.store import ResultStore

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class PeriodicPollEngine(Generic[T]):
    """Fetch immediately, then again every ``interval`` seconds, until cancelled.

    There is no retry or backoff: a failed cycle is logged and the next one
    runs on the normal schedule.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[Iterable[T]]],
        *,
        interval: float,
        store: ResultStore[T] | None = None,
        name: str = "poll",
    ) -> None:
        self._fetch = fetch
        self._interval = interval
        self._store: ResultStore[T] = store if store is not None else ResultStore()
        self.name = name

    @property
    def store(self) -> ResultStore[T]:
        return self._store

    async def run(self) -> None:
        _logger.debug("%s: engine started (interval=%.3fs)", self.name, self._interval)
        try:
            while True:
                _logger.info("%s: updating", self.name)
                await run_fetch_cycle(self._store, self._fetch, label=self.name)
                await asyncio.sleep(self._interval)
        finally:
            _logger.debug("%s: engine stopped", self.name)
