"""Debounced location search.

The render loop edits an :class:`InputBuffer` and calls
:meth:`DebouncedSearchEngine.notify`. The engine wakes at most once per
cooldown, searches for whatever the buffer holds at that moment and publishes
the result into its store.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Generic, TypeVar

from routewatch.engine._cycle import run_fetch_cycle
from routewatch.state.store import ResultStore

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class InputBuffer:
    """Editable search text owned by the render loop."""

    def __init__(self, text: str = "") -> None:
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    def append(self, char: str) -> None:
        self._text += char

    def backspace(self) -> bool:
        """Drop the last character. Returns ``False`` if the buffer was empty."""
        if not self._text:
            return False
        self._text = self._text[:-1]
        return True

    def __len__(self) -> int:
        return len(self._text)


class DebouncedSearchEngine(Generic[T]):
    """Search task driven by a coalescing wake-up signal.

    Cycle: wait for a signal, read the buffer, fetch, publish (or log the
    failure), then sleep ``cooldown`` seconds before waiting again. Signals
    raised while a cycle is running collapse into a single wake-up.
    """

    def __init__(
        self,
        fetch: Callable[[str], Awaitable[Iterable[T]]],
        buffer: InputBuffer,
        *,
        cooldown: float,
        store: ResultStore[T] | None = None,
        name: str = "search",
    ) -> None:
        self._fetch = fetch
        self._buffer = buffer
        self._cooldown = cooldown
        self._store: ResultStore[T] = store if store is not None else ResultStore()
        self._dirty = asyncio.Event()
        self.name = name

    @property
    def store(self) -> ResultStore[T]:
        return self._store

    @property
    def pending(self) -> bool:
        """Whether a wake-up is queued and not yet consumed."""
        return self._dirty.is_set()

    def notify(self) -> None:
        """Mark the input as changed. Never blocks; repeated calls coalesce."""
        self._dirty.set()

    async def run(self) -> None:
        """Serve search requests until cancelled."""
        _logger.debug("%s: engine started (cooldown=%.3fs)", self.name, self._cooldown)
        try:
            while True:
                await self._dirty.wait()
                self._dirty.clear()
                query = self._buffer.text
                await run_fetch_cycle(
                    self._store,
                    lambda: self._fetch(query),
                    label=f"{self.name} {query!r}",
                )
                await asyncio.sleep(self._cooldown)
        finally:
            _logger.debug("%s: engine stopped", self.name)
