"""Versioned single-writer/multi-reader result cell.

Background tasks replace the whole result set after each successful fetch;
the render loop takes an immutable snapshot every frame.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class FetchStatus(StrEnum):
    IDLE = "idle"
    FETCHING = "fetching"


@dataclass(frozen=True, slots=True)
class ResultSet(Generic[T]):
    """The latest fetched items plus a monotonically increasing version."""

    items: tuple[T, ...] = ()
    version: int = 0

    def __len__(self) -> int:
        return len(self.items)

    def __bool__(self) -> bool:
        return bool(self.items)


@dataclass(frozen=True, slots=True)
class StoreSnapshot(Generic[T]):
    """What a reader sees: one result set and one status, taken together."""

    result: ResultSet[T] = field(default_factory=ResultSet)
    status: FetchStatus = FetchStatus.IDLE
    updated_at: float | None = None

    @property
    def items(self) -> tuple[T, ...]:
        return self.result.items

    @property
    def version(self) -> int:
        return self.result.version

    @property
    def is_fetching(self) -> bool:
        return self.status is FetchStatus.FETCHING


class ResultStore(Generic[T]):
    """In-memory cell holding the latest :class:`ResultSet` and fetch status.

    Every write swaps in a new frozen snapshot under a lock, so readers see
    either the old or the new value, never a mix, and a completed write is
    visible to the very next :meth:`read`.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshot: StoreSnapshot[T] = StoreSnapshot()

    def read(self) -> StoreSnapshot[T]:
        """Return the current snapshot. Safe to call every frame."""
        with self._lock:
            return self._snapshot

    @property
    def version(self) -> int:
        return self.read().version

    def replace(self, items: Iterable[T]) -> ResultSet[T]:
        """Install *items* wholesale and bump the version."""
        frozen = tuple(items)
        with self._lock:
            current = self._snapshot
            result = ResultSet(items=frozen, version=current.result.version + 1)
            self._snapshot = StoreSnapshot(
                result=result,
                status=current.status,
                updated_at=self._clock(),
            )
        return result

    def set_fetching(self, fetching: bool) -> None:
        status = FetchStatus.FETCHING if fetching else FetchStatus.IDLE
        with self._lock:
            current = self._snapshot
            if current.status is status:
                return
            self._snapshot = StoreSnapshot(
                result=current.result,
                status=status,
                updated_at=current.updated_at,
            )
