"""Ownership of one background task per view.

A :class:`LifecycleController` starts exactly one engine task and guarantees it
is cancelled, and has finished, before the view returns::

    async with LifecycleController("origin-search") as lifecycle:
        handle, store = lifecycle.start(engine)
        ...
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol, TypeVar

from routewatch.exceptions import TaskLifecycleError
from routewatch.state.store import ResultStore

_logger = logging.getLogger(__name__)

T = TypeVar("T")

#: Seconds :meth:`LifecycleController.stop` waits for a cancelled task to finish.
DEFAULT_STOP_TIMEOUT: float = 5.0


class Engine(Protocol[T]):
    @property
    def store(self) -> ResultStore[T]:
        ...

    async def run(self) -> None:
        ...


class TaskHandle:
    """Cancellable reference to a running background task."""

    def __init__(self, task: asyncio.Task[None], name: str) -> None:
        self._task = task
        self._cancel_requested = False
        self.name = name

    @property
    def done(self) -> bool:
        return self._task.done()

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_requested

    @property
    def failure(self) -> BaseException | None:
        """The exception the task died with, if it finished with one."""
        if not self._task.done() or self._task.cancelled():
            return None
        return self._task.exception()

    def cancel(self) -> bool:
        """Request cancellation. Only the first call has an effect."""
        if self._cancel_requested:
            return False
        self._cancel_requested = True
        self._task.cancel()
        return True

    async def wait(self, timeout: float | None = None) -> bool:
        """Wait for the task to finish. Returns ``False`` on timeout."""
        done, _ = await asyncio.wait({self._task}, timeout=timeout)
        return bool(done)


class LifecycleController:
    """Starts one engine task for a view and stops it when the view ends."""

    def __init__(self, name: str, *, stop_timeout: float = DEFAULT_STOP_TIMEOUT) -> None:
        self.name = name
        self._stop_timeout = stop_timeout
        self._handle: TaskHandle | None = None
        self._stopped = False

    @property
    def handle(self) -> TaskHandle | None:
        return self._handle

    def start(self, engine: Engine[T]) -> tuple[TaskHandle, ResultStore[T]]:
        """Spawn *engine* as this view's background task.

        Raises
        ------
        TaskLifecycleError
            If a task was already started or no event loop is running.
        """
        if self._handle is not None or self._stopped:
            raise TaskLifecycleError(f"{self.name}: a background task was already started")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            raise TaskLifecycleError(f"{self.name}: no running event loop") from exc

        task = loop.create_task(engine.run(), name=f"routewatch:{self.name}")
        self._handle = TaskHandle(task, self.name)
        _logger.debug("%s: background task started", self.name)
        return self._handle, engine.store

    def check(self) -> None:
        """Raise if the background task ended while the view is still running."""
        handle = self._handle
        if handle is None or not handle.done or handle.cancel_requested:
            return
        failure = handle.failure
        if failure is not None:
            raise TaskLifecycleError(f"{self.name}: background task failed: {failure!r}") from failure
        raise TaskLifecycleError(f"{self.name}: background task exited unexpectedly")

    async def stop(self) -> None:
        """Cancel the task and wait until it has finished.

        Safe to call more than once; only the first call cancels.

        Raises
        ------
        TaskLifecycleError
            If the task does not finish within the stop timeout, or finished
            with an unexpected exception.
        """
        handle = self._handle
        if handle is None or self._stopped:
            self._stopped = True
            return
        self._stopped = True
        handle.cancel()
        if not await handle.wait(self._stop_timeout):
            raise TaskLifecycleError(f"{self.name}: background task did not stop within {self._stop_timeout}s")
        failure = handle.failure
        if failure is not None:
            raise TaskLifecycleError(f"{self.name}: background task failed: {failure!r}") from failure
        _logger.debug("%s: background task stopped", self.name)

    async def __aenter__(self) -> LifecycleController:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()
