"""One fetch cycle, shared by the search and poll engines."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from routewatch.exceptions import FetchError
from routewatch.state.store import ResultStore

_logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_fetch_cycle(
    store: ResultStore[T],
    fetch: Callable[[], Awaitable[Iterable[T]]],
    *,
    label: str,
) -> bool:
    """Fetch once and publish the result.

    The store is marked as fetching for the duration of the request. A
    :class:`FetchError` skips the update and leaves the previous result set
    in place. Returns ``True`` when the store was replaced.
    """
    store.set_fetching(True)
    try:
        items = await fetch()
    except FetchError as exc:
        _logger.warning("%s: fetch failed, keeping previous results: %s", label, exc)
        return False
    else:
        result = store.replace(items)
        _logger.debug("%s: published %d items (version %d)", label, len(result), result.version)
        return True
    finally:
        store.set_fetching(False)
