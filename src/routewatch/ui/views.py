"""Render/input loops for the search and itinerary views.

Each view owns one background engine through a :class:`LifecycleController`.
A frame is: snapshot the store, lay out, draw, then wait up to
``config.frame_timeout`` for one key press. The wait for a key is the only
place a view suspends, and the engine is stopped before ``run`` returns.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from routewatch._api.planning import build_plan_request
from routewatch.config import RouteWatchConfig
from routewatch.engine.lifecycle import LifecycleController
from routewatch.engine.poll import PeriodicPollEngine
from routewatch.engine.search import DebouncedSearchEngine, InputBuffer
from routewatch.exceptions import NoSelectionError, ViewAborted
from routewatch.models.itinerary import Itinerary
from routewatch.models.location import Candidate
from routewatch.state.store import StoreSnapshot
from routewatch.ui.keys import Key, Keyboard, KeyEvent
from routewatch.ui.layout import layout_itineraries
from routewatch.ui.render import render_itinerary_frame, render_search_frame
from routewatch.ui.selection import SelectionState
from routewatch.ui.surface import Surface

_logger = logging.getLogger(__name__)

SearchFn = Callable[[str], Awaitable[Iterable[Candidate]]]
PlanFn = Callable[[dict[str, Any]], Awaitable[Iterable[Itinerary]]]


class SearchView:
    """Location autocomplete: type to search, Up/Down to choose, Enter to confirm."""

    def __init__(
        self,
        search: SearchFn,
        surface: Surface,
        keyboard: Keyboard,
        config: RouteWatchConfig,
        *,
        title: str = "Location",
        name: str = "search",
        initial_text: str = "",
        hint: str = "",
    ) -> None:
        self._search = search
        self._surface = surface
        self._keyboard = keyboard
        self._config = config
        self._title = title
        self._name = name
        self._initial_text = initial_text
        self._hint = hint

    async def run(self) -> Candidate:
        """Run until the user confirms a location.

        Raises
        ------
        NoSelectionError
            Enter was pressed with nothing selected.
        ViewAborted
            Escape was pressed.
        TaskLifecycleError
            The search task failed or could not be stopped.
        """
        buffer = InputBuffer(self._initial_text)
        engine: DebouncedSearchEngine[Candidate] = DebouncedSearchEngine(
            self._search,
            buffer,
            cooldown=self._config.search_cooldown,
            name=self._name,
        )
        selection = SelectionState()
        if buffer.text:
            engine.notify()

        async with LifecycleController(self._name) as lifecycle:
            _, store = lifecycle.start(engine)
            while True:
                lifecycle.check()
                snapshot = store.read()
                selection.sync(snapshot.version)
                _, height = self._surface.size
                self._surface.draw(
                    render_search_frame(
                        title=self._title,
                        text=buffer.text,
                        snapshot=snapshot,
                        selected=selection.selected,
                        height=height,
                        hint=self._hint,
                    )
                )
                event = await self._keyboard.poll(self._config.frame_timeout)
                if event is None:
                    continue
                chosen = self._on_key(event, buffer, engine, selection, snapshot)
                if chosen is not None:
                    break

        _logger.info("%s: selected %r", self._name, chosen.label)
        return chosen

    def _on_key(
        self,
        event: KeyEvent,
        buffer: InputBuffer,
        engine: DebouncedSearchEngine[Candidate],
        selection: SelectionState,
        snapshot: StoreSnapshot[Candidate],
    ) -> Candidate | None:
        count = len(snapshot.items)
        if event.key is Key.CHAR:
            buffer.append(event.char)
            engine.notify()
        elif event.key is Key.BACKSPACE:
            buffer.backspace()
            engine.notify()
        elif event.key is Key.UP:
            selection.previous(count)
        elif event.key is Key.DOWN:
            selection.next(count)
        elif event.key is Key.ENTER:
            index = selection.selected
            if index is None or index >= count:
                raise NoSelectionError("Missing location selection", query=buffer.text)
            return snapshot.items[index]
        elif event.key is Key.ESCAPE:
            raise ViewAborted(f"{self._name}: cancelled by user")
        return None


class ItineraryView:
    """Itineraries between two locations, refreshed every ``poll_interval``."""

    def __init__(
        self,
        plan: PlanFn,
        surface: Surface,
        keyboard: Keyboard,
        config: RouteWatchConfig,
        *,
        name: str = "itineraries",
    ) -> None:
        self._plan = plan
        self._surface = surface
        self._keyboard = keyboard
        self._config = config
        self._name = name

    async def run(self, origin: Candidate, destination: Candidate) -> None:
        """Run until Escape or ``q`` is pressed."""
        request = build_plan_request(origin, destination, num_itineraries=self._config.num_itineraries)
        engine: PeriodicPollEngine[Itinerary] = PeriodicPollEngine(
            lambda: self._plan(request),
            interval=self._config.poll_interval,
            name=self._name,
        )

        async with LifecycleController(self._name) as lifecycle:
            _, store = lifecycle.start(engine)
            while True:
                lifecycle.check()
                snapshot = store.read()
                _, height = self._surface.size
                layout = layout_itineraries(
                    snapshot.items,
                    height=height,
                    min_leg_duration=self._config.min_leg_duration,
                )
                self._surface.draw(
                    render_itinerary_frame(
                        origin=origin,
                        destination=destination,
                        snapshot=snapshot,
                        layout=layout,
                    )
                )
                event = await self._keyboard.poll(self._config.frame_timeout)
                if event is None:
                    continue
                if event.key is Key.ESCAPE or event.is_char("q"):
                    break

        _logger.info("%s: closed", self._name)
