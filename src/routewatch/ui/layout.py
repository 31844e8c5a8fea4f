"""Pure frame geometry.

Everything here is a function of a store snapshot and the terminal size, so it
can be tested without a terminal.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from routewatch.models.itinerary import Itinerary, Leg

MARGIN = 1
INPUT_HEIGHT = 3
HEADER_HEIGHT = 2
ITINERARY_HEIGHT = 5
BORDER = 1


@dataclass(frozen=True, slots=True)
class LegSegment:
    leg: Leg
    ratio: int


@dataclass(frozen=True, slots=True)
class ItineraryRow:
    itinerary: Itinerary
    segments: tuple[LegSegment, ...]


@dataclass(frozen=True, slots=True)
class ItineraryLayout:
    rows: tuple[ItineraryRow, ...]
    hidden: int = 0


def leg_segments(itinerary: Itinerary, *, min_leg_duration: float) -> tuple[LegSegment, ...]:
    """Width shares (percent) for the legs worth drawing.

    Legs of ``min_leg_duration`` seconds or less are left out of the breakdown;
    the itinerary itself keeps them.
    """
    if itinerary.duration <= 0:
        return ()
    return tuple(
        LegSegment(leg=leg, ratio=max(1, int(leg.duration / itinerary.duration * 100)))
        for leg in itinerary.legs
        if leg.duration > min_leg_duration
    )


def itinerary_capacity(height: int) -> int:
    """How many itinerary rows fit in a terminal *height* lines tall."""
    usable = height - 2 * MARGIN - HEADER_HEIGHT
    return max(0, usable // ITINERARY_HEIGHT)


def layout_itineraries(
    itineraries: Sequence[Itinerary],
    *,
    height: int,
    min_leg_duration: float,
) -> ItineraryLayout:
    capacity = itinerary_capacity(height)
    shown = itineraries[:capacity]
    rows = tuple(
        ItineraryRow(itinerary=itinerary, segments=leg_segments(itinerary, min_leg_duration=min_leg_duration))
        for itinerary in shown
    )
    return ItineraryLayout(rows=rows, hidden=len(itineraries) - len(rows))


def result_list_rows(height: int) -> int:
    """Lines available for search results below the input box."""
    return max(0, height - 2 * MARGIN - INPUT_HEIGHT - 2 * BORDER)


def visible_window(count: int, selected: int | None, rows: int) -> range:
    """Slice of a *count*-item list to show in *rows* lines, keeping *selected* in view."""
    if rows <= 0 or count <= 0:
        return range(0)
    if count <= rows:
        return range(count)
    start = 0
    if selected is not None and selected >= rows:
        start = min(selected - rows + 1, count - rows)
    return range(start, start + rows)
