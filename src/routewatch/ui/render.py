"""Turn snapshots and layouts into rich renderables."""

from __future__ import annotations

from typing import Any

from rich.console import RenderableType
from rich.layout import Layout
from rich.padding import Padding
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from routewatch.models.itinerary import Itinerary
from routewatch.models.location import Candidate
from routewatch.state.store import StoreSnapshot
from routewatch.ui.formatting import format_title, leg_label, mode_colour
from routewatch.ui.layout import (
    HEADER_HEIGHT,
    INPUT_HEIGHT,
    ITINERARY_HEIGHT,
    MARGIN,
    ItineraryLayout,
    ItineraryRow,
    result_list_rows,
    visible_window,
)

HIGHLIGHT_STYLE = "black on white"


def status_text(snapshot: StoreSnapshot[Any]) -> str:
    return "Updating..." if snapshot.is_fetching else "Idle"


def render_search_frame(
    *,
    title: str,
    text: str,
    snapshot: StoreSnapshot[Candidate],
    selected: int | None,
    height: int,
    hint: str = "",
) -> RenderableType:
    """Input box above a scrolling, highlightable list of candidates."""
    input_panel = Panel(Text(text + "\N{LEFT ONE EIGHTH BLOCK}"), title=title, title_align="left")

    items = snapshot.items
    lines = Text(no_wrap=True, overflow="ellipsis")
    for position, index in enumerate(visible_window(len(items), selected, result_list_rows(height))):
        if position:
            lines.append("\n")
        style = HIGHLIGHT_STYLE if index == selected else ""
        lines.append(items[index].label, style=style)

    subtitle = "Searching..." if snapshot.is_fetching else hint
    results_panel = Panel(
        lines,
        title="Locations",
        title_align="left",
        subtitle=subtitle or None,
        subtitle_align="left",
    )

    root = Layout(name="search")
    root.split_column(
        Layout(input_panel, name="input", size=INPUT_HEIGHT),
        Layout(results_panel, name="results"),
    )
    return Padding(root, (MARGIN, MARGIN))


def _leg_table(row: ItineraryRow) -> Table:
    table = Table.grid(expand=True)
    if not row.segments:
        table.add_column(justify="center")
        table.add_row(Text("no legs to show", style="dim"))
        return table
    cells: list[Text] = []
    for segment in row.segments:
        leg = segment.leg
        table.add_column(ratio=segment.ratio, justify="center", style=f"on {mode_colour(leg.mode)}")
        cell = Text(justify="center", no_wrap=True, overflow="ellipsis")
        cell.append(leg.from_stop_name, style="reverse")
        cell.append("\n")
        cell.append(leg_label(leg))
        cell.append("\n")
        cell.append(leg.to_stop_name, style="reverse")
        cells.append(cell)
    table.add_row(*cells)
    return table


def render_itinerary(row: ItineraryRow) -> Panel:
    return Panel(
        _leg_table(row),
        title=Text(format_title(row.itinerary), style="bold"),
        title_align="left",
        height=ITINERARY_HEIGHT,
        padding=(0, 0),
    )


def render_itinerary_frame(
    *,
    origin: Candidate,
    destination: Candidate,
    snapshot: StoreSnapshot[Itinerary],
    layout: ItineraryLayout,
) -> RenderableType:
    """Route header with status, then one panel per itinerary."""
    header = Table.grid(expand=True)
    header.add_column(ratio=1)
    header.add_column(ratio=1, justify="right")
    header.add_row(
        Text(f"{origin.label} -> {destination.label}", no_wrap=True, overflow="ellipsis"),
        Text(status_text(snapshot)),
    )

    root = Layout(name="itineraries")
    children = [Layout(header, name="header", size=HEADER_HEIGHT)]
    children.extend(
        Layout(render_itinerary(row), name=f"itinerary-{index}", size=ITINERARY_HEIGHT)
        for index, row in enumerate(layout.rows)
    )
    footer = Text(f"{layout.hidden} more not shown", style="dim") if layout.hidden else Text("")
    children.append(Layout(footer, name="footer"))
    root.split_column(*children)
    return Padding(root, (MARGIN, MARGIN))
