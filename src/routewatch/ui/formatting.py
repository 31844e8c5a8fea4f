"""Display helpers for durations, clock times and travel modes."""

from __future__ import annotations

from datetime import datetime

from routewatch.models.itinerary import Itinerary, Leg, TransitMode

_MODE_ICONS: dict[TransitMode, str] = {
    TransitMode.WALK: "\N{PEDESTRIAN}",
    TransitMode.BUS: "\N{BUS}",
    TransitMode.RAIL: "\N{TRAIN}",
    TransitMode.SUBWAY: "\N{METRO}",
    TransitMode.TRAM: "\N{TRAM CAR}",
    TransitMode.FERRY: "\N{FERRY}",
    TransitMode.BICYCLE: "\N{BICYCLE}",
}

_MODE_COLOURS: dict[TransitMode, str] = {
    TransitMode.WALK: "black",
    TransitMode.BUS: "blue",
    TransitMode.RAIL: "magenta",
    TransitMode.SUBWAY: "dark_orange",
    TransitMode.TRAM: "green",
    TransitMode.FERRY: "cyan",
}


def format_duration(seconds: float) -> str:
    """Format a duration as ``"1h 2m 3s"``, leaving out zero parts."""
    total = max(0, int(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    parts = [
        f"{hours}h" if hours else "",
        f"{minutes}m" if minutes else "",
        f"{secs}s" if secs else "",
    ]
    return " ".join(part for part in parts if part) or "0s"


def format_clock(moment: datetime | None) -> str:
    """Local wall-clock time as ``HH:MM``."""
    if moment is None:
        return "--:--"
    return moment.astimezone().strftime("%H:%M")


def format_title(itinerary: Itinerary) -> str:
    return (
        f"[ {format_clock(itinerary.start_time)} - {format_clock(itinerary.end_time)}"
        f" | {format_duration(itinerary.duration)} ]"
    )


def mode_icon(mode: TransitMode) -> str:
    return _MODE_ICONS.get(mode, "?")


def mode_colour(mode: TransitMode) -> str:
    return _MODE_COLOURS.get(mode, "black")


def leg_label(leg: Leg) -> str:
    """Centre line of a leg box: icon, route and duration."""
    duration = format_duration(leg.duration)
    if leg.is_walk or not leg.route_short_name:
        return f"{mode_icon(leg.mode)} {duration}"
    return f"{mode_icon(leg.mode)} ({leg.route_short_name}) {duration}"
