"""Trip plan models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import Field, field_validator

from routewatch.models._base import EpochTimestamp, RouteWatchModel


class TransitMode(StrEnum):
    """Travel mode of a leg.

    Modes the planner sends that have no mapped member resolve to
    ``UNKNOWN`` instead of raising ``ValueError``.
    """

    WALK = "WALK"
    BUS = "BUS"
    RAIL = "RAIL"
    SUBWAY = "SUBWAY"
    TRAM = "TRAM"
    FERRY = "FERRY"
    BICYCLE = "BICYCLE"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value: object) -> TransitMode:
        return cls.UNKNOWN


class Stop(RouteWatchModel):
    name: str


class Place(RouteWatchModel):
    name: str | None = None
    stop: Stop | None = None


class Route(RouteWatchModel):
    short_name: str | None = None


class Leg(RouteWatchModel):
    """One segment of an itinerary travelled with a single mode."""

    mode: TransitMode = TransitMode.UNKNOWN
    duration: float = Field(default=0.0, ge=0.0)
    distance: float | None = None
    start_time: EpochTimestamp = None
    end_time: EpochTimestamp = None
    from_place: Place = Field(default_factory=Place, alias="from")
    to_place: Place = Field(default_factory=Place, alias="to")
    route: Route | None = None

    @field_validator("mode", mode="before")
    @classmethod
    def _default_mode(cls, value: Any) -> Any:
        return TransitMode.UNKNOWN if value is None else value

    @field_validator("duration", mode="before")
    @classmethod
    def _default_duration(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("from_place", "to_place", mode="before")
    @classmethod
    def _default_place(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def is_walk(self) -> bool:
        return self.mode == TransitMode.WALK

    @property
    def from_stop_name(self) -> str:
        """Boarding stop name; empty for walking legs or unknown stops."""
        if self.is_walk or self.from_place.stop is None:
            return ""
        return self.from_place.stop.name

    @property
    def to_stop_name(self) -> str:
        """Alighting stop name; empty for walking legs or unknown stops."""
        if self.is_walk or self.to_place.stop is None:
            return ""
        return self.to_place.stop.name

    @property
    def route_short_name(self) -> str:
        if self.route is None or not self.route.short_name:
            return ""
        return self.route.short_name


class Itinerary(RouteWatchModel):
    """A complete trip from origin to destination."""

    start_time: EpochTimestamp = None
    end_time: EpochTimestamp = None
    duration: int = Field(ge=0)
    walk_distance: float | None = None
    legs: tuple[Leg, ...] = ()

    @field_validator("legs", mode="before")
    @classmethod
    def _drop_null_legs(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, (list, tuple)):
            return tuple(leg for leg in value if leg is not None)
        return value
