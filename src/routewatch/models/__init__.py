"""Typed response models for the geocoding and trip-planning APIs."""

from routewatch.models.itinerary import Itinerary, Leg, Place, Route, Stop, TransitMode
from routewatch.models.location import Candidate, Coordinates

__all__ = [
    "Candidate",
    "Coordinates",
    "Itinerary",
    "Leg",
    "Place",
    "Route",
    "Stop",
    "TransitMode",
]
