"""Location search models."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator, model_validator

from routewatch.models._base import RouteWatchModel


class Coordinates(RouteWatchModel):
    """WGS84 coordinates in degrees."""

    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)


class Candidate(RouteWatchModel):
    """One location suggestion returned by the geocoder.

    Validates straight from a GeoJSON feature, whose geometry lists
    coordinates as ``[lon, lat]``::

        {"geometry": {"coordinates": [24.94, 60.17]},
         "properties": {"label": "Rautatientori, Helsinki"}}
    """

    coordinates: Coordinates
    label: str
    layer: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_geojson_feature(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "geometry" not in values:
            return values
        geometry = values.get("geometry") or {}
        properties = values.get("properties") or {}
        position = geometry.get("coordinates") if isinstance(geometry, dict) else None
        if not isinstance(position, (list, tuple)) or len(position) < 2:
            raise ValueError("feature geometry must contain [lon, lat] coordinates")
        return {
            "coordinates": {"lat": position[1], "lon": position[0]},
            "label": properties.get("label") if isinstance(properties, dict) else None,
            "layer": properties.get("layer") if isinstance(properties, dict) else None,
        }

    @field_validator("label")
    @classmethod
    def _label_non_empty(cls, value: str) -> str:
        label = value.strip()
        if not label:
            raise ValueError("label must be non-empty")
        return label
