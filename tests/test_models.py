"""Tests for pydantic parsing of geocoder features and plan itineraries."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from routewatch.models._base import parse_epoch_timestamp
from routewatch.models.itinerary import Itinerary, Leg, TransitMode
from routewatch.models.location import Candidate

from factories import itinerary_payload

# ------------------------------------------------------------------
# Timestamps
# ------------------------------------------------------------------


class TestEpochTimestamp:
    def test_milliseconds(self) -> None:
        assert parse_epoch_timestamp(1_771_000_000_000) == datetime.fromtimestamp(1_771_000_000, tz=UTC)

    def test_seconds(self) -> None:
        assert parse_epoch_timestamp(1_771_000_000) == datetime.fromtimestamp(1_771_000_000, tz=UTC)

    def test_none(self) -> None:
        assert parse_epoch_timestamp(None) is None


# ------------------------------------------------------------------
# Candidate
# ------------------------------------------------------------------


class TestCandidate:
    FEATURE: dict = {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [24.941, 60.171]},
        "properties": {"label": "Rautatientori, Helsinki", "layer": "stop", "confidence": 1},
    }

    def test_from_geojson_feature_swaps_lon_lat(self) -> None:
        candidate = Candidate.model_validate(self.FEATURE)
        assert candidate.label == "Rautatientori, Helsinki"
        assert candidate.coordinates.lat == pytest.approx(60.171)
        assert candidate.coordinates.lon == pytest.approx(24.941)
        assert candidate.layer == "stop"

    def test_from_plain_fields(self) -> None:
        candidate = Candidate.model_validate({"coordinates": {"lat": 60.2, "lon": 24.8}, "label": "Otaniemi"})
        assert candidate.coordinates.lat == 60.2
        assert candidate.layer is None

    def test_missing_label_rejected(self) -> None:
        feature = {"geometry": {"coordinates": [24.9, 60.1]}, "properties": {}}
        with pytest.raises(ValidationError):
            Candidate.model_validate(feature)

    def test_blank_label_rejected(self) -> None:
        feature = {"geometry": {"coordinates": [24.9, 60.1]}, "properties": {"label": "   "}}
        with pytest.raises(ValidationError):
            Candidate.model_validate(feature)

    def test_missing_coordinates_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Candidate.model_validate({"geometry": {}, "properties": {"label": "Nowhere"}})

    def test_out_of_range_latitude_rejected(self) -> None:
        feature = {"geometry": {"coordinates": [24.9, 95.0]}, "properties": {"label": "North of north"}}
        with pytest.raises(ValidationError):
            Candidate.model_validate(feature)

    def test_is_frozen(self) -> None:
        candidate = Candidate.model_validate(self.FEATURE)
        with pytest.raises(ValidationError):
            candidate.label = "Elsewhere"  # type: ignore[misc]


# ------------------------------------------------------------------
# Itinerary / Leg
# ------------------------------------------------------------------


class TestItinerary:
    def test_parses_plan_payload(self) -> None:
        itinerary = Itinerary.model_validate(itinerary_payload())

        assert itinerary.duration == 1920
        assert itinerary.walk_distance == pytest.approx(410.5)
        assert itinerary.start_time == datetime.fromtimestamp(1_771_000_000, tz=UTC)
        assert itinerary.end_time == datetime.fromtimestamp(1_771_000_000 + 1920, tz=UTC)
        assert [leg.mode for leg in itinerary.legs] == [TransitMode.WALK, TransitMode.BUS, TransitMode.WALK]

    def test_transit_leg_stop_names_and_route(self) -> None:
        bus = Itinerary.model_validate(itinerary_payload()).legs[1]
        assert bus.from_stop_name == "Kamppi"
        assert bus.to_stop_name == "Otaniemi"
        assert bus.route_short_name == "550"
        assert not bus.is_walk

    def test_walk_leg_has_no_stop_names(self) -> None:
        walk = Itinerary.model_validate(itinerary_payload()).legs[0]
        assert walk.is_walk
        assert walk.from_stop_name == ""
        assert walk.to_stop_name == ""
        assert walk.route_short_name == ""

    def test_null_legs_are_dropped(self) -> None:
        payload = itinerary_payload(legs=[None, {"mode": "TRAM", "duration": 300}, None])
        itinerary = Itinerary.model_validate(payload)
        assert len(itinerary.legs) == 1

    def test_missing_legs(self) -> None:
        payload = itinerary_payload()
        payload["legs"] = None
        assert Itinerary.model_validate(payload).legs == ()

    def test_negative_duration_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Itinerary.model_validate(itinerary_payload(duration=-1))

    def test_unknown_mode_falls_back(self) -> None:
        leg = Leg.model_validate({"mode": "CABLE_CAR", "duration": 120})
        assert leg.mode is TransitMode.UNKNOWN

    def test_null_fields_get_defaults(self) -> None:
        leg = Leg.model_validate({"mode": None, "duration": None, "from": None, "to": None, "route": None})
        assert leg.mode is TransitMode.UNKNOWN
        assert leg.duration == 0.0
        assert leg.from_stop_name == ""
        assert leg.route_short_name == ""
