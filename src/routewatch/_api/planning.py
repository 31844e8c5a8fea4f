"""Trip planning GraphQL endpoint.

Endpoint:
  - POST {routing_url}  ``{"query": PLAN_QUERY, "variables": {...}}``
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from routewatch._transport import Transport
from routewatch.config import RouteWatchConfig
from routewatch.exceptions import DecodeError
from routewatch.models.itinerary import Itinerary
from routewatch.models.location import Candidate

_logger = logging.getLogger(__name__)

PLAN_QUERY = """
query Plan($from: InputCoordinates!, $to: InputCoordinates!, $numItineraries: Int) {
  plan(from: $from, to: $to, numItineraries: $numItineraries) {
    itineraries {
      startTime
      endTime
      duration
      walkDistance
      legs {
        mode
        duration
        distance
        startTime
        endTime
        from { name stop { name } }
        to { name stop { name } }
        route { shortName }
      }
    }
  }
}
""".strip()


def input_coordinates(candidate: Candidate) -> dict[str, Any]:
    """Build the ``InputCoordinates`` GraphQL variable for a location."""
    return {
        "lat": candidate.coordinates.lat,
        "lon": candidate.coordinates.lon,
        "address": candidate.label,
    }


def build_plan_request(
    origin: Candidate,
    destination: Candidate,
    *,
    num_itineraries: int,
) -> dict[str, Any]:
    """Build the GraphQL request body. Built once per itinerary view."""
    return {
        "query": PLAN_QUERY,
        "operationName": "Plan",
        "variables": {
            "from": input_coordinates(origin),
            "to": input_coordinates(destination),
            "numItineraries": num_itineraries,
        },
    }


def parse_itineraries(body: Any, *, endpoint: str = "") -> list[Itinerary]:
    """Extract itineraries from a GraphQL response.

    Raises
    ------
    DecodeError
        On GraphQL ``errors``, a missing ``data.plan``, or malformed itineraries.
    """
    if not isinstance(body, dict):
        raise DecodeError(f"Unexpected GraphQL response from {endpoint}", endpoint=endpoint)

    errors = body.get("errors")
    if errors:
        messages = [
            str(err.get("message", err)) if isinstance(err, dict) else str(err)
            for err in (errors if isinstance(errors, list) else [errors])
        ]
        raise DecodeError(f"GraphQL errors from {endpoint}: {'; '.join(messages)}", endpoint=endpoint)

    data = body.get("data")
    plan = data.get("plan") if isinstance(data, dict) else None
    if not isinstance(plan, dict):
        raise DecodeError(f"Missing 'data.plan' from {endpoint}", endpoint=endpoint)

    raw_itineraries = plan.get("itineraries") or []
    if not isinstance(raw_itineraries, list):
        raise DecodeError(f"'itineraries' is not a list from {endpoint}", endpoint=endpoint)
    try:
        return [Itinerary.model_validate(item) for item in raw_itineraries if item is not None]
    except ValidationError as exc:
        raise DecodeError(f"Malformed itinerary from {endpoint}: {exc}", endpoint=endpoint) from exc


async def plan_itineraries(
    transport: Transport,
    config: RouteWatchConfig,
    request: dict[str, Any],
) -> list[Itinerary]:
    """Send a prepared plan request and return the itineraries."""
    body = await transport.post_json(config.routing_url, request)
    itineraries = parse_itineraries(body, endpoint=config.routing_url)
    _logger.info("Plan returned %d itineraries", len(itineraries))
    return itineraries
