"""Location autocomplete endpoint.

Endpoint:
  - GET {geocoding_url}?text=<query>  (GeoJSON FeatureCollection)
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from routewatch._transport import Transport
from routewatch.config import RouteWatchConfig
from routewatch.exceptions import DecodeError
from routewatch.models.location import Candidate

_logger = logging.getLogger(__name__)


def parse_candidates(body: Any, *, endpoint: str = "") -> list[Candidate]:
    """Parse a GeoJSON feature collection into candidates.

    Raises
    ------
    DecodeError
        If the body is not a feature collection or a feature is malformed.
    """
    if not isinstance(body, dict) or not isinstance(body.get("features"), list):
        raise DecodeError(f"Missing 'features' list from {endpoint}", endpoint=endpoint)
    try:
        return [Candidate.model_validate(feature) for feature in body["features"]]
    except ValidationError as exc:
        raise DecodeError(f"Malformed feature from {endpoint}: {exc}", endpoint=endpoint) from exc


async def search_locations(
    transport: Transport,
    config: RouteWatchConfig,
    text: str,
) -> list[Candidate]:
    """Return location suggestions for *text*.

    Blank text yields no suggestions and sends no request.
    """
    query = text.strip()
    if not query:
        return []
    body = await transport.get_json(config.geocoding_url, {"text": query})
    candidates = parse_candidates(body, endpoint=config.geocoding_url)
    _logger.info("Search %r returned %d candidates", query, len(candidates))
    return candidates
