"""High-level async client for the Digitransit geocoding and routing APIs."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from routewatch._api.geocoding import search_locations
from routewatch._api.planning import build_plan_request, plan_itineraries
from routewatch._transport import HttpTransport, Transport
from routewatch.config import RouteWatchConfig
from routewatch.exceptions import RouteWatchError
from routewatch.models.itinerary import Itinerary
from routewatch.models.location import Candidate

_logger = logging.getLogger(__name__)


class RouteWatchClient:
    """Async client for location search and trip planning.

    Usage::

        async with RouteWatchClient(config) as client:
            candidates = await client.search_locations("Kamppi")
            itineraries = await client.plan_itineraries(candidates[0], candidates[1])
    """

    def __init__(
        self,
        config: RouteWatchConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport

    @property
    def config(self) -> RouteWatchConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> RouteWatchClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        if not self._config.api_key:
            _logger.warning("No subscription key configured; requests will likely be rejected")
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise RouteWatchError("Client not initialized. Use 'async with RouteWatchClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def search_locations(self, text: str) -> list[Candidate]:
        """Return location suggestions matching *text*."""
        return await search_locations(self._require_transport(), self._config, text)

    async def plan_itineraries(self, origin: Candidate, destination: Candidate) -> list[Itinerary]:
        """Plan itineraries between two locations."""
        request = build_plan_request(origin, destination, num_itineraries=self._config.num_itineraries)
        return await self.plan_request(request)

    async def plan_request(self, request: dict[str, Any]) -> list[Itinerary]:
        """Send a request previously built with :func:`build_plan_request`."""
        return await plan_itineraries(self._require_transport(), self._config, request)
