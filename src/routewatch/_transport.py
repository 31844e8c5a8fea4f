"""HTTP transport for the Digitransit geocoding and routing APIs."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from routewatch._constants import SUBSCRIPTION_KEY_HEADER, USER_AGENT
from routewatch._redact import redact_for_log
from routewatch.config import RouteWatchConfig
from routewatch.exceptions import DecodeError, TransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str, params: Mapping[str, str]) -> Any:
        ...

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> Any:
        ...


class HttpTransport:
    """aiohttp transport that adds the subscription key and maps failures."""

    def __init__(self, config: RouteWatchConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        if self._config.api_key:
            headers[SUBSCRIPTION_KEY_HEADER] = self._config.api_key
        return headers

    async def get_json(self, url: str, params: Mapping[str, str]) -> Any:
        """GET *url* with query *params* and decode the JSON reply."""
        _logger.debug("GET %s params=%s", url, redact_for_log(dict(params)))
        return await self._request("GET", url, params=dict(params))

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> Any:
        """POST *payload* as JSON to *url* and decode the JSON reply."""
        _logger.debug("POST %s", url)
        return await self._request("POST", url, json=dict(payload))

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            async with self._http.request(
                method,
                url,
                headers=self._headers(),
                timeout=self._timeout,
                **kwargs,
            ) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise TransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=url,
                    )
        except TransportError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(
                f"Request to {url} failed: {exc!r}",
                endpoint=url,
            ) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DecodeError(
                f"Invalid JSON from {url}: {text[:200]}",
                endpoint=url,
            ) from exc

        _logger.debug("Response from %s: %s", url, redact_for_log(body, max_string=128, max_items=3))
        return body
