"""Client configuration for routewatch."""

from __future__ import annotations

import dataclasses
import logging
import os
from pathlib import Path
from typing import Any

from routewatch._constants import (
    DEFAULT_API_KEY_FILE,
    DEFAULT_FRAME_TIMEOUT,
    DEFAULT_LOG_FILE,
    DEFAULT_MIN_LEG_DURATION,
    DEFAULT_NUM_ITINERARIES,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SEARCH_COOLDOWN,
    GEOCODING_URL,
    ROUTING_URL,
)
from routewatch.exceptions import ConfigError

_POSITIVE_FLOAT_FIELDS = (
    "search_cooldown",
    "poll_interval",
    "frame_timeout",
    "request_timeout",
)


def _read_key_file(path: str) -> str:
    key_path = Path(path).expanduser()
    if not key_path.is_file():
        return ""
    try:
        return key_path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ConfigError(f"Cannot read API key file {key_path}: {exc}") from exc


def _parse_number(env_key: str, raw: str, kind: type[float] | type[int]) -> float | int:
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigError(f"{env_key} must be a number, got {raw!r}") from exc


@dataclasses.dataclass(frozen=True)
class RouteWatchConfig:
    """Client configuration.

    Parameters
    ----------
    api_key : str
        Digitransit subscription key sent with every request. When empty,
        the contents of ``api_key_file`` are used (see :meth:`from_env`).
    api_key_file : str
        File holding the subscription key.
    geocoding_url : str
        Autocomplete endpoint used by the location search views.
    routing_url : str
        GraphQL endpoint used by the itinerary view.
    search_cooldown : float
        Seconds the search engine waits after each request before it
        reacts to further typing.
    poll_interval : float
        Seconds between itinerary refreshes.
    frame_timeout : float
        Seconds the render loop waits for a key press per frame.
    min_leg_duration : float
        Legs at or below this many seconds are left out of the itinerary
        breakdown.
    num_itineraries : int
        Number of itineraries requested from the planner.
    request_timeout : float
        Total HTTP timeout per request in seconds.
    log_file : str
        Log destination used by the command line entry point.
    log_level : str
        Logging level name.
    """

    api_key: str = ""
    api_key_file: str = DEFAULT_API_KEY_FILE
    geocoding_url: str = GEOCODING_URL
    routing_url: str = ROUTING_URL
    search_cooldown: float = DEFAULT_SEARCH_COOLDOWN
    poll_interval: float = DEFAULT_POLL_INTERVAL
    frame_timeout: float = DEFAULT_FRAME_TIMEOUT
    min_leg_duration: float = DEFAULT_MIN_LEG_DURATION
    num_itineraries: int = DEFAULT_NUM_ITINERARIES
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_file: str = DEFAULT_LOG_FILE
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        for name in _POSITIVE_FLOAT_FIELDS:
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)}")
        if self.min_leg_duration < 0:
            raise ConfigError(f"min_leg_duration must not be negative, got {self.min_leg_duration}")
        if self.num_itineraries < 1:
            raise ConfigError(f"num_itineraries must be at least 1, got {self.num_itineraries}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigError(f"Unknown log level {self.log_level!r}")

    @classmethod
    def from_env(cls, **overrides: Any) -> RouteWatchConfig:
        """Create configuration from environment variables.

        Reads ``DIGITRANSIT_SUBSCRIPTION_KEY`` and optional ``ROUTEWATCH_*``
        variables. Explicit keyword arguments override environment values.
        If no key is given either way, the key file is read.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        RouteWatchConfig
            Populated configuration.

        Raises
        ------
        ConfigError
            If a value cannot be parsed or is out of range.
        """
        env = os.environ
        overrides = {k: v for k, v in overrides.items() if v is not None}

        _ENV_STR_MAP = {
            "DIGITRANSIT_SUBSCRIPTION_KEY": "api_key",
            "ROUTEWATCH_API_KEY_FILE": "api_key_file",
            "ROUTEWATCH_GEOCODING_URL": "geocoding_url",
            "ROUTEWATCH_ROUTING_URL": "routing_url",
            "ROUTEWATCH_LOG_FILE": "log_file",
            "ROUTEWATCH_LOG_LEVEL": "log_level",
        }
        _ENV_NUMBER_MAP: dict[str, tuple[str, type[float] | type[int]]] = {
            "ROUTEWATCH_SEARCH_COOLDOWN": ("search_cooldown", float),
            "ROUTEWATCH_POLL_INTERVAL": ("poll_interval", float),
            "ROUTEWATCH_FRAME_TIMEOUT": ("frame_timeout", float),
            "ROUTEWATCH_MIN_LEG_DURATION": ("min_leg_duration", float),
            "ROUTEWATCH_NUM_ITINERARIES": ("num_itineraries", int),
            "ROUTEWATCH_REQUEST_TIMEOUT": ("request_timeout", float),
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = val.strip()

        for env_key, (field_name, kind) in _ENV_NUMBER_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _parse_number(env_key, val, kind)

        config_kwargs.update(overrides)

        if not config_kwargs.get("api_key"):
            key_file = config_kwargs.get("api_key_file", DEFAULT_API_KEY_FILE)
            config_kwargs["api_key"] = _read_key_file(key_file)

        return cls(**config_kwargs)
