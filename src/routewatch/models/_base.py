"""Base model for Digitransit API responses.

Every response model inherits from :class:`RouteWatchModel`, which is frozen
(results are shared between the background engines and the render loop) and
maps camelCase API keys to snake_case fields via ``alias_generator=to_camel``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 1_000_000_000_000


def parse_epoch_timestamp(value: Any) -> datetime | None:
    """Convert an epoch timestamp (seconds **or** milliseconds) to a UTC datetime.

    Returns ``None`` when the value is ``None``.
    """
    if value is None:
        return value
    if isinstance(value, datetime):
        return value
    ts = float(value)
    if ts >= _MS_THRESHOLD:
        ts = ts / 1000
    return datetime.fromtimestamp(ts, tz=UTC)


EpochTimestamp = Annotated[datetime | None, BeforeValidator(parse_epoch_timestamp)]
"""Annotated type that coerces epoch numbers (seconds or ms) to UTC datetimes."""


class RouteWatchModel(BaseModel):
    """Base for API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
