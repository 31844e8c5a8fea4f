"""Custom exception hierarchy for routewatch."""

from __future__ import annotations


class RouteWatchError(Exception):
    """Base exception for all routewatch errors."""


class ConfigError(RouteWatchError):
    """Invalid or missing configuration."""


class FetchError(RouteWatchError):
    """A single search or poll cycle failed.

    Background engines swallow these at the cycle boundary: the failure is
    logged and the previously published results stay on screen.
    """

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class TransportError(FetchError):
    """HTTP-level failure (network, timeout, non-200)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        super().__init__(message, endpoint=endpoint)


class DecodeError(FetchError):
    """Response body was not JSON or did not have the expected shape.

    GraphQL ``errors`` payloads are reported as this error as well.
    """


class NoSelectionError(RouteWatchError):
    """Enter was pressed in a search view while no result was selected.

    ``query`` holds the text that was typed, so a caller can reopen the view
    where the user left off.
    """

    def __init__(self, message: str, *, query: str = "") -> None:
        self.query = query
        super().__init__(message)


class ViewAborted(RouteWatchError):
    """The user left a search view without choosing a location."""


class TaskLifecycleError(RouteWatchError):
    """A background task could not be started or stopped cleanly.

    Also raised when a background task terminates with an unexpected
    exception while its view is still running.
    """
