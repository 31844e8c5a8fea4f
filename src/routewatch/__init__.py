"""routewatch - Terminal client that keeps public transport itineraries up to date."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("routewatch")
except PackageNotFoundError:
    __version__ = "0+local"
from routewatch.client import RouteWatchClient
from routewatch.config import RouteWatchConfig
from routewatch.engine import (
    DebouncedSearchEngine,
    InputBuffer,
    LifecycleController,
    PeriodicPollEngine,
    TaskHandle,
)
from routewatch.exceptions import (
    ConfigError,
    DecodeError,
    FetchError,
    NoSelectionError,
    RouteWatchError,
    TaskLifecycleError,
    TransportError,
    ViewAborted,
)
from routewatch.models import (
    Candidate,
    Coordinates,
    Itinerary,
    Leg,
    Place,
    Route,
    Stop,
    TransitMode,
)
from routewatch.state import FetchStatus, ResultSet, ResultStore, StoreSnapshot

__all__ = [
    "__version__",
    "Candidate",
    "ConfigError",
    "Coordinates",
    "DebouncedSearchEngine",
    "DecodeError",
    "FetchError",
    "FetchStatus",
    "InputBuffer",
    "Itinerary",
    "LifecycleController",
    "Leg",
    "NoSelectionError",
    "PeriodicPollEngine",
    "Place",
    "ResultSet",
    "ResultStore",
    "Route",
    "RouteWatchClient",
    "RouteWatchConfig",
    "RouteWatchError",
    "Stop",
    "StoreSnapshot",
    "TaskHandle",
    "TaskLifecycleError",
    "TransitMode",
    "TransportError",
    "ViewAborted",
]
