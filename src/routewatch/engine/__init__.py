"""Background fetch engines and the controller that owns their tasks."""

from routewatch.engine.lifecycle import LifecycleController, TaskHandle
from routewatch.engine.poll import PeriodicPollEngine
from routewatch.engine.search import DebouncedSearchEngine, InputBuffer

__all__ = [
    "DebouncedSearchEngine",
    "InputBuffer",
    "LifecycleController",
    "PeriodicPollEngine",
    "TaskHandle",
]
