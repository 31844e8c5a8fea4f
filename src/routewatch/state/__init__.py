"""State/store layer.

The result store is the only mutable state shared between a view's render
loop and its background fetch task. Everything else stays on one side.
"""

from routewatch.state.store import FetchStatus, ResultSet, ResultStore, StoreSnapshot

__all__ = ["FetchStatus", "ResultSet", "ResultStore", "StoreSnapshot"]
