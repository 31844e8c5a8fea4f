from __future__ import annotations

from collections.abc import Callable, Iterable

import pytest

from routewatch.config import RouteWatchConfig

from fakes import FakeSurface, ScriptedKeyboard, ScriptStep


@pytest.fixture
def config() -> RouteWatchConfig:
    return RouteWatchConfig(
        api_key="test-key",
        search_cooldown=0.05,
        poll_interval=0.1,
        frame_timeout=0.005,
    )


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def keyboard_factory() -> Callable[[Iterable[ScriptStep]], ScriptedKeyboard]:
    return ScriptedKeyboard
