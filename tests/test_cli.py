from __future__ import annotations

import asyncio
import io
from collections.abc import Iterable
from pathlib import Path

import pytest
from rich.console import Console

from routewatch.cli import NO_SELECTION_HINT, build_parser, main, pick_location
from routewatch.config import RouteWatchConfig
from routewatch.models.location import Candidate
from routewatch.ui.keys import Key, KeyEvent

from factories import make_candidate
from fakes import FakeSurface, ScriptedKeyboard, ScriptStep


class FakeClient:
    def __init__(self) -> None:
        self.completed: list[str] = []

    async def search_locations(self, text: str) -> list[Candidate]:
        await asyncio.sleep(0)
        self.completed.append(text)
        return [make_candidate(f"{text} {n}") for n in (1, 2)]


def test_parser_maps_flags_to_config_fields() -> None:
    args = build_parser().parse_args(["--poll-interval", "30", "--itineraries", "3", "--log-level", "debug"])
    assert args.poll_interval == 30.0
    assert args.num_itineraries == 3
    assert args.log_level == "debug"
    assert args.search_cooldown is None


def test_main_rejects_bad_config(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.delenv("ROUTEWATCH_POLL_INTERVAL", raising=False)
    assert main(["--poll-interval", "0"]) == 2
    assert "poll_interval must be positive" in capsys.readouterr().err


def test_main_requires_terminal(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO())
    assert main(["--log-file", str(tmp_path / "client.log")]) == 2
    assert "interactive terminal" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_pick_location_reopens_with_previous_query(config: RouteWatchConfig) -> None:
    client = FakeClient()
    surface = FakeSurface()
    script: Iterable[ScriptStep] = [
        KeyEvent.character("K"),
        KeyEvent.character("a"),
        lambda: "Ka" in client.completed,
        KeyEvent(Key.ENTER),
        lambda: client.completed.count("Ka") >= 2,
        KeyEvent(Key.DOWN),
        KeyEvent(Key.ENTER),
    ]
    keyboard = ScriptedKeyboard(script)

    chosen = await asyncio.wait_for(
        pick_location(client, surface, keyboard, config, title="From", name="origin-search"),  # type: ignore[arg-type]
        timeout=5.0,
    )

    assert chosen.label == "Ka 1"
    console = Console(file=io.StringIO(), width=80, height=24, color_system=None)
    console.print(surface.frames[-1])
    assert NO_SELECTION_HINT in console.file.getvalue()
