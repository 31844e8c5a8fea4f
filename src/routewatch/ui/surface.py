"""Drawing surface the views render their frames onto."""

from __future__ import annotations

from typing import Any, Protocol

from rich.console import Console, RenderableType
from rich.live import Live


class Surface(Protocol):
    @property
    def size(self) -> tuple[int, int]:
        """Terminal ``(width, height)`` in cells."""
        ...

    def draw(self, renderable: RenderableType) -> None:
        ...


class RichSurface:
    """Full-screen rich ``Live`` display with manual refresh.

    Usage::

        with RichSurface() as surface:
            surface.draw(frame)
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console if console is not None else Console()
        self._live = Live(
            console=self._console,
            screen=True,
            auto_refresh=False,
            redirect_stdout=False,
            redirect_stderr=False,
        )

    @property
    def size(self) -> tuple[int, int]:
        width, height = self._console.size
        return width, height

    def __enter__(self) -> RichSurface:
        self._live.start()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._live.stop()

    def draw(self, renderable: RenderableType) -> None:
        self._live.update(renderable, refresh=True)
