"""Keyboard input.

:func:`decode_keys` turns raw terminal bytes into :class:`KeyEvent` objects.
:class:`TerminalKeyboard` puts the terminal in cbreak mode and feeds decoded
keys into an asyncio queue from an event-loop reader callback, so a render
loop can wait for a key with a timeout without blocking background tasks.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Protocol

_logger = logging.getLogger(__name__)


class Key(Enum):
    CHAR = auto()
    ENTER = auto()
    ESCAPE = auto()
    BACKSPACE = auto()
    UP = auto()
    DOWN = auto()
    OTHER = auto()


@dataclass(frozen=True, slots=True)
class KeyEvent:
    key: Key
    char: str = ""

    @classmethod
    def character(cls, char: str) -> KeyEvent:
        return cls(Key.CHAR, char)

    def is_char(self, char: str) -> bool:
        return self.key is Key.CHAR and self.char == char


_ESCAPE_SEQUENCES: dict[bytes, Key] = {
    b"\x1b[A": Key.UP,
    b"\x1b[B": Key.DOWN,
    b"\x1bOA": Key.UP,
    b"\x1bOB": Key.DOWN,
}

_CONTROL_KEYS: dict[int, Key] = {
    0x0D: Key.ENTER,
    0x0A: Key.ENTER,
    0x7F: Key.BACKSPACE,
    0x08: Key.BACKSPACE,
}


def _escape_sequence_length(data: bytes, start: int) -> int:
    """Length of the CSI/SS3 sequence starting at *start*, or 1 for a bare ESC."""
    if start + 1 >= len(data) or data[start + 1] not in b"[O":
        return 1
    end = start + 2
    while end < len(data):
        # CSI final bytes are in 0x40..0x7E; parameters come before them.
        if 0x40 <= data[end] <= 0x7E:
            return end - start + 1
        end += 1
    return len(data) - start


def decode_keys(data: bytes) -> list[KeyEvent]:
    """Decode one read from the terminal into key events."""
    events: list[KeyEvent] = []
    text_start: int | None = None
    index = 0

    def flush_text(end: int) -> None:
        nonlocal text_start
        if text_start is None:
            return
        text = data[text_start:end].decode("utf-8", errors="ignore")
        events.extend(KeyEvent.character(char) for char in text if char.isprintable())
        text_start = None

    while index < len(data):
        byte = data[index]
        if byte == 0x1B:
            flush_text(index)
            length = _escape_sequence_length(data, index)
            sequence = data[index : index + length]
            if length == 1:
                events.append(KeyEvent(Key.ESCAPE))
            else:
                events.append(KeyEvent(_ESCAPE_SEQUENCES.get(sequence, Key.OTHER)))
            index += length
            continue
        if byte in _CONTROL_KEYS:
            flush_text(index)
            events.append(KeyEvent(_CONTROL_KEYS[byte]))
        elif byte < 0x20:
            flush_text(index)
            events.append(KeyEvent(Key.OTHER))
        elif text_start is None:
            text_start = index
        index += 1
    flush_text(len(data))
    return events


class Keyboard(Protocol):
    async def poll(self, timeout: float) -> KeyEvent | None:
        ...


class TerminalKeyboard:
    """Reads key presses from a TTY file descriptor.

    Usage::

        with TerminalKeyboard() as keyboard:
            event = await keyboard.poll(0.016)
    """

    def __init__(self, fd: int | None = None) -> None:
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._queue: asyncio.Queue[KeyEvent] = asyncio.Queue()
        self._saved_attrs: list[Any] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    def __enter__(self) -> TerminalKeyboard:
        import termios
        import tty

        self._saved_attrs = termios.tcgetattr(self._fd)
        tty.setcbreak(self._fd)
        self._loop = asyncio.get_running_loop()
        self._loop.add_reader(self._fd, self._on_readable)
        return self

    def __exit__(self, *exc: Any) -> None:
        import termios

        if self._loop is not None:
            self._loop.remove_reader(self._fd)
            self._loop = None
        if self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

    def _on_readable(self) -> None:
        try:
            data = os.read(self._fd, 1024)
        except (BlockingIOError, InterruptedError):
            return
        if not data:
            _logger.warning("Keyboard input closed")
            if self._loop is not None:
                self._loop.remove_reader(self._fd)
            return
        for event in decode_keys(data):
            self._queue.put_nowait(event)

    async def poll(self, timeout: float) -> KeyEvent | None:
        """Return the next key press, or ``None`` if none arrives in *timeout* seconds."""
        with contextlib.suppress(asyncio.QueueEmpty):
            return self._queue.get_nowait()
        try:
            return await asyncio.wait_for(self._queue.get(), timeout)
        except TimeoutError:
            return None
