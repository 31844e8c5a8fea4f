"""Cursor over the current result set."""

from __future__ import annotations


class SelectionState:
    """Optional index into the displayed results.

    The cursor is tied to the result-set version it was made against: when
    :meth:`sync` sees a newer version the selection is cleared, even if the
    new list has the same length, so it never points at a replaced item.
    """

    def __init__(self) -> None:
        self._index: int | None = None
        self._version = 0

    @property
    def selected(self) -> int | None:
        return self._index

    @property
    def version(self) -> int:
        return self._version

    def sync(self, version: int) -> bool:
        """Adopt *version*; returns ``True`` when the selection was reset."""
        if version == self._version:
            return False
        self._version = version
        reset = self._index is not None
        self._index = None
        return reset

    def select(self, index: int | None) -> None:
        self._index = index

    def next(self, count: int) -> None:
        if count <= 0:
            return
        if self._index is None or self._index >= count - 1:
            self._index = 0
        else:
            self._index += 1

    def previous(self, count: int) -> None:
        if count <= 0:
            return
        if self._index is None:
            self._index = 0
        elif self._index == 0 or self._index > count - 1:
            self._index = count - 1
        else:
            self._index -= 1
