"""Host display primitives: allocate rows, overwrite rows, append rows.

The simulation only ever talks to a RowDisplay.  Updates addressed to a
handle the display never allocated are dropped, so a host that offers
fewer rows than a frame needs just shows a truncated arena.
"""

from __future__ import annotations

import re
import sys
import threading
from typing import Mapping, Protocol, TextIO

_MARKUP = re.compile(r"\{(/?)([a-z]+)\}")

ANSI_COLORS: dict[str, str] = {
    "cyan": "\x1b[36m",
    "orange": "\x1b[38;5;208m",
    "green": "\x1b[32m",
    "purple": "\x1b[35m",
}
ANSI_RESET = "\x1b[0m"


def strip_markup(row: str) -> str:
    return _MARKUP.sub("", row)


def to_ansi(row: str) -> str:
    def repl(m: re.Match[str]) -> str:
        closing, color = m.group(1), m.group(2)
        if closing:
            return ANSI_RESET
        return ANSI_COLORS.get(color, "")

    return _MARKUP.sub(repl, row)


class RowDisplay(Protocol):
    """What a host must provide to show a match."""

    def allocate(self, count: int) -> list[int]:
        """Reserve *count* fixed rows; return their handles."""
        ...

    def update(self, rows: Mapping[int, str]) -> None:
        """Overwrite rows by handle."""
        ...

    def append(self, rows: list[str]) -> None:
        """Add rows after everything allocated so far."""
        ...


def push_frame(display: RowDisplay, handles: list[int], frame: list[str]) -> None:
    """Send *frame* to *handles* in order; surplus rows are dropped."""
    display.update(dict(zip(handles, frame)))


class BufferDisplay:
    """In-memory display. Thread-safe; used by the API and tests."""

    __slots__ = ("_rows", "_lock", "_max_rows")

    def __init__(self, max_rows: int | None = None) -> None:
        self._rows: list[str] = []
        self._lock = threading.Lock()
        self._max_rows = max_rows

    def allocate(self, count: int) -> list[int]:
        with self._lock:
            if self._max_rows is not None:
                count = max(0, min(count, self._max_rows - len(self._rows)))
            start = len(self._rows)
            self._rows.extend([""] * count)
            return list(range(start, start + count))

    def update(self, rows: Mapping[int, str]) -> None:
        with self._lock:
            for handle, content in rows.items():
                if 0 <= handle < len(self._rows):
                    self._rows[handle] = content

    def append(self, rows: list[str]) -> None:
        with self._lock:
            self._rows.extend(rows)

    @property
    def rows(self) -> list[str]:
        with self._lock:
            return list(self._rows)

    def clear(self) -> None:
        with self._lock:
            self._rows.clear()


class StreamDisplay:
    """Writes rows to a text stream (stdout by default).

    With ``live=True`` every update redraws the allocated block in place
    using ANSI cursor movement; otherwise only the final state of the
    block is printed, right before the first appended rows.
    """

    __slots__ = ("_stream", "_live", "_color", "_rows", "_drawn", "_flushed")

    def __init__(self, stream: TextIO | None = None, live: bool = False, color: bool = True) -> None:
        self._stream = stream or sys.stdout
        self._live = live
        self._color = color
        self._rows: list[str] = []
        self._drawn = False
        self._flushed = False

    def allocate(self, count: int) -> list[int]:
        start = len(self._rows)
        self._rows.extend([""] * count)
        return list(range(start, start + count))

    def update(self, rows: Mapping[int, str]) -> None:
        for handle, content in rows.items():
            if 0 <= handle < len(self._rows):
                self._rows[handle] = content
        if self._live:
            self._redraw()

    def append(self, rows: list[str]) -> None:
        if not self._live and not self._flushed and self._rows:
            self._write(self._rows)
            self._flushed = True
        self._write(rows)

    # -- internals --

    def _format(self, row: str) -> str:
        return to_ansi(row) if self._color else strip_markup(row)

    def _write(self, rows: list[str]) -> None:
        for row in rows:
            self._stream.write(self._format(row) + "\n")
        self._stream.flush()

    def _redraw(self) -> None:
        if self._drawn:
            self._stream.write(f"\x1b[{len(self._rows)}F")
        for row in self._rows:
            self._stream.write("\x1b[2K" + self._format(row) + "\n")
        self._stream.flush()
        self._drawn = True
        self._flushed = True
