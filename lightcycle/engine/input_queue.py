"""Thread-safe key queue connecting the host to the simulation clock."""

from __future__ import annotations

import queue


class InputQueue:
    """MPSC (multiple-producer, single-consumer) queue of raw key names.

    Host threads push key presses at any time; the clock drains them once
    per tick, between ticks.
    """

    __slots__ = ("_queue",)

    def __init__(self) -> None:
        self._queue: queue.Queue[str] = queue.Queue()

    def push(self, key: str) -> None:
        """Thread-safe enqueue."""
        self._queue.put_nowait(key)

    def drain(self) -> list[str]:
        """Drain all pending keys in arrival order."""
        keys: list[str] = []
        while True:
            try:
                keys.append(self._queue.get_nowait())
            except queue.Empty:
                break
        return keys

    @property
    def empty(self) -> bool:
        return self._queue.empty()
