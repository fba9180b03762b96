"""Thread-safe log of match events exposed via the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MatchEvent:
    """A single match event for the API event feed."""

    tick: int
    category: str                       # "match" | "crash" | "input"
    message: str
    agent_ids: tuple[int, ...] = ()


class EventLog:
    """Bounded event log. Writers append; readers copy a slice.

    Oldest events fall off once ``maxlen`` is reached.
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self, maxlen: int = 2000) -> None:
        self._buffer: deque[MatchEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def append(self, event: MatchEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def append_many(self, events: list[MatchEvent]) -> None:
        with self._lock:
            self._buffer.extend(events)

    def since_tick(self, tick: int) -> list[MatchEvent]:
        """Return all events with tick >= *tick*."""
        with self._lock:
            return [e for e in self._buffer if e.tick >= tick]

    def latest(self, count: int = 50) -> list[MatchEvent]:
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)
