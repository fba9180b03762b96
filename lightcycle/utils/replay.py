"""Replay serialization — per-tick agent trajectories as JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from lightcycle.core.match_state import MatchState

logger = logging.getLogger(__name__)


def trajectory_row(state: MatchState) -> dict[str, Any]:
    """Observable per-tick state of every agent, ordered by id."""
    return {
        "tick": state.tick,
        "agents": [
            {
                "id": a.id,
                "pos": [a.pos.x, a.pos.y],
                "heading": [a.heading.x, a.heading.y],
                "alive": a.alive,
                "trail": len(a.trail),
            }
            for a in state.agents
        ],
    }


class ReplayRecorder:
    """Accumulates tick rows and flushes them to a JSON replay file."""

    __slots__ = ("_path", "_ticks", "_seed", "_precision")

    def __init__(self, path: str | Path, seed: int, precision: bool) -> None:
        self._path = Path(path)
        self._seed = seed
        self._precision = precision
        self._ticks: list[dict[str, Any]] = []

    def record_tick(self, state: MatchState) -> None:
        self._ticks.append(trajectory_row(state))

    @property
    def ticks(self) -> list[dict[str, Any]]:
        return self._ticks

    def flush(self, winner_id: int | None = None) -> None:
        """Write accumulated data to disk."""
        replay = {
            "version": "1.0",
            "seed": self._seed,
            "precision": self._precision,
            "winner": winner_id,
            "total_ticks": len(self._ticks),
            "ticks": self._ticks,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(replay, indent=2), encoding="utf-8")
        logger.info("Replay saved to %s (%d ticks)", self._path, len(self._ticks))
