"""Immutable pre-tick snapshot of the arena for the decision engine."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from lightcycle.core.grid import Grid
from lightcycle.core.match_state import MatchState
from lightcycle.core.models import Vector2


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only occupancy view shared by every agent's decision in a tick.

    ``blocked`` holds every trail cell and every head (crashed heads
    included).  Walls are not stored; ``is_blocked`` derives them from
    the grid bounds.
    """

    tick: int
    grid: Grid
    blocked: frozenset[tuple[int, int]]
    heads: Mapping[int, Vector2]        # alive agent id -> head
    headings: Mapping[int, Vector2]     # alive agent id -> heading

    @classmethod
    def from_state(cls, state: MatchState) -> Snapshot:
        cells: set[tuple[int, int]] = set()
        for a in state.agents:
            cells.update((t.pos.x, t.pos.y) for t in a.trail)
            cells.add((a.pos.x, a.pos.y))
        alive = [a for a in state.agents if a.alive]
        return cls(
            tick=state.tick,
            grid=state.grid,
            blocked=frozenset(cells),
            heads=MappingProxyType({a.id: a.pos for a in alive}),
            headings=MappingProxyType({a.id: a.heading for a in alive}),
        )

    def is_blocked(self, pos: Vector2) -> bool:
        return self.is_blocked_xy(pos.x, pos.y)

    def is_blocked_xy(self, x: int, y: int) -> bool:
        if not self.grid.in_interior_xy(x, y):
            return True
        return (x, y) in self.blocked

    def opponents(self, agent_id: int) -> dict[int, Vector2]:
        """Heads of every other living agent."""
        return {aid: pos for aid, pos in self.heads.items() if aid != agent_id}
