"""Authoritative match state — only replaced by the GameController."""

from __future__ import annotations

from lightcycle.core.enums import EndReason
from lightcycle.core.grid import Grid
from lightcycle.core.models import Agent


class MatchState:
    """The single source of truth for one match."""

    __slots__ = ("tick", "seed", "grid", "agents", "ended", "winner_id", "reason")

    def __init__(self, seed: int, grid: Grid, agents: list[Agent]) -> None:
        self.tick: int = 0
        self.seed: int = seed
        self.grid: Grid = grid
        self.agents: list[Agent] = sorted(agents, key=lambda a: a.id)
        self.ended: bool = False
        self.winner_id: int | None = None
        self.reason: EndReason = EndReason.RUNNING

    def agent(self, agent_id: int) -> Agent | None:
        for a in self.agents:
            if a.id == agent_id:
                return a
        return None

    @property
    def alive_agents(self) -> list[Agent]:
        return [a for a in self.agents if a.alive]

    @property
    def alive_count(self) -> int:
        return sum(1 for a in self.agents if a.alive)

    @property
    def winner(self) -> Agent | None:
        if self.winner_id is None:
            return None
        return self.agent(self.winner_id)

    def copy(self) -> MatchState:
        new = MatchState.__new__(MatchState)
        new.tick = self.tick
        new.seed = self.seed
        new.grid = self.grid
        new.agents = [a.copy() for a in self.agents]
        new.ended = self.ended
        new.winner_id = self.winner_id
        new.reason = self.reason
        return new
