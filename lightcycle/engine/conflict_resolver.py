"""Batch move application and collision resolution."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lightcycle.core.match_state import MatchState
    from lightcycle.core.models import Vector2
    from lightcycle.core.snapshot import Snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Crash:
    """One agent's death this tick."""

    agent_id: int
    pos: Vector2
    cause: str          # "boxed_in" | "wall" | "trail" | "head_on"


class ConflictResolver:
    """Applies every agent's chosen heading at once, then checks collisions.

    Resolution policy:
    - ``None`` heading: the agent had no legal move and dies where it is.
    - Otherwise the agent advances one cell, then dies if that cell was a
      wall or occupied in the pre-tick snapshot, or if another agent moved
      into the same cell this tick (every agent in the pile-up dies).

    Because all moves land before any check, the outcome does not depend
    on the order agents are processed in.
    """

    __slots__ = ()

    def resolve(
        self,
        proposals: dict[int, Vector2 | None],
        state: MatchState,
        snapshot: Snapshot,
    ) -> list[Crash]:
        """Mutate *state* in place. Returns crashes sorted by agent id."""
        crashes: list[Crash] = []
        movers = [a for a in state.agents if a.alive and a.id in proposals]

        targets: Counter[Vector2] = Counter()
        for agent in movers:
            heading = proposals[agent.id]
            if heading is not None:
                targets[agent.pos + heading] += 1

        for agent in movers:
            heading = proposals[agent.id]
            if heading is None:
                agent.alive = False
                crashes.append(Crash(agent.id, agent.pos, "boxed_in"))
                continue

            agent.advance(heading)
            cause = self._collision_cause(agent.pos, snapshot, targets)
            if cause is not None:
                agent.alive = False
                crashes.append(Crash(agent.id, agent.pos, cause))

        for crash in crashes:
            logger.debug("Tick %d: agent %d crashed at %s (%s)", state.tick, crash.agent_id, crash.pos, crash.cause)
        return crashes

    @staticmethod
    def _collision_cause(pos: Vector2, snapshot: Snapshot, targets: Counter[Vector2]) -> str | None:
        if not snapshot.grid.in_interior(pos):
            return "wall"
        if (pos.x, pos.y) in snapshot.blocked:
            return "trail"
        if targets[pos] > 1:
            return "head_on"
        return None
