"""Match setup: fixed corner starts, names, colors and personalities."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lightcycle.core.grid import Grid
from lightcycle.core.match_state import MatchState
from lightcycle.core.models import EAST, WEST, Agent, Vector2
from lightcycle.core.personality import generate_personality

if TYPE_CHECKING:
    from lightcycle.config import ArenaConfig
    from lightcycle.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AgentProfile:
    """Display identity and start slot for one agent id."""

    name: str
    color: str
    # Start offsets: non-negative from the left/top edge, negative from the right/bottom
    start_x: int
    start_y: int
    heading: Vector2


AGENT_PROFILES: tuple[AgentProfile, ...] = (
    AgentProfile("CYAN", "cyan", 5, 3, EAST),
    AgentProfile("ORANGE", "orange", -6, 3, WEST),
    AgentProfile("GREEN", "green", 5, -4, EAST),
    AgentProfile("PURPLE", "purple", -6, -4, WEST),
)


def start_position(profile: AgentProfile, grid: Grid) -> Vector2:
    x = profile.start_x if profile.start_x >= 0 else grid.width + profile.start_x
    y = profile.start_y if profile.start_y >= 0 else grid.height + profile.start_y
    return Vector2(x, y)


def build_match(config: ArenaConfig, rng: DeterministicRNG) -> MatchState:
    """Create the tick-0 MatchState for *config*.

    Raises ValueError if a start slot falls outside the playable interior
    or two agents share a start cell (only possible on tiny grids).
    """
    grid = Grid(config.grid_width, config.grid_height)
    agents: list[Agent] = []
    taken: set[Vector2] = set()

    for agent_id, profile in enumerate(AGENT_PROFILES[: config.agent_count]):
        pos = start_position(profile, grid)
        if not grid.in_interior(pos):
            raise ValueError(f"Start {pos} for {profile.name} is outside the {grid.width}x{grid.height} arena")
        if pos in taken:
            raise ValueError(f"Start {pos} for {profile.name} collides with another agent")
        taken.add(pos)

        agents.append(Agent(
            id=agent_id,
            name=profile.name,
            color=profile.color,
            pos=pos,
            heading=profile.heading,
            personality=generate_personality(rng, agent_id),
            controlled=(config.player_agent == agent_id),
        ))
        logger.debug("Placed %s at %s heading %s", profile.name, pos, profile.heading)

    return MatchState(seed=config.seed, grid=grid, agents=agents)
