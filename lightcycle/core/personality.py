"""Per-match AI personalities for precision mode.

Each agent draws one Personality at match setup.  The weights are bounded
around a shared baseline so every agent still plays near-optimally, but
agents differ in what they value: one leans on territory, another hugs
walls, another takes more risks when picking among near-equal moves.

Key types:
  Personality       — immutable weight vector for one agent
  PERSONALITY_RANGES— [low, high) bounds for each scalar weight
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic.dataclasses import dataclass as pydantic_dataclass

from lightcycle.core.enums import Domain

if TYPE_CHECKING:
    from lightcycle.systems.rng import DeterministicRNG


@pydantic_dataclass(frozen=True)
class Personality:
    """Immutable scoring weights for one agent (precision mode only)."""

    territory: float = 50.0
    survival: float = 100.0
    escape_route: float = 30.0
    open_space: float = 20.0
    look_ahead: float = 15.0
    center_preference: float = 30.0
    mobility: float = 40.0
    wall_hug: bool = False
    aggressiveness: float = 0.0     # Chance to sample the wider top tier


# [low, high) for each scalar weight
PERSONALITY_RANGES: dict[str, tuple[float, float]] = {
    "territory":         (40.0, 60.0),
    "survival":          (80.0, 120.0),
    "escape_route":      (20.0, 40.0),
    "open_space":        (15.0, 25.0),
    "look_ahead":        (10.0, 20.0),
    "center_preference": (20.0, 40.0),
    "mobility":          (30.0, 50.0),
    "aggressiveness":    (0.0, 0.3),
}

WALL_HUG_CHANCE = 0.5

BASELINE = Personality()


def generate_personality(rng: DeterministicRNG, agent_id: int) -> Personality:
    """Draw a personality for *agent_id* from the fixed ranges.

    Each weight uses its own draw index so adding a weight never shifts the
    values of the others.
    """
    values: dict[str, float] = {}
    for idx, (name, (low, high)) in enumerate(PERSONALITY_RANGES.items()):
        values[name] = low + rng.next_float(Domain.PERSONALITY, agent_id, 0, idx) * (high - low)
    wall_hug = rng.next_bool(
        Domain.PERSONALITY, agent_id, 0, len(PERSONALITY_RANGES), WALL_HUG_CHANCE,
    )
    return Personality(wall_hug=wall_hug, **values)
