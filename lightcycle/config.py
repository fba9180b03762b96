"""Arena configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass

MAX_AGENTS = 4


@dataclass(frozen=True)
class ArenaConfig:
    """Immutable configuration for one light-cycle match."""

    # Match
    seed: int = 42
    grid_width: int = 50
    grid_height: int = 16
    agent_count: int = MAX_AGENTS
    precision: bool = False

    # Timing
    standard_max_ticks: int = 200
    precision_max_ticks: int = 500
    tick_interval_seconds: float = 0.1

    # Heuristic caps (standard / precision)
    standard_open_space_cap: int = 30
    precision_open_space_cap: int = 100
    standard_look_ahead: int = 10
    precision_look_ahead: int = 20
    survival_depth: int = 8
    trap_depth: int = 20

    # Move selection
    standard_swap_chance: float = 0.15     # Chance to take the runner-up move
    standard_swap_margin: float = 20.0     # ...only if it trails the best by less than this
    precision_band: float = 0.08           # Top tier: within 8% of the best score
    precision_tight_ratio: float = 0.3     # Tight sub-band as a fraction of the top tier

    # Input
    player_agent: int | None = None        # Agent id steered by key presses, if any

    # Logging
    log_level: str = "INFO"
    replay_file: str | None = None

    def __post_init__(self) -> None:
        if self.grid_width < 3 or self.grid_height < 3:
            raise ValueError(
                f"Grid {self.grid_width}x{self.grid_height} has no playable interior"
            )
        if not 1 <= self.agent_count <= MAX_AGENTS:
            raise ValueError(f"agent_count must be in 1..{MAX_AGENTS}, got {self.agent_count}")
        if self.player_agent is not None and not 0 <= self.player_agent < self.agent_count:
            raise ValueError(f"player_agent {self.player_agent} is not a valid agent id")

    # -- derived --

    @property
    def max_ticks(self) -> int:
        return self.precision_max_ticks if self.precision else self.standard_max_ticks

    @property
    def open_space_cap(self) -> int:
        return self.precision_open_space_cap if self.precision else self.standard_open_space_cap

    @property
    def look_ahead_depth(self) -> int:
        return self.precision_look_ahead if self.precision else self.standard_look_ahead
