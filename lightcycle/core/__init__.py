"""Core layer: arena geometry, agents, match state and snapshots."""

from lightcycle.core.grid import Grid
from lightcycle.core.match_state import MatchState
from lightcycle.core.models import Agent, TrailPoint, Vector2
from lightcycle.core.personality import Personality
from lightcycle.core.snapshot import Snapshot

__all__ = ["Agent", "Grid", "MatchState", "Personality", "Snapshot", "TrailPoint", "Vector2"]
