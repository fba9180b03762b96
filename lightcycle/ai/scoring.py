"""Mode-specific move scorers.

Each DecisionMode maps to one MoveScorer that owns both halves of the
mode's behaviour: how a candidate move is scored and how a move is picked
from the ranked list.  The tick loop and collision code never branch on
mode; they only look the scorer up in ``SCORERS``.

MoveScorer     — abstract base; implement ``score()`` and ``select()``.
StandardScorer — cheap flood fill + look-ahead with mild randomness.
PrecisionScorer— territory, survival and trap analysis blended through
                 the agent's Personality, sampling among near-best moves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from lightcycle.ai.space import look_ahead, mobility, nearest_opponent, open_space, territory, wall_hug
from lightcycle.ai.survival import detect_trap, survival_lookahead
from lightcycle.core.enums import DecisionMode, Domain, Turn

if TYPE_CHECKING:
    from lightcycle.config import ArenaConfig
    from lightcycle.core.models import Agent, Vector2
    from lightcycle.core.snapshot import Snapshot
    from lightcycle.systems.rng import DeterministicRNG


TRAP_PENALTY = 10_000.0


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class MoveCandidate:
    """One legal relative move and its evaluation."""

    turn: Turn
    heading: Vector2
    target: Vector2
    score: float = 0.0
    factors: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ScoringContext:
    """Everything a scorer may read while evaluating one agent."""

    agent: Agent
    snapshot: Snapshot
    config: ArenaConfig
    rng: DeterministicRNG


# ---------------------------------------------------------------------------
# Abstract scorer
# ---------------------------------------------------------------------------

class MoveScorer(ABC):
    """Base class for mode scorers."""

    @property
    @abstractmethod
    def mode(self) -> DecisionMode:
        """The DecisionMode this scorer implements."""

    @abstractmethod
    def factors(self, ctx: ScoringContext, move: MoveCandidate) -> dict[str, float]:
        """Return the signed contribution of every heuristic for *move*."""

    @abstractmethod
    def select(self, ctx: ScoringContext, ranked: list[MoveCandidate]) -> MoveCandidate:
        """Pick a move from *ranked* (non-empty, sorted best first)."""

    def score(self, ctx: ScoringContext, move: MoveCandidate) -> MoveCandidate:
        """Convenience: evaluate and store factors and total on *move*."""
        move.factors = self.factors(ctx, move)
        move.score = sum(move.factors.values())
        return move


# ---------------------------------------------------------------------------
# Standard
# ---------------------------------------------------------------------------

class StandardScorer(MoveScorer):
    """Flood fill and straight-line room with a pull toward the center."""

    PROXIMITY_RADIUS = 5
    CRAMPED_PENALTY = 20.0

    @property
    def mode(self) -> DecisionMode:
        return DecisionMode.STANDARD

    def factors(self, ctx: ScoringContext, move: MoveCandidate) -> dict[str, float]:
        snap, cfg = ctx.snapshot, ctx.config
        target, heading = move.target, move.heading

        result = {
            "open_space": 10.0 * open_space(snap, target, cfg.standard_open_space_cap),
            "look_ahead": 5.0 * look_ahead(snap, target, heading, cfg.standard_look_ahead),
            "straight": 3.0 if move.turn == Turn.STRAIGHT else 0.0,
            "center": 20.0 - snap.grid.center_distance(target.x, target.y) / 2,
        }

        dist = nearest_opponent(snap, ctx.agent.id, target)
        if dist < self.PROXIMITY_RADIUS:
            result["proximity"] = -(self.PROXIMITY_RADIUS - dist) * 2.0

        if mobility(snap, target, heading) <= 1:
            result["mobility"] = -self.CRAMPED_PENALTY
        return result

    def select(self, ctx: ScoringContext, ranked: list[MoveCandidate]) -> MoveCandidate:
        cfg = ctx.config
        if len(ranked) > 1:
            roll = ctx.rng.next_float(Domain.MOVE_SELECTION, ctx.agent.id, ctx.snapshot.tick)
            if roll < cfg.standard_swap_chance and ranked[0].score - ranked[1].score < cfg.standard_swap_margin:
                return ranked[1]
        return ranked[0]


# ---------------------------------------------------------------------------
# Precision
# ---------------------------------------------------------------------------

class PrecisionScorer(MoveScorer):
    """Near-optimal play; the agent's Personality sets the weights."""

    STRAIGHT_BONUS = 5.0

    @property
    def mode(self) -> DecisionMode:
        return DecisionMode.PRECISION

    def factors(self, ctx: ScoringContext, move: MoveCandidate) -> dict[str, float]:
        snap, cfg = ctx.snapshot, ctx.config
        agent = ctx.agent
        p = agent.personality
        target, heading = move.target, move.heading

        trap = detect_trap(snap, target, cfg.trap_depth)
        survival = survival_lookahead(
            snap, target, heading, cfg.survival_depth, visited=((agent.pos.x, agent.pos.y),),
        )

        result = {
            "territory": territory(snap, agent.id, target) * p.territory,
            "survival": survival * p.survival,
            "escape_routes": trap.escape_routes * p.escape_route,
            "open_space": open_space(snap, target, cfg.precision_open_space_cap) * p.open_space,
            "look_ahead": look_ahead(snap, target, heading, cfg.precision_look_ahead) * p.look_ahead,
            "wall_hug": wall_hug(snap, target) * (1.5 if p.wall_hug else 0.5),
            "center": p.center_preference - snap.grid.center_distance(target.x, target.y),
            "mobility": mobility(snap, target, heading) * p.mobility,
            "straight": self.STRAIGHT_BONUS if move.turn == Turn.STRAIGHT else 0.0,
        }
        if trap.is_trap:
            result["trap"] = -TRAP_PENALTY
        return result

    def select(self, ctx: ScoringContext, ranked: list[MoveCandidate]) -> MoveCandidate:
        cfg, rng = ctx.config, ctx.rng
        aid, tick = ctx.agent.id, ctx.snapshot.tick

        best = ranked[0].score
        threshold = abs(best) * cfg.precision_band
        top_tier = [m for m in ranked if best - m.score <= threshold]

        if len(top_tier) > 1 and rng.next_float(Domain.MOVE_SELECTION, aid, tick, 0) < ctx.agent.personality.aggressiveness:
            return top_tier[rng.choice_index(Domain.MOVE_SELECTION, aid, tick, len(top_tier), draw=1)]

        tight = [m for m in ranked if best - m.score <= threshold * cfg.precision_tight_ratio]
        return tight[rng.choice_index(Domain.MOVE_SELECTION, aid, tick, len(tight), draw=2)]


SCORERS: dict[DecisionMode, MoveScorer] = {
    DecisionMode.STANDARD: StandardScorer(),
    DecisionMode.PRECISION: PrecisionScorer(),
}
