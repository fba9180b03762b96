"""DecisionEngine — per-agent, per-tick move choice.

For each living agent:
  1. Enumerate straight / left / right (reversal is never legal).
  2. Drop candidates whose target cell is blocked in the snapshot.
  3. Score survivors with the mode's MoveScorer.
  4. Rank best-first (stable, so candidate order breaks exact ties) and
     let the scorer pick.

The engine only reads the pre-tick Snapshot, so agents deciding in the
same tick never see each other's choices.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lightcycle.ai.scoring import SCORERS, MoveCandidate, ScoringContext
from lightcycle.core.enums import DecisionMode, Turn
from lightcycle.core.models import turn_heading

if TYPE_CHECKING:
    from lightcycle.config import ArenaConfig
    from lightcycle.core.models import Agent
    from lightcycle.core.snapshot import Snapshot
    from lightcycle.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


class DecisionEngine:
    """Stateless move chooser. Safe to call for agents in any order."""

    __slots__ = ("_config", "_rng", "_scorer")

    def __init__(self, config: ArenaConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng
        mode = DecisionMode.PRECISION if config.precision else DecisionMode.STANDARD
        self._scorer = SCORERS[mode]

    @property
    def mode(self) -> DecisionMode:
        return self._scorer.mode

    @staticmethod
    def candidates(agent: Agent, snapshot: Snapshot) -> list[MoveCandidate]:
        """Legal (unblocked) moves for *agent*, in straight / right / left order."""
        moves: list[MoveCandidate] = []
        for turn in Turn:
            heading = turn_heading(agent.heading, turn)
            target = agent.pos + heading
            if snapshot.is_blocked(target):
                continue
            moves.append(MoveCandidate(turn=turn, heading=heading, target=target))
        return moves

    def rank(self, agent: Agent, snapshot: Snapshot) -> list[MoveCandidate]:
        """Score every legal move and sort best first."""
        ctx = ScoringContext(agent=agent, snapshot=snapshot, config=self._config, rng=self._rng)
        scored = [self._scorer.score(ctx, m) for m in self.candidates(agent, snapshot)]
        scored.sort(key=lambda m: m.score, reverse=True)
        return scored

    def decide(self, agent: Agent, snapshot: Snapshot) -> MoveCandidate | None:
        """Return the chosen move, or None when every option is blocked."""
        ranked = self.rank(agent, snapshot)
        if not ranked:
            logger.debug("Tick %d: %s has no legal move", snapshot.tick, agent.name)
            return None

        ctx = ScoringContext(agent=agent, snapshot=snapshot, config=self._config, rng=self._rng)
        chosen = self._scorer.select(ctx, ranked)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Tick %d: %s -> %s (%.1f) from %s",
                snapshot.tick, agent.name, chosen.turn.name, chosen.score,
                ", ".join(f"{m.turn.name}={m.score:.1f}" for m in ranked),
            )
        return chosen
