"""GameController — the authoritative tick transition.

``step(state, intents) -> StepResult`` is a pure state transition from the
caller's point of view: the incoming MatchState is never mutated.  One
step runs four phases:

  1. Input — kill switch, then steering for a human-controlled agent
  2. Decide — every living agent chooses against one pre-tick Snapshot
  3. Resolve — all moves land together, then collisions are checked
  4. Advance — tick counter, termination check, frame rendering
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from lightcycle.ai.brain import DecisionEngine
from lightcycle.core.enums import EndReason, Intent
from lightcycle.core.match_builder import build_match
from lightcycle.core.models import is_reverse
from lightcycle.core.snapshot import Snapshot
from lightcycle.engine.conflict_resolver import ConflictResolver, Crash
from lightcycle.engine.input_map import heading_for
from lightcycle.render.adapter import RenderAdapter
from lightcycle.systems.rng import DeterministicRNG
from lightcycle.utils.event_log import MatchEvent

if TYPE_CHECKING:
    from lightcycle.config import ArenaConfig
    from lightcycle.core.match_state import MatchState
    from lightcycle.core.models import Vector2

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StepResult:
    """Outcome of one tick: the new state plus what the host should show."""

    state: MatchState
    frame: list[str]
    crashes: list[Crash] = field(default_factory=list)
    events: list[MatchEvent] = field(default_factory=list)

    @property
    def ended(self) -> bool:
        return self.state.ended


class GameController:
    """Owns the rules of a match; holds no per-match mutable state."""

    __slots__ = ("_config", "_rng", "_engine", "_resolver", "_renderer")

    def __init__(
        self,
        config: ArenaConfig,
        rng: DeterministicRNG | None = None,
        engine: DecisionEngine | None = None,
        resolver: ConflictResolver | None = None,
        renderer: RenderAdapter | None = None,
    ) -> None:
        self._config = config
        self._rng = rng or DeterministicRNG(config.seed)
        self._engine = engine or DecisionEngine(config, self._rng)
        self._resolver = resolver or ConflictResolver()
        self._renderer = renderer or RenderAdapter()

    @property
    def config(self) -> ArenaConfig:
        return self._config

    @property
    def rng(self) -> DeterministicRNG:
        return self._rng

    @property
    def renderer(self) -> RenderAdapter:
        return self._renderer

    def new_match(self) -> MatchState:
        state = build_match(self._config, self._rng)
        logger.info(
            "Match created: %d agents, %dx%d, %s mode (seed=%d)",
            len(state.agents), state.grid.width, state.grid.height,
            "precision" if self._config.precision else "standard", self._config.seed,
        )
        return state

    # -- the tick --

    def step(self, state: MatchState, intents: Iterable[Intent] = ()) -> StepResult:
        """Advance *state* by one tick and return the successor."""
        if state.ended:
            return StepResult(state=state, frame=self._renderer.frame(state))

        intents = list(intents)
        new = state.copy()
        events: list[MatchEvent] = []

        # --- Phase 1: Input ---
        if Intent.QUIT in intents:
            self._finish(new, EndReason.ABORTED, events)
            return StepResult(state=new, frame=self._renderer.frame(new), events=events)
        self._steer(new, intents, events)

        # --- Phase 2: Decide ---
        snapshot = Snapshot.from_state(new)
        proposals: dict[int, Vector2 | None] = {}
        for agent in new.agents:
            if not agent.alive:
                continue
            if agent.controlled:
                proposals[agent.id] = agent.heading
                continue
            move = self._engine.decide(agent, snapshot)
            proposals[agent.id] = move.heading if move is not None else None

        # --- Phase 3: Resolve ---
        crashes = self._resolver.resolve(proposals, new, snapshot)
        for crash in crashes:
            agent = new.agent(crash.agent_id)
            name = agent.name if agent else str(crash.agent_id)
            logger.info("Tick %d: %s derezzed at %s (%s)", new.tick, name, crash.pos, crash.cause)
            events.append(MatchEvent(new.tick, "crash", f"{name} derezzed ({crash.cause})", (crash.agent_id,)))

        # --- Phase 4: Advance ---
        new.tick += 1
        self._check_termination(new, events)
        if new.tick % 50 == 0 and not new.ended:
            logger.info("Tick %d: %d agents alive", new.tick, new.alive_count)

        return StepResult(state=new, frame=self._renderer.frame(new), crashes=crashes, events=events)

    def play(self, state: MatchState | None = None) -> MatchState:
        """Run a match to completion without a clock or display."""
        state = state if state is not None else self.new_match()
        while not state.ended:
            state = self.step(state).state
        return state

    # -- internals --

    def _steer(self, state: MatchState, intents: list[Intent], events: list[MatchEvent]) -> None:
        """Point the controlled agent along the last usable direction intent."""
        pilot = next((a for a in state.agents if a.controlled and a.alive), None)
        if pilot is None:
            return
        before = pilot.heading
        for intent in intents:
            heading = heading_for(intent)
            if heading is None:
                continue
            if is_reverse(heading, before):
                logger.debug("Tick %d: ignoring reverse intent %s", state.tick, intent.name)
                continue
            pilot.heading = heading
        if pilot.heading != before:
            events.append(MatchEvent(state.tick, "input", f"{pilot.name} heading {pilot.heading}", (pilot.id,)))

    def _check_termination(self, state: MatchState, events: list[MatchEvent]) -> None:
        # A solo agent plays until it crashes; otherwise the last one standing wins.
        last_standing = 1 if len(state.agents) > 1 else 0
        alive = state.alive_agents
        if len(alive) <= last_standing:
            state.winner_id = alive[0].id if alive else None
            self._finish(state, EndReason.LAST_STANDING, events)
        elif state.tick >= self._config.max_ticks:
            self._finish(state, EndReason.TICK_CAP, events)

    @staticmethod
    def _finish(state: MatchState, reason: EndReason, events: list[MatchEvent]) -> None:
        state.ended = True
        state.reason = reason
        winner = state.winner
        message = f"{winner.name} wins" if winner else "no winner"
        logger.info("Match over at tick %d: %s (%s)", state.tick, message, reason.name.lower())
        events.append(MatchEvent(
            state.tick, "match", f"Match over: {message} ({reason.name.lower()})",
            (winner.id,) if winner else (),
        ))
