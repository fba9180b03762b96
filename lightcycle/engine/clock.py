"""SimulationClock — drives one match against a host display.

The clock is the only place that touches the host: it allocates the arena
rows, pushes every frame, drains key presses between ticks and appends the
outcome summary.  It never starts a tick before the previous one has fully
resolved, and a stop request only takes effect between ticks.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Callable

from lightcycle.core.enums import Intent
from lightcycle.engine.game_controller import StepResult
from lightcycle.engine.input_map import InputMapper
from lightcycle.engine.input_queue import InputQueue
from lightcycle.render.display import push_frame

if TYPE_CHECKING:
    from lightcycle.core.match_state import MatchState
    from lightcycle.engine.game_controller import GameController
    from lightcycle.render.display import RowDisplay
    from lightcycle.utils.event_log import EventLog
    from lightcycle.utils.replay import ReplayRecorder

logger = logging.getLogger(__name__)


class SimulationClock:
    """Fixed-interval tick driver for a single match."""

    __slots__ = (
        "_controller", "_display", "_interval", "_recorder", "_event_log",
        "_sleep", "_inputs", "_mapper", "_stop", "_state", "_handles",
    )

    def __init__(
        self,
        controller: GameController,
        display: RowDisplay,
        interval: float | None = None,
        recorder: ReplayRecorder | None = None,
        event_log: EventLog | None = None,
        mapper: InputMapper | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._controller = controller
        self._display = display
        self._interval = controller.config.tick_interval_seconds if interval is None else interval
        self._recorder = recorder
        self._event_log = event_log
        self._sleep = sleep
        self._inputs = InputQueue()
        self._mapper = mapper or InputMapper()
        self._stop = threading.Event()
        self._state: MatchState | None = None
        self._handles: list[int] = []

    @property
    def state(self) -> MatchState | None:
        return self._state

    @property
    def handles(self) -> list[int]:
        return list(self._handles)

    # -- host-facing --

    def submit_key(self, key: str) -> None:
        """Queue a raw key press; applied at the start of the next tick."""
        self._inputs.push(key)

    def request_stop(self) -> None:
        """Kill switch: the match ends before the next tick runs."""
        self._stop.set()

    # -- lifecycle --

    def start(self, state: MatchState | None = None) -> MatchState:
        """Print the banner, allocate arena rows and show the tick-0 frame."""
        controller = self._controller
        self._state = state if state is not None else controller.new_match()
        self._stop.clear()

        renderer = controller.renderer
        self._display.append(renderer.banner(controller.config.precision))
        self._handles = self._display.allocate(renderer.frame_height(self._state))
        push_frame(self._display, self._handles, renderer.frame(self._state))
        if self._recorder:
            self._recorder.record_tick(self._state)
        return self._state

    def tick(self) -> StepResult:
        """Run exactly one tick and publish its frame."""
        if self._state is None:
            self.start()
        assert self._state is not None
        if self._state.ended:
            return StepResult(state=self._state, frame=self._controller.renderer.frame(self._state))

        intents = self._mapper.map_keys(self._inputs.drain())
        if self._stop.is_set():
            intents.append(Intent.QUIT)

        prev_tick = self._state.tick
        result = self._controller.step(self._state, intents)
        self._state = result.state
        push_frame(self._display, self._handles, result.frame)

        if self._event_log is not None and result.events:
            self._event_log.append_many(result.events)
        if self._recorder and result.state.tick > prev_tick:
            self._recorder.record_tick(result.state)
        if result.ended:
            self._finish(result.state)
        return result

    def run(self, realtime: bool = True) -> MatchState:
        """Tick until the match ends. With *realtime*, hold the fixed interval."""
        state = self._state if self._state is not None else self.start()
        while not state.ended:
            t0 = time.perf_counter()
            state = self.tick().state
            if realtime and not state.ended:
                remaining = self._interval - (time.perf_counter() - t0)
                if remaining > 0:
                    self._sleep(remaining)
        return state

    # -- internals --

    def _finish(self, state: MatchState) -> None:
        controller = self._controller
        self._display.append(controller.renderer.summary(state, controller.rng, controller.config.precision))
        if self._recorder:
            self._recorder.flush(state.winner_id)
        logger.info("Clock stopped at tick %d", state.tick)
