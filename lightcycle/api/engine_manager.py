"""MatchManager — runs the SimulationClock on a background thread.

The API reads an atomically swapped immutable view (frame rows + match
state copy); the clock thread is the only writer of the live MatchState.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lightcycle.engine.clock import SimulationClock
from lightcycle.engine.game_controller import GameController
from lightcycle.engine.input_map import InputMapper
from lightcycle.render.display import BufferDisplay
from lightcycle.systems.rng import DeterministicRNG
from lightcycle.utils.event_log import EventLog

if TYPE_CHECKING:
    from lightcycle.config import ArenaConfig
    from lightcycle.core.match_state import MatchState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MatchView:
    """What readers see: the display rows and a private copy of the state."""

    rows: tuple[str, ...]
    state: MatchState


class MatchManager:
    """Manages one match's lifecycle on a background thread.

    Provides thread-safe access to:
      - latest view (atomic reference swap)
      - event log (lock-guarded)
      - control commands (start / pause / resume / step / reset / stop)
      - key input (queued, applied between ticks)
    """

    def __init__(self, config: ArenaConfig) -> None:
        self._config = config
        self.config = config
        self._tick_rate: float = config.tick_interval_seconds
        self._mapper = InputMapper()

        self._controller: GameController | None = None
        self._clock: SimulationClock | None = None
        self._display: BufferDisplay | None = None

        self._view_lock = threading.Lock()
        self._latest_view: MatchView | None = None
        self._event_log = EventLog()

        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.01, min(value, 2.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def mapper(self) -> InputMapper:
        return self._mapper

    # -- view access --

    def get_view(self) -> MatchView | None:
        with self._view_lock:
            return self._latest_view

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="match-clock", daemon=True)
        self._thread.start()
        logger.info("MatchManager started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("MatchManager paused at tick %d", self._current_tick())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("MatchManager resumed at tick %d", self._current_tick())

    def step(self) -> None:
        """Execute exactly one tick (must be paused)."""
        if not self._paused.is_set():
            self.pause()
        self._step_requested.set()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        logger.info("MatchManager stopped.")

    def reset(self) -> None:
        """Stop and rebuild a fresh match, leaving it ready to start."""
        self.stop()
        self._event_log.clear()
        self._build()
        logger.info("MatchManager reset.")

    def kill(self) -> None:
        """Host kill switch: end the match at the next tick boundary."""
        if self._clock is not None:
            self._clock.request_stop()
        if not self._running.is_set():
            self.tick_once()
        elif self._paused.is_set():
            self._step_requested.set()

    def submit_key(self, key: str) -> bool:
        """Queue a key press. Returns False for keys with no binding."""
        if self._mapper.map_key(key) is None:
            return False
        assert self._clock is not None
        self._clock.submit_key(key)
        return True

    def tick_once(self) -> bool:
        """Advance one tick on the caller's thread. Returns False once the match is over."""
        assert self._clock is not None
        state = self._clock.state
        if state is None or state.ended:
            return False
        result = self._clock.tick()
        self._publish_view()
        return not result.ended

    # -- internals --

    def _build(self) -> None:
        cfg = self._config
        rng = DeterministicRNG(cfg.seed)
        self._controller = GameController(cfg, rng)
        self._display = BufferDisplay()
        self._clock = SimulationClock(
            self._controller, self._display, event_log=self._event_log, mapper=self._mapper,
        )
        self._clock.start()
        self._publish_view()

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Clock thread started.")

        while not self._stop_requested.is_set():
            if self._paused.is_set() and not self._step_requested.is_set():
                time.sleep(0.01)
                continue

            single_step = self._step_requested.is_set()
            if single_step:
                self._step_requested.clear()

            try:
                can_continue = self.tick_once()
            except Exception:
                logger.exception("Tick failed at %d; stopping the clock", self._current_tick())
                break

            if not can_continue:
                logger.info("Match ended at tick %d.", self._current_tick())
                break

            if not single_step:
                time.sleep(self._tick_rate)

        self._running.clear()
        logger.info("Clock thread exited.")

    def _publish_view(self) -> None:
        assert self._clock is not None and self._display is not None
        state = self._clock.state
        if state is None:
            return
        view = MatchView(rows=tuple(self._display.rows), state=state.copy())
        with self._view_lock:
            self._latest_view = view

    def _current_tick(self) -> int:
        view = self.get_view()
        return view.state.tick if view else 0
