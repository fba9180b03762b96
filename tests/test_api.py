"""Tests for the MatchManager and the REST route handlers.

Route functions are called directly with an injected manager, so no HTTP
server or client is needed.
"""

import time

import pytest
from fastapi import FastAPI, HTTPException

from lightcycle.api.app import create_app
from lightcycle.api.engine_manager import MatchManager
from lightcycle.api.routes.config import get_config
from lightcycle.api.routes.control import ControlAction, control
from lightcycle.api.routes.input import press_key
from lightcycle.api.routes.state import get_events, get_frame, get_state
from lightcycle.config import ArenaConfig


def _build_manager(**overrides) -> MatchManager:
    return MatchManager(ArenaConfig(**overrides))


class TestMatchManager:

    def test_built_match_is_visible_before_start(self):
        mgr = _build_manager()
        view = mgr.get_view()
        assert view is not None
        assert view.state.tick == 0
        assert not mgr.running

    def test_tick_once_publishes_new_view(self):
        mgr = _build_manager()
        first = mgr.get_view()
        assert mgr.tick_once()
        second = mgr.get_view()
        assert second.state.tick == 1
        assert first.state.tick == 0
        assert second.rows != first.rows

    def test_view_is_a_copy(self):
        mgr = _build_manager()
        view = mgr.get_view()
        mgr.tick_once()
        assert all(a.trail == [] for a in view.state.agents)

    def test_kill_aborts(self):
        mgr = _build_manager()
        mgr.kill()
        state = mgr.get_view().state
        assert state.ended
        assert state.reason.name == "ABORTED"
        assert not mgr.tick_once()

    def test_reset_rebuilds(self):
        mgr = _build_manager()
        for _ in range(3):
            mgr.tick_once()
        mgr.reset()
        assert mgr.get_view().state.tick == 0
        assert len(mgr.event_log) == 0

    def test_background_thread_runs_to_completion(self):
        mgr = _build_manager(standard_max_ticks=5)
        mgr.tick_rate = 0.01
        mgr.start()
        deadline = time.monotonic() + 10.0
        while mgr.running and time.monotonic() < deadline:
            time.sleep(0.01)
        mgr.stop()
        state = mgr.get_view().state
        assert state.ended
        assert state.tick <= 5

    def test_kill_while_paused_ends_match(self):
        mgr = _build_manager()
        mgr.tick_rate = 0.01
        mgr.start()
        mgr.pause()
        assert control(ControlAction.stop, manager=mgr).status == "ok"
        deadline = time.monotonic() + 5.0
        while mgr.running and time.monotonic() < deadline:
            time.sleep(0.01)
        state = mgr.get_view().state
        mgr.stop()
        assert state.ended
        assert state.reason.name == "ABORTED"
        assert control(ControlAction.stop, manager=mgr).status == "noop"

    def test_tick_rate_clamped(self):
        mgr = _build_manager()
        mgr.tick_rate = 0.0
        assert mgr.tick_rate == 0.01
        mgr.tick_rate = 10.0
        assert mgr.tick_rate == 2.0


class TestStateRoutes:

    def test_frame(self):
        mgr = _build_manager()
        resp = get_frame(manager=mgr)
        assert resp.tick == 0
        assert not resp.ended
        assert any("LIGHT CYCLE BATTLE ARENA" in r for r in resp.rows)

    def test_state(self):
        mgr = _build_manager(precision=True)
        resp = get_state(manager=mgr)
        assert resp.reason == "running"
        assert resp.precision
        assert resp.alive_count == 4
        assert [a.name for a in resp.agents] == ["CYAN", "ORANGE", "GREEN", "PURPLE"]
        assert resp.agents[0].personality is not None

    def test_events_after_match(self):
        mgr = _build_manager(standard_max_ticks=3)
        while mgr.tick_once():
            pass
        events = get_events(since_tick=0, limit=50, manager=mgr)
        assert events[-1].category == "match"
        assert get_events(since_tick=1000, limit=50, manager=mgr) == []

    def test_config(self):
        mgr = _build_manager(seed=77, precision=True)
        resp = get_config(manager=mgr)
        assert resp.seed == 77
        assert resp.max_ticks == 500
        assert resp.survival_depth == 8


class TestControlRoutes:

    def test_step_when_idle_runs_one_tick(self):
        mgr = _build_manager()
        resp = control(ControlAction.step, manager=mgr)
        assert resp.status == "ok"
        assert resp.tick == 1

    def test_pause_when_idle_is_error(self):
        resp = control(ControlAction.pause, manager=_build_manager())
        assert resp.status == "error"

    def test_stop_aborts_then_noop(self):
        mgr = _build_manager()
        assert control(ControlAction.stop, manager=mgr).status == "ok"
        assert get_state(manager=mgr).reason == "aborted"
        assert control(ControlAction.stop, manager=mgr).status == "noop"

    def test_reset(self):
        mgr = _build_manager()
        control(ControlAction.step, manager=mgr)
        resp = control(ControlAction.reset, manager=mgr)
        assert resp.tick == 0


class TestInputRoute:

    def test_accepted_key_steers_player(self):
        mgr = _build_manager(player_agent=0)
        resp = press_key("ArrowDown", manager=mgr)
        assert resp.accepted
        assert resp.intent == "DOWN"
        mgr.tick_once()
        assert get_state(manager=mgr).agents[0].dy == 1

    def test_unknown_key_404(self):
        with pytest.raises(HTTPException) as exc:
            press_key("F5", manager=_build_manager())
        assert exc.value.status_code == 404

    def test_finished_match_409(self):
        mgr = _build_manager()
        mgr.kill()
        with pytest.raises(HTTPException) as exc:
            press_key("w", manager=mgr)
        assert exc.value.status_code == 409


class TestAppFactory:

    def test_routes_registered(self):
        app = create_app(ArenaConfig(), autostart=False)
        assert isinstance(app, FastAPI)
        paths = {route.path for route in app.routes}
        for path in ("/api/v1/frame", "/api/v1/state", "/api/v1/events", "/api/v1/config",
                     "/api/v1/control/{action}", "/api/v1/input/{key}"):
            assert path in paths
