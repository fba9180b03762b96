"""POST /api/v1/control/{action} — match lifecycle controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, Query

from lightcycle.api.dependencies import get_match_manager
from lightcycle.api.engine_manager import MatchManager
from lightcycle.api.schemas import ControlResponse

router = APIRouter()


class ControlAction(str, Enum):
    start = "start"
    pause = "pause"
    resume = "resume"
    step = "step"
    reset = "reset"
    stop = "stop"


def _tick(manager: MatchManager) -> int:
    view = manager.get_view()
    return view.state.tick if view else 0


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: MatchManager = Depends(get_match_manager),
) -> ControlResponse:
    tick = _tick(manager)

    match action:
        case ControlAction.start:
            if manager.running:
                return ControlResponse(status="noop", message="Already running.", tick=tick)
            manager.start()
            return ControlResponse(status="ok", message="Match started.", tick=tick)

        case ControlAction.pause:
            if not manager.running:
                return ControlResponse(status="error", message="Not running.", tick=tick)
            manager.pause()
            return ControlResponse(status="ok", message="Match paused.", tick=tick)

        case ControlAction.resume:
            if not manager.running:
                return ControlResponse(status="error", message="Not running.", tick=tick)
            manager.resume()
            return ControlResponse(status="ok", message="Match resumed.", tick=tick)

        case ControlAction.step:
            if manager.running:
                manager.step()
                return ControlResponse(status="ok", message="Single tick requested.", tick=tick)
            if not manager.tick_once():
                return ControlResponse(status="noop", message="Match is over.", tick=_tick(manager))
            return ControlResponse(status="ok", message="Single tick executed.", tick=_tick(manager))

        case ControlAction.reset:
            manager.reset()
            return ControlResponse(status="ok", message="Match reset.", tick=_tick(manager))

        case ControlAction.stop:
            view = manager.get_view()
            if view is not None and view.state.ended:
                return ControlResponse(status="noop", message="Match is already over.", tick=tick)
            manager.kill()
            return ControlResponse(status="ok", message="Stop requested.", tick=tick)


@router.post("/speed")
def set_speed(
    tps: float = Query(10.0, gt=0.5, le=100.0, description="Ticks per second"),
    manager: MatchManager = Depends(get_match_manager),
) -> ControlResponse:
    manager.tick_rate = 1.0 / tps
    return ControlResponse(status="ok", message=f"Speed set to {tps:.1f} tps.", tick=_tick(manager))
