"""GET /api/v1/frame, /state, /events — live match data (polled by UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from lightcycle.api.dependencies import get_match_manager
from lightcycle.api.engine_manager import MatchManager
from lightcycle.api.schemas import (
    AgentSchema,
    EventSchema,
    FrameResponse,
    MatchStateResponse,
    PersonalitySchema,
)

router = APIRouter()


def _serialize_agent(a) -> AgentSchema:
    p = a.personality
    return AgentSchema(
        id=a.id,
        name=a.name,
        color=a.color,
        x=a.pos.x,
        y=a.pos.y,
        dx=a.heading.x,
        dy=a.heading.y,
        alive=a.alive,
        controlled=a.controlled,
        trail_length=len(a.trail),
        personality=PersonalitySchema(
            territory=p.territory, survival=p.survival, escape_route=p.escape_route,
            open_space=p.open_space, look_ahead=p.look_ahead,
            center_preference=p.center_preference, mobility=p.mobility,
            wall_hug=p.wall_hug, aggressiveness=p.aggressiveness,
        ) if p is not None else None,
    )


@router.get("/frame", response_model=FrameResponse)
def get_frame(
    manager: MatchManager = Depends(get_match_manager),
) -> FrameResponse:
    view = manager.get_view()
    if view is None:
        raise HTTPException(status_code=503, detail="No frame rendered yet.")
    return FrameResponse(tick=view.state.tick, ended=view.state.ended, rows=list(view.rows))


@router.get("/state", response_model=MatchStateResponse)
def get_state(
    manager: MatchManager = Depends(get_match_manager),
) -> MatchStateResponse:
    view = manager.get_view()
    if view is None:
        raise HTTPException(status_code=503, detail="Match not started yet.")
    state = view.state
    winner = state.winner
    return MatchStateResponse(
        tick=state.tick,
        ended=state.ended,
        reason=state.reason.name.lower(),
        winner_id=state.winner_id,
        winner_name=winner.name if winner else None,
        alive_count=state.alive_count,
        precision=manager.config.precision,
        agents=[_serialize_agent(a) for a in state.agents],
    )


@router.get("/events", response_model=list[EventSchema])
def get_events(
    since_tick: int = Query(0, ge=0, description="Only return events at or after this tick"),
    limit: int = Query(50, ge=1, le=2000),
    manager: MatchManager = Depends(get_match_manager),
) -> list[EventSchema]:
    events = manager.event_log.since_tick(since_tick)[-limit:]
    return [
        EventSchema(tick=e.tick, category=e.category, message=e.message, agent_ids=list(e.agent_ids))
        for e in events
    ]
