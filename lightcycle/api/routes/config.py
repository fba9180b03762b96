"""GET /api/v1/config — expose arena configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from lightcycle.api.dependencies import get_match_manager
from lightcycle.api.engine_manager import MatchManager
from lightcycle.api.schemas import ArenaConfigResponse

router = APIRouter()


@router.get("/config", response_model=ArenaConfigResponse)
def get_config(
    manager: MatchManager = Depends(get_match_manager),
) -> ArenaConfigResponse:
    cfg = manager.config
    return ArenaConfigResponse(
        seed=cfg.seed,
        grid_width=cfg.grid_width,
        grid_height=cfg.grid_height,
        agent_count=cfg.agent_count,
        precision=cfg.precision,
        max_ticks=cfg.max_ticks,
        open_space_cap=cfg.open_space_cap,
        look_ahead_depth=cfg.look_ahead_depth,
        survival_depth=cfg.survival_depth,
        trap_depth=cfg.trap_depth,
        player_agent=cfg.player_agent,
        tick_rate=manager.tick_rate,
    )
