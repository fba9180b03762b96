"""POST /api/v1/input/{key} — forward a key press to the running match."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from lightcycle.api.dependencies import get_match_manager
from lightcycle.api.engine_manager import MatchManager
from lightcycle.api.schemas import InputResponse

router = APIRouter()


@router.post("/input/{key}", response_model=InputResponse)
def press_key(
    key: str,
    manager: MatchManager = Depends(get_match_manager),
) -> InputResponse:
    view = manager.get_view()
    if view is None:
        raise HTTPException(status_code=503, detail="Match not started yet.")
    if view.state.ended:
        raise HTTPException(status_code=409, detail="Match is already over.")

    intent = manager.mapper.map_key(key)
    if intent is None:
        raise HTTPException(status_code=404, detail=f"No binding for key '{key}'.")
    manager.submit_key(key)
    return InputResponse(accepted=True, key=key, intent=intent.name, tick=view.state.tick)
