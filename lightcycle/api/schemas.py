"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Agents ---

class PersonalitySchema(BaseModel):
    territory: float
    survival: float
    escape_route: float
    open_space: float
    look_ahead: float
    center_preference: float
    mobility: float
    wall_hug: bool
    aggressiveness: float


class AgentSchema(BaseModel):
    id: int
    name: str
    color: str
    x: int
    y: int
    dx: int
    dy: int
    alive: bool
    controlled: bool = False
    trail_length: int = 0
    personality: PersonalitySchema | None = None


# --- Match ---

class FrameResponse(BaseModel):
    tick: int
    ended: bool
    rows: list[str] = Field(default_factory=list)


class MatchStateResponse(BaseModel):
    tick: int
    ended: bool
    reason: str
    winner_id: int | None = None
    winner_name: str | None = None
    alive_count: int
    precision: bool
    agents: list[AgentSchema] = Field(default_factory=list)


class EventSchema(BaseModel):
    tick: int
    category: str
    message: str
    agent_ids: list[int] = Field(default_factory=list)


class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int


class InputResponse(BaseModel):
    accepted: bool
    key: str
    intent: str | None = None
    tick: int


class ArenaConfigResponse(BaseModel):
    seed: int
    grid_width: int
    grid_height: int
    agent_count: int
    precision: bool
    max_ticks: int
    open_space_cap: int
    look_ahead_depth: int
    survival_depth: int
    trap_depth: int
    player_agent: int | None = None
    tick_rate: float
