"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lightcycle.api.dependencies import set_match_manager
from lightcycle.api.engine_manager import MatchManager
from lightcycle.api.routes import api_router
from lightcycle.config import ArenaConfig
from lightcycle.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: ArenaConfig | None = None, autostart: bool = True) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = ArenaConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = MatchManager(_config)
        set_match_manager(manager)
        if autostart:
            manager.start()
        logger.info("API server started — match %s.", "running" if autostart else "ready")
        yield
        manager.stop()
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Light-Cycle Arena",
        description=(
            "Deterministic four-agent light-cycle arena — live match API.\n\n"
            "## API Groups\n\n"
            "- **State** — Rendered frame rows, match state and the event feed\n"
            "- **Control** — Match lifecycle: start, pause, resume, step, reset, stop\n"
            "- **Input** — Key presses for a human-controlled agent\n"
            "- **Config** — Read-only arena configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live match data polled by a viewer: frame rows, agents, events."},
            {"name": "Control", "description": "Match lifecycle controls: start, pause, resume, single-step, reset and the stop kill switch."},
            {"name": "Input", "description": "Raw key presses, mapped to steering intents and applied between ticks."},
            {"name": "Config", "description": "Read-only arena configuration (grid size, mode, tick caps, heuristic depths)."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
