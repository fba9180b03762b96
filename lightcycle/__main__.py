"""Entry point: ``python -m lightcycle``.

Supports two modes:
  - ``python -m lightcycle``            → Launch FastAPI server with a live match
  - ``python -m lightcycle cli``        → Headless match printed to the terminal
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Light-Cycle Arena")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI match server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--precision", action="store_true", help="Enable precision (impossible) mode")
    srv.add_argument("--player", type=int, default=None, help="Agent id steered via /input")
    srv.add_argument("--paused", action="store_true", help="Wait for /control/start")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run one match in the terminal")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--precision", action="store_true", help="Enable precision (impossible) mode")
    cli.add_argument("--ticks", type=int, default=None, help="Override the mode's tick cap")
    cli.add_argument("--agents", type=int, default=4)
    cli.add_argument("--realtime", action="store_true", help="Redraw live at the tick interval")
    cli.add_argument("--no-color", action="store_true")
    cli.add_argument("--replay", type=str, default=None, help="Write a JSON replay to this path")
    cli.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from lightcycle.api.app import create_app
    from lightcycle.config import ArenaConfig

    config = ArenaConfig(
        seed=args.seed,
        precision=args.precision,
        player_agent=args.player,
        log_level=args.log_level,
    )
    app = create_app(config, autostart=not args.paused)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from lightcycle.config import ArenaConfig
    from lightcycle.engine.clock import SimulationClock
    from lightcycle.engine.game_controller import GameController
    from lightcycle.render.display import StreamDisplay
    from lightcycle.systems.rng import DeterministicRNG
    from lightcycle.utils.logging import setup_logging
    from lightcycle.utils.replay import ReplayRecorder

    overrides = {}
    if args.ticks is not None:
        key = "precision_max_ticks" if args.precision else "standard_max_ticks"
        overrides[key] = args.ticks

    config = ArenaConfig(
        seed=args.seed,
        precision=args.precision,
        agent_count=args.agents,
        replay_file=args.replay,
        log_level=args.log_level,
        **overrides,
    )

    setup_logging(config.log_level)

    rng = DeterministicRNG(config.seed)
    controller = GameController(config, rng)
    display = StreamDisplay(live=args.realtime, color=not args.no_color)
    recorder = (
        ReplayRecorder(config.replay_file, config.seed, config.precision)
        if config.replay_file else None
    )
    clock = SimulationClock(controller, display, recorder=recorder)

    try:
        state = clock.run(realtime=args.realtime)
    except KeyboardInterrupt:
        logger.info("Interrupted — stopping between ticks.")
        clock.request_stop()
        state = clock.tick().state

    winner = state.winner
    logger.info(
        "Match finished at tick %d: %s (%s)",
        state.tick, winner.name if winner else "no winner", state.reason.name.lower(),
    )


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    if args.command == "cli":
        _run_cli(args)
    else:
        # Default to server mode (including bare ``python -m lightcycle``)
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)


if __name__ == "__main__":
    main()
