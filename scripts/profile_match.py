#!/usr/bin/env python3
"""Automated match profiler.

Usage:
    python scripts/profile_match.py --seed 42
    python scripts/profile_match.py --precision --seed 42 --cprofile match.prof
    python scripts/profile_match.py --precision --memory

Reports:
    - Per-tick timing statistics (min, max, mean, p50, p95, p99)
    - Per-phase breakdown (decide, resolve, render, other)
    - Alive agent count over time
    - Throughput (ticks/sec) against the 100 ms tick budget
    - Optional: cProfile dump for flame graph generation
    - Optional: tracemalloc memory snapshot
"""

from __future__ import annotations

import argparse
import cProfile
import io
import os
import pstats
import statistics
import sys
import time
import tracemalloc

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from lightcycle.ai.brain import DecisionEngine
from lightcycle.config import ArenaConfig
from lightcycle.engine.conflict_resolver import ConflictResolver
from lightcycle.engine.game_controller import GameController
from lightcycle.render.adapter import RenderAdapter
from lightcycle.systems.rng import DeterministicRNG


class _PhaseTimer:
    """Accumulates wall time per phase within one tick."""

    def __init__(self) -> None:
        self.elapsed: dict[str, float] = {}

    def reset(self) -> None:
        self.elapsed = {"decide": 0.0, "resolve": 0.0, "render": 0.0}

    def add(self, phase: str, seconds: float) -> None:
        self.elapsed[phase] = self.elapsed.get(phase, 0.0) + seconds


class _TimedEngine(DecisionEngine):
    def __init__(self, config: ArenaConfig, rng: DeterministicRNG, timer: _PhaseTimer) -> None:
        super().__init__(config, rng)
        self.timer = timer

    def decide(self, agent, snapshot):
        t0 = time.perf_counter()
        move = super().decide(agent, snapshot)
        self.timer.add("decide", time.perf_counter() - t0)
        return move


class _TimedResolver(ConflictResolver):
    def __init__(self, timer: _PhaseTimer) -> None:
        self.timer = timer

    def resolve(self, *args, **kwargs):
        t0 = time.perf_counter()
        crashes = super().resolve(*args, **kwargs)
        self.timer.add("resolve", time.perf_counter() - t0)
        return crashes


class _TimedRenderer(RenderAdapter):
    def __init__(self, timer: _PhaseTimer) -> None:
        self.timer = timer

    def frame(self, state):
        t0 = time.perf_counter()
        rows = super().frame(state)
        self.timer.add("render", time.perf_counter() - t0)
        return rows


def _run_match(cfg: ArenaConfig) -> dict:
    """Play one match through GameController.step and collect per-tick timing data."""
    rng = DeterministicRNG(cfg.seed)
    timer = _PhaseTimer()
    controller = GameController(
        cfg, rng,
        engine=_TimedEngine(cfg, rng, timer),
        resolver=_TimedResolver(timer),
        renderer=_TimedRenderer(timer),
    )
    state = controller.new_match()

    tick_times: list[float] = []
    phase_times: list[tuple[float, float, float, float]] = []
    alive_counts: list[int] = []

    while not state.ended:
        timer.reset()
        t_start = time.perf_counter()
        state = controller.step(state).state
        total = time.perf_counter() - t_start

        e = timer.elapsed
        other = max(0.0, total - e["decide"] - e["resolve"] - e["render"])
        tick_times.append(total)
        phase_times.append((e["decide"], e["resolve"], e["render"], other))
        alive_counts.append(state.alive_count)

    return {
        "tick_times": tick_times,
        "phase_times": phase_times,
        "alive_counts": alive_counts,
        "final_tick": state.tick,
        "winner": state.winner.name if state.winner else None,
        "reason": state.reason.name.lower(),
    }


def _percentile(data: list[float], p: float) -> float:
    """Simple percentile calculation."""
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(data: dict, wall_time: float, budget: float) -> None:
    """Print a formatted performance report."""
    tick_times = data["tick_times"]
    phase_times = data["phase_times"]
    alive_counts = data["alive_counts"]
    num_ticks = len(tick_times)

    if num_ticks == 0:
        print("No ticks executed.")
        return

    print("\n" + "=" * 70)
    print("  MATCH PERFORMANCE REPORT")
    print("=" * 70)

    # --- Overview ---
    print(f"\n  Ticks executed:    {num_ticks}")
    print(f"  Outcome:           {data['winner'] or 'no winner'} ({data['reason']})")
    print(f"  Wall clock time:   {wall_time:.3f}s")
    print(f"  Throughput:        {num_ticks / wall_time:.1f} ticks/sec")
    print(f"  Avg tick time:     {statistics.mean(tick_times) * 1000:.2f}ms")
    over = sum(1 for t in tick_times if t > budget)
    print(f"  Over budget:       {over} ticks (> {budget * 1000:.0f}ms)")

    # --- Alive counts ---
    print(f"\n  Alive (end):       {alive_counts[-1]}")

    # --- Tick time distribution ---
    print(f"\n  {'Metric':<16} {'Time (ms)':>10}")
    print(f"  {'-' * 16} {'-' * 10}")
    print(f"  {'Min':<16} {min(tick_times) * 1000:>10.3f}")
    print(f"  {'P50 (median)':<16} {_percentile(tick_times, 50) * 1000:>10.3f}")
    print(f"  {'P95':<16} {_percentile(tick_times, 95) * 1000:>10.3f}")
    print(f"  {'P99':<16} {_percentile(tick_times, 99) * 1000:>10.3f}")
    print(f"  {'Max':<16} {max(tick_times) * 1000:>10.3f}")
    if num_ticks > 1:
        print(f"  {'StdDev':<16} {statistics.stdev(tick_times) * 1000:>10.3f}")

    # --- Phase breakdown ---
    total_sum = sum(tick_times)
    names = ("Decide", "Resolve", "Render", "Other")

    print(f"\n  {'Phase':<16} {'Avg (ms)':>10} {'P95 (ms)':>10} {'% Total':>10}")
    print(f"  {'-' * 16} {'-' * 10} {'-' * 10} {'-' * 10}")
    for idx, name in enumerate(names):
        times = [p[idx] for p in phase_times]
        avg_ms = statistics.mean(times) * 1000
        p95_ms = _percentile(times, 95) * 1000
        pct = (sum(times) / total_sum * 100) if total_sum > 0 else 0
        print(f"  {name:<16} {avg_ms:>10.3f} {p95_ms:>10.3f} {pct:>9.1f}%")

    # --- Slowest ticks ---
    print("\n  Top 5 slowest ticks:")
    indexed = sorted(enumerate(tick_times), key=lambda x: x[1], reverse=True)[:5]
    for tick_idx, t in indexed:
        print(f"    Tick {tick_idx:>5}: {t * 1000:.3f}ms  ({alive_counts[tick_idx]} alive after)")

    print("\n" + "=" * 70)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile one light-cycle match")
    parser.add_argument("--seed", type=int, default=42, help="Match seed")
    parser.add_argument("--precision", action="store_true", help="Profile precision mode")
    parser.add_argument("--width", type=int, default=50, help="Grid width")
    parser.add_argument("--height", type=int, default=16, help="Grid height")
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    parser.add_argument("--memory", action="store_true", help="Enable tracemalloc memory profiling")
    args = parser.parse_args()

    cfg = ArenaConfig(
        seed=args.seed,
        precision=args.precision,
        grid_width=args.width,
        grid_height=args.height,
    )

    print(f"Profiling: {'precision' if cfg.precision else 'standard'} mode, seed={cfg.seed}, "
          f"grid={cfg.grid_width}x{cfg.grid_height}, cap={cfg.max_ticks} ticks")

    # --- Optional: memory tracking ---
    if args.memory:
        tracemalloc.start()

    # --- Optional: cProfile ---
    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    wall_start = time.perf_counter()
    data = _run_match(cfg)
    wall_time = time.perf_counter() - wall_start

    if profiler:
        profiler.disable()

    _print_report(data, wall_time, cfg.tick_interval_seconds)

    # --- cProfile output ---
    if profiler and args.cprofile:
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"  View with: python -m pstats {args.cprofile}")

        print("\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())

    # --- Memory output ---
    if args.memory:
        snapshot = tracemalloc.take_snapshot()
        print("\n  Top 15 memory allocations by size:")
        print(f"  {'File:Line':<60} {'Size':>10}")
        print(f"  {'-' * 60} {'-' * 10}")
        for stat in snapshot.statistics("lineno")[:15]:
            print(f"  {str(stat.traceback):<60} {stat.size / 1024:>8.1f} KB")

        current, peak = tracemalloc.get_traced_memory()
        print(f"\n  Current memory: {current / 1024:.1f} KB")
        print(f"  Peak memory:    {peak / 1024:.1f} KB")
        tracemalloc.stop()


if __name__ == "__main__":
    main()
