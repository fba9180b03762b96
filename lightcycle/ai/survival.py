"""Self-survival heuristics: bounded path search and trap detection."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from lightcycle.core.enums import Turn
from lightcycle.core.models import Vector2, turn_heading

if TYPE_CHECKING:
    from lightcycle.core.snapshot import Snapshot

_NEIGHBOURS = ((1, 0), (-1, 0), (0, 1), (0, -1))
_TURNS = tuple(Turn)


def survival_lookahead(
    snapshot: Snapshot,
    start: Vector2,
    heading: Vector2,
    depth: int,
    visited: Iterable[tuple[int, int]] = (),
) -> int:
    """Longest collision-free path the agent could drive starting at *start*.

    Explores straight / left / right at every step, ignoring opponents'
    future moves.  A cell may not be revisited within one path.  *start*
    counts as the first step, so a free start scores at least 1 and the
    result never exceeds *depth*.  The search stops as soon as any path
    reaches *depth*.
    """
    if depth <= 0:
        return 0
    path: set[tuple[int, int]] = set(visited)
    is_blocked = snapshot.is_blocked_xy

    def walk(x: int, y: int, hx: int, hy: int, remaining: int) -> int:
        if (x, y) in path or is_blocked(x, y):
            return 0
        if remaining == 1:
            return 1
        path.add((x, y))
        best = 0
        h = Vector2(hx, hy)
        for turn in _TURNS:
            nh = turn_heading(h, turn)
            best = max(best, walk(x + nh.x, y + nh.y, nh.x, nh.y, remaining - 1))
            if best == remaining - 1:
                break
        path.discard((x, y))
        return 1 + best

    return walk(start.x, start.y, heading.x, heading.y, depth)


@dataclass(frozen=True, slots=True)
class TrapReport:
    """Outcome of a bounded reachability probe from one cell."""

    is_trap: bool
    escape_routes: int      # Cells reached at exactly the depth cap
    reachable: int          # Cells reached within the depth cap


def detect_trap(snapshot: Snapshot, origin: Vector2, depth: int = 20) -> TrapReport:
    """BFS from *origin* out to *depth* steps.

    A move is a trap when nothing is reachable at the full depth and the
    reachable pocket is small (fewer than ``2 * depth`` cells).
    """
    if snapshot.is_blocked(origin):
        return TrapReport(is_trap=True, escape_routes=0, reachable=0)

    is_blocked = snapshot.is_blocked_xy
    start = (origin.x, origin.y)
    dist: dict[tuple[int, int], int] = {start: 0}
    queue = deque([start])
    escape_routes = 0

    while queue:
        cell = queue.popleft()
        d = dist[cell]
        if d == depth:
            escape_routes += 1
            continue
        x, y = cell
        for dx, dy in _NEIGHBOURS:
            n = (x + dx, y + dy)
            if n in dist or is_blocked(n[0], n[1]):
                continue
            dist[n] = d + 1
            queue.append(n)

    reachable = len(dist)
    return TrapReport(
        is_trap=escape_routes == 0 and reachable < depth * 2,
        escape_routes=escape_routes,
        reachable=reachable,
    )
