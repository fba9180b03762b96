"""Spatial heuristics over a pre-tick Snapshot.

Every function here is pure: the same (snapshot, arguments) always gives
the same answer, and nothing mutates the snapshot.  All searches carry a
hard cap because they run once per candidate move per living agent per
tick.

Usage:
    open_space(snap, pos, cap=30)           # reachable cells, capped
    look_ahead(snap, pos, heading, 10)      # free cells in a straight line
    territory(snap, agent_id, candidate)    # Voronoi cells won from candidate
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from lightcycle.core.enums import Turn
from lightcycle.core.models import Vector2, turn_heading

if TYPE_CHECKING:
    from lightcycle.core.snapshot import Snapshot

# Cardinal neighbour offsets (no diagonals)
_NEIGHBOURS = ((1, 0), (-1, 0), (0, 1), (0, -1))


# ---------------------------------------------------------------------------
# Open space (bounded flood fill)
# ---------------------------------------------------------------------------

def open_space(snapshot: Snapshot, origin: Vector2, cap: int) -> int:
    """Count cells reachable from *origin*, stopping once *cap* is reached.

    The origin counts as the first cell.  A blocked origin has no room at all.
    """
    if cap <= 0 or snapshot.is_blocked(origin):
        return 0

    is_blocked = snapshot.is_blocked_xy
    start = (origin.x, origin.y)
    visited = {start}
    queue = deque([start])

    while queue and len(visited) < cap:
        x, y = queue.popleft()
        for dx, dy in _NEIGHBOURS:
            n = (x + dx, y + dy)
            if n in visited or is_blocked(n[0], n[1]):
                continue
            visited.add(n)
            if len(visited) >= cap:
                break
            queue.append(n)

    return min(len(visited), cap)


# ---------------------------------------------------------------------------
# Straight-line look-ahead
# ---------------------------------------------------------------------------

def look_ahead(snapshot: Snapshot, origin: Vector2, heading: Vector2, depth: int) -> int:
    """Count consecutive free cells beyond *origin* along *heading*, up to *depth*."""
    x, y = origin.x, origin.y
    count = 0
    for _ in range(depth):
        x += heading.x
        y += heading.y
        if snapshot.is_blocked_xy(x, y):
            break
        count += 1
    return count


# ---------------------------------------------------------------------------
# Territory partition (simultaneous multi-source BFS)
# ---------------------------------------------------------------------------

def partition(snapshot: Snapshot, agent_id: int, candidate: Vector2) -> dict[tuple[int, int], int]:
    """Assign cells to whichever wavefront reaches them first.

    The evaluating agent expands from *candidate* (where it would be after
    the move); every other living agent expands from its real head.  All
    wavefronts advance one BFS layer per round.  A cell belongs to the first
    wavefront that reaches it and is never reassigned.  When two wavefronts
    reach a cell in the same round, the lower agent id wins.

    Returns a cell -> owner id map covering every claimed cell.
    """
    seeds: dict[int, Vector2] = snapshot.opponents(agent_id)
    if not snapshot.is_blocked(candidate):
        seeds[agent_id] = candidate

    owner: dict[tuple[int, int], int] = {}
    frontier: list[tuple[int, int, int]] = []
    for aid in sorted(seeds):
        pos = seeds[aid]
        if (pos.x, pos.y) in owner:
            continue
        owner[(pos.x, pos.y)] = aid
        frontier.append((aid, pos.x, pos.y))

    is_blocked = snapshot.is_blocked_xy
    # Each layer is processed in ascending agent id, so first-claim-wins is
    # also lowest-id-wins for same-round ties.
    while frontier:
        next_frontier: list[tuple[int, int, int]] = []
        for aid, x, y in frontier:
            for dx, dy in _NEIGHBOURS:
                n = (x + dx, y + dy)
                if n in owner or is_blocked(n[0], n[1]):
                    continue
                owner[n] = aid
                next_frontier.append((aid, n[0], n[1]))
        next_frontier.sort(key=lambda item: item[0])
        frontier = next_frontier

    return owner


def territory(snapshot: Snapshot, agent_id: int, candidate: Vector2) -> int:
    """Number of cells *agent_id* would claim by moving to *candidate*."""
    return sum(1 for owner in partition(snapshot, agent_id, candidate).values() if owner == agent_id)


# ---------------------------------------------------------------------------
# Cheap local signals
# ---------------------------------------------------------------------------

def mobility(snapshot: Snapshot, pos: Vector2, heading: Vector2) -> int:
    """How many of the three follow-up moves from *pos* are free (0-3)."""
    free = 0
    for turn in Turn:
        h = turn_heading(heading, turn)
        if not snapshot.is_blocked_xy(pos.x + h.x, pos.y + h.y):
            free += 1
    return free


def wall_hug(snapshot: Snapshot, pos: Vector2) -> float:
    """Reward running along an edge: one blocked neighbour is best, two is fine."""
    walls = sum(1 for dx, dy in _NEIGHBOURS if snapshot.is_blocked_xy(pos.x + dx, pos.y + dy))
    if walls == 1:
        return 10.0
    if walls == 2:
        return 5.0
    return 0.0


def nearest_opponent(snapshot: Snapshot, agent_id: int, pos: Vector2) -> float:
    """Manhattan distance from *pos* to the closest living opponent head."""
    dists = [pos.manhattan(head) for head in snapshot.opponents(agent_id).values()]
    return float(min(dists)) if dists else float("inf")
