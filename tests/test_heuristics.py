"""Tests for the spatial heuristics: open space, look-ahead, territory, survival, traps."""

from types import MappingProxyType

from lightcycle.ai.space import (
    look_ahead,
    mobility,
    nearest_opponent,
    open_space,
    partition,
    territory,
    wall_hug,
)
from lightcycle.ai.survival import detect_trap, survival_lookahead
from lightcycle.core.grid import Grid
from lightcycle.core.models import EAST, WEST, Vector2
from lightcycle.core.snapshot import Snapshot


def _make_snapshot(
    width: int,
    height: int,
    blocked: set[tuple[int, int]] | None = None,
    heads: dict[int, Vector2] | None = None,
) -> Snapshot:
    heads = heads or {}
    cells = set(blocked or ()) | {(p.x, p.y) for p in heads.values()}
    return Snapshot(
        tick=0,
        grid=Grid(width, height),
        blocked=frozenset(cells),
        heads=MappingProxyType(dict(heads)),
        headings=MappingProxyType({aid: EAST for aid in heads}),
    )


def _ring(x0: int, y0: int, x1: int, y1: int) -> set[tuple[int, int]]:
    """Cells on the rectangle boundary (x0, y0)-(x1, y1) inclusive."""
    cells = set()
    for x in range(x0, x1 + 1):
        cells.add((x, y0))
        cells.add((x, y1))
    for y in range(y0, y1 + 1):
        cells.add((x0, y))
        cells.add((x1, y))
    return cells


class TestOpenSpace:

    def test_capped(self):
        snap = _make_snapshot(10, 10)
        assert open_space(snap, Vector2(1, 1), 30) == 30

    def test_whole_interior_when_cap_is_large(self):
        snap = _make_snapshot(10, 10)
        assert open_space(snap, Vector2(1, 1), 100) == 64

    def test_blocked_origin_has_no_room(self):
        snap = _make_snapshot(10, 10, blocked={(4, 4)})
        assert open_space(snap, Vector2(4, 4), 30) == 0
        assert open_space(snap, Vector2(0, 4), 30) == 0

    def test_enclosed_pocket(self):
        snap = _make_snapshot(20, 20, blocked=_ring(4, 4, 8, 8))
        assert open_space(snap, Vector2(6, 6), 100) == 9

    def test_pure(self):
        snap = _make_snapshot(12, 12, blocked={(5, 5), (5, 6)})
        before = snap.blocked
        first = open_space(snap, Vector2(2, 2), 50)
        second = open_space(snap, Vector2(2, 2), 50)
        assert first == second
        assert snap.blocked == before


class TestLookAhead:

    def test_stops_at_wall(self):
        snap = _make_snapshot(10, 10)
        assert look_ahead(snap, Vector2(1, 1), EAST, 20) == 7

    def test_stops_at_depth(self):
        snap = _make_snapshot(10, 10)
        assert look_ahead(snap, Vector2(1, 1), EAST, 3) == 3

    def test_stops_at_trail(self):
        snap = _make_snapshot(10, 10, blocked={(4, 1)})
        assert look_ahead(snap, Vector2(1, 1), EAST, 20) == 2

    def test_pure(self):
        snap = _make_snapshot(10, 10, blocked={(6, 2)})
        results = {look_ahead(snap, Vector2(1, 2), EAST, 10) for _ in range(3)}
        assert results == {4}


class TestTerritory:

    def test_equidistant_cell_goes_to_lower_id(self):
        # Corridor x=1..6 on row 1; agent 0 evaluates moving to (2, 1)
        snap = _make_snapshot(8, 3, heads={0: Vector2(1, 1), 1: Vector2(6, 1)})
        owners = partition(snap, 0, Vector2(2, 1))
        assert owners[(4, 1)] == 0
        assert territory(snap, 0, Vector2(2, 1)) == 3

    def test_lower_id_wins_tie_even_when_not_evaluating(self):
        snap = _make_snapshot(8, 3, heads={0: Vector2(1, 1), 1: Vector2(6, 1)})
        owners = partition(snap, 1, Vector2(5, 1))
        assert owners[(3, 1)] == 0
        assert territory(snap, 1, Vector2(5, 1)) == 2

    def test_no_cell_has_two_owners(self):
        heads = {0: Vector2(2, 2), 1: Vector2(9, 2), 2: Vector2(2, 7), 3: Vector2(9, 7)}
        snap = _make_snapshot(12, 10, heads=heads)
        owners = partition(snap, 0, Vector2(3, 2))
        counts = [territory(snap, 0, Vector2(3, 2))] + [
            sum(1 for o in owners.values() if o == aid) for aid in (1, 2, 3)
        ]
        assert sum(counts) == len(owners)
        free = 10 * 8 - len(snap.blocked)
        # Every free cell plus the three opponent heads is claimed exactly once
        assert len(owners) == free + 3

    def test_blocked_candidate_claims_nothing(self):
        snap = _make_snapshot(8, 8, blocked={(3, 3)}, heads={1: Vector2(6, 6)})
        assert territory(snap, 0, Vector2(3, 3)) == 0


class TestLocalSignals:

    def test_mobility(self):
        snap = _make_snapshot(10, 10)
        assert mobility(snap, Vector2(5, 5), EAST) == 3
        assert mobility(snap, Vector2(8, 5), EAST) == 2
        assert mobility(snap, Vector2(8, 1), EAST) == 1

    def test_wall_hug(self):
        snap = _make_snapshot(10, 10)
        assert wall_hug(snap, Vector2(5, 5)) == 0.0
        assert wall_hug(snap, Vector2(1, 5)) == 10.0
        assert wall_hug(snap, Vector2(1, 1)) == 5.0

    def test_nearest_opponent(self):
        snap = _make_snapshot(10, 10, heads={0: Vector2(1, 1), 1: Vector2(4, 5)})
        assert nearest_opponent(snap, 0, Vector2(2, 1)) == 6.0
        alone = _make_snapshot(10, 10, heads={0: Vector2(1, 1)})
        assert nearest_opponent(alone, 0, Vector2(2, 1)) == float("inf")


class TestSurvivalLookahead:

    def test_open_field_reaches_depth(self):
        snap = _make_snapshot(10, 10)
        assert survival_lookahead(snap, Vector2(3, 3), EAST, 8) == 8

    def test_blocked_start(self):
        snap = _make_snapshot(10, 10, blocked={(3, 3)})
        assert survival_lookahead(snap, Vector2(3, 3), EAST, 8) == 0

    def test_dead_end_corridor(self):
        snap = _make_snapshot(6, 3)
        # (2,1) -> (3,1) -> (4,1) then wall on every side
        assert survival_lookahead(snap, Vector2(2, 1), EAST, 8) == 3

    def test_visited_cells_are_not_reentered(self):
        snap = _make_snapshot(6, 3)
        assert survival_lookahead(snap, Vector2(2, 1), WEST, 8, visited=((1, 1),)) == 1

    def test_turns_are_explored(self):
        # Straight ahead hits the wall after one cell; the long way is north
        snap = _make_snapshot(5, 12)
        assert survival_lookahead(snap, Vector2(2, 10), EAST, 8) == 8


class TestTrapDetector:

    def test_enclosed_pocket_is_trap(self):
        snap = _make_snapshot(20, 20, blocked=_ring(4, 4, 8, 8))
        report = detect_trap(snap, Vector2(6, 6), depth=20)
        assert report.is_trap
        assert report.escape_routes == 0
        assert report.reachable == 9

    def test_long_corridor_is_not_trap(self):
        snap = _make_snapshot(30, 3)
        report = detect_trap(snap, Vector2(1, 1), depth=20)
        assert not report.is_trap
        assert report.escape_routes == 1

    def test_open_field_is_not_trap(self):
        snap = _make_snapshot(50, 16)
        assert not detect_trap(snap, Vector2(25, 8), depth=20).is_trap

    def test_blocked_origin_is_trap(self):
        snap = _make_snapshot(10, 10, blocked={(5, 5)})
        assert detect_trap(snap, Vector2(5, 5)).is_trap
