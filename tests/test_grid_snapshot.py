"""Tests for Grid geometry and the pre-tick Snapshot occupancy view."""

from lightcycle.config import ArenaConfig
from lightcycle.core.grid import Grid
from lightcycle.core.match_builder import build_match
from lightcycle.core.match_state import MatchState
from lightcycle.core.models import EAST, WEST, Agent, Vector2
from lightcycle.core.personality import BASELINE
from lightcycle.core.snapshot import Snapshot
from lightcycle.systems.rng import DeterministicRNG


def _make_agent(aid: int, x: int, y: int, heading: Vector2 = EAST) -> Agent:
    return Agent(id=aid, name=f"A{aid}", color="cyan", pos=Vector2(x, y), heading=heading, personality=BASELINE)


class TestGrid:

    def test_interior_excludes_border(self):
        g = Grid(6, 4)
        assert not g.in_interior(Vector2(0, 1))
        assert not g.in_interior(Vector2(5, 2))
        assert not g.in_interior(Vector2(2, 0))
        assert not g.in_interior(Vector2(2, 3))
        assert g.in_interior(Vector2(1, 1))
        assert g.in_interior(Vector2(4, 2))

    def test_border_covers_outer_ring(self):
        g = Grid(6, 4)
        border = g.border()
        assert len(border) == 6 * 4 - g.interior_cells
        assert all(g.is_wall(p) for p in border)

    def test_center_distance(self):
        g = Grid(50, 16)
        assert g.center_distance(25, 8) == 0
        assert g.center_distance(20, 10) == 7


class TestSnapshot:

    def test_border_always_blocked(self):
        state = build_match(ArenaConfig(), DeterministicRNG(42))
        snap = Snapshot.from_state(state)
        assert all(snap.is_blocked(p) for p in state.grid.border())

    def test_outside_grid_is_blocked(self):
        snap = Snapshot.from_state(MatchState(seed=1, grid=Grid(8, 8), agents=[]))
        assert snap.is_blocked_xy(-1, 3)
        assert snap.is_blocked_xy(3, 100)

    def test_heads_and_trails_block(self):
        a = _make_agent(0, 3, 3)
        a.advance(EAST)
        a.advance(EAST)
        state = MatchState(seed=1, grid=Grid(10, 10), agents=[a])
        snap = Snapshot.from_state(state)
        assert snap.is_blocked(Vector2(3, 3))
        assert snap.is_blocked(Vector2(4, 3))
        assert snap.is_blocked(Vector2(5, 3))
        assert not snap.is_blocked(Vector2(6, 3))

    def test_dead_head_stays_blocked_but_is_not_an_opponent(self):
        alive = _make_agent(0, 2, 2)
        dead = _make_agent(1, 6, 6, WEST)
        dead.alive = False
        snap = Snapshot.from_state(MatchState(seed=1, grid=Grid(10, 10), agents=[alive, dead]))
        assert snap.is_blocked(Vector2(6, 6))
        assert 1 not in snap.heads
        assert snap.opponents(0) == {}

    def test_snapshot_is_detached_from_state(self):
        a = _make_agent(0, 3, 3)
        state = MatchState(seed=1, grid=Grid(10, 10), agents=[a])
        snap = Snapshot.from_state(state)
        a.advance(EAST)
        assert not snap.is_blocked(Vector2(4, 3))
        assert snap.heads[0] == Vector2(3, 3)
