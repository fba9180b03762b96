"""Tests for the RenderAdapter, glyph selection and host displays."""

import io

from lightcycle.config import ArenaConfig
from lightcycle.core.enums import EndReason
from lightcycle.core.grid import Grid
from lightcycle.core.match_state import MatchState
from lightcycle.core.models import EAST, NORTH, SOUTH, WEST, Agent, Vector2
from lightcycle.core.personality import BASELINE
from lightcycle.engine.game_controller import GameController
from lightcycle.render.adapter import PRECISION_QUOTES, STANDARD_QUOTES, RenderAdapter, colorize
from lightcycle.render.display import BufferDisplay, StreamDisplay, push_frame, strip_markup, to_ansi
from lightcycle.render.glyphs import trail_glyph, wall_glyph
from lightcycle.systems.rng import DeterministicRNG


def _make_agent(aid: int, x: int, y: int, heading: Vector2, color: str = "cyan", name: str = "CYAN") -> Agent:
    return Agent(id=aid, name=name, color=color, pos=Vector2(x, y), heading=heading, personality=BASELINE)


class TestGlyphs:

    def test_straight_segments(self):
        assert trail_glyph(EAST, EAST) == "─"
        assert trail_glyph(WEST, WEST) == "─"
        assert trail_glyph(NORTH, NORTH) == "│"
        assert trail_glyph(SOUTH, SOUTH) == "│"

    def test_corners(self):
        assert trail_glyph(EAST, SOUTH) == "┐"
        assert trail_glyph(EAST, NORTH) == "┘"
        assert trail_glyph(WEST, SOUTH) == "┌"
        assert trail_glyph(WEST, NORTH) == "└"
        assert trail_glyph(NORTH, EAST) == "┌"
        assert trail_glyph(SOUTH, WEST) == "┘"

    def test_wall_frame(self):
        assert wall_glyph(0, 0, 5, 4) == "╔"
        assert wall_glyph(4, 0, 5, 4) == "╗"
        assert wall_glyph(0, 3, 5, 4) == "╚"
        assert wall_glyph(4, 3, 5, 4) == "╝"
        assert wall_glyph(2, 0, 5, 4) == "═"
        assert wall_glyph(0, 2, 5, 4) == "║"


class TestFrame:

    def test_rows_and_margin(self):
        state = GameController(ArenaConfig()).new_match()
        frame = RenderAdapter().frame(state)
        assert len(frame) == state.grid.height + 1
        assert all(row.startswith("  ") for row in frame)
        for row in frame[:-1]:
            assert len(strip_markup(row)) == 2 + state.grid.width

    def test_border_rows(self):
        state = MatchState(seed=1, grid=Grid(6, 4), agents=[])
        frame = RenderAdapter().frame(state)
        assert frame[0] == "  ╔════╗"
        assert frame[1] == "  ║    ║"
        assert frame[3] == "  ╚════╝"

    def test_trail_and_head_colored_as_one_run(self):
        agent = _make_agent(0, 1, 1, EAST)
        agent.advance(EAST)
        agent.advance(EAST)
        state = MatchState(seed=1, grid=Grid(8, 3), agents=[agent])
        row = RenderAdapter().frame(state)[1]
        assert row == "  ║{cyan}──●{/cyan}   ║"

    def test_crashed_head_marked(self):
        agent = _make_agent(0, 2, 1, EAST)
        agent.alive = False
        state = MatchState(seed=1, grid=Grid(6, 3), agents=[agent])
        frame = RenderAdapter().frame(state)
        assert "×" in frame[1]
        assert frame[-1] == "  {cyan}CYAN:×{/cyan}"

    def test_status_row(self):
        agents = [
            _make_agent(0, 1, 1, EAST),
            _make_agent(1, 3, 1, WEST, color="orange", name="ORANGE"),
        ]
        agents[1].alive = False
        assert RenderAdapter.status_row(agents) == "  {cyan}CYAN:◉{/cyan} {orange}ORANGE:×{/orange}"

    def test_corner_trail(self):
        agent = _make_agent(0, 1, 1, EAST)
        agent.advance(EAST)     # leaves (1,1) heading east
        agent.advance(SOUTH)    # leaves (2,1) turning south
        state = MatchState(seed=1, grid=Grid(6, 5), agents=[agent])
        frame = RenderAdapter().frame(state)
        assert strip_markup(frame[1]) == "  ║─┐  ║"
        assert strip_markup(frame[2]) == "  ║ ●  ║"


class TestBookends:

    def test_banner_modes(self):
        assert any("LIGHT CYCLE BATTLE ARENA" in r for r in RenderAdapter.banner(False))
        assert any("IMPOSSIBLE MODE" in r for r in RenderAdapter.banner(True))

    def test_winner_summary(self):
        agent = _make_agent(0, 2, 1, EAST)
        state = MatchState(seed=1, grid=Grid(6, 3), agents=[agent])
        state.ended, state.winner_id, state.reason = True, 0, EndReason.LAST_STANDING
        rows = RenderAdapter.summary(state, DeterministicRNG(1), precision=False)
        assert len(rows) == 5
        assert rows[1] == "  ★ {cyan}CYAN WINS!{/cyan} ★"
        assert rows[3].strip() in STANDARD_QUOTES

    def test_draw_summary(self):
        state = MatchState(seed=1, grid=Grid(6, 3), agents=[])
        state.ended, state.reason = True, EndReason.TICK_CAP
        rows = RenderAdapter.summary(state, DeterministicRNG(1), precision=True)
        assert rows[1] == "  ★ DRAW - ALL DEREZZED! ★"
        assert rows[3].strip() in PRECISION_QUOTES

    def test_quote_is_deterministic(self):
        state = MatchState(seed=1, grid=Grid(6, 3), agents=[])
        state.ended, state.tick = True, 77
        a = RenderAdapter.summary(state, DeterministicRNG(5), precision=False)
        b = RenderAdapter.summary(state, DeterministicRNG(5), precision=False)
        assert a == b


class TestDisplays:

    def test_markup_helpers(self):
        row = "  " + colorize("ab", "cyan") + "c"
        assert strip_markup(row) == "  abc"
        assert to_ansi(row) == "  \x1b[36mab\x1b[0mc"

    def test_surplus_rows_dropped(self):
        display = BufferDisplay(max_rows=3)
        handles = display.allocate(5)
        assert handles == [0, 1, 2]
        push_frame(display, handles, ["a", "b", "c", "d", "e"])
        assert display.rows == ["a", "b", "c"]

    def test_unknown_handle_ignored(self):
        display = BufferDisplay()
        display.allocate(2)
        display.update({0: "x", 9: "ignored"})
        assert display.rows == ["x", ""]

    def test_stream_prints_final_block_before_summary(self):
        out = io.StringIO()
        display = StreamDisplay(out, color=False)
        display.append(["banner"])
        handles = display.allocate(2)
        push_frame(display, handles, ["{cyan}one{/cyan}", "two"])
        push_frame(display, handles, ["three", "four"])
        display.append(["done"])
        assert out.getvalue().splitlines() == ["banner", "three", "four", "done"]
