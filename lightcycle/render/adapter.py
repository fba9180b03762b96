"""RenderAdapter — MatchState -> display rows.

Presentation only: nothing here feeds back into the simulation.  Colored
runs are wrapped in ``{color}...{/color}`` markup that the host display
understands; every row carries a two-space left margin.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lightcycle.core.enums import Domain, EndReason
from lightcycle.render.glyphs import CRASH_GLYPH, EMPTY_GLYPH, trail_glyph, wall_glyph

if TYPE_CHECKING:
    from lightcycle.core.match_state import MatchState
    from lightcycle.core.models import Agent
    from lightcycle.systems.rng import DeterministicRNG

MARGIN = "  "

STANDARD_QUOTES: tuple[str, ...] = (
    '"The Grid. A digital frontier."',
    '"I fight for the Users."',
    '"It\'s all in the wrist."',
    '"End of Line."',
    '"Greetings, Program!"',
    '"This is the game now."',
)

PRECISION_QUOTES: tuple[str, ...] = (
    '"I am the ultimate program."',
    '"Perfection is not a goal. It is my nature."',
    '"You cannot defeat what never errs."',
    '"I have calculated every possibility."',
    '"The Grid bends to my will."',
    '"Survival is not a challenge. It is a certainty."',
)

Cell = tuple[str, str | None]     # (glyph, color)


def colorize(text: str, color: str | None) -> str:
    return f"{{{color}}}{text}{{/{color}}}" if color else text


class RenderAdapter:
    """Builds arena rows, the status row, banners and the outcome summary."""

    __slots__ = ()

    # -- per tick --

    def frame(self, state: MatchState) -> list[str]:
        """Arena rows (one per grid row) followed by the status row."""
        rows = [self._encode_row(row) for row in self._cells(state)]
        rows.append(self.status_row(state.agents))
        return rows

    def frame_height(self, state: MatchState) -> int:
        return state.grid.height + 1

    @staticmethod
    def status_row(agents: list[Agent]) -> str:
        parts = [colorize(f"{a.name}:{'◉' if a.alive else '×'}", a.color) for a in agents]
        return MARGIN + " ".join(parts)

    # -- bookends --

    @staticmethod
    def banner(precision: bool) -> list[str]:
        title = (
            "  ║     ⚠ IMPOSSIBLE MODE - PERFECT AI ENABLED ⚠     ║"
            if precision
            else "  ║          LIGHT CYCLE BATTLE ARENA               ║"
        )
        return [
            "  ╔══════════════════════════════════════════════════╗",
            title,
            "  ╚══════════════════════════════════════════════════╝",
            "",
        ]

    @staticmethod
    def summary(state: MatchState, rng: DeterministicRNG, precision: bool) -> list[str]:
        """Rows appended once the match has ended."""
        winner = state.winner
        if winner is not None:
            headline = f"{MARGIN}★ {colorize(f'{winner.name} WINS!', winner.color)} ★"
        elif state.reason == EndReason.ABORTED:
            headline = f"{MARGIN}■ MATCH ABORTED ■"
        else:
            headline = f"{MARGIN}★ DRAW - ALL DEREZZED! ★"

        quotes = PRECISION_QUOTES if precision else STANDARD_QUOTES
        quote = quotes[rng.choice_index(Domain.QUOTE, 0, state.tick, len(quotes))]
        return ["", headline, "", f"{MARGIN}{quote}", ""]

    # -- internals --

    @staticmethod
    def _cells(state: MatchState) -> list[list[Cell]]:
        grid = state.grid
        w, h = grid.width, grid.height
        cells: list[list[Cell]] = [
            [
                (EMPTY_GLYPH, None) if grid.in_interior_xy(x, y) else (wall_glyph(x, y, w, h), None)
                for x in range(w)
            ]
            for y in range(h)
        ]

        for agent in state.agents:
            trail = agent.trail
            for i, point in enumerate(trail):
                if not grid.in_interior(point.pos):
                    continue
                outgoing = trail[i + 1].heading if i + 1 < len(trail) else agent.heading
                cells[point.pos.y][point.pos.x] = (trail_glyph(point.heading, outgoing), agent.color)

        # Heads last so they sit on top of any trail they crashed into
        for agent in state.agents:
            if grid.in_interior(agent.pos):
                glyph = agent.glyph if agent.alive else CRASH_GLYPH
                cells[agent.pos.y][agent.pos.x] = (glyph, agent.color)

        return cells

    @staticmethod
    def _encode_row(row: list[Cell]) -> str:
        """Join glyphs, wrapping each same-color run once."""
        out: list[str] = [MARGIN]
        run: list[str] = []
        run_color: str | None = None
        for glyph, color in row:
            if color != run_color and run:
                out.append(colorize("".join(run), run_color))
                run = []
            run_color = color
            run.append(glyph)
        if run:
            out.append(colorize("".join(run), run_color))
        return "".join(out)
