"""Box-drawing glyph selection for walls and trails."""

from __future__ import annotations

from lightcycle.core.models import Vector2

HEAD_GLYPH = "●"
CRASH_GLYPH = "×"
EMPTY_GLYPH = " "
JUNCTION_GLYPH = "┼"

# Which sides of a cell a trail segment touches -> glyph
_SIDE_GLYPHS: dict[frozenset[str], str] = {
    frozenset({"L", "R"}): "─",
    frozenset({"U", "D"}): "│",
    frozenset({"L", "U"}): "┘",
    frozenset({"L", "D"}): "┐",
    frozenset({"R", "U"}): "└",
    frozenset({"R", "D"}): "┌",
}


def _side(v: Vector2) -> str:
    if v.x < 0:
        return "L"
    if v.x > 0:
        return "R"
    if v.y < 0:
        return "U"
    return "D"


def trail_glyph(incoming: Vector2, outgoing: Vector2) -> str:
    """Glyph for a trail cell entered along *incoming* and left along *outgoing*.

    The segment touches the side it came in from (opposite *incoming*) and
    the side it leaves through.
    """
    sides = frozenset({_side(-incoming), _side(outgoing)})
    return _SIDE_GLYPHS.get(sides, JUNCTION_GLYPH)


def wall_glyph(x: int, y: int, width: int, height: int) -> str:
    """Double-line frame glyph for a border cell."""
    top, bottom = y == 0, y == height - 1
    left, right = x == 0, x == width - 1
    if top:
        return "╔" if left else "╗" if right else "═"
    if bottom:
        return "╚" if left else "╝" if right else "═"
    return "║"
