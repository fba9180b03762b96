"""Core data models: Vector2, TrailPoint, Agent."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from lightcycle.core.enums import Turn

if TYPE_CHECKING:
    from lightcycle.core.personality import Personality


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate, also used for unit headings."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def manhattan(self, other: Vector2) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


# Screen coordinates: y grows downward.
NORTH = Vector2(0, -1)
EAST = Vector2(1, 0)
SOUTH = Vector2(0, 1)
WEST = Vector2(-1, 0)

CARDINALS = (EAST, WEST, SOUTH, NORTH)


def turn_heading(heading: Vector2, turn: Turn) -> Vector2:
    """Rotate *heading* by a relative turn. Reversal is not expressible."""
    if turn == Turn.LEFT:
        return Vector2(heading.y, -heading.x)
    if turn == Turn.RIGHT:
        return Vector2(-heading.y, heading.x)
    return heading


def is_reverse(a: Vector2, b: Vector2) -> bool:
    return a.x == -b.x and a.y == -b.y


@dataclass(frozen=True, slots=True)
class TrailPoint:
    """A vacated head cell plus the heading the agent held while on it."""

    pos: Vector2
    heading: Vector2


@dataclass(slots=True)
class Agent:
    """One light cycle. Mutated only by the GameController."""

    id: int
    name: str
    color: str
    pos: Vector2
    heading: Vector2
    personality: Personality
    glyph: str = "●"
    alive: bool = True
    controlled: bool = False
    trail: list[TrailPoint] = field(default_factory=list)

    def advance(self, heading: Vector2) -> None:
        """Leave the current cell on the trail and step one cell along *heading*."""
        self.trail.append(TrailPoint(self.pos, self.heading))
        self.heading = heading
        self.pos = self.pos + heading

    def copy(self) -> Agent:
        return Agent(
            id=self.id, name=self.name, color=self.color,
            pos=self.pos, heading=self.heading, personality=self.personality,
            glyph=self.glyph, alive=self.alive, controlled=self.controlled,
            trail=list(self.trail),
        )
