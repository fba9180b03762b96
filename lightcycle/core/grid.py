"""Arena bounds: a rectangle whose outer ring is permanent wall."""

from __future__ import annotations

from lightcycle.core.models import Vector2


class Grid:
    """Static arena geometry. Occupancy lives in the Snapshot."""

    __slots__ = ("width", "height")

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    # -- access --

    def in_bounds(self, pos: Vector2) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def is_wall(self, pos: Vector2) -> bool:
        return not self.in_interior_xy(pos.x, pos.y)

    def in_interior(self, pos: Vector2) -> bool:
        return self.in_interior_xy(pos.x, pos.y)

    # -- fast raw-coordinate access (no Vector2 alloc, for hot loops) --

    def in_interior_xy(self, x: int, y: int) -> bool:
        return 0 < x < self.width - 1 and 0 < y < self.height - 1

    @property
    def interior_cells(self) -> int:
        return (self.width - 2) * (self.height - 2)

    def center_distance(self, x: int, y: int) -> float:
        """Manhattan distance from (x, y) to the arena's geometric center."""
        return abs(x - self.width / 2) + abs(y - self.height / 2)

    def border(self) -> list[Vector2]:
        """Every wall cell, row by row."""
        return [
            Vector2(x, y)
            for y in range(self.height)
            for x in range(self.width)
            if not self.in_interior_xy(x, y)
        ]
