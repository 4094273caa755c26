from __future__ import annotations

import logging
from typing import List, Protocol, Set, Tuple

from ..dungeon.map import TileGrid

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class VisibilityService(Protocol):
    """What the simulation needs from a field-of-view provider."""

    def is_visible(self, x: int, y: int) -> bool: ...


class TransparencyMap:
    """
    Per-cell ``(opaque, walkable)`` flags handed to a visibility service.

    Built once after generation; the terrain does not change afterwards.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("TransparencyMap width/height must be > 0")
        self.width = width
        self.height = height
        self._opaque: List[List[bool]] = [[True] * width for _ in range(height)]
        self._walkable: List[List[bool]] = [[False] * width for _ in range(height)]

    @classmethod
    def from_grid(cls, grid: TileGrid) -> "TransparencyMap":
        tmap = cls(grid.width, grid.height)
        for x, y, _tile in grid.cells():
            tmap.set(x, y, opaque=grid.is_opaque(x, y), walkable=grid.is_walkable(x, y))
        logger.debug("TransparencyMap built from %r", grid)
        return tmap

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set(self, x: int, y: int, *, opaque: bool, walkable: bool) -> None:
        if not self.in_bounds(x, y):
            raise IndexError("Tile out of bounds")
        self._opaque[y][x] = opaque
        self._walkable[y][x] = walkable

    def is_opaque(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return True
        return self._opaque[y][x]

    def is_walkable(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return self._walkable[y][x]


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> List[Coord]:
    """Points from (x0, y0) to (x1, y1) inclusive."""
    points: List[Coord] = []

    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    x, y = x0, y0
    while True:
        points.append((x, y))
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy

    return points


class LineOfSightVisibility:
    """
    Reference visibility service: circular radius, Bresenham line of sight.

    Every intermediate cell on the line must be transparent. With
    ``light_walls`` the opaque cell that stops a line is itself visible, so
    room walls light up. ``radius == 0`` means unlimited range.
    """

    def __init__(self, tmap: TransparencyMap, radius: int = 8, light_walls: bool = True) -> None:
        if radius < 0:
            raise ValueError("radius must be >= 0")
        self.tmap = tmap
        self.radius = radius
        self.light_walls = light_walls
        self._visible: Set[Coord] = set()
        self.origin: Coord | None = None

    def compute(self, ox: int, oy: int) -> Set[Coord]:
        if not self.tmap.in_bounds(ox, oy):
            raise ValueError("Origin out of bounds")
        visible: Set[Coord] = {(ox, oy)}
        r = self.radius
        if r:
            min_x, max_x = max(0, ox - r), min(self.tmap.width - 1, ox + r)
            min_y, max_y = max(0, oy - r), min(self.tmap.height - 1, oy + r)
        else:
            min_x, max_x, min_y, max_y = 0, self.tmap.width - 1, 0, self.tmap.height - 1

        for y in range(min_y, max_y + 1):
            for x in range(min_x, max_x + 1):
                if (x, y) == (ox, oy):
                    continue
                if r and (x - ox) ** 2 + (y - oy) ** 2 > r * r:
                    continue
                if self._line_clear(ox, oy, x, y):
                    visible.add((x, y))

        self._visible = visible
        self.origin = (ox, oy)
        logger.debug("FOV from (%d,%d) radius %d -> %d visible tiles", ox, oy, r, len(visible))
        return set(visible)

    def _line_clear(self, x0: int, y0: int, x1: int, y1: int) -> bool:
        line = bresenham_line(x0, y0, x1, y1)
        for x, y in line[1:-1]:
            if self.tmap.is_opaque(x, y):
                return False
        if not self.light_walls and self.tmap.is_opaque(x1, y1):
            return False
        return True

    def is_visible(self, x: int, y: int) -> bool:
        return (x, y) in self._visible
