from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from .tiles import Tile

logger = logging.getLogger(__name__)

Point = Tuple[int, int]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle used while laying out rooms.

    Built half-open from an origin and a size (``x2 = x + w``); the interior
    that gets carved is ``x1 < x < x2`` / ``y1 < y < y2``, leaving a one-tile
    wall margin on every side.
    """

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_size(cls, x: int, y: int, w: int, h: int) -> "Rect":
        return cls(x, y, x + w, y + h)

    def center(self) -> Point:
        return ((self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2)

    def intersects(self, other: "Rect") -> bool:
        # Inclusive bounds: rooms sharing an edge count as overlapping.
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )

    def interior(self) -> Iterator[Point]:
        for x in range(self.x1 + 1, self.x2):
            for y in range(self.y1 + 1, self.y2):
                yield x, y

    def contains_interior(self, x: int, y: int) -> bool:
        return self.x1 < x < self.x2 and self.y1 < y < self.y2


class TileGrid:
    """
    Fixed-size grid of tiles for one level. Starts as solid wall; generation
    carves rooms and corridors into it. Tile access through ``tile`` is
    bounds-checked; walkability queries treat out-of-bounds as blocked.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("TileGrid width/height must be > 0")
        self.width = width
        self.height = height
        self._tiles: List[List[Tile]] = [[Tile.wall() for _ in range(width)] for _ in range(height)]

    # ---- Safety / Bounds -------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile out of bounds: ({x},{y}) not in [0,{self.width})x[0,{self.height})")
        return self._tiles[y][x]

    # ---- Query -----------------------------------------------------------
    def is_blocked(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return True
        return self._tiles[y][x].blocked

    def is_walkable(self, x: int, y: int) -> bool:
        return not self.is_blocked(x, y)

    def is_opaque(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return True
        return self._tiles[y][x].block_sight

    def cells(self) -> Iterator[Tuple[int, int, Tile]]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y, self._tiles[y][x]

    # ---- Carving helpers -------------------------------------------------
    def set_floor(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"Cannot carve out-of-bounds tile at ({x},{y})")
        self._tiles[y][x] = Tile.floor()

    def carve_room(self, room: Rect) -> None:
        for x, y in room.interior():
            self.set_floor(x, y)

    def carve_h_tunnel(self, x1: int, x2: int, y: int) -> None:
        for x in range(min(x1, x2), max(x1, x2) + 1):
            self.set_floor(x, y)

    def carve_v_tunnel(self, y1: int, y2: int, x: int) -> None:
        for y in range(min(y1, y2), max(y1, y2) + 1):
            self.set_floor(x, y)

    # ---- Discovery -------------------------------------------------------
    def mark_explored(self, x: int, y: int) -> bool:
        """Flag a tile as explored. Returns True only the first time."""
        tile = self.tile(x, y)
        if tile.explored:
            return False
        tile.explored = True
        return True

    # ---- Export ----------------------------------------------------------
    def to_str_lines(self) -> List[str]:
        return ["".join(self._tiles[y][x].glyph for x in range(self.width)) for y in range(self.height)]

    @classmethod
    def from_ascii(cls, rows: List[str], wall_chars: Tuple[str, ...] = ("#",)) -> "TileGrid":
        """Build a grid from ASCII rows for tests/tools; wall chars stay walls."""
        if not rows:
            raise ValueError("rows must not be empty")
        width = len(rows[0])
        if any(len(r) != width for r in rows):
            raise ValueError("All rows must be same width")
        grid = cls(width, len(rows))
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if ch not in wall_chars:
                    grid.set_floor(x, y)
        return grid

    def __repr__(self) -> str:
        return f"TileGrid({self.width}x{self.height})"
