from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Tile:
    """A single map cell.

    - blocked: movement cannot enter the cell
    - block_sight: the cell is opaque to the visibility service
    - explored: set the first time the cell is seen; never cleared
    """

    blocked: bool
    block_sight: bool
    explored: bool = False

    @classmethod
    def floor(cls) -> "Tile":
        return cls(blocked=False, block_sight=False)

    @classmethod
    def wall(cls) -> "Tile":
        return cls(blocked=True, block_sight=True)

    @property
    def glyph(self) -> str:
        """A single-character visualization useful for logs/debug."""
        return "#" if self.blocked else "."
