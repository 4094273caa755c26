"""
Dungeon systems for delve.

Contains the tile grid, room rectangles, the rejection-sampling level
generator with room population, and movement helpers.
"""
from .generator import Corridor, DungeonGenerator, GeneratedLevel, generate_level, populate_room
from .map import Point, Rect, TileGrid
from .movement import is_blocked, move_by, move_towards, player_move_or_attack
from .tiles import Tile

__all__ = [
    "Corridor",
    "DungeonGenerator",
    "GeneratedLevel",
    "Point",
    "Rect",
    "Tile",
    "TileGrid",
    "generate_level",
    "is_blocked",
    "move_by",
    "move_towards",
    "player_move_or_attack",
    "populate_room",
]
