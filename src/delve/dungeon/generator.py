from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..config import DungeonSettings, HostileArchetype
from ..core.rng import RNG
from ..exceptions import ConfigError
from ..world.entities import EntityStore
from ..world.factory import make_hostile
from .map import Point, Rect, TileGrid
from .movement import is_blocked

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Corridor:
    """An L-shaped tunnel between two room centres."""

    start: Point
    end: Point
    horizontal_first: bool

    def cells(self) -> List[Point]:
        (x1, y1), (x2, y2) = self.start, self.end
        out: List[Point] = []
        if self.horizontal_first:
            out.extend((x, y1) for x in _span(x1, x2))
            out.extend((x2, y) for y in _span(y1, y2))
        else:
            out.extend((x1, y) for y in _span(y1, y2))
            out.extend((x, y2) for x in _span(x1, x2))
        return out


def _span(a: int, b: int) -> range:
    return range(min(a, b), max(a, b) + 1)


@dataclass
class GeneratedLevel:
    grid: TileGrid
    rooms: List[Rect]
    player_spawn: Point
    hostile_ids: List[int] = field(default_factory=list)
    corridors: List[Corridor] = field(default_factory=list)
    fallback_room: bool = False


class DungeonGenerator:
    """
    Rooms + corridors generator using rejection sampling.

    Each of ``max_rooms`` attempts samples one room; a candidate that overlaps
    an accepted room is discarded without retry. Every accepted room after the
    first is tunnelled to the previously accepted one, so rooms form a single
    path. All randomness comes from the RNG handed in, so a seeded RNG gives
    a reproducible level.
    """

    def __init__(self, settings: DungeonSettings, archetypes: Sequence[HostileArchetype], rng: RNG) -> None:
        if settings.room_max_size >= settings.width or settings.room_max_size >= settings.height:
            raise ConfigError("Rooms must be smaller than the map in both dimensions")
        if settings.room_min_size > settings.room_max_size:
            raise ConfigError("room_min_size must not exceed room_max_size")
        if settings.room_min_size < 2:
            # Anything smaller has no floor inside its wall margin.
            raise ConfigError("room_min_size must be at least 2")
        self.settings = settings
        self.archetypes = list(archetypes)
        self.rng = rng

    def generate(self, entities: EntityStore) -> GeneratedLevel:
        """Carve a new level and add its hostiles to ``entities``.

        The player (slot 0 of ``entities``) is moved to the centre of the first
        accepted room.
        """
        s = self.settings
        grid = TileGrid(s.width, s.height)
        level = GeneratedLevel(grid=grid, rooms=[], player_spawn=(0, 0))
        logger.debug("Generating level %dx%d with up to %d rooms", s.width, s.height, s.max_rooms)

        for _ in range(s.max_rooms):
            room = self._sample_room()
            if any(room.intersects(other) for other in level.rooms):
                logger.debug("Rejected room %s (overlap)", room)
                continue
            self._accept(room, level, entities)

        if not level.rooms:
            room = self._fallback_room()
            logger.warning("All %d room candidates rejected; placing fallback room %s", s.max_rooms, room)
            level.fallback_room = True
            self._accept(room, level, entities)

        logger.info(
            "Generated level: %d rooms, %d hostiles, spawn at %s",
            len(level.rooms),
            len(level.hostile_ids),
            level.player_spawn,
        )
        return level

    def _sample_room(self) -> Rect:
        s = self.settings
        w = self.rng.randint(s.room_min_size, s.room_max_size)
        h = self.rng.randint(s.room_min_size, s.room_max_size)
        x = self.rng.randint(0, s.width - w - 1)
        y = self.rng.randint(0, s.height - h - 1)
        return Rect.from_size(x, y, w, h)

    def _fallback_room(self) -> Rect:
        s = self.settings
        size = s.room_min_size
        return Rect.from_size((s.width - size) // 2, (s.height - size) // 2, size, size)

    def _accept(self, room: Rect, level: GeneratedLevel, entities: EntityStore) -> None:
        grid = level.grid
        grid.carve_room(room)
        center = room.center()
        if not level.rooms:
            level.player_spawn = center
            entities.player.set_pos(*center)
        else:
            corridor = Corridor(level.rooms[-1].center(), center, self.rng.coin_flip())
            self._carve_corridor(grid, corridor)
            level.corridors.append(corridor)
        level.rooms.append(room)
        level.hostile_ids.extend(
            populate_room(room, grid, entities, self.rng, self.settings.max_room_hostiles, self.archetypes)
        )

    @staticmethod
    def _carve_corridor(grid: TileGrid, corridor: Corridor) -> None:
        (x1, y1), (x2, y2) = corridor.start, corridor.end
        if corridor.horizontal_first:
            grid.carve_h_tunnel(x1, x2, y1)
            grid.carve_v_tunnel(y1, y2, x2)
        else:
            grid.carve_v_tunnel(y1, y2, x1)
            grid.carve_h_tunnel(x1, x2, y2)


def populate_room(
    room: Rect,
    grid: TileGrid,
    entities: EntityStore,
    rng: RNG,
    max_hostiles: int,
    archetypes: Sequence[HostileArchetype],
) -> List[int]:
    """Drop up to ``max_hostiles`` hostiles inside a room; returns their ids.

    A sampled cell that is already blocked is skipped, not re-rolled.
    """
    count = rng.randint(0, max_hostiles) if max_hostiles > 0 else 0
    placed: List[int] = []
    if count and not archetypes:
        raise ConfigError("populate_room needs at least one hostile archetype")
    weights = [a.weight for a in archetypes]
    for _ in range(count):
        x = rng.randint(room.x1 + 1, room.x2 - 1)
        y = rng.randint(room.y1 + 1, room.y2 - 1)
        if is_blocked(x, y, grid, entities):
            logger.debug("Skipped hostile placement at (%d,%d): blocked", x, y)
            continue
        archetype = rng.weighted_choice(archetypes, weights)
        placed.append(entities.add(make_hostile(archetype, x, y)))
    return placed


def generate_level(
    settings: DungeonSettings,
    archetypes: Sequence[HostileArchetype],
    entities: EntityStore,
    rng: Optional[RNG] = None,
) -> GeneratedLevel:
    """Convenience wrapper: one-shot generation with a fresh generator."""
    return DungeonGenerator(settings, archetypes, rng or RNG()).generate(entities)


__all__ = [
    "Corridor",
    "DungeonGenerator",
    "GeneratedLevel",
    "generate_level",
    "populate_room",
]

