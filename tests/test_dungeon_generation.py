from dataclasses import replace

import pytest

from conftest import make_hero
from delve.config import DungeonSettings
from delve.core.rng import RNG
from delve.dungeon.generator import Corridor, DungeonGenerator, generate_level
from delve.dungeon.map import Rect
from delve.exceptions import ConfigError
from delve.world.entities import PLAYER_ID, EntityStore


def _generate(settings, seed=123, dungeon=None):
    store = EntityStore(make_hero(0, 0))
    level = generate_level(dungeon or settings.dungeon, settings.hostiles, store, RNG(seed))
    return level, store


def test_rooms_never_overlap(settings):
    for seed in (1, 2, 3, 99):
        level, _ = _generate(settings, seed=seed)
        rooms = level.rooms
        assert 1 <= len(rooms) <= settings.dungeon.max_rooms
        for i, a in enumerate(rooms):
            for b in rooms[i + 1:]:
                assert not a.intersects(b)


def test_room_interiors_and_corridors_are_walkable(settings):
    for seed in (1, 2, 3, 99, 123):
        level, _ = _generate(settings, seed=seed)
        grid = level.grid
        for room in level.rooms:
            for x, y in room.interior():
                assert grid.is_walkable(x, y)
        assert len(level.corridors) == len(level.rooms) - 1
        for corridor in level.corridors:
            for x, y in corridor.cells():
                assert grid.is_walkable(x, y)


def test_map_border_stays_wall(settings):
    level, _ = _generate(settings, seed=7)
    grid = level.grid
    for x in range(grid.width):
        assert grid.is_blocked(x, 0)
        assert grid.is_blocked(x, grid.height - 1)
    for y in range(grid.height):
        assert grid.is_blocked(0, y)
        assert grid.is_blocked(grid.width - 1, y)


def test_player_spawns_at_first_room_center(settings):
    level, store = _generate(settings)
    assert level.player_spawn == level.rooms[0].center()
    assert store[PLAYER_ID].pos == level.player_spawn


def test_corridors_link_consecutive_rooms(settings):
    level, _ = _generate(settings)
    for prev, room, corridor in zip(level.rooms, level.rooms[1:], level.corridors):
        assert corridor.start == prev.center()
        assert corridor.end == room.center()


def test_hostiles_inside_rooms_and_off_the_player(settings):
    level, store = _generate(settings, seed=5)
    player = store.player
    positions = set()
    for hostile_id in level.hostile_ids:
        hostile = store[hostile_id]
        assert hostile.alive
        assert any(room.contains_interior(hostile.x, hostile.y) for room in level.rooms)
        assert hostile.pos != player.pos
        positions.add(hostile.pos)
    # Blocking entities never share a cell
    assert len(positions) == len(level.hostile_ids)


def test_same_seed_same_level(settings):
    a, store_a = _generate(settings, seed=2024)
    b, store_b = _generate(settings, seed=2024)
    assert a.grid.to_str_lines() == b.grid.to_str_lines()
    assert a.rooms == b.rooms
    assert [e.pos for e in store_a] == [e.pos for e in store_b]
    assert [e.name for e in store_a] == [e.name for e in store_b]


def test_zero_attempts_places_fallback_room(settings):
    dungeon = replace(settings.dungeon, max_rooms=0)
    level, store = _generate(settings, dungeon=dungeon)
    assert level.fallback_room is True
    assert len(level.rooms) == 1
    assert level.corridors == []
    assert store.player.pos == level.rooms[0].center()
    assert level.grid.is_walkable(*store.player.pos)


def test_generator_rejects_rooms_larger_than_map(settings):
    with pytest.raises(ConfigError):
        DungeonGenerator(DungeonSettings(width=10, height=30, room_max_size=10), settings.hostiles, RNG(1))
    with pytest.raises(ConfigError):
        DungeonGenerator(DungeonSettings(room_min_size=8, room_max_size=6), settings.hostiles, RNG(1))
    with pytest.raises(ConfigError):
        DungeonGenerator(DungeonSettings(room_min_size=1), settings.hostiles, RNG(1))


def test_corridor_cells_horizontal_first():
    corridor = Corridor((1, 1), (3, 4), horizontal_first=True)
    cells = corridor.cells()
    assert cells[:3] == [(1, 1), (2, 1), (3, 1)]
    assert (3, 4) in cells
    assert (1, 4) not in cells


def test_corridor_cells_vertical_first():
    corridor = Corridor((3, 4), (1, 1), horizontal_first=False)
    cells = corridor.cells()
    assert (3, 1) in cells and (2, 1) in cells and (1, 1) in cells
    assert (1, 4) not in cells


def test_rect_geometry():
    room = Rect.from_size(2, 3, 4, 6)
    assert (room.x2, room.y2) == (6, 9)
    assert room.center() == (4, 6)
    assert room.intersects(Rect.from_size(6, 9, 2, 2))
    assert not room.intersects(Rect.from_size(7, 3, 2, 2))
