import pytest

from conftest import make_hero, make_hostile, open_grid
from delve.config import HostileArchetype
from delve.core.rng import RNG
from delve.dungeon.generator import populate_room
from delve.dungeon.map import Rect
from delve.exceptions import ConfigError
from delve.world.entities import AiKind, DeathKind, EntityStore

OFFICER = HostileArchetype("police officer", "o", (63, 127, 63), hp=10, defense=0, power=3, weight=0.8)
SOLDIER = HostileArchetype("army soldier", "a", (0, 127, 0), hp=15, defense=1, power=4, weight=0.2)
ROOM = Rect(0, 0, 11, 11)


def test_count_never_exceeds_max():
    for seed in range(20):
        store = EntityStore(make_hero(0, 0))
        placed = populate_room(ROOM, open_grid(), store, RNG(seed), 3, [OFFICER, SOLDIER])
        assert len(placed) <= 3
        assert len(store) == 1 + len(placed)


def test_zero_max_places_nothing():
    store = EntityStore(make_hero())
    assert populate_room(ROOM, open_grid(), store, RNG(1), 0, [OFFICER]) == []
    assert len(store) == 1


def test_spawned_hostiles_are_alive_and_chasing():
    store = EntityStore(make_hero(0, 0))
    placed = []
    seed = 0
    while not placed:
        placed = populate_room(ROOM, open_grid(), store, RNG(seed), 3, [OFFICER, SOLDIER])
        seed += 1
    for hostile_id in placed:
        hostile = store[hostile_id]
        assert hostile.alive and hostile.blocks
        assert hostile.ai is AiKind.BASIC
        assert hostile.fighter.on_death is DeathKind.HOSTILE
        assert hostile.fighter.hp == hostile.fighter.max_hp
        assert ROOM.contains_interior(hostile.x, hostile.y)


def test_zero_weight_archetype_is_never_rolled():
    never = HostileArchetype("dragon", "D", (255, 0, 0), hp=99, defense=9, power=9, weight=0.0)
    for seed in range(30):
        store = EntityStore(make_hero(0, 0))
        populate_room(ROOM, open_grid(), store, RNG(seed), 3, [never, OFFICER])
        assert all(e.name != "dragon" for e in store)


def test_blocked_cells_are_skipped_not_rerolled():
    # Only one interior cell, already occupied: every placement is skipped.
    room = Rect(0, 0, 2, 2)
    grid = open_grid(3, 3)
    store = EntityStore(make_hero(0, 0))
    store.add(make_hostile(1, 1))
    for seed in range(10):
        assert populate_room(room, grid, store, RNG(seed), 3, [OFFICER]) == []
    assert len(store) == 2


def test_missing_archetypes_raise_when_hostiles_are_due():
    store = EntityStore(make_hero(0, 0))
    rng = RNG(0)
    with pytest.raises(ConfigError):
        # Loop until a non-zero count is rolled
        for _ in range(50):
            populate_room(ROOM, open_grid(), store, rng, 3, [])


def test_weighted_choice_validation():
    rng = RNG(1)
    with pytest.raises(IndexError):
        rng.weighted_choice([], [])
    with pytest.raises(ValueError):
        rng.weighted_choice([1, 2], [1.0])
    with pytest.raises(ValueError):
        rng.weighted_choice([1, 2], [0.0, 0.0])
    assert rng.weighted_choice(["only"], [1.0]) == "only"



def test_same_seed_same_draws():
    a, b = RNG(42), RNG(42)
    assert [a.randint(0, 100) for _ in range(5)] == [b.randint(0, 100) for _ in range(5)]
    assert [a.coin_flip() for _ in range(8)] == [b.coin_flip() for _ in range(8)]
