import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from delve.combat.log import MessageLog  # noqa: E402
from delve.config import load_settings  # noqa: E402
from delve.dungeon.map import Rect, TileGrid  # noqa: E402
from delve.world.entities import AiKind, DeathKind, Entity, EntityStore, Fighter  # noqa: E402


class StaticVisibility:
    """Stand-in for the external visibility service.

    Either everything is visible, or only an explicit set of cells.
    """

    def __init__(self, cells=None, everything=False, width=0, height=0):
        self.cells = set(cells or ())
        self.everything = everything
        self.width = width
        self.height = height
        self.computed_from = []

    def compute(self, x, y):
        self.computed_from.append((x, y))
        if self.everything:
            return {(cx, cy) for cy in range(self.height) for cx in range(self.width)}
        return set(self.cells)

    def is_visible(self, x, y):
        return self.everything or (x, y) in self.cells


def make_hero(x=5, y=5, hp=30, defense=2, power=5):
    return Entity(
        x=x,
        y=y,
        glyph="@",
        color=(255, 255, 255),
        name="hero",
        blocks=True,
        alive=True,
        fighter=Fighter(max_hp=hp, hp=hp, defense=defense, power=power, on_death=DeathKind.PLAYER),
    )


def make_hostile(x, y, name="orc", hp=10, defense=0, power=3):
    return Entity(
        x=x,
        y=y,
        glyph="o",
        color=(63, 127, 63),
        name=name,
        blocks=True,
        alive=True,
        fighter=Fighter(max_hp=hp, hp=hp, defense=defense, power=power, on_death=DeathKind.HOSTILE),
        ai=AiKind.BASIC,
    )


def open_grid(width=12, height=12):
    """A single room whose floor spans (1,1)..(width-2,height-2)."""
    grid = TileGrid(width, height)
    grid.carve_room(Rect(0, 0, width - 1, height - 1))
    return grid


@pytest.fixture
def grid():
    return open_grid()


@pytest.fixture
def log():
    return MessageLog()


@pytest.fixture
def store():
    return EntityStore(make_hero())


@pytest.fixture
def settings():
    # Empty env so a developer's DELVE_* variables never leak into tests
    return load_settings(env={})
