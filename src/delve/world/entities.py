from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from ..colors import Color
from ..exceptions import InvariantViolation

logger = logging.getLogger(__name__)

PLAYER_ID = 0


class DeathKind(Enum):
    """Which death handler runs when a fighter's hp reaches zero."""

    PLAYER = "player"
    HOSTILE = "hostile"


class AiKind(Enum):
    """Behavior selector for non-player entities.

    Handlers are looked up in ``delve.ai``'s registry, so a new member only
    needs a registered handler.
    """

    BASIC = "basic"


@dataclass
class Fighter:
    """Combat stats. Only ``hp`` changes after creation, and only downwards."""

    max_hp: int
    hp: int
    defense: int
    power: int
    on_death: DeathKind


@dataclass
class Entity:
    """Any positioned actor in the level: the player or a hostile."""

    x: int
    y: int
    glyph: str
    color: Color
    name: str
    blocks: bool
    alive: bool = False
    fighter: Optional[Fighter] = None
    ai: Optional[AiKind] = None

    @property
    def pos(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def set_pos(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def distance(self, x: int, y: int) -> float:
        return math.hypot(x - self.x, y - self.y)

    def distance_to(self, other: "Entity") -> float:
        return self.distance(other.x, other.y)

    @property
    def is_consistent(self) -> bool:
        """``alive`` must track ``fighter is not None and fighter.hp > 0``."""
        return self.alive == (self.fighter is not None and self.fighter.hp > 0)

    def __repr__(self) -> str:
        hp = f" hp={self.fighter.hp}/{self.fighter.max_hp}" if self.fighter else ""
        return f"Entity({self.name!r}@{self.x},{self.y}{hp})"


class EntityStore:
    """Ordered, index-stable collection of every entity in a level.

    The player always occupies ``PLAYER_ID``. Entities are appended during
    generation and never removed; death mutates an entity in place, so an id
    stays valid for the lifetime of the level.
    """

    def __init__(self, player: Entity) -> None:
        self._entities: List[Entity] = [player]

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __getitem__(self, entity_id: int) -> Entity:
        self._check_id(entity_id)
        return self._entities[entity_id]

    @property
    def player(self) -> Entity:
        return self._entities[PLAYER_ID]

    def add(self, entity: Entity) -> int:
        self._entities.append(entity)
        return len(self._entities) - 1

    def ids(self) -> range:
        return range(len(self._entities))

    def _check_id(self, entity_id: int) -> None:
        if not isinstance(entity_id, int) or not 0 <= entity_id < len(self._entities):
            logger.error("Entity id %r outside live range [0, %d)", entity_id, len(self._entities))
            raise InvariantViolation(f"Entity id {entity_id!r} outside live range [0, {len(self._entities)})")

    def borrow_pair(self, first_id: int, second_id: int) -> Tuple[Entity, Entity]:
        """Return two distinct entities for an interaction that mutates both.

        The ids must differ; asking for the same entity twice is a caller bug
        and raises ``InvariantViolation`` before anything is touched.
        """
        self._check_id(first_id)
        self._check_id(second_id)
        if first_id == second_id:
            logger.error("borrow_pair called with the same id twice: %d", first_id)
            raise InvariantViolation(f"Cannot borrow entity {first_id} twice")
        return self._entities[first_id], self._entities[second_id]

    # ---- Spatial queries -------------------------------------------------
    def blocking_at(self, x: int, y: int) -> Optional[int]:
        """Id of an entity that blocks movement at (x, y), if any."""
        for entity_id, entity in enumerate(self._entities):
            if entity.blocks and entity.pos == (x, y):
                return entity_id
        return None

    def fighter_at(self, x: int, y: int, exclude: Optional[int] = None) -> Optional[int]:
        """Id of the first combat-capable entity at (x, y), skipping ``exclude``."""
        for entity_id, entity in enumerate(self._entities):
            if entity_id == exclude:
                continue
            if entity.fighter is not None and entity.pos == (x, y):
                return entity_id
        return None

    def at(self, x: int, y: int) -> List[Entity]:
        return [e for e in self._entities if e.pos == (x, y)]
