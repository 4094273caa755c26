from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..combat.core import attack
from ..combat.log import MessageLog
from ..world.entities import PLAYER_ID, EntityStore
from .map import TileGrid

logger = logging.getLogger(__name__)


def is_blocked(x: int, y: int, grid: TileGrid, entities: EntityStore) -> bool:
    """A cell is blocked by terrain (or being off-map) or by a blocking entity."""
    if grid.is_blocked(x, y):
        return True
    return entities.blocking_at(x, y) is not None


def move_by(entity_id: int, dx: int, dy: int, grid: TileGrid, entities: EntityStore) -> bool:
    """Step an entity by (dx, dy) unless the target cell is blocked.

    Returns True if the entity moved. Blocked moves are a silent no-op.
    """
    entity = entities[entity_id]
    tx, ty = entity.x + dx, entity.y + dy
    if is_blocked(tx, ty, grid, entities):
        logger.debug("Blocked move of %s by (%d, %d)", entity.name, dx, dy)
        return False
    entity.set_pos(tx, ty)
    return True


def step_towards(from_x: int, from_y: int, to_x: int, to_y: int) -> tuple[int, int]:
    """Unit direction to a target, rounded per axis (may be diagonal)."""
    dx = to_x - from_x
    dy = to_y - from_y
    distance = math.hypot(dx, dy)
    if distance == 0:
        return 0, 0
    return _round_half_away(dx / distance), _round_half_away(dy / distance)


def _round_half_away(value: float) -> int:
    return int(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)


def move_towards(entity_id: int, target_x: int, target_y: int, grid: TileGrid, entities: EntityStore) -> bool:
    entity = entities[entity_id]
    dx, dy = step_towards(entity.x, entity.y, target_x, target_y)
    if dx == 0 and dy == 0:
        return False
    return move_by(entity_id, dx, dy, grid, entities)


@dataclass
class PlayerActionResult:
    moved: bool = False
    target_id: Optional[int] = None
    damage: int = 0

    @property
    def attacked(self) -> bool:
        return self.target_id is not None


def player_move_or_attack(dx: int, dy: int, grid: TileGrid, entities: EntityStore, log: MessageLog) -> PlayerActionResult:
    """Attack whatever fighter stands in the target cell, otherwise try to move there."""
    player = entities.player
    x, y = player.x + dx, player.y + dy
    target_id = entities.fighter_at(x, y, exclude=PLAYER_ID)
    if target_id is not None:
        hero, target = entities.borrow_pair(PLAYER_ID, target_id)
        damage = attack(hero, target, log)
        return PlayerActionResult(target_id=target_id, damage=damage)
    return PlayerActionResult(moved=move_by(PLAYER_ID, dx, dy, grid, entities))
