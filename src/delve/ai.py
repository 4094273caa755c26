"""
Hostile turn policies.

Handlers are registered per ``AiKind``; ``take_turn`` dispatches on the
entity's current tag, so adding a behavior means adding an enum member and
registering a handler here.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict

from .combat.core import attack
from .combat.log import MessageLog
from .dungeon.map import TileGrid
from .dungeon.movement import move_towards
from .fov.visibility import VisibilityService
from .world.entities import PLAYER_ID, AiKind, EntityStore

logger = logging.getLogger(__name__)

MELEE_RANGE = 2.0

AiHandler = Callable[[int, EntityStore, TileGrid, VisibilityService, MessageLog], None]

_HANDLERS: Dict[AiKind, AiHandler] = {}


def register(kind: AiKind) -> Callable[[AiHandler], AiHandler]:
    def decorator(fn: AiHandler) -> AiHandler:
        _HANDLERS[kind] = fn
        return fn

    return decorator


def take_turn(
    entity_id: int,
    entities: EntityStore,
    grid: TileGrid,
    visibility: VisibilityService,
    log: MessageLog,
) -> None:
    """Run one turn for a hostile. Entities without a behavior do nothing."""
    kind = entities[entity_id].ai
    if kind is None:
        return
    handler = _HANDLERS.get(kind)
    if handler is None:
        raise LookupError(f"No AI handler registered for {kind!r}")
    handler(entity_id, entities, grid, visibility, log)


@register(AiKind.BASIC)
def basic_turn(
    entity_id: int,
    entities: EntityStore,
    grid: TileGrid,
    visibility: VisibilityService,
    log: MessageLog,
) -> None:
    """Chase the player while in view; hit them once adjacent."""
    hostile = entities[entity_id]
    if not visibility.is_visible(hostile.x, hostile.y):
        return
    player = entities.player
    if hostile.distance_to(player) >= MELEE_RANGE:
        move_towards(entity_id, player.x, player.y, grid, entities)
    elif player.fighter is not None and player.fighter.hp > 0:
        attacker, target = entities.borrow_pair(entity_id, PLAYER_ID)
        attack(attacker, target, log)
