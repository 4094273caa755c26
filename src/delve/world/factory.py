from __future__ import annotations

import logging

from ..config import HostileArchetype, PlayerTemplate
from .entities import AiKind, DeathKind, Entity, Fighter

logger = logging.getLogger(__name__)


def make_player(template: PlayerTemplate, x: int = 0, y: int = 0) -> Entity:
    """Build the player entity; it starts alive with the player death handler."""
    return Entity(
        x=x,
        y=y,
        glyph=template.glyph,
        color=template.color,
        name=template.name,
        blocks=True,
        alive=True,
        fighter=Fighter(
            max_hp=template.hp,
            hp=template.hp,
            defense=template.defense,
            power=template.power,
            on_death=DeathKind.PLAYER,
        ),
    )


def make_hostile(archetype: HostileArchetype, x: int, y: int) -> Entity:
    """Build a hostile from an archetype. Hostiles are born alive and chasing."""
    logger.debug("Spawning %s at (%d,%d)", archetype.name, x, y)
    return Entity(
        x=x,
        y=y,
        glyph=archetype.glyph,
        color=archetype.color,
        name=archetype.name,
        blocks=True,
        alive=True,
        fighter=Fighter(
            max_hp=archetype.hp,
            hp=archetype.hp,
            defense=archetype.defense,
            power=archetype.power,
            on_death=DeathKind.HOSTILE,
        ),
        ai=AiKind.BASIC,
    )
