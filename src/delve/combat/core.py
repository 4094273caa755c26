"""
Melee resolution and the entity death state machine.

    Alive --(hp drops to <= 0)--> Dead

Dead is terminal. A dead player keeps its slot and fighter so the run can
report the final state; a dead hostile becomes inert, non-blocking remains.
"""
from __future__ import annotations

import logging

from .. import colors
from ..exceptions import InvariantViolation
from ..world.entities import DeathKind, Entity
from .log import MessageLog, Severity

logger = logging.getLogger(__name__)

CORPSE_GLYPH = "%"


def compute_damage(attacker: Entity, defender: Entity) -> int:
    """``power - defense``, floored at zero. A missing fighter counts as 0."""
    power = attacker.fighter.power if attacker.fighter else 0
    defense = defender.fighter.defense if defender.fighter else 0
    return max(0, power - defense)


def attack(attacker: Entity, defender: Entity, log: MessageLog) -> int:
    """Resolve one melee attack. Returns the damage dealt (0 for no effect)."""
    if attacker is defender:
        logger.error("%s attempted to attack itself", attacker.name)
        raise InvariantViolation(f"{attacker.name} cannot attack itself")
    damage = compute_damage(attacker, defender)
    if damage > 0:
        log.add(f"{attacker.name} attacks {defender.name} for {damage} hit points", Severity.INFO)
        take_damage(defender, damage, log)
    else:
        log.add(f"{attacker.name} attacks {defender.name} but it has no effect", Severity.INFO)
    return damage


def take_damage(entity: Entity, amount: int, log: MessageLog) -> bool:
    """Apply damage and run the death transition if hp crosses zero.

    Non-positive amounts leave hp untouched. Returns True when this call
    killed the entity.
    """
    fighter = entity.fighter
    if fighter is None:
        return False
    if amount > 0:
        fighter.hp -= amount
        logger.debug("%s takes %d damage (hp=%d/%d)", entity.name, amount, fighter.hp, fighter.max_hp)
    if fighter.hp <= 0 and entity.alive:
        entity.alive = False
        _on_death(entity, fighter.on_death, log)
        return True
    return False


def _on_death(entity: Entity, kind: DeathKind, log: MessageLog) -> None:
    if kind is DeathKind.PLAYER:
        _player_death(entity, log)
    elif kind is DeathKind.HOSTILE:
        _hostile_death(entity, log)
    else:  # pragma: no cover - enum is closed
        raise ValueError(f"Unknown death kind: {kind!r}")


def _player_death(player: Entity, log: MessageLog) -> None:
    log.add("you died", Severity.DANGER)
    player.glyph = CORPSE_GLYPH
    player.color = colors.DARK_RED
    logger.info("Player died at %s", player.pos)


def _hostile_death(hostile: Entity, log: MessageLog) -> None:
    log.add(f"{hostile.name} is dead", Severity.WARNING)
    logger.info("%s died at %s", hostile.name, hostile.pos)
    hostile.glyph = CORPSE_GLYPH
    hostile.color = colors.DARK_RED
    hostile.blocks = False
    hostile.fighter = None
    hostile.ai = None
    hostile.name = f"remains of {hostile.name}"
