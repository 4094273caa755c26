from .entities import PLAYER_ID, AiKind, DeathKind, Entity, EntityStore, Fighter
from .factory import make_hostile, make_player

__all__ = [
    "PLAYER_ID",
    "AiKind",
    "DeathKind",
    "Entity",
    "EntityStore",
    "Fighter",
    "make_hostile",
    "make_player",
]
