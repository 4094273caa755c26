from .core import attack, compute_damage, take_damage
from .log import Message, MessageLog, Severity

__all__ = [
    "Message",
    "MessageLog",
    "Severity",
    "attack",
    "compute_damage",
    "take_damage",
]
