"""
Input boundary for delve.

Exposes:
- Intent: the discrete per-frame intents the simulation understands.
- InputMapper: rebindable mapping from physical keys to intents.
"""
from .actions import Intent
from .mapping import InputMapper

__all__ = [
    "Intent",
    "InputMapper",
]
