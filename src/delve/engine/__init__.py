from .events import GameEvent, TurnResult
from .game_state import GameState, default_visibility

__all__ = [
    "GameEvent",
    "GameState",
    "TurnResult",
    "default_visibility",
]
