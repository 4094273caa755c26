from enum import Enum, auto


class GameEvent(Enum):
    """Events emitted by GameState to notify UI or systems."""

    PLAYER_MOVED = auto()
    PLAYER_ATTACKED = auto()
    PLAYER_DIED = auto()
    FULLSCREEN_TOGGLED = auto()
    TURN_ENDED = auto()


class TurnResult(Enum):
    """What the player's input did to the turn clock."""

    TURN_CONSUMED = auto()
    TURN_NOT_CONSUMED = auto()
    EXIT_REQUESTED = auto()
