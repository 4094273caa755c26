from __future__ import annotations

from enum import Enum, auto
from typing import Optional, Tuple


class Intent(Enum):
    """One discrete player intent per polled frame.

    The simulation only ever sees these; mapping from physical keys happens
    in ``InputMapper``.
    """

    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    TOGGLE_FULLSCREEN = auto()
    EXIT = auto()
    NONE = auto()

    @property
    def direction(self) -> Optional[Tuple[int, int]]:
        return _DIRECTIONS.get(self)


_DIRECTIONS = {
    Intent.MOVE_UP: (0, -1),
    Intent.MOVE_DOWN: (0, 1),
    Intent.MOVE_LEFT: (-1, 0),
    Intent.MOVE_RIGHT: (1, 0),
}


__all__ = ["Intent"]
