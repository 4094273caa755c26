"""RGB palette shared by entities, messages and the render view model.

Colors are plain ``(r, g, b)`` tuples so any rendering backend can consume
them directly.
"""
from typing import Tuple

Color = Tuple[int, int, int]

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)
RED: Color = (255, 0, 0)
DARK_RED: Color = (191, 0, 0)
DARKER_RED: Color = (127, 0, 0)
LIGHT_RED: Color = (255, 63, 63)
ORANGE: Color = (255, 127, 0)
LIGHT_GREY: Color = (159, 159, 159)
DESATURATED_GREEN: Color = (63, 127, 63)
DARKER_GREEN: Color = (0, 127, 0)

# Map background palette
WALL_DARK: Color = (0, 0, 100)
WALL_LIGHT: Color = (130, 110, 50)
FLOOR_DARK: Color = (50, 50, 150)
FLOOR_LIGHT: Color = (200, 180, 50)

_NAMED = {
    "black": BLACK,
    "white": WHITE,
    "red": RED,
    "dark_red": DARK_RED,
    "darker_red": DARKER_RED,
    "light_red": LIGHT_RED,
    "orange": ORANGE,
    "light_grey": LIGHT_GREY,
    "desaturated_green": DESATURATED_GREEN,
    "darker_green": DARKER_GREEN,
}


def parse_color(value) -> Color:
    """Accept a palette name or an ``[r, g, b]`` triple (as found in YAML)."""
    if isinstance(value, str):
        key = value.strip().lower()
        if key not in _NAMED:
            raise ValueError(f"Unknown color name: {value!r}")
        return _NAMED[key]
    parts = tuple(int(v) for v in value)
    if len(parts) != 3 or any(p < 0 or p > 255 for p in parts):
        raise ValueError(f"Color must be three components in 0..255: {value!r}")
    return parts  # type: ignore[return-value]
