"""
Render-side view model.

Pure functions that turn simulation state into what a renderer draws: tile
backgrounds, entity draw order, the message panel and the HP bar. Nothing
here touches a window or a font, so any backend (or a test) can consume it.
"""
from __future__ import annotations

import textwrap
from dataclasses import dataclass
from typing import List, Optional

from .. import colors
from ..colors import Color
from ..combat.log import MessageLog
from ..dungeon.map import TileGrid
from ..fov.visibility import VisibilityService
from ..world.entities import Entity, EntityStore


@dataclass(frozen=True)
class PanelLine:
    row: int
    text: str
    color: Color


def tile_background(grid: TileGrid, visibility: VisibilityService) -> List[List[Optional[Color]]]:
    """Background color per cell, ``[y][x]``; None for never-explored cells."""
    out: List[List[Optional[Color]]] = [[None] * grid.width for _ in range(grid.height)]
    for x, y, tile in grid.cells():
        if not tile.explored:
            continue
        visible = visibility.is_visible(x, y)
        if tile.block_sight:
            out[y][x] = colors.WALL_LIGHT if visible else colors.WALL_DARK
        else:
            out[y][x] = colors.FLOOR_LIGHT if visible else colors.FLOOR_DARK
    return out


def draw_order(entities: EntityStore, visibility: VisibilityService) -> List[Entity]:
    """Visible entities, non-blocking first so remains render beneath the living."""
    visible = [e for e in entities if visibility.is_visible(e.x, e.y)]
    # sorted() is stable: ties keep store order.
    return sorted(visible, key=lambda e: e.blocks)


def message_lines(log: MessageLog, width: int, height: int) -> List[PanelLine]:
    """Pack the newest messages bottom-up into a ``width`` x ``height`` panel.

    Each message is word-wrapped; a message that does not fully fit stops the
    packing, as do all older ones.
    """
    if width <= 0 or height <= 0:
        return []
    lines: List[PanelLine] = []
    y = height
    for msg in log.newest_first():
        wrapped = textwrap.wrap(msg.text, width) or [""]
        y -= len(wrapped)
        if y < 0:
            break
        lines.extend(PanelLine(row=y + i, text=text, color=msg.color) for i, text in enumerate(wrapped))
    return sorted(lines, key=lambda line: line.row)


def hp_bar_width(value: int, maximum: int, total_width: int) -> int:
    if maximum <= 0:
        return 0
    return max(0, int(value / maximum * total_width))


def hp_bar_label(name: str, value: int, maximum: int) -> str:
    return f"{name}: {value}/{maximum}"


def names_under(x: int, y: int, entities: EntityStore, visibility: VisibilityService) -> str:
    """Comma-joined names of visible entities on a cell (cursor tooltip)."""
    if not visibility.is_visible(x, y):
        return ""
    return ", ".join(e.name for e in entities.at(x, y))
