from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

from .config import GameSettings
from .core.rng import RNG
from .engine.events import TurnResult
from .engine.game_state import GameState
from .input.mapping import InputMapper
from .ui.view_model import draw_order, hp_bar_label, message_lines

logger = logging.getLogger(__name__)


def render_ascii(state: GameState) -> List[str]:
    """Text frame: explored map with visible entities, then the status panel."""
    grid = state.grid
    rows = [
        [tile.glyph if tile.explored else " " for tile in (grid.tile(x, y) for x in range(grid.width))]
        for y in range(grid.height)
    ]
    for entity in draw_order(state.entities, state.visibility):
        rows[entity.y][entity.x] = entity.glyph
    lines = ["".join(r) for r in rows]

    player = state.player
    hp = player.fighter.hp if player.fighter else 0
    max_hp = player.fighter.max_hp if player.fighter else 0
    lines.append(hp_bar_label("HP", hp, max_hp))
    panel = state.settings.panel
    lines.extend(line.text for line in message_lines(state.log, panel.message_width, panel.message_height))
    return lines


def run_headless(
    settings: GameSettings,
    keys: Iterable[str] = (),
    seed: Optional[int] = None,
    out: Callable[[str], None] = print,
) -> int:
    """Play a scripted key sequence against a fresh level and print the result.

    Each item of ``keys`` is one key name (a single character works for
    letters). Returns a process exit code.
    """
    state = GameState(settings, rng=RNG(seed if seed is not None else settings.seed))
    mapper = InputMapper.default()
    taken = 0
    for key in keys:
        result = state.step(mapper.translate_key(key))
        if result is TurnResult.EXIT_REQUESTED:
            logger.info("Exit requested after %d turns", taken)
            break
        if result is TurnResult.TURN_CONSUMED:
            taken += 1

    for line in render_ascii(state):
        out(line)
    out(f"Turns taken: {taken}")
    if not state.player.alive:
        out("The hero has fallen.")
    return 0
