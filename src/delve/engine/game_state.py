from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol, Tuple

from .. import ai
from ..combat.log import MessageLog, Severity
from ..config import GameSettings
from ..core.rng import RNG
from ..dungeon.generator import DungeonGenerator, GeneratedLevel
from ..dungeon.map import TileGrid
from ..dungeon.movement import player_move_or_attack
from ..fov.visibility import LineOfSightVisibility, TransparencyMap
from ..input.actions import Intent
from ..world.entities import Entity, EntityStore
from ..world.factory import make_player
from .events import GameEvent, TurnResult

logger = logging.getLogger(__name__)


class RecomputingVisibility(Protocol):
    """A visibility service the orchestrator can ask to recompute."""

    def compute(self, x: int, y: int): ...

    def is_visible(self, x: int, y: int) -> bool: ...


VisibilityFactory = Callable[[TransparencyMap, GameSettings], RecomputingVisibility]


def default_visibility(tmap: TransparencyMap, settings: GameSettings) -> RecomputingVisibility:
    return LineOfSightVisibility(tmap, radius=settings.fov.radius, light_walls=settings.fov.light_walls)


class GameState:
    """Holds one level and runs its turns.

    A turn is: resolve the player's intent completely, then, if that consumed
    a turn and the player is still alive, give every entity with a behavior
    one AI turn in ascending id order.
    """

    def __init__(
        self,
        settings: GameSettings,
        rng: Optional[RNG] = None,
        visibility_factory: VisibilityFactory = default_visibility,
    ) -> None:
        self.settings = settings
        self.rng = rng or RNG(settings.seed)
        self._listeners: List[Callable[[GameEvent, "GameState"], None]] = []

        self.entities = EntityStore(make_player(settings.player))
        self.log = MessageLog()
        self.level: GeneratedLevel = DungeonGenerator(settings.dungeon, settings.hostiles, self.rng).generate(
            self.entities
        )
        self.transparency = TransparencyMap.from_grid(self.level.grid)
        self.visibility = visibility_factory(self.transparency, settings)
        self.fullscreen = False
        self.turn = 0
        self._visibility_origin: Optional[Tuple[int, int]] = None

        if settings.welcome_message:
            self.log.add(settings.welcome_message, Severity.DANGER)
        self.refresh_visibility()
        logger.info(
            "Initialized GameState: %d entities, player at %s", len(self.entities), self.entities.player.pos
        )

    @property
    def grid(self) -> TileGrid:
        return self.level.grid

    @property
    def player(self) -> Entity:
        return self.entities.player

    def add_listener(self, listener: Callable[[GameEvent, "GameState"], None]) -> None:
        """Subscribe to game events (movement, attacks, death, turn end)."""
        self._listeners.append(listener)

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            listener(event, self)

    # ---- Visibility ------------------------------------------------------
    @property
    def needs_visibility_update(self) -> bool:
        return self._visibility_origin != self.player.pos

    def refresh_visibility(self) -> bool:
        """Recompute the visible set if the player moved; mark newly seen tiles.

        Returns True when a recompute happened.
        """
        if not self.needs_visibility_update:
            return False
        px, py = self.player.pos
        visible = self.visibility.compute(px, py)
        newly = 0
        for x, y in visible:
            if self.grid.in_bounds(x, y) and self.grid.mark_explored(x, y):
                newly += 1
        self._visibility_origin = (px, py)
        logger.debug("Visibility recomputed at (%d,%d); %d tiles newly explored", px, py, newly)
        return True

    # ---- Turn resolution -------------------------------------------------
    def handle_intent(self, intent: Intent) -> TurnResult:
        """Resolve the player's side of the turn."""
        if intent is Intent.EXIT:
            return TurnResult.EXIT_REQUESTED
        if intent is Intent.TOGGLE_FULLSCREEN:
            self.fullscreen = not self.fullscreen
            self._emit(GameEvent.FULLSCREEN_TOGGLED)
            return TurnResult.TURN_NOT_CONSUMED
        direction = intent.direction
        if direction is None or not self.player.alive:
            return TurnResult.TURN_NOT_CONSUMED

        result = player_move_or_attack(direction[0], direction[1], self.grid, self.entities, self.log)
        if result.moved:
            self._emit(GameEvent.PLAYER_MOVED)
        elif result.attacked:
            self._emit(GameEvent.PLAYER_ATTACKED)
        # Bumping a wall still spends the turn.
        return TurnResult.TURN_CONSUMED

    def run_hostile_turns(self) -> None:
        for entity_id in self.entities.ids():
            if self.entities[entity_id].ai is not None:
                ai.take_turn(entity_id, self.entities, self.grid, self.visibility, self.log)

    def step(self, intent: Intent) -> TurnResult:
        """Resolve one polled intent end to end."""
        result = self.handle_intent(intent)
        if result is TurnResult.EXIT_REQUESTED:
            return result
        self.refresh_visibility()
        if result is TurnResult.TURN_CONSUMED and self.player.alive:
            self.run_hostile_turns()
            self.turn += 1
            if not self.player.alive:
                self._emit(GameEvent.PLAYER_DIED)
            self._emit(GameEvent.TURN_ENDED)
        return result
