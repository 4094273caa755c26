from __future__ import annotations

import copy
import logging
import os
from dataclasses import MISSING, dataclass, field, fields
from importlib.resources import files as resource_files
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from ..colors import Color, parse_color
from ..exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DungeonSettings:
    width: int = 60
    height: int = 30
    max_rooms: int = 12
    room_min_size: int = 4
    room_max_size: int = 10
    max_room_hostiles: int = 3


@dataclass(frozen=True)
class FovSettings:
    radius: int = 8
    light_walls: bool = True


@dataclass(frozen=True)
class PanelSettings:
    """Bottom status panel: HP bar on the left, messages on the right."""

    height: int = 7
    bar_width: int = 20
    screen_width: int = 80

    @property
    def message_x(self) -> int:
        return self.bar_width + 2

    @property
    def message_width(self) -> int:
        return self.screen_width - self.bar_width - 2

    @property
    def message_height(self) -> int:
        return self.height - 1


@dataclass(frozen=True)
class PlayerTemplate:
    name: str = "hero"
    glyph: str = "@"
    color: Color = (255, 255, 255)
    hp: int = 30
    defense: int = 2
    power: int = 5


@dataclass(frozen=True)
class HostileArchetype:
    """One stat profile hostiles can be rolled from during room population."""

    name: str
    glyph: str
    color: Color
    hp: int
    defense: int
    power: int
    weight: float


@dataclass(frozen=True)
class GameSettings:
    """All tunables needed to build and run one level.

    Build with ``load_settings()``: embedded defaults, then an optional user
    YAML file, then DELVE_* environment overrides.
    """

    dungeon: DungeonSettings = field(default_factory=DungeonSettings)
    fov: FovSettings = field(default_factory=FovSettings)
    panel: PanelSettings = field(default_factory=PanelSettings)
    player: PlayerTemplate = field(default_factory=PlayerTemplate)
    hostiles: List[HostileArchetype] = field(default_factory=list)
    welcome_message: str = ""
    seed: Optional[int] = None
    screen_height: int = 40

    def validate(self) -> None:
        d = self.dungeon
        if d.width <= 0 or d.height <= 0:
            raise ConfigError(f"Map size must be positive, got {d.width}x{d.height}")
        if d.room_min_size < 2 or d.room_min_size > d.room_max_size:
            raise ConfigError(f"Invalid room size range [{d.room_min_size}, {d.room_max_size}]")
        if d.room_max_size >= d.width or d.room_max_size >= d.height:
            raise ConfigError(
                f"Rooms up to {d.room_max_size} tiles cannot fit in a {d.width}x{d.height} map"
            )
        if d.max_rooms < 0 or d.max_room_hostiles < 0:
            raise ConfigError("max_rooms and max_room_hostiles must be >= 0")
        if self.fov.radius < 0:
            raise ConfigError("fov radius must be >= 0")
        if self.player.hp <= 0:
            raise ConfigError("player hp must be positive")
        if d.max_room_hostiles > 0:
            if not self.hostiles:
                raise ConfigError("At least one hostile archetype is required to populate rooms")
            if any(h.weight < 0 for h in self.hostiles) or sum(h.weight for h in self.hostiles) <= 0:
                raise ConfigError("Hostile archetype weights must be >= 0 and sum to a positive value")
            if any(h.hp <= 0 for h in self.hostiles):
                raise ConfigError("Hostile archetype hp must be positive")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameSettings":
        try:
            dungeon = _build_section(DungeonSettings, dict(data.get("dungeon") or {}))
            fov = _build_section(FovSettings, dict(data.get("fov") or {}))
            screen = dict(data.get("screen") or {})
            panel_raw = dict(data.get("panel") or {})
            panel = PanelSettings(
                height=int(panel_raw.get("height", PanelSettings.height)),
                bar_width=int(panel_raw.get("bar_width", PanelSettings.bar_width)),
                screen_width=int(screen.get("width", PanelSettings.screen_width)),
            )
            player_raw = dict(data.get("player") or {})
            if "color" in player_raw:
                player_raw["color"] = parse_color(player_raw["color"])
            player = _build_section(PlayerTemplate, player_raw)
            hostiles = [_build_archetype(h) for h in (data.get("hostiles") or [])]
            seed = data.get("seed")
            seed = None if seed is None else int(seed)
            screen_height = int(screen.get("height", 40))
        except (TypeError, ValueError, KeyError) as exc:
            raise ConfigError(f"Invalid settings: {exc}") from exc
        settings = cls(
            dungeon=dungeon,
            fov=fov,
            panel=panel,
            player=player,
            hostiles=hostiles,
            welcome_message=str(data.get("welcome_message") or ""),
            seed=seed,
            screen_height=screen_height,
        )
        settings.validate()
        return settings


def _build_section(cls, raw: Dict[str, Any]):
    """Instantiate a settings dataclass, converting scalars to each field's default type.

    Unknown keys still reach the constructor and fail there with TypeError.
    """
    values = dict(raw)
    for f in fields(cls):
        if f.name not in values or f.default is MISSING:
            continue
        value = values[f.name]
        if isinstance(f.default, bool):
            if not isinstance(value, bool):
                raise ConfigError(f"{cls.__name__}.{f.name} must be true or false, got {value!r}")
        elif isinstance(f.default, int):
            values[f.name] = int(value)
        elif isinstance(f.default, float):
            values[f.name] = float(value)
        elif isinstance(f.default, str):
            values[f.name] = str(value)
    return cls(**values)


def _build_archetype(raw: Mapping[str, Any]) -> HostileArchetype:
    return HostileArchetype(
        name=str(raw["name"]),
        glyph=str(raw["glyph"]),
        color=parse_color(raw["color"]),
        hp=int(raw["hp"]),
        defense=int(raw["defense"]),
        power=int(raw["power"]),
        weight=float(raw["weight"]),
    )


def _deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(out.get(key), dict):
            out[key] = _deep_merge(out[key], value)
        else:
            out[key] = copy.deepcopy(value)
    return out


def load_default_data() -> Dict[str, Any]:
    text = resource_files("delve.config").joinpath("defaults.yaml").read_text(encoding="utf-8")
    logger.debug("Loaded embedded default settings resource")
    return yaml.safe_load(text) or {}


def _env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    mapping = {
        "DELVE_MAP_WIDTH": ("dungeon", "width"),
        "DELVE_MAP_HEIGHT": ("dungeon", "height"),
        "DELVE_MAX_ROOMS": ("dungeon", "max_rooms"),
        "DELVE_FOV_RADIUS": ("fov", "radius"),
    }
    out: Dict[str, Any] = {}
    for env_key, (section, name) in mapping.items():
        if env.get(env_key):
            try:
                out.setdefault(section, {})[name] = int(env[env_key])
            except ValueError as exc:
                raise ConfigError(f"Invalid env for {env_key}={env[env_key]!r}") from exc
    if env.get("DELVE_SEED"):
        try:
            out["seed"] = int(env["DELVE_SEED"])
        except ValueError as exc:
            raise ConfigError(f"Invalid env for DELVE_SEED={env['DELVE_SEED']!r}") from exc
    return out


def load_settings(path: Optional[str | Path] = None, env: Optional[Mapping[str, str]] = None) -> GameSettings:
    """Load settings from embedded defaults, a user YAML file and the environment.

    If path is None, DELVE_CONFIG is consulted for a user file.
    """
    env = os.environ if env is None else env
    data = load_default_data()

    user_path = path if path is not None else env.get("DELVE_CONFIG")
    if user_path:
        p = Path(user_path)
        if not p.exists():
            raise ConfigError(f"Config file not found: {p}")
        with p.open("r", encoding="utf-8") as f:
            try:
                user = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Config file is not valid YAML: {p}: {exc}") from exc
        if not isinstance(user, Mapping):
            raise ConfigError(f"Config file must contain a mapping: {p}")
        data = _deep_merge(data, user)
        logger.info("Loaded settings overrides from %s", p)

    data = _deep_merge(data, _env_overrides(env))
    return GameSettings.from_dict(data)


__all__ = [
    "DungeonSettings",
    "FovSettings",
    "GameSettings",
    "HostileArchetype",
    "PanelSettings",
    "PlayerTemplate",
    "load_settings",
]
