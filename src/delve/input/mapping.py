from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple

from .actions import Intent

logger = logging.getLogger(__name__)

_Binding = Tuple[str, bool]


class InputMapper:
    """Rebindable mapping from physical keys to intents.

    Keys are strings normalized to upper case, so any backend can translate
    its key constants to names before calling in. A binding can require the
    alt modifier (alt+ENTER toggles fullscreen while a bare ENTER does
    nothing). Unbound keys translate to ``Intent.NONE``.

    Example usage:
        mapper = InputMapper.default()
        mapper.translate_key("up")               # -> Intent.MOVE_UP
        mapper.translate_key("enter", alt=True)  # -> Intent.TOGGLE_FULLSCREEN
    """

    def __init__(self, bindings: Optional[Dict[str, Intent]] = None) -> None:
        self._bindings: Dict[_Binding, Intent] = {}
        self._aliases: Dict[str, str] = {}
        if bindings:
            for key, intent in bindings.items():
                self.bind(key, intent)

    @staticmethod
    def _normalize(key: str | int | None) -> Optional[str]:
        if key is None:
            return None
        if isinstance(key, int):
            return str(key)
        if not isinstance(key, str):
            return None
        k = key.strip()
        if not k:
            return None
        return k.upper()

    def bind(self, key: str | int, intent: Intent, *, alt: bool = False) -> None:
        nk = self._normalize(key)
        if nk is None:
            logger.warning("Attempted to bind invalid key: %r", key)
            return
        self._bindings[(nk, alt)] = intent

    def bind_many(self, keys: Iterable[str | int], intent: Intent, *, alt: bool = False) -> None:
        for k in keys:
            self.bind(k, intent, alt=alt)

    def unbind(self, key: str | int, *, alt: bool = False) -> None:
        nk = self._normalize(key)
        if nk is not None:
            self._bindings.pop((nk, alt), None)

    def set_alias(self, physical: str | int, canonical_name: str) -> None:
        """Map a backend-specific key (e.g. a numeric code) to a canonical name."""
        nk = self._normalize(physical)
        cn = self._normalize(canonical_name)
        if nk and cn:
            self._aliases[nk] = cn

    def translate_key(self, key: str | int | None, *, alt: bool = False) -> Intent:
        nk = self._normalize(key)
        if nk is None:
            return Intent.NONE
        canonical = self._aliases.get(nk, nk)
        return self._bindings.get((canonical, alt), Intent.NONE)

    @classmethod
    def default(cls) -> "InputMapper":
        """Arrows, WASD and vi-keys move; alt+Enter toggles fullscreen; Escape exits."""
        mapper = cls()
        mapper.bind_many(["UP", "W", "K"], Intent.MOVE_UP)
        mapper.bind_many(["DOWN", "S", "J"], Intent.MOVE_DOWN)
        mapper.bind_many(["LEFT", "A", "H"], Intent.MOVE_LEFT)
        mapper.bind_many(["RIGHT", "D", "L"], Intent.MOVE_RIGHT)
        mapper.bind_many(["ENTER", "RETURN"], Intent.TOGGLE_FULLSCREEN, alt=True)
        mapper.bind_many(["ESCAPE", "ESC", "Q"], Intent.EXIT)
        return mapper


__all__ = ["InputMapper"]
