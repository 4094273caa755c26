from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List

from .. import colors
from ..colors import Color

logger = logging.getLogger(__name__)


class Severity(Enum):
    """How loudly a message should be shown; each level maps to a color."""

    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"

    @property
    def color(self) -> Color:
        return {
            Severity.INFO: colors.WHITE,
            Severity.WARNING: colors.ORANGE,
            Severity.DANGER: colors.RED,
        }[self]


@dataclass(frozen=True)
class Message:
    text: str
    severity: Severity = Severity.INFO

    @property
    def color(self) -> Color:
        return self.severity.color


class MessageLog:
    """Append-only narrative log for one level.

    Entries keep insertion order and are never dropped or reordered; readers
    that want the latest first use ``newest_first``.
    """

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def add(self, text: str, severity: Severity = Severity.INFO) -> Message:
        msg = Message(text=text, severity=severity)
        self._messages.append(msg)
        logger.debug("Message added [%s]: %s", severity.value, text)
        return msg

    def newest_first(self) -> Iterator[Message]:
        return reversed(self._messages)

    @property
    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None
