"""Change notifier — explicit observer registration for presentation layers.

Listeners are invoked synchronously, in registration order, after a command
has mutated state and persisted it. A failing listener is logged and does not
stop the others: the command itself already succeeded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clearair.ports.notification_port import ChangeListener

logger = logging.getLogger(__name__)


class ChangeKind(Enum):
    HABITS = "habits"
    SMOKE_FREE_DAYS = "smoke_free_days"
    PROFILE = "profile"


@dataclass(frozen=True)
class ChangeEvent:
    kind: ChangeKind
    habit_id: str | None = None   # set for single-habit changes


class ChangeNotifier:
    """Registry of listeners plus a synchronous publish point."""

    def __init__(self) -> None:
        self._listeners: list[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, event: ChangeEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as exc:
                logger.error("Change listener %r failed on %s: %s", listener, event, exc)

    def __len__(self) -> int:
        return len(self._listeners)
