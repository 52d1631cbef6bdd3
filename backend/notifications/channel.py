"""
Notification channel — the console's toast feed.

Entity services emit exactly one notification per call outcome. The channel
keeps a bounded history and a pending queue the browser drains; listeners can
subscribe for push delivery. Business logic never branches on whether a
notification was delivered.
"""

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

import structlog

logger = structlog.get_logger()


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def success(cls, description: str) -> "Notification":
        return cls(title="Success", description=description)

    @classmethod
    def failure(cls, description: str) -> "Notification":
        return cls(title="Error", description=description, variant=NotificationVariant.DESTRUCTIVE)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "variant": self.variant.value,
            "created_at": self.created_at.isoformat(),
        }


Listener = Callable[[Notification], None]


class NotificationChannel:
    """In-process fan-out of console notifications."""

    def __init__(self, history_size: int = 50):
        if history_size < 1:
            raise ValueError("history_size must be at least 1")
        self.history: deque[Notification] = deque(maxlen=history_size)
        self._pending: deque[Notification] = deque(maxlen=history_size)
        self._listeners: list[Listener] = []

    def emit(self, notification: Notification) -> None:
        self.history.append(notification)
        self._pending.append(notification)
        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception as exc:  # noqa: BLE001
                logger.warning("notifications.listener.failed", error=str(exc))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it again."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def drain(self) -> list[Notification]:
        """Return and clear notifications not yet delivered to the browser."""
        drained = list(self._pending)
        self._pending.clear()
        return drained
