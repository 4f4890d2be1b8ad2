"""Ephemeral success/error notifications."""

import itertools
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List

DEFAULT_TTL_SECONDS = 5.0


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    id: int
    message: str
    kind: NotificationKind
    created_at: float


class NotificationCenter:
    """
    Holds active notifications in emission order.

    A notification disappears `ttl` seconds after it was emitted, or earlier
    when dismissed. Expiry is evaluated against `clock` whenever the active
    list is read.
    """

    def __init__(self, ttl: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.clock = clock
        self._ids = itertools.count(1)
        self._notifications: List[Notification] = []

    def notify(self, message: str, kind: NotificationKind = NotificationKind.SUCCESS) -> Notification:
        notification = Notification(
            id=next(self._ids),
            message=message,
            kind=NotificationKind(kind),
            created_at=self.clock(),
        )
        self._notifications.append(notification)
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(message, NotificationKind.SUCCESS)

    def error(self, message: str) -> Notification:
        return self.notify(message, NotificationKind.ERROR)

    def dismiss(self, notification_id: int) -> None:
        self._notifications = [n for n in self._notifications if n.id != notification_id]

    def active(self) -> List[Notification]:
        now = self.clock()
        self._notifications = [n for n in self._notifications if now - n.created_at < self.ttl]
        return list(self._notifications)
