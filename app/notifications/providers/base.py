from typing import Protocol

from app.notifications.types import Notification


class NotificationProvider(Protocol):
    """Delivers one notification; raising marks the send as failed."""

    name: str

    def send(self, notification: Notification) -> None:
        ...
