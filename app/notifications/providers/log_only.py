import logging

from app.notifications.types import Notification

logger = logging.getLogger("notifications")


class LogNotificationProvider:
    name = "log"

    def send(self, notification: Notification) -> None:
        logger.info(
            "notify kind=%s user=%s title=%s body=%s",
            notification.kind,
            notification.user_id,
            notification.title,
            notification.body,
        )
