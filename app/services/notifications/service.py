import logging

from app.notifications.config import NotificationsConfig
from app.notifications.providers import NotificationProvider, provider_for
from app.notifications.types import Notification

logger = logging.getLogger("uvicorn.error")


class NotificationService:
    def __init__(
        self,
        config: NotificationsConfig | None = None,
        provider: NotificationProvider | None = None,
    ) -> None:
        self.config = config or NotificationsConfig.from_settings()
        if provider is None and self.config.enabled:
            provider = provider_for(self.config.provider)
        self.provider = provider

    def send(self, notification: Notification) -> bool:
        if not self.config.enabled or self.provider is None:
            return False
        try:
            self.provider.send(notification)
        except Exception as exc:
            # a failed notification never fails the job that produced it
            logger.warning("notify:failed user=%s kind=%s err=%s", notification.user_id, notification.kind, exc)
            return False
        logger.info("notify:sent user=%s kind=%s provider=%s", notification.user_id, notification.kind, self.config.provider)
        return True
