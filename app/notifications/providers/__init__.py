from typing import Callable, Dict

from app.notifications.providers.base import NotificationProvider
from app.notifications.providers.log_only import LogNotificationProvider

PROVIDERS: Dict[str, Callable[[], NotificationProvider]] = {
    LogNotificationProvider.name: LogNotificationProvider,
}


def provider_for(name: str) -> NotificationProvider:
    try:
        return PROVIDERS[name]()
    except KeyError:
        raise ValueError(f"unknown notification provider: {name}") from None


__all__ = [
    "NotificationProvider",
    "LogNotificationProvider",
    "PROVIDERS",
    "provider_for",
]
