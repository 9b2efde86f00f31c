from dataclasses import dataclass

from app.core.config import settings


@dataclass(frozen=True)
class NotificationsConfig:
    provider: str = "log"
    enabled: bool = True

    @classmethod
    def from_settings(cls) -> "NotificationsConfig":
        name = (settings.NOTIFY_PROVIDER or "log").lower()
        return cls(provider=name, enabled=name != "none")
