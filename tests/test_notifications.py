import pytest

from app.notifications.config import NotificationsConfig
from app.notifications.providers import LogNotificationProvider, provider_for
from app.notifications.types import Notification
from app.services.notifications.dispatcher import daily_suggestion_ready
from app.services.notifications.service import NotificationService


class Recorder:
    def __init__(self):
        self.sent = []

    def send(self, notification):
        self.sent.append(notification)


class Exploding:
    def send(self, notification):
        raise RuntimeError("push gateway down")


def test_log_provider_send():
    service = NotificationService(NotificationsConfig())
    assert service.send(Notification(user_id="u", title="t", body="b")) is True


def test_disabled_config_sends_nothing():
    recorder = Recorder()
    service = NotificationService(NotificationsConfig(provider="none", enabled=False), recorder)
    assert service.send(Notification(user_id="u", title="t", body="b")) is False
    assert recorder.sent == []


def test_provider_failure_does_not_raise():
    service = NotificationService(NotificationsConfig(), Exploding())
    assert service.send(Notification(user_id="u", title="t", body="b")) is False


def test_daily_suggestion_message():
    n = daily_suggestion_ready("u1", 3, "Slight rain")
    assert n.kind == "daily_suggestion"
    assert n.body == "3 outfit ideas picked for today (slight rain)"
    assert n.data == {"outfit_count": 3}
    assert daily_suggestion_ready("u1", 1, None).body == "1 outfit idea picked for today"


def test_provider_lookup():
    assert isinstance(provider_for("log"), LogNotificationProvider)
    with pytest.raises(ValueError):
        provider_for("carrier-pigeon")
    assert NotificationService(NotificationsConfig(provider="none", enabled=False)).provider is None
