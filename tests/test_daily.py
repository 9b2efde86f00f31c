from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import httpx
import pytest
from sqlalchemy import select

from app.core.config import settings
from app.models.models import ClothingItem, DailySuggestion, Outfit, SmartReminder, UserPreferences
from app.notifications.types import Notification
from app.notifications.config import NotificationsConfig
from app.services import daily
from app.services.llm.types import DailyPick, DailyPickOutput, LLMError
from app.services.notifications.service import NotificationService

TODAY = date(2026, 10, 18)
NOW = datetime(2026, 10, 18, 6, 0, tzinfo=timezone.utc)


def weather_transport(temperature=14.4, found=True):
    def handler(request: httpx.Request) -> httpx.Response:
        if "geocoding" in request.url.host:
            results = [{"name": "Amsterdam", "country": "Netherlands", "latitude": 52.37, "longitude": 4.89}]
            return httpx.Response(200, json={"results": results} if found else {})
        return httpx.Response(
            200,
            json={
                "current": {
                    "time": "2026-10-18T08:00",
                    "temperature_2m": temperature,
                    "apparent_temperature": temperature - 2,
                    "relative_humidity_2m": 81,
                    "weather_code": 61,
                    "wind_speed_10m": 17.6,
                }
            },
        )

    return httpx.MockTransport(handler)


class RecordingProvider:
    def __init__(self):
        self.sent = []

    def send(self, notification: Notification) -> None:
        self.sent.append(notification)


class PickFirst:
    name = "stub"

    def __init__(self):
        self.calls = []

    async def pick_daily_outfits(self, payload, *, timeout_ms):
        self.calls.append(payload)
        first = payload.candidates[0].outfit_id
        return DailyPickOutput(
            outfits=[DailyPick(outfit_id=first, reasoning="Warm layers"), DailyPick(outfit_id="not-a-candidate")],
            summary="Layer up for the drizzle.",
        )


class Broken:
    name = "broken"

    async def pick_daily_outfits(self, payload, *, timeout_ms):
        raise LLMError("boom")


def outfit(name, tags, last_worn=None):
    return SimpleNamespace(name=name, season_tags=tags, last_worn_at=last_worn)


def test_every_temperature_lands_in_a_bracket():
    for t in range(-40, 50):
        bracket = daily.weather_bracket(t + 0.5)
        assert len(bracket) == 2
        assert set(bracket) <= {"winter", "fall", "spring", "summer"}
    assert daily.weather_bracket(9.9) == ("winter", "fall")
    assert daily.weather_bracket(10) == ("spring", "fall")
    assert daily.weather_bracket(19.9) == ("spring", "fall")
    assert daily.weather_bracket(20) == ("summer", "spring")


def test_candidates_never_worn_first_then_oldest():
    old = NOW - timedelta(days=30)
    recent = NOW - timedelta(days=1)
    outfits = [
        outfit("recent", ["fall"], recent),
        outfit("never-a", ["Fall"]),
        outfit("old", ["winter"], old),
        outfit("summer-only", ["summer"]),
        outfit("never-b", ["fall"]),
    ]
    picked = daily.select_candidates(outfits, 5)
    assert [o.name for o in picked] == ["never-a", "never-b", "old"]


def test_candidates_fall_back_to_everything_outside_the_bracket():
    outfits = [outfit("a", ["summer"], NOW), outfit("b", None)]
    picked = daily.select_candidates(outfits, 2)
    assert [o.name for o in picked] == ["b", "a"]


async def seed_wardrobe(session, user_id="test-user", outfits=2):
    items = [
        ClothingItem(user_id=user_id, name="Navy coat", type="coat", color="navy", season_tags=["winter"]),
        ClothingItem(user_id=user_id, name="Grey knit", type="sweater", color="grey", season_tags=["fall"]),
    ]
    session.add_all(items)
    await session.flush()
    rows = []
    for i in range(outfits):
        o = Outfit(
            user_id=user_id,
            name=f"Autumn look {i}",
            item_ids=[str(x.id) for x in items],
            season_tags=["fall"],
            times_worn=0,
        )
        session.add(o)
        rows.append(o)
    await session.commit()
    return items, rows


@pytest.mark.asyncio
async def test_no_items_writes_nothing(session):
    outcome = await daily.generate_for_user(session, "empty-user", today=TODAY, transport=weather_transport())
    assert outcome.status == "empty"
    res = await session.execute(select(DailySuggestion))
    assert res.scalars().all() == []


@pytest.mark.asyncio
async def test_suggestion_round_trip(session, enable_llm):
    provider = enable_llm(PickFirst())
    _, outfits = await seed_wardrobe(session)
    recorder = RecordingProvider()
    notifier = NotificationService(NotificationsConfig(), recorder)

    outcome = await daily.generate_for_user(
        session, "test-user", today=TODAY, transport=weather_transport(), notifier=notifier
    )
    assert outcome.status == "created"

    row = (await session.execute(select(DailySuggestion))).scalar_one()
    candidate_ids = {str(o.id) for o in outfits}
    assert row.suggestion_date == TODAY
    assert len(row.outfit_ids) == 1 and row.outfit_ids[0] in candidate_ids
    assert row.reasoning == "Layer up for the drizzle."
    assert row.used_fallback is False
    assert row.weather_context["current"]["temperature"] == 14
    assert row.weather_context["current"]["condition"] == "Slight rain"
    assert row.weather_context["source"] == "open-meteo"

    sent = provider.calls[0]
    assert sent.weather["temperature"] == 14
    assert recorder.sent[0].kind == "daily_suggestion"
    assert recorder.sent[0].user_id == "test-user"

    again = await daily.generate_for_user(session, "test-user", today=TODAY, transport=weather_transport())
    assert again.status == "exists"


@pytest.mark.asyncio
async def test_llm_failure_keeps_the_shortlist(session, enable_llm):
    enable_llm(Broken())
    _, outfits = await seed_wardrobe(session, outfits=4)
    outcome = await daily.generate_for_user(session, "test-user", today=TODAY, transport=weather_transport(found=False))
    row = outcome.suggestion
    assert row.used_fallback is True
    assert len(row.outfit_ids) == 3
    assert set(row.outfit_ids) <= {str(o.id) for o in outfits}
    assert "weather" in row.reasoning
    assert row.weather_context["source"] == "random"


@pytest.mark.asyncio
async def test_reminders_are_created_for_unworn_items(session, enable_llm):
    enable_llm(PickFirst())
    await seed_wardrobe(session, outfits=0)
    outcome = await daily.generate_for_user(session, "test-user", today=TODAY, transport=weather_transport())
    assert outcome.status == "empty"
    reminders = (await session.execute(select(SmartReminder))).scalars().all()
    assert len(reminders) == 2
    assert all(r.reminder_type == "unworn_item" for r in reminders)


@pytest.mark.asyncio
async def test_run_skips_without_llm(session):
    result = await daily.run_daily_suggestions(lambda: session, today=TODAY)
    assert result.reason == "llm_not_configured"
    assert result.processed == 0


@pytest.mark.asyncio
async def test_run_walks_opted_in_users(session, enable_llm, monkeypatch):
    from app.core import db

    enable_llm(PickFirst())
    monkeypatch.setattr(settings, "NOTIFY_PROVIDER", "none")
    session.add_all(
        [
            UserPreferences(user_id="test-user", reminder_enabled=True),
            UserPreferences(user_id="bare-user", reminder_enabled=True),
            UserPreferences(user_id="quiet-user", reminder_enabled=False),
        ]
    )
    await session.commit()
    await seed_wardrobe(session)
    await seed_wardrobe(session, user_id="quiet-user")

    transport = weather_transport()
    first = await daily.run_daily_suggestions(db.SessionLocal, today=TODAY, transport=transport)
    assert (first.processed, first.skipped, first.errors) == (1, 1, 0)

    second = await daily.run_daily_suggestions(db.SessionLocal, today=TODAY, transport=transport)
    assert (second.processed, second.skipped, second.errors) == (0, 2, 0)

    rows = (await session.execute(select(DailySuggestion.user_id))).scalars().all()
    assert rows == ["test-user"]
