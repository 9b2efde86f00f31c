import pytest

from app.core.config import settings
from app.core.dates import local_today
from app.models.models import ClothingItem, DailySuggestion, Outfit
from app.services import daily
from app.services.llm.types import DailyPick, DailyPickOutput


class PickAll:
    name = "stub"

    async def pick_daily_outfits(self, payload, *, timeout_ms):
        return DailyPickOutput(outfits=[DailyPick(outfit_id=c.outfit_id) for c in payload.candidates])


@pytest.fixture
async def offline_weather(monkeypatch):
    from app.services import weather

    async def fake(city, country=None, *, transport=None):
        return weather.random_weather(city, country)

    monkeypatch.setattr(daily, "fetch_weather_or_random", fake)


async def add_suggestion(session, **kw):
    row = DailySuggestion(user_id="test-user", suggestion_date=local_today(), outfit_ids=["a", "b"], reasoning="r", **kw)
    session.add(row)
    await session.commit()
    return row


@pytest.mark.asyncio
async def test_today_and_history(client, session):
    assert (await client.get("/v1/suggestions/today")).json() is None
    row = await add_suggestion(session)

    today = (await client.get("/v1/suggestions/today")).json()
    assert today["id"] == str(row.id)
    assert today["outfit_ids"] == ["a", "b"]
    assert today["suggestion_date"] == local_today().isoformat()

    history = (await client.get("/v1/suggestions/history")).json()
    assert [h["id"] for h in history] == [str(row.id)]


@pytest.mark.asyncio
async def test_viewed_and_accepted(client, session):
    row = await add_suggestion(session)
    viewed = (await client.post(f"/v1/suggestions/{row.id}/viewed")).json()
    assert viewed["was_viewed"] is True and viewed["was_accepted"] is False
    accepted = (await client.post(f"/v1/suggestions/{row.id}/accepted")).json()
    assert accepted["was_accepted"] is True


@pytest.mark.asyncio
async def test_other_owner_suggestion_is_not_found(client, session):
    row = DailySuggestion(user_id="someone-else", suggestion_date=local_today(), outfit_ids=[])
    session.add(row)
    await session.commit()
    resp = await client.post(f"/v1/suggestions/{row.id}/viewed")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "suggestion_not_found"


@pytest.mark.asyncio
async def test_generate_now_replaces_today(client, session, enable_llm, offline_weather):
    assert (await client.post("/v1/suggestions/generate")).json()["status"] == "skipped"

    enable_llm(PickAll())
    old = await add_suggestion(session)
    item = ClothingItem(user_id="test-user", name="Tee")
    session.add(item)
    await session.flush()
    outfit = Outfit(user_id="test-user", name="Easy", item_ids=[str(item.id)], season_tags=[])
    session.add(outfit)
    await session.commit()

    body = (await client.post("/v1/suggestions/generate")).json()
    assert body["status"] == "created"
    assert body["suggestion"]["id"] != str(old.id)
    assert body["suggestion"]["outfit_ids"] == [str(outfit.id)]

    history = (await client.get("/v1/suggestions/history")).json()
    assert len(history) == 1


@pytest.mark.asyncio
async def test_daily_run_requires_cron_secret(client, monkeypatch):
    monkeypatch.setattr(settings, "CRON_SECRET", "s3cret")
    assert (await client.post("/v1/suggestions/daily/run")).status_code == 401
    resp = await client.post("/v1/suggestions/daily/run", headers={"X-Cron-Secret": "wrong"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "unauthorized"

    resp = await client.post("/v1/suggestions/daily/run", headers={"X-Cron-Secret": "s3cret"})
    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "processed": 0,
        "skipped": 0,
        "errors": 0,
        "reason": "llm_not_configured",
    }
