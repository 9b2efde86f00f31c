from datetime import date

import pytest
from sqlalchemy import select

from app.models.models import FashionTrend, UserAccount, UserPreferences
from app.services.llm.types import LLMError, StyleSummaryOutput, TrendDiscoveryOutput, TrendOut
from app.services.style_summary import fallback_summary, profile_context
from app.services.trends import sync_fashion_trends


class TrendStub:
    name = "stub"

    def __init__(self):
        self.seasons = None

    async def discover_trends(self, payload, *, timeout_ms):
        self.seasons = (payload.current_season, payload.next_season)
        return TrendDiscoveryOutput(
            trends=[
                TrendOut(trend_name="Quiet luxury", season="fall_2026", popularity_score=90),
                TrendOut(trend_name="Quiet luxury", season="fall_2026", popularity_score=85),
                TrendOut(trend_name="Burgundy everything", season="fall_2026", colors=["burgundy"]),
                TrendOut(trend_name="Quiet luxury", season="winter_2026"),
            ]
        )


class SummaryStub:
    name = "stub"

    def __init__(self, fail=False):
        self.calls = 0
        self.fail = fail

    async def summarize_style(self, payload, *, timeout_ms):
        self.calls += 1
        if self.fail:
            raise LLMError("timeout")
        return StyleSummaryOutput(summary=f"{payload.name}, you are a minimalist at heart.")


@pytest.mark.asyncio
async def test_trend_sync_skipped_without_llm(session):
    assert await sync_fashion_trends(session) == {"ok": True, "skipped": True, "added": 0}


@pytest.mark.asyncio
async def test_trend_sync_dedupes_by_name_and_season(session, enable_llm):
    stub = enable_llm(TrendStub())
    session.add(FashionTrend(trend_name="Burgundy everything", season="fall_2026"))
    await session.commit()

    result = await sync_fashion_trends(session, today=date(2026, 10, 18))
    assert stub.seasons == ("fall_2026", "winter_2026")
    assert result["ok"] is True
    assert result["added"] == 2

    rows = (await session.execute(select(FashionTrend.trend_name, FashionTrend.season))).all()
    assert sorted(tuple(r) for r in rows) == [
        ("Burgundy everything", "fall_2026"),
        ("Quiet luxury", "fall_2026"),
        ("Quiet luxury", "winter_2026"),
    ]


@pytest.mark.asyncio
async def test_trend_sync_failure_is_reported(session, enable_llm):
    class Broken:
        name = "broken"

        async def discover_trends(self, payload, *, timeout_ms):
            raise LLMError("bad json")

    enable_llm(Broken())
    result = await sync_fashion_trends(session)
    assert result["ok"] is False
    assert result["used_fallback"] is True


def test_profile_context_lists_quiz_answers():
    prefs = UserPreferences(
        user_id="u",
        quiz_derived={"styleType": "Minimalist", "vibeProfile": "Calm"},
        favorite_colors=["navy"],
        favorite_styles=[],
        personality_tags=None,
    )
    text = profile_context(prefs)
    assert text.splitlines() == [
        "Derived Style Profile:",
        "- Style Type: Minimalist",
        "- Vibe: Calm",
        "- Favorite Colors: navy",
    ]
    assert profile_context(None) == ""


def test_fallback_summary_mentions_styles():
    prefs = UserPreferences(user_id="u", favorite_styles=["classic", "edgy"])
    assert "classic, edgy" in fallback_summary("Ada", prefs)
    assert fallback_summary("there", None).startswith("Hi there!")


@pytest.mark.asyncio
async def test_style_summary_is_cached(client, session, enable_llm, memory_cache):
    stub = enable_llm(SummaryStub())
    session.add(UserAccount(user_id="test-user", first_name="Ada"))
    session.add(UserPreferences(user_id="test-user", favorite_styles=["minimalist"]))
    await session.commit()

    first = (await client.get("/v1/style/summary")).json()
    second = (await client.get("/v1/style/summary")).json()
    assert first["summary"] == "Ada, you are a minimalist at heart."
    assert first["cached"] is False
    assert second["cached"] is True
    assert second["summary"] == first["summary"]
    assert stub.calls == 1
    assert len(memory_cache) == 1


@pytest.mark.asyncio
async def test_style_summary_falls_back(client, enable_llm, memory_cache):
    enable_llm(SummaryStub(fail=True))
    body = (await client.get("/v1/style/summary")).json()
    assert body["used_fallback"] is True
    assert body["summary"].startswith("Hi there!")
    assert memory_cache == {}
