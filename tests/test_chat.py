from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.core.config import settings
from app.core.dates import local_today
from app.models.models import ClothingItem, LearningDatum, UserAccount
from app.services import chat, quota
from app.services.llm.providers.openai import CHAT_FALLBACK_REPLY
from app.services.llm.types import ChatMessage, ChatOutput, LLMError


class Echo:
    name = "stub"

    def __init__(self):
        self.calls = []

    async def chat(self, payload, *, timeout_ms):
        self.calls.append(payload)
        return ChatOutput(reply=f"You said: {payload.messages[-1].content}")


class Broken:
    name = "broken"

    async def chat(self, payload, *, timeout_ms):
        raise LLMError("rate limited")


def msg(text):
    return {"messages": [{"role": "user", "content": text}]}


def item(name, favorite=False, last_worn=None, times_worn=0):
    return SimpleNamespace(
        name=name,
        type="top",
        color="black",
        season_tags=["fall"],
        occasion_tags=[],
        favorite=favorite,
        times_worn=times_worn,
        last_worn_at=last_worn,
    )


def test_trigger_phrases():
    assert chat.matches_any("What should I wear to a dinner tonight?", chat.OUTFIT_TRIGGERS)
    assert chat.matches_any("Explain quiet luxury", chat.EDUCATION_TRIGGERS)
    assert not chat.matches_any("hello there", chat.OUTFIT_TRIGGERS)


def test_context_sections():
    worn = datetime(2026, 9, 1, tzinfo=timezone.utc)
    prefs = SimpleNamespace(
        preferred_city="Paris",
        preferred_country="FR",
        favorite_styles=["minimalist"],
        favorite_colors=["navy"],
        personality_tags=[],
    )
    trend = SimpleNamespace(
        trend_name="Quiet luxury",
        popularity_score=88,
        description="Understated pieces",
        colors=["camel"],
        key_pieces=[],
        style_tags=[],
    )
    text = chat.build_chat_context(
        first_name="Sam",
        preferences=prefs,
        items=[item("Silk blouse", favorite=True), item("Wool coat"), item("Old tee", last_worn=worn, times_worn=4)],
        trends=[trend],
        season="fall_2026",
        is_premium=True,
        latest_message="What should I wear for a meeting?",
    )
    assert "User's name: Sam" in text
    assert "Location: Paris, FR" in text
    assert "Favorite pieces (prioritize these):" in text
    assert "Never worn (suggest these!):" in text
    assert "Old tee (top, black) - last worn: 2026-09-01" in text
    assert "=== CURRENT FASHION TRENDS (FALL 2026) ===" in text
    assert "Premium member" in text
    assert "OUTFIT SUGGESTION ACTIVATED!" in text
    assert "EDUCATION MODE ACTIVATED!" not in text


def test_context_for_guest_is_persona_only():
    text = chat.build_chat_context(latest_message="hi")
    assert "=== WARDROBE ===" not in text
    assert "OUTFIT SUGGESTION ACTIVATED!" not in text


@pytest.mark.asyncio
async def test_chat_skipped_without_llm(client):
    body = (await client.post("/v1/chat", json=msg("hi"))).json()
    assert body["skipped"] is True
    assert body["reply"] is None


@pytest.mark.asyncio
async def test_chat_uses_wardrobe_and_learning(client, session, enable_llm):
    provider = enable_llm(Echo())
    session.add(UserAccount(user_id="test-user", first_name="Ada"))
    session.add(ClothingItem(user_id="test-user", name="Camel trench", type="coat", color="camel"))
    session.add(
        LearningDatum(
            user_id="test-user",
            interaction_type="outfit_rating",
            rating=5,
            outfit_data={"style": "minimalist", "colors": ["navy"]},
        )
    )
    await session.commit()

    body = (await client.post("/v1/chat", json=msg("What should I wear today?"))).json()
    assert body["reply"] == "You said: What should I wear today?"
    assert body["message_count"] == 1
    assert body["remaining"] == settings.CHAT_DAILY_LIMIT - 1

    system = provider.calls[0].system
    assert "User's name: Ada" in system
    assert "Camel trench" in system
    assert "=== LEARNED PREFERENCES ===" in system
    assert "User loves: minimalist styles" in system


@pytest.mark.asyncio
async def test_chat_limit(client, enable_llm, monkeypatch):
    enable_llm(Echo())
    monkeypatch.setattr(settings, "CHAT_DAILY_LIMIT", 2)
    await client.post("/v1/chat", json=msg("one"))
    second = (await client.post("/v1/chat", json=msg("two"))).json()
    assert second["limit_reached"] is True
    assert second["reply"]

    third = (await client.post("/v1/chat", json=msg("three"))).json()
    assert third["limit_reached"] is True
    assert third["remaining"] == 0
    assert third["reply"] is None


@pytest.mark.asyncio
async def test_chat_failure_replies_and_refunds(client, session, enable_llm):
    enable_llm(Broken())
    body = (await client.post("/v1/chat", json=msg("hello"))).json()
    assert body["reply"] == CHAT_FALLBACK_REPLY
    assert body["used_fallback"] is True
    assert body["message_count"] == 0
    assert await quota.usage(session, "test-user", quota.CHAT, local_today()) == 0


@pytest.mark.asyncio
async def test_chat_validation(client):
    assert (await client.post("/v1/chat", json={"messages": []})).status_code == 422
    too_long = {"messages": [{"role": "user", "content": "x" * 4001}]}
    assert (await client.post("/v1/chat", json=too_long)).status_code == 422
    bad_role = {"messages": [{"role": "tool", "content": "hi"}]}
    assert (await client.post("/v1/chat", json=bad_role)).status_code == 422
    many = {"messages": [{"role": "user", "content": "hi"}] * 51}
    assert (await client.post("/v1/chat", json=many)).status_code == 422


@pytest.mark.asyncio
async def test_guest_chat_quota_travels_with_client(client, enable_llm, monkeypatch):
    enable_llm(Echo())
    monkeypatch.setattr(settings, "GUEST_CHAT_DAILY_LIMIT", 1)
    first = (await client.post("/v1/chat/guest", json=msg("hi"))).json()
    assert first["reply"] == "You said: hi"
    assert first["quota"]["count"] == 1

    second = (await client.post("/v1/chat/guest", json={**msg("again"), "quota": first["quota"]})).json()
    assert second["limit_reached"] is True
    assert second["reply"] is None

    yesterday = (local_today() - timedelta(days=1)).isoformat()
    fresh = (await client.post("/v1/chat/guest", json={**msg("new day"), "quota": {"count": 1, "date": yesterday}})).json()
    assert fresh["reply"] == "You said: new day"


@pytest.mark.asyncio
async def test_chat_with_odd_learning_rows(client, session, enable_llm):
    provider = enable_llm(Echo())
    for _ in range(3):
        session.add(
            LearningDatum(
                user_id="test-user",
                interaction_type="outfit_rating",
                rating=5,
                outfit_data={"style": ["casual", "street"], "colors": "navy"},
            )
        )
    await session.commit()

    resp = await client.post("/v1/chat", json=msg("hello"))
    assert resp.status_code == 200
    assert resp.json()["reply"] == "You said: hello"
    assert "Favorite color combinations: navy" in provider.calls[0].system


@pytest.mark.asyncio
async def test_context_failure_gives_the_unit_back(session, enable_llm, monkeypatch):
    enable_llm(Echo())

    async def boom(*args, **kwargs):
        raise RuntimeError("db went away")

    monkeypatch.setattr(chat, "load_recent_learning", boom)
    with pytest.raises(RuntimeError):
        await chat.chat_with_stylist(session, "test-user", [ChatMessage(role="user", content="hi")])
    assert await quota.usage(session, "test-user", quota.CHAT, local_today()) == 0
