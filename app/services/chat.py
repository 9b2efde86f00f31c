from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dates import as_utc, current_season, local_today
from app.schemas.chat import ChatOut, GuestChatOut, GuestQuotaState
from app.services import llm as llm_service
from app.services import quota, wardrobe
from app.services.insights import CHAT_WINDOW, learned_preferences_block, load_recent_learning
from app.services.llm.prompts import CHAT_MISSION, CHAT_PERSONA
from app.services.llm.providers.openai import CHAT_FALLBACK_REPLY
from app.services.llm.types import ChatInput, ChatMessage, LLMError, LLMNotConfigured
from app.services.weather import WeatherError, WeatherReport, fetch_current_weather

logger = logging.getLogger("uvicorn.error")

OUTFIT_TRIGGERS = (
    "today", "tomorrow", "tonight", "what should i wear", "outfit", "dress",
    "dinner", "lunch", "meeting", "date", "party", "event", "shopping", "interview", "work",
    "weather", "weekend", "going to", "have a", "attending", "planning",
)

EDUCATION_TRIGGERS = (
    "what is", "what are", "explain", "tell me about", "how do i", "how to wear",
    "trend", "style", "fashion", "look", "aesthetic",
)

SAVED_OUTFITS_LIMIT = 15
RECENT_LOGS_LIMIT = 5


def matches_any(text: str, triggers: Sequence[str]) -> bool:
    lowered = (text or "").lower()
    return any(t in lowered for t in triggers)


def _tags(values: Optional[List[str]]) -> str:
    return ", ".join(v for v in (values or []) if v)


def _wardrobe_section(items: Sequence[Any]) -> List[str]:
    # favourites first, then never worn, then the rest oldest-worn first
    favorites = [i for i in items if i.favorite]
    never_worn = [i for i in items if not i.last_worn_at]
    rotation = sorted(
        (i for i in items if not i.favorite and i.last_worn_at),
        key=lambda i: as_utc(i.last_worn_at),
    )
    lines = [
        "=== WARDROBE ===",
        f"Total: {len(items)} items (favorites and unworn items first)",
    ]
    if favorites:
        lines.append("Favorite pieces (prioritize these):")
        for i in favorites[:10]:
            seasons = f" ({_tags(i.season_tags)})" if i.season_tags else ""
            occasions = f" - {_tags(i.occasion_tags)}" if i.occasion_tags else ""
            worn = f" [worn {i.times_worn}x]" if i.times_worn else ""
            lines.append(f"  - {i.name} ({i.type}, {i.color}){seasons}{occasions}{worn}")
    if never_worn:
        lines.append("Never worn (suggest these!):")
        for i in never_worn[:5]:
            seasons = f" ({_tags(i.season_tags)})" if i.season_tags else ""
            lines.append(f"  - {i.name} ({i.type}, {i.color}){seasons}")
    if rotation:
        lines.append("Ready for rotation:")
        for i in rotation[:10]:
            lines.append(f"  - {i.name} ({i.type}, {i.color}) - last worn: {as_utc(i.last_worn_at).date().isoformat()}")
    return lines


def build_chat_context(
    *,
    first_name: Optional[str] = None,
    weather: Optional[WeatherReport] = None,
    preferences: Any = None,
    items: Sequence[Any] = (),
    outfits: Sequence[Any] = (),
    logs: Sequence[Any] = (),
    trends: Sequence[Any] = (),
    learning: Sequence[Any] = (),
    season: Optional[str] = None,
    is_premium: bool = False,
    latest_message: str = "",
) -> str:
    """System prompt for the stylist persona, assembled from whatever is known."""
    sections: List[str] = [CHAT_PERSONA]

    about: List[str] = []
    if first_name:
        about.append(f"User's name: {first_name}")
    if preferences is not None:
        if not weather and preferences.preferred_city and preferences.preferred_country:
            about.append(f"Location: {preferences.preferred_city}, {preferences.preferred_country}")
        if preferences.favorite_styles:
            about.append(f"Preferred styles: {_tags(preferences.favorite_styles)}")
        if preferences.favorite_colors:
            about.append(f"Favorite colors: {_tags(preferences.favorite_colors)}")
        if preferences.personality_tags:
            about.append(f"Style personality: {_tags(preferences.personality_tags)}")
    if about:
        sections.append("\n".join(about))

    if weather:
        cur = weather.current
        sections.append(
            "\n".join(
                [
                    "=== CURRENT WEATHER ===",
                    f"Location: {weather.location.name}, {weather.location.country or ''}".rstrip(", "),
                    f"Temperature: {cur.temperature}°C (feels like {cur.feelsLike}°C)",
                    f"Condition: {cur.condition}",
                    f"Humidity: {cur.humidity}%",
                    f"Wind: {cur.windSpeed} km/h",
                    "IMPORTANT: Use this LIVE weather data when suggesting outfits.",
                ]
            )
        )

    if items:
        sections.append("\n".join(_wardrobe_section(items)))

    if outfits:
        lines = ["=== SAVED OUTFITS ==="]
        for o in list(outfits)[:SAVED_OUTFITS_LIMIT]:
            occasions = f" - {_tags(o.occasion_tags)}" if o.occasion_tags else ""
            fav = " (favorite)" if o.favorite else ""
            worn = f" (worn {o.times_worn} times)" if o.times_worn else ""
            lines.append(f'- "{o.name}"{occasions}{fav}{worn}')
        sections.append("\n".join(lines))

    if logs:
        lines = ["Recent outfit history:"]
        for log in list(logs)[:RECENT_LOGS_LIMIT]:
            activity = log.activity or "general wear"
            conditions = (
                f" ({log.weather_condition}, {log.temperature:g}°C)"
                if log.weather_condition and log.temperature is not None
                else ""
            )
            lines.append(f"- {log.worn_date.isoformat()}: {activity}{conditions}")
        sections.append("\n".join(lines))

    if trends:
        label = (season or current_season()).replace("_", " ").upper()
        lines = [f"=== CURRENT FASHION TRENDS ({label}) ==="]
        for t in trends:
            lines.append(f"* {t.trend_name} ({t.popularity_score}/100 popularity)")
            if t.description:
                lines.append(f"   {t.description}")
            if t.colors:
                lines.append(f"   Key colors: {_tags(t.colors)}")
            if t.key_pieces:
                lines.append(f"   Must-have pieces: {_tags(t.key_pieces)}")
            if t.style_tags:
                lines.append(f"   Style vibe: {_tags(t.style_tags)}")
        lines.append("IMPORTANT: Reference these trends when relevant to the user's style preferences.")
        sections.append("\n".join(lines))

    learned = learned_preferences_block(learning)
    if learned:
        sections.append(learned)

    if is_premium:
        sections.append("Premium member: You have access to advanced styling features and unlimited chat.")

    sections.append(CHAT_MISSION)

    if matches_any(latest_message, EDUCATION_TRIGGERS):
        lines = [
            "EDUCATION MODE ACTIVATED!",
            "User is asking about a fashion concept or trend. Explain it clearly, then show examples from their wardrobe that fit!",
        ]
        if trends:
            lines.append(f"Current trends available for reference: {', '.join(t.trend_name for t in trends)}")
        sections.append("\n".join(lines))

    if matches_any(latest_message, OUTFIT_TRIGGERS) and items:
        lines = ["OUTFIT SUGGESTION ACTIVATED!"]
        if weather:
            lines.append(f"- Weather: {weather.current.temperature}°C, {weather.current.condition}")
        if trends:
            lines.append(f"- Consider these trends: {', '.join(t.trend_name for t in list(trends)[:2])}")
        lines.append(
            "Suggest a COMPLETE outfit using their actual items (by name), considering weather + trends "
            "+ learned preferences. Explain your reasoning including any trend references!"
        )
        sections.append("\n".join(lines))

    return "\n\n".join(sections)


async def _live_weather(preferences: Any) -> Optional[WeatherReport]:
    if preferences is None or not preferences.preferred_city:
        return None
    try:
        return await fetch_current_weather(preferences.preferred_city, preferences.preferred_country)
    except WeatherError as exc:
        logger.info("chat:weather skipped city=%s reason=%s", preferences.preferred_city, exc)
        return None


async def _stylist_context(
    session: AsyncSession, user_id: str, today: date, is_premium: bool, messages: List[ChatMessage]
) -> str:
    items = await wardrobe.list_items(session, user_id)
    outfits = sorted(
        await wardrobe.list_outfits(session, user_id),
        key=lambda o: (not o.favorite, -(o.times_worn or 0)),
    )
    prefs = await wardrobe.get_preferences(session, user_id)
    account = await wardrobe.get_account(session, user_id)
    logs = await wardrobe.recent_logs(session, user_id, RECENT_LOGS_LIMIT)
    learning = await load_recent_learning(session, user_id, CHAT_WINDOW)
    season = current_season(today)
    trends = await wardrobe.season_trends(session, season, limit=5)
    weather = await _live_weather(prefs)

    return build_chat_context(
        first_name=account.first_name if account else None,
        weather=weather,
        preferences=prefs,
        items=items,
        outfits=outfits,
        logs=logs,
        trends=trends,
        learning=learning,
        season=season,
        is_premium=is_premium,
        latest_message=messages[-1].content if messages else "",
    )


async def chat_with_stylist(session: AsyncSession, user_id: str, messages: List[ChatMessage]) -> ChatOut:
    if not settings.llm_configured:
        return ChatOut(skipped=True)

    today = local_today()
    decision = await quota.consume(session, user_id, quota.CHAT, settings.CHAT_DAILY_LIMIT, today)
    if not decision.allowed:
        return ChatOut(message_count=decision.count, limit_reached=True, remaining=0)

    try:
        system = await _stylist_context(session, user_id, today, decision.is_premium, messages)
    except Exception:
        # the reserved unit goes back before the error surfaces
        await session.rollback()
        await quota.release(session, user_id, quota.CHAT, today)
        raise

    try:
        out = await llm_service.chat_reply(ChatInput(system=system, messages=messages))
        reply, used_fallback = out.reply, False
    except LLMNotConfigured:
        await quota.release(session, user_id, quota.CHAT, today)
        return ChatOut(skipped=True)
    except LLMError as exc:
        logger.warning("generation:fallback site=chat user=%s reason=%s", user_id, exc)
        await quota.release(session, user_id, quota.CHAT, today)
        decision = quota.QuotaDecision(
            allowed=True, count=max(0, decision.count - 1), limit=decision.limit, is_premium=decision.is_premium
        )
        reply, used_fallback = CHAT_FALLBACK_REPLY, True

    return ChatOut(
        reply=reply,
        message_count=decision.count,
        limit_reached=decision.limit_reached,
        remaining=decision.remaining,
        used_fallback=used_fallback,
    )


async def chat_as_guest(messages: List[ChatMessage], state: Optional[GuestQuotaState]) -> GuestChatOut:
    """Signed-out chat with the persona only; the quota travels with the client."""
    today = local_today()
    incoming = state.model_dump() if state else None
    if not settings.llm_configured:
        return GuestChatOut(skipped=True, quota=GuestQuotaState(**(incoming or {"count": 0, "date": today.isoformat()})))

    decision, new_state = quota.guest_check(incoming, settings.GUEST_CHAT_DAILY_LIMIT, today)
    if not decision.allowed:
        return GuestChatOut(
            message_count=decision.count, limit_reached=True, remaining=0, quota=GuestQuotaState(**new_state)
        )

    system = build_chat_context(latest_message=messages[-1].content if messages else "")
    try:
        out = await llm_service.chat_reply(ChatInput(system=system, messages=messages))
    except LLMError as exc:
        logger.warning("generation:fallback site=chat user=guest reason=%s", exc)
        previous = {"count": decision.count - 1, "date": new_state["date"]}
        return GuestChatOut(
            reply=CHAT_FALLBACK_REPLY,
            message_count=previous["count"],
            remaining=max(0, decision.limit - previous["count"]),
            used_fallback=True,
            quota=GuestQuotaState(**previous),
        )
    return GuestChatOut(
        reply=out.reply,
        message_count=decision.count,
        limit_reached=decision.limit_reached,
        remaining=decision.remaining,
        quota=GuestQuotaState(**new_state),
    )
