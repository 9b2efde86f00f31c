"""Daily outfit suggestions.

One run walks every owner who opted into reminders, one at a time. Per owner
the wardrobe load and the weather lookup are awaited together, candidates are
pre-filtered by a temperature bracket and ranked least-recently-worn first,
and the LLM picks from that shortlist. Any LLM failure falls back to the
shortlist itself with a canned rationale.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

import httpx
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dates import as_utc, local_today
from app.models.models import DailySuggestion, Outfit, UserPreferences
from app.services import llm as llm_service
from app.services import reminders as reminder_service
from app.services import wardrobe
from app.services.llm.types import DailyCandidate, DailyPickInput, LLMError, LLMNotConfigured
from app.services.notifications.dispatcher import daily_suggestion_ready
from app.services.notifications.service import NotificationService
from app.services.weather import WeatherReport, fetch_weather_or_random

logger = logging.getLogger("uvicorn.error")

SUGGESTION_COUNT = 3

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def weather_bracket(temperature: float) -> tuple[str, str]:
    """Season tags that suit ``temperature`` (°C)."""
    if temperature < 10:
        return ("winter", "fall")
    if temperature < 20:
        return ("spring", "fall")
    return ("summer", "spring")


def in_bracket(outfit: Any, bracket: Sequence[str]) -> bool:
    tags = {t.lower() for t in (outfit.season_tags or []) if t}
    return bool(tags.intersection(bracket))


def _wear_key(outfit: Any) -> tuple[int, datetime]:
    last = as_utc(outfit.last_worn_at)
    if last is None:
        return (0, _EPOCH)
    return (1, last)


def select_candidates(outfits: Sequence[Any], temperature: float, limit: int = SUGGESTION_COUNT) -> List[Any]:
    """Season-appropriate outfits, never-worn first then oldest wear first.

    When nothing matches the bracket the whole list is ranked instead. The
    sort is stable, so equal keys keep their input order.
    """
    bracket = weather_bracket(temperature)
    pool = [o for o in outfits if in_bracket(o, bracket)] or list(outfits)
    return sorted(pool, key=_wear_key)[:limit]


def fallback_reasoning(weather: WeatherReport) -> str:
    cur = weather.current
    return (
        f"Picked for today's {cur.condition.lower()} weather at {cur.temperature}°C, "
        "favouring season-appropriate outfits you haven't worn recently."
    )


def weather_snapshot(weather: WeatherReport) -> Dict[str, Any]:
    return weather.model_dump()


class DailyRunResult(BaseModel):
    success: bool = True
    processed: int = 0
    skipped: int = 0
    errors: int = 0
    reason: Optional[str] = None


@dataclass
class DailyOutcome:
    status: str  # created | exists | empty
    suggestion: Optional[DailySuggestion] = None


def _candidate_payload(outfit: Outfit) -> DailyCandidate:
    last = as_utc(outfit.last_worn_at)
    return DailyCandidate(
        outfit_id=str(outfit.id),
        name=outfit.name,
        season_tags=list(outfit.season_tags or []),
        occasion_tags=list(outfit.occasion_tags or []),
        last_worn=last.date().isoformat() if last else None,
    )


async def _pick(
    user_id: str,
    candidates: List[Outfit],
    weather: WeatherReport,
    ctx: wardrobe.WardrobeContext,
) -> tuple[List[str], str, bool]:
    candidate_ids = [str(o.id) for o in candidates]
    payload = DailyPickInput(
        weather={
            "temperature": weather.current.temperature,
            "condition": weather.current.condition,
            "location": weather.location.name,
        },
        favorite_styles=list((ctx.preferences.favorite_styles if ctx.preferences else None) or []),
        trends=[t.trend_name for t in ctx.trends],
        candidates=[_candidate_payload(o) for o in candidates],
    )
    try:
        out = await llm_service.pick_daily_outfits(payload)
        known = set(candidate_ids)
        picked: List[str] = []
        reasons: List[str] = []
        for p in out.outfits:
            if p.outfit_id in known and p.outfit_id not in picked:
                picked.append(p.outfit_id)
                if p.reasoning:
                    reasons.append(p.reasoning)
        picked = picked[:SUGGESTION_COUNT]
        if not picked:
            raise LLMError("no known outfit ids in response")
        reasoning = out.summary or " ".join(reasons) or fallback_reasoning(weather)
        return picked, reasoning, False
    except LLMNotConfigured:
        raise
    except LLMError as exc:
        logger.warning("generation:fallback site=daily user=%s reason=%s", user_id, exc)
        return candidate_ids, fallback_reasoning(weather), True


async def generate_for_user(
    session: AsyncSession,
    user_id: str,
    *,
    today: date | None = None,
    replace: bool = False,
    transport: httpx.AsyncBaseTransport | None = None,
    notifier: NotificationService | None = None,
) -> DailyOutcome:
    """Write today's suggestion row for one owner.

    ``replace`` swaps an existing row for a fresh one; otherwise an owner who
    already has today's row is left alone.
    """
    today = today or local_today()
    existing = await wardrobe.get_suggestion(session, user_id, today)
    if existing is not None and not replace:
        return DailyOutcome(status="exists", suggestion=existing)

    prefs = await wardrobe.get_preferences(session, user_id)
    city = (prefs.preferred_city if prefs else None) or settings.DEFAULT_CITY
    country = (prefs.preferred_country if prefs else None) or settings.DEFAULT_COUNTRY

    ctx, weather = await asyncio.gather(
        wardrobe.load_context(session, user_id, trend_limit=settings.DAILY_TRENDS_LIMIT),
        fetch_weather_or_random(city, country, transport=transport),
    )

    if ctx.items:
        await reminder_service.create_unworn_reminders(session, user_id, ctx.items)

    if not ctx.items or not ctx.outfits:
        await session.commit()
        logger.info("daily:empty user=%s items=%s outfits=%s", user_id, len(ctx.items), len(ctx.outfits))
        return DailyOutcome(status="empty")

    candidates = select_candidates(ctx.outfits, weather.current.temperature)
    outfit_ids, reasoning, used_fallback = await _pick(user_id, candidates, weather, ctx)

    if existing is not None:
        await session.delete(existing)
        await session.flush()
    row = DailySuggestion(
        user_id=user_id,
        suggestion_date=today,
        outfit_ids=outfit_ids,
        reasoning=reasoning,
        weather_context=weather_snapshot(weather),
        used_fallback=used_fallback,
        was_viewed=False,
        was_accepted=False,
    )
    session.add(row)
    await session.commit()
    await session.refresh(row)
    logger.info(
        "daily:created user=%s outfits=%s fallback=%s", user_id, len(outfit_ids), used_fallback
    )

    (notifier or NotificationService()).send(
        daily_suggestion_ready(user_id, len(outfit_ids), weather.current.condition)
    )
    return DailyOutcome(status="created", suggestion=row)


async def eligible_users(session: AsyncSession) -> List[str]:
    res = await session.execute(
        select(UserPreferences.user_id)
        .where(UserPreferences.reminder_enabled.is_(True))
        .order_by(UserPreferences.user_id)
    )
    return [row[0] for row in res.all()]


async def run_daily_suggestions(
    session_factory: Callable[[], AsyncSession],
    *,
    today: date | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    notifier: NotificationService | None = None,
) -> DailyRunResult:
    """Generate today's suggestions for every opted-in owner, sequentially."""
    if not settings.llm_configured:
        logger.info("daily:skipped reason=llm_not_configured")
        return DailyRunResult(reason="llm_not_configured")

    today = today or local_today()
    result = DailyRunResult()
    async with session_factory() as session:
        users = await eligible_users(session)
        logger.info("daily:run start users=%s date=%s", len(users), today)
        for user_id in users:
            try:
                outcome = await generate_for_user(
                    session, user_id, today=today, transport=transport, notifier=notifier
                )
            except LLMNotConfigured:
                await session.rollback()
                result.reason = "llm_not_configured"
                break
            except IntegrityError:
                # another run wrote today's row first
                await session.rollback()
                result.skipped += 1
                continue
            except Exception:
                await session.rollback()
                logger.exception("daily:error user=%s", user_id)
                result.errors += 1
                continue
            if outcome.status == "created":
                result.processed += 1
            else:
                result.skipped += 1
    logger.info(
        "daily:run processed=%s skipped=%s errors=%s", result.processed, result.skipped, result.errors
    )
    return result
