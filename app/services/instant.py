from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dates import local_today
from app.schemas.instant import InstantMeta, InstantOutfitIn, InstantOutfitOut, InstantOutfitsOut
from app.services import instant_catalog
from app.services import llm as llm_service
from app.services import quota
from app.services.llm.types import InstantOutfit, InstantOutfitsInput, LLMError, LLMNotConfigured

logger = logging.getLogger("uvicorn.error")

OUTFIT_COUNT = 3
FALLBACK_MODEL = "catalog"

_TEMP_RE = re.compile(r"(-?\d+(?:\.\d+)?)\s*°?\s*c?\b", re.IGNORECASE)


def determine_weather_condition(label: str | None, temperature: float | None = None) -> str:
    """Collapse a weather label and/or temperature into Sunny, Rainy, Cold or Hot."""
    label = (label or "").strip()
    if label.title() in instant_catalog.CONDITIONS:
        return label.title()
    lowered = label.lower()
    if "rain" in lowered or "drizzle" in lowered:
        return "Rainy"
    if temperature is None:
        match = _TEMP_RE.search(label)
        if match:
            temperature = float(match.group(1))
    if temperature is not None:
        if temperature < 10:
            return "Cold"
        if temperature > 25:
            return "Hot"
    return "Sunny"


def fallback_outfits(style_vibe: str, occasion: str, weather: str, temperature: float | None = None) -> List[InstantOutfitOut]:
    """Exactly three outfits: catalog matches first, padded from the templates."""
    condition = determine_weather_condition(weather, temperature)
    entries = instant_catalog.lookup(style_vibe, occasion, condition)[:OUTFIT_COUNT]
    for extra in instant_catalog.templated(style_vibe, occasion, condition):
        if len(entries) >= OUTFIT_COUNT:
            break
        entries.append(extra)
    return [InstantOutfitOut(title=t, items=list(items), reasoning=r) for t, items, r in entries]


def _to_out(o: InstantOutfit) -> InstantOutfitOut:
    return InstantOutfitOut(
        title=o.title,
        items=o.items,
        reasoning=o.reasoning,
        palette=o.palette,
        do_not_wear=o.doNotWear,
    )


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


async def generate_instant_outfits(
    session: AsyncSession,
    user_id: Optional[str],
    req: InstantOutfitIn,
) -> InstantOutfitsOut:
    """Three outfit ideas for a vibe, occasion and weather.

    Signed-in owners spend one unit of the instant-outfit quota per call; a
    provider failure refunds it and answers from the static catalog instead.
    Signed-out callers are not metered.
    """
    if not settings.llm_configured:
        return InstantOutfitsOut(skipped=True)

    today = local_today()
    decision: Optional[quota.QuotaDecision] = None
    if user_id:
        decision = await quota.consume(
            session, user_id, quota.INSTANT_OUTFIT, settings.INSTANT_OUTFIT_DAILY_LIMIT, today
        )
        if not decision.allowed:
            return InstantOutfitsOut(limit_reached=True, generations_remaining=0)

    payload = InstantOutfitsInput(
        style_vibe=req.style_vibe,
        occasion=req.occasion,
        weather=req.weather,
        color_family=req.color_family,
        comfort_level=req.comfort_level,
    )
    try:
        out = await llm_service.generate_instant_outfits(payload)
        outfits = [_to_out(o) for o in out.outfits[:OUTFIT_COUNT]]
        meta = InstantMeta(model=out.usage.model or settings.LLM_MODEL, generated_at=_now_iso())
        used_fallback = False
    except LLMNotConfigured:
        if user_id:
            await quota.release(session, user_id, quota.INSTANT_OUTFIT, today)
        return InstantOutfitsOut(skipped=True)
    except LLMError as exc:
        logger.warning("generation:fallback site=instant user=%s reason=%s", user_id or "guest", exc)
        if user_id:
            await quota.release(session, user_id, quota.INSTANT_OUTFIT, today)
            decision = quota.QuotaDecision(
                allowed=True,
                count=max(0, decision.count - 1),
                limit=decision.limit,
                is_premium=decision.is_premium,
            )
        outfits = fallback_outfits(req.style_vibe, req.occasion, req.weather, req.temperature)
        meta = InstantMeta(model=FALLBACK_MODEL, generated_at=_now_iso())
        used_fallback = True

    return InstantOutfitsOut(
        outfits=outfits,
        meta=meta,
        used_fallback=used_fallback,
        limit_reached=decision.limit_reached if decision else False,
        generations_remaining=decision.remaining if decision else None,
    )
