from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dates import current_season, next_season
from app.models.models import FashionTrend
from app.services import llm as llm_service
from app.services.llm.types import LLMError, LLMNotConfigured, TrendDiscoveryInput

logger = logging.getLogger("uvicorn.error")


async def sync_fashion_trends(session: AsyncSession, today: Optional[date] = None) -> Dict[str, Any]:
    """Ask the LLM for this season's and next season's trends and store the new ones.

    Trends are keyed by ``(trend_name, season)``; names already stored for a
    season are skipped.
    """
    current = current_season(today)
    upcoming = next_season(today)
    try:
        out = await llm_service.discover_trends(TrendDiscoveryInput(current_season=current, next_season=upcoming))
    except LLMNotConfigured:
        logger.info("trends:skipped reason=llm_not_configured")
        return {"ok": True, "skipped": True, "added": 0}
    except LLMError as exc:
        logger.warning("generation:fallback site=trends reason=%s", exc)
        return {"ok": False, "used_fallback": True, "added": 0, "error": str(exc)}

    res = await session.execute(select(FashionTrend.trend_name, FashionTrend.season))
    seen = {(name, season) for name, season in res.all()}
    added = 0
    for trend in out.trends:
        key = (trend.trend_name, trend.season)
        if key in seen:
            continue
        seen.add(key)
        session.add(
            FashionTrend(
                trend_name=trend.trend_name,
                season=trend.season,
                description=trend.description,
                colors=trend.colors,
                key_pieces=trend.key_pieces,
                style_tags=trend.style_tags,
                popularity_score=trend.popularity_score,
            )
        )
        added += 1
    await session.commit()
    logger.info("trends:synced seasons=%s,%s added=%s skipped=%s", current, upcoming, added, len(out.trends) - added)
    return {"ok": True, "added": added, "skipped_existing": len(out.trends) - added}
