"""Owner-scoped reads and writes shared by routers, chat and the daily job."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dates import current_season
from app.models.models import (
    ClothingItem,
    DailySuggestion,
    FashionTrend,
    Outfit,
    OutfitLog,
    UserAccount,
    UserPreferences,
)


@dataclass
class WardrobeContext:
    items: List[ClothingItem] = field(default_factory=list)
    outfits: List[Outfit] = field(default_factory=list)
    preferences: Optional[UserPreferences] = None
    trends: List[FashionTrend] = field(default_factory=list)


def clean_tags(tags: Iterable[str] | None) -> List[str]:
    """Lowercased, trimmed, de-duplicated tags capped at 32 characters."""
    out: List[str] = []
    for tag in tags or []:
        t = (tag or "").strip().lower()[:32]
        if t and t not in out:
            out.append(t)
    return out


def parse_uuid(value: str | uuid.UUID | None) -> Optional[uuid.UUID]:
    if value is None or isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


async def list_items(session: AsyncSession, user_id: str) -> List[ClothingItem]:
    res = await session.execute(
        select(ClothingItem).where(ClothingItem.user_id == user_id).order_by(ClothingItem.created_at, ClothingItem.name)
    )
    return list(res.scalars().all())


async def get_item(session: AsyncSession, user_id: str, item_id: uuid.UUID) -> Optional[ClothingItem]:
    item = await session.get(ClothingItem, item_id)
    if not item or item.user_id != user_id:
        return None
    return item


async def list_outfits(session: AsyncSession, user_id: str) -> List[Outfit]:
    res = await session.execute(
        select(Outfit).where(Outfit.user_id == user_id).order_by(Outfit.created_at, Outfit.name)
    )
    return list(res.scalars().all())


async def get_outfit(session: AsyncSession, user_id: str, outfit_id: uuid.UUID) -> Optional[Outfit]:
    outfit = await session.get(Outfit, outfit_id)
    if not outfit or outfit.user_id != user_id:
        return None
    return outfit


async def owned_item_ids(session: AsyncSession, user_id: str, ids: Iterable[str]) -> set[str]:
    wanted = [u for u in (parse_uuid(i) for i in ids) if u is not None]
    if not wanted:
        return set()
    res = await session.execute(
        select(ClothingItem.id).where(ClothingItem.user_id == user_id, ClothingItem.id.in_(wanted))
    )
    return {str(row[0]) for row in res.all()}


async def get_preferences(session: AsyncSession, user_id: str) -> Optional[UserPreferences]:
    return await session.get(UserPreferences, user_id)


async def get_account(session: AsyncSession, user_id: str) -> Optional[UserAccount]:
    return await session.get(UserAccount, user_id)


async def ensure_account(session: AsyncSession, user_id: str) -> UserAccount:
    account = await session.get(UserAccount, user_id)
    if account is None:
        account = UserAccount(user_id=user_id, is_premium=False)
        session.add(account)
        await session.flush()
    return account


async def season_trends(session: AsyncSession, season: str | None = None, limit: int = 5) -> List[FashionTrend]:
    season = season or current_season()
    res = await session.execute(
        select(FashionTrend)
        .where(FashionTrend.season == season)
        .order_by(FashionTrend.popularity_score.desc(), FashionTrend.trend_name)
        .limit(limit)
    )
    return list(res.scalars().all())


async def load_context(session: AsyncSession, user_id: str, trend_limit: int = 5) -> WardrobeContext:
    return WardrobeContext(
        items=await list_items(session, user_id),
        outfits=await list_outfits(session, user_id),
        preferences=await get_preferences(session, user_id),
        trends=await season_trends(session, limit=trend_limit),
    )


async def recent_logs(session: AsyncSession, user_id: str, limit: int = 5) -> List[OutfitLog]:
    res = await session.execute(
        select(OutfitLog)
        .where(OutfitLog.user_id == user_id)
        .order_by(OutfitLog.worn_date.desc(), OutfitLog.created_at.desc())
        .limit(limit)
    )
    return list(res.scalars().all())


async def log_wear(
    session: AsyncSession,
    outfit: Outfit,
    worn_date: date,
    *,
    time_of_day: str | None = None,
    weather_condition: str | None = None,
    temperature: float | None = None,
    activity: str | None = None,
    notes: str | None = None,
) -> OutfitLog:
    """Append a wear log and bump wear counters on the outfit and its items."""
    now = datetime.now(timezone.utc)
    entry = OutfitLog(
        user_id=outfit.user_id,
        outfit_id=outfit.id,
        worn_date=worn_date,
        time_of_day=time_of_day,
        weather_condition=weather_condition,
        temperature=temperature,
        activity=activity,
        notes=notes,
    )
    session.add(entry)
    outfit.times_worn = (outfit.times_worn or 0) + 1
    outfit.last_worn_at = now
    item_ids = [u for u in (parse_uuid(i) for i in outfit.item_ids or []) if u is not None]
    if item_ids:
        res = await session.execute(
            select(ClothingItem).where(ClothingItem.user_id == outfit.user_id, ClothingItem.id.in_(item_ids))
        )
        for item in res.scalars().all():
            item.times_worn = (item.times_worn or 0) + 1
            item.last_worn_at = now
    await session.commit()
    await session.refresh(entry)
    return entry


async def get_suggestion(session: AsyncSession, user_id: str, day: date) -> Optional[DailySuggestion]:
    res = await session.execute(
        select(DailySuggestion).where(DailySuggestion.user_id == user_id, DailySuggestion.suggestion_date == day)
    )
    return res.scalar_one_or_none()


async def list_suggestions(session: AsyncSession, user_id: str, limit: int = 7) -> List[DailySuggestion]:
    res = await session.execute(
        select(DailySuggestion)
        .where(DailySuggestion.user_id == user_id)
        .order_by(DailySuggestion.suggestion_date.desc())
        .limit(limit)
    )
    return list(res.scalars().all())

