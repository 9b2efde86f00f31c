"""Per-owner daily quotas.

Each quota dimension (chat messages, instant-outfit generations) is counted in
its own row keyed by ``(user_id, dimension, window_date)``. Only today's row is
ever compared against the ceiling, so yesterday's count simply stops being
read; there is no reset job.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.models import UsageQuota, UserAccount

logger = logging.getLogger("uvicorn.error")

CHAT = "chat"
INSTANT_OUTFIT = "instant_outfit"


@dataclass
class QuotaDecision:
    allowed: bool
    count: int
    limit: int
    is_premium: bool = False

    @property
    def limit_reached(self) -> bool:
        if self.is_premium:
            return False
        return self.count >= self.limit

    @property
    def remaining(self) -> Optional[int]:
        if self.is_premium:
            return None
        return max(0, self.limit - self.count)


def _insert_for(session: AsyncSession):
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return pg_insert
    if dialect == "sqlite":
        return sqlite_insert
    raise RuntimeError(f"quota upsert unsupported on dialect {dialect}")


async def is_premium(session: AsyncSession, user_id: str) -> bool:
    res = await session.execute(select(UserAccount.is_premium).where(UserAccount.user_id == user_id))
    return bool(res.scalar_one_or_none())


async def usage(session: AsyncSession, user_id: str, dimension: str, today: date) -> int:
    res = await session.execute(
        select(UsageQuota.count).where(
            UsageQuota.user_id == user_id,
            UsageQuota.dimension == dimension,
            UsageQuota.window_date == today,
        )
    )
    return res.scalar_one_or_none() or 0


async def _increment(
    session: AsyncSession, user_id: str, dimension: str, today: date, ceiling: Optional[int]
) -> Optional[int]:
    insert = _insert_for(session)
    now = datetime.now(timezone.utc)
    stmt = insert(UsageQuota).values(
        user_id=user_id, dimension=dimension, window_date=today, count=1, updated_at=now
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[UsageQuota.user_id, UsageQuota.dimension, UsageQuota.window_date],
        set_={"count": UsageQuota.count + 1, "updated_at": now},
        where=(UsageQuota.count < ceiling) if ceiling is not None else None,
    ).returning(UsageQuota.count)
    res = await session.execute(stmt)
    row = res.first()
    return row[0] if row else None


async def consume(
    session: AsyncSession,
    user_id: str,
    dimension: str,
    limit: int,
    today: date,
) -> QuotaDecision:
    """Take one unit of today's quota, or refuse when the ceiling is reached.

    The increment and the ceiling check are a single statement; two concurrent
    callers cannot both take the last unit. Premium owners are always allowed
    and their usage is still counted.
    """
    premium = await is_premium(session, user_id)
    new_count = await _increment(session, user_id, dimension, today, None if premium else limit)
    await session.commit()
    if new_count is None:
        logger.info("quota:denied user=%s dimension=%s limit=%s", user_id, dimension, limit)
        return QuotaDecision(allowed=False, count=limit, limit=limit, is_premium=premium)
    return QuotaDecision(allowed=True, count=new_count, limit=limit, is_premium=premium)


async def release(session: AsyncSession, user_id: str, dimension: str, today: date) -> None:
    """Give back one unit taken by :func:`consume` (never below zero)."""
    await session.execute(
        update(UsageQuota)
        .where(
            UsageQuota.user_id == user_id,
            UsageQuota.dimension == dimension,
            UsageQuota.window_date == today,
            UsageQuota.count > 0,
        )
        .values(count=UsageQuota.count - 1)
    )
    await session.commit()


def effective_count(count: int, last_activity: datetime | date | str | None, today: date) -> int:
    """Count that still applies today given when it was last bumped."""
    if last_activity is None:
        return 0
    if isinstance(last_activity, str):
        try:
            last_day = date.fromisoformat(last_activity[:10])
        except ValueError:
            return 0
    elif isinstance(last_activity, datetime):
        last_day = last_activity.date()
    else:
        last_day = last_activity
    if last_day.isoformat() != today.isoformat():
        return 0
    return count


def guest_check(state: Dict[str, Any] | None, limit: int, today: date) -> tuple[QuotaDecision, Dict[str, Any]]:
    """Quota for signed-out chat, held by the client.

    The state round-trips through the client (``{"count": n, "date": "YYYY-MM-DD"}``),
    so it only informs the UI; clearing it resets the count.
    """
    state = state or {}
    try:
        stored = max(0, int(state.get("count") or 0))
    except (TypeError, ValueError):
        stored = 0
    current = effective_count(stored, state.get("date"), today)
    if current >= limit:
        return QuotaDecision(allowed=False, count=current, limit=limit), {"count": current, "date": today.isoformat()}
    new_count = current + 1
    return QuotaDecision(allowed=True, count=new_count, limit=limit), {"count": new_count, "date": today.isoformat()}
