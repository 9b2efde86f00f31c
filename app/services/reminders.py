from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Sequence

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dates import as_utc
from app.models.models import ClothingItem, SmartReminder

logger = logging.getLogger("uvicorn.error")

UNWORN_ITEM = "unworn_item"
UNWORN_PRIORITY = 6
UNWORN_EXPIRY = timedelta(days=7)
MAX_UNWORN_PER_RUN = 3


def is_unworn(item: ClothingItem, now: datetime, days: int | None = None) -> bool:
    days = settings.REMINDER_UNWORN_DAYS if days is None else days
    last = as_utc(item.last_worn_at)
    if last is None:
        return True
    return now - last > timedelta(days=days)


def unworn_message(item: ClothingItem) -> str:
    label = " ".join(p for p in (item.color, item.type) if p) or item.name
    return f"You haven't worn your {label} in a while. Want to style it today?"


async def create_unworn_reminders(
    session: AsyncSession, user_id: str, items: Sequence[ClothingItem], now: datetime | None = None
) -> List[SmartReminder]:
    """Queue up to three nudges for items left in the closet.

    Items that already have an open unworn reminder are skipped so repeated
    runs do not stack duplicates. The caller commits.
    """
    now = now or datetime.now(timezone.utc)
    res = await session.execute(
        select(SmartReminder.item_id).where(
            SmartReminder.user_id == user_id,
            SmartReminder.reminder_type == UNWORN_ITEM,
            SmartReminder.dismissed.is_(False),
            or_(SmartReminder.expires_at.is_(None), SmartReminder.expires_at > now),
        )
    )
    already = {row[0] for row in res.all()}
    created: List[SmartReminder] = []
    for item in items:
        if len(created) >= MAX_UNWORN_PER_RUN:
            break
        if item.id in already or not is_unworn(item, now):
            continue
        reminder = SmartReminder(
            user_id=user_id,
            reminder_type=UNWORN_ITEM,
            item_id=item.id,
            message=unworn_message(item),
            priority=UNWORN_PRIORITY,
            expires_at=now + UNWORN_EXPIRY,
        )
        session.add(reminder)
        created.append(reminder)
    if created:
        logger.info("reminders:created user=%s count=%s", user_id, len(created))
    return created


async def list_active(session: AsyncSession, user_id: str, now: datetime | None = None) -> List[SmartReminder]:
    now = now or datetime.now(timezone.utc)
    res = await session.execute(
        select(SmartReminder)
        .where(
            SmartReminder.user_id == user_id,
            SmartReminder.dismissed.is_(False),
            or_(SmartReminder.expires_at.is_(None), SmartReminder.expires_at > now),
        )
        .order_by(SmartReminder.priority.desc(), SmartReminder.created_at.desc())
    )
    return list(res.scalars().all())


async def dismiss(session: AsyncSession, user_id: str, reminder_id: uuid.UUID) -> bool:
    reminder = await session.get(SmartReminder, reminder_id)
    if not reminder or reminder.user_id != user_id:
        return False
    reminder.dismissed = True
    await session.commit()
    return True


async def cleanup_expired(session: AsyncSession, now: datetime | None = None) -> int:
    now = now or datetime.now(timezone.utc)
    res = await session.execute(
        delete(SmartReminder).where(
            or_(SmartReminder.dismissed.is_(True), SmartReminder.expires_at < now)
        )
    )
    await session.commit()
    return res.rowcount or 0
