from datetime import date, datetime
from typing import Optional

from app.core.dates import as_utc
from app.models.models import ClothingItem, DailySuggestion, Outfit, OutfitLog, SmartReminder
from app.schemas.items import ItemOut
from app.schemas.outfits import OutfitOut, WearLogOut
from app.schemas.reminders import ReminderOut
from app.schemas.suggestions import DailySuggestionOut


def iso_or_none(value: Optional[datetime | date]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return as_utc(value).isoformat()
    return value.isoformat()


def item_out(item: ClothingItem) -> ItemOut:
    return ItemOut(
        id=str(item.id),
        name=item.name,
        type=item.type,
        color=item.color,
        material=item.material,
        season_tags=item.season_tags or [],
        occasion_tags=item.occasion_tags or [],
        favorite=bool(item.favorite),
        times_worn=item.times_worn or 0,
        last_worn_at=iso_or_none(item.last_worn_at),
        image_url=item.image_url,
        created_at=iso_or_none(item.created_at),
    )


def outfit_out(outfit: Outfit) -> OutfitOut:
    return OutfitOut(
        id=str(outfit.id),
        name=outfit.name,
        item_ids=[str(i) for i in outfit.item_ids or []],
        season_tags=outfit.season_tags or [],
        occasion_tags=outfit.occasion_tags or [],
        favorite=bool(outfit.favorite),
        times_worn=outfit.times_worn or 0,
        last_worn_at=iso_or_none(outfit.last_worn_at),
        source=outfit.source,
        created_at=iso_or_none(outfit.created_at),
    )


def wear_log_out(log: OutfitLog) -> WearLogOut:
    return WearLogOut(
        id=str(log.id),
        outfit_id=str(log.outfit_id),
        worn_date=log.worn_date.isoformat(),
        time_of_day=log.time_of_day,
        weather_condition=log.weather_condition,
        temperature=log.temperature,
        activity=log.activity,
        notes=log.notes,
        created_at=iso_or_none(log.created_at),
    )


def suggestion_out(row: DailySuggestion) -> DailySuggestionOut:
    return DailySuggestionOut(
        id=str(row.id),
        suggestion_date=row.suggestion_date.isoformat(),
        outfit_ids=[str(i) for i in row.outfit_ids or []],
        reasoning=row.reasoning,
        weather_context=row.weather_context,
        used_fallback=bool(row.used_fallback),
        was_viewed=bool(row.was_viewed),
        was_accepted=bool(row.was_accepted),
        created_at=iso_or_none(row.created_at),
    )


def reminder_out(r: SmartReminder) -> ReminderOut:
    return ReminderOut(
        id=str(r.id),
        reminder_type=r.reminder_type,
        item_id=str(r.item_id) if r.item_id else None,
        outfit_id=str(r.outfit_id) if r.outfit_id else None,
        message=r.message,
        priority=r.priority,
        expires_at=iso_or_none(r.expires_at),
        created_at=iso_or_none(r.created_at),
    )
