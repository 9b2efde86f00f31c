from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from app.core.config import settings


def local_now() -> datetime:
    return datetime.now(ZoneInfo(settings.APP_TIMEZONE))


def local_today() -> date:
    return local_now().date()


def current_season(today: date | None = None) -> str:
    """Season key used by the trend catalog, e.g. ``fall_2026``."""
    today = today or local_today()
    month = today.month
    if 3 <= month <= 5:
        name = "spring"
    elif 6 <= month <= 8:
        name = "summer"
    elif 9 <= month <= 11:
        name = "fall"
    else:
        name = "winter"
    return f"{name}_{today.year}"


def next_season(today: date | None = None) -> str:
    today = today or local_today()
    name, year = current_season(today).split("_")
    order = ["spring", "summer", "fall", "winter"]
    nxt = order[(order.index(name) + 1) % 4]
    # winter spans the new year; the following spring belongs to the next one
    if name == "winter" and today.month == 12:
        return f"{nxt}_{int(year) + 1}"
    return f"{nxt}_{year}"


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive timestamps; treat them as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
