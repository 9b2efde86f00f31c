from datetime import date, datetime, timezone

import pytest

from app.core.dates import as_utc, current_season, next_season


@pytest.mark.parametrize(
    "day,current,upcoming",
    [
        (date(2026, 3, 1), "spring_2026", "summer_2026"),
        (date(2026, 8, 31), "summer_2026", "fall_2026"),
        (date(2026, 10, 18), "fall_2026", "winter_2026"),
        (date(2026, 12, 5), "winter_2026", "spring_2027"),
        (date(2027, 1, 15), "winter_2027", "spring_2027"),
    ],
)
def test_seasons(day, current, upcoming):
    assert current_season(day) == current
    assert next_season(day) == upcoming


def test_as_utc_assumes_naive_is_utc():
    naive = datetime(2026, 10, 18, 6, 0)
    assert as_utc(naive) == datetime(2026, 10, 18, 6, 0, tzinfo=timezone.utc)
    assert as_utc(None) is None
