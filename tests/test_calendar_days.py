# tests/test_calendar_days.py
from datetime import date, datetime, timedelta, timezone

import pytest

from app.core.errors import InvalidInput
from app.services.calendar_days import day_span, iter_days, parse_calendar_day


def test_parse_plain_iso_date():
    assert parse_calendar_day("2025-01-02") == date(2025, 1, 2)


def test_parse_timestamp_uses_utc_day():
    # 23:30 in UTC-05:00 is already the next day in UTC
    assert parse_calendar_day("2025-01-02T23:30:00-05:00") == date(2025, 1, 3)
    assert parse_calendar_day("2025-01-02T00:00:00Z") == date(2025, 1, 2)


def test_parse_date_and_datetime_objects():
    assert parse_calendar_day(date(2025, 5, 1)) == date(2025, 5, 1)
    aware = datetime(2025, 5, 1, 22, 0, tzinfo=timezone(timedelta(hours=-4)))
    assert parse_calendar_day(aware) == date(2025, 5, 2)
    assert parse_calendar_day(datetime(2025, 5, 1, 22, 0)) == date(2025, 5, 1)


@pytest.mark.parametrize("value", [None, "", "tomorrow", "2025-02-30", 20250101])
def test_parse_rejects_bad_input(value):
    with pytest.raises(InvalidInput) as exc:
        parse_calendar_day(value, field="start_date")
    assert exc.value.field == "start_date"


def test_iter_days_is_inclusive():
    days = list(iter_days(date(2024, 2, 27), date(2024, 3, 1)))
    assert days == [
        date(2024, 2, 27),
        date(2024, 2, 28),
        date(2024, 2, 29),
        date(2024, 3, 1),
    ]
    assert day_span(date(2024, 2, 27), date(2024, 3, 1)) == 4
    assert day_span(date(2024, 3, 1), date(2024, 2, 27)) == 0
