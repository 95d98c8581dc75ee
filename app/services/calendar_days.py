# app/services/calendar_days.py
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterator, List, Optional

from app.core.errors import InvalidInput


def parse_calendar_day(value: Any, field: str = "date") -> date:
    """
    Turn client input into a calendar day.

    Accepts:
      - date objects (returned as-is)
      - datetime objects (aware ones are converted to UTC first)
      - "YYYY-MM-DD" strings
      - full ISO-8601 timestamps ("2025-01-02T00:00:00Z", ...)

    Raises InvalidInput naming `field` for anything else.
    """
    if value is None or value == "":
        raise InvalidInput(f"{field} is required", field=field)

    if isinstance(value, datetime):
        return _datetime_to_day(value)
    if isinstance(value, date):
        return value

    if not isinstance(value, str):
        raise InvalidInput(f"{field} must be an ISO date string", field=field)

    raw = value.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass

    # Python < 3.11 doesn't accept a trailing "Z"
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return _datetime_to_day(datetime.fromisoformat(raw))
    except ValueError as e:
        raise InvalidInput(f"{field} is not a valid date: {value!r}", field=field) from e


def _datetime_to_day(dt: datetime) -> date:
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.date()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every day from start to end, both inclusive, ascending."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def day_span(start: date, end: date) -> int:
    """Number of days in [start, end]; 0 when end is before start."""
    return max((end - start).days + 1, 0)


def candidate_days(start: date, end: date, cap: Optional[int] = None) -> List[date]:
    """
    Days of a trip window eligible for ranking.

    Windows longer than `cap` are truncated to their first `cap` days.
    """
    days: List[date] = []
    for d in iter_days(start, end):
        if cap is not None and len(days) >= cap:
            break
        days.append(d)
    return days
