from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError) as exc:
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from exc


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 datetime; timezone info is dropped after conversion to local time."""
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (AttributeError, ValueError) as exc:
        raise ValidationError(f"Invalid datetime: {value!r}") from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each day in [start, end)."""
    current = start
    while current < end:
        yield current
        current += timedelta(days=1)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a 1-based month."""
    if not 1 <= year <= 9999:
        raise ValidationError(f"Invalid year: {year}")
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}")
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def parse_clock_time(value, day: date) -> Optional[datetime]:
    """Parse an admin-entered clock time.

    Accepts a datetime, an ISO-8601 datetime string, or HH:MM[:SS] which is
    placed on `day`. Empty values clear the time.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if len(text) <= 8 and ":" in text:
        for fmt in ("%H:%M:%S", "%H:%M"):
            try:
                return datetime.combine(day, datetime.strptime(text, fmt).time())
            except ValueError:
                continue
        raise ValidationError(f"Invalid time: {text!r} (expected HH:MM or HH:MM:SS)")
    return parse_iso_datetime(text)
