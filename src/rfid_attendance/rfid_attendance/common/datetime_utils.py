from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM into (year, month)."""
    try:
        parsed = datetime.strptime((value or "").strip(), "%Y-%m")
    except ValueError:
        raise ValidationError(f"Invalid month (YYYY-MM): {value!r}")
    return parsed.year, parsed.month


def month_key(day: date) -> str:
    return day.strftime("%Y-%m")


def parse_hhmm(value: str) -> tuple[int, int]:
    """Split "HH:MM" into hours and minutes.

    Minutes are not range-checked here; callers add them as a timedelta so
    "09:50" plus 15 minutes of grace lands on 10:05.
    """
    parts = (value or "").strip().split(":")
    if len(parts) < 2:
        raise ValidationError(f"Invalid time (HH:MM): {value!r}")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def parse_clock_time(value: str) -> tuple[int, int]:
    """Like `parse_hhmm`, but a wall-clock time: 00:00 .. 23:59."""
    hours, minutes = parse_hhmm(value)
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValidationError(f"Invalid time (HH:MM): {value!r}")
    return hours, minutes


def at_clock_time(day: date, hhmm: str) -> datetime:
    hours, minutes = parse_clock_time(hhmm)
    return datetime.combine(day, time(hours, minutes))


def at_offset(day: date, hhmm: str, *, extra_minutes: int = 0) -> datetime:
    hours, minutes = parse_hhmm(hhmm)
    return datetime.combine(day, time()) + timedelta(hours=hours, minutes=minutes + extra_minutes)


def iter_month_days(year: int, month: int) -> Iterator[date]:
    days_in_month = calendar.monthrange(year, month)[1]
    for d in range(1, days_in_month + 1):
        yield date(year, month, d)


def js_weekday(day: date) -> int:
    """Weekday index with 0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7


def week_bounds(day: date) -> tuple[date, date]:
    """Sunday-start week containing `day`."""
    start = day - timedelta(days=js_weekday(day))
    return start, start + timedelta(days=6)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored ISO timestamp into a naive local datetime.

    Timestamps written by older clients carry a UTC "Z" suffix.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()
