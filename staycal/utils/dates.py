"""Calendar-day helpers shared by the availability index and the calendar.

All arithmetic is done on ``datetime.date`` values with ``timedelta(days=1)``
steps, so a day is always one calendar day regardless of daylight saving.
Month arguments here are 1-based, as in the standard library.
"""

import calendar
import re
from collections.abc import Iterator, Mapping
from datetime import date, datetime, timedelta
from typing import Any

DateLike = date | datetime | str | int | float | Mapping[str, Any] | None

ONE_DAY = timedelta(days=1)

# Epoch values above this are taken as milliseconds
_EPOCH_MS_THRESHOLD = 100_000_000_000

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def to_local_datetime(value: DateLike) -> datetime | None:
    """Parse a date-like value into a naive local datetime.

    Accepts datetimes (aware ones are converted to local time), dates,
    ISO strings (a trailing ``Z`` is read as UTC), epoch seconds or
    milliseconds, and document-store timestamp mappings of the form
    ``{"seconds": ..., "nanoseconds": ...}``.

    Args:
        value: The raw value

    Returns:
        Naive local datetime, or None if the value is empty or unparsable
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        if seconds is None:
            return None
        nanos = value.get("nanoseconds", value.get("_nanoseconds")) or 0
        try:
            return datetime.fromtimestamp(float(seconds) + float(nanos) / 1e9)
        except (TypeError, ValueError, OverflowError, OSError):
            return None

    if isinstance(value, (int, float)):
        seconds = value / 1000 if abs(value) >= _EPOCH_MS_THRESHOLD else value
        try:
            return datetime.fromtimestamp(seconds)
        except (ValueError, OverflowError, OSError):
            return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if _DATE_ONLY.match(text):
            # Date-only strings are a local calendar day, not UTC midnight
            try:
                parsed = date.fromisoformat(text)
            except ValueError:
                return None
            return datetime(parsed.year, parsed.month, parsed.day)
        try:
            return to_local_datetime(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            return None

    return None


def to_local_date(value: DateLike) -> date | None:
    """Normalize a date-like value to its local calendar day (local midnight)."""
    parsed = to_local_datetime(value)
    return parsed.date() if parsed else None


def date_key(value: DateLike) -> str | None:
    """Canonical per-day key (``YYYY-MM-DD``) ignoring time of day."""
    day = to_local_date(value)
    return day.isoformat() if day else None


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day in the half-open range ``[start, end)``."""
    current = start
    while current < end:
        yield current
        current += ONE_DAY


def add_days(day: date, count: int) -> date:
    return day + timedelta(days=count)


def nights_between(check_in: DateLike, check_out: DateLike) -> int | None:
    """Number of nights between two dates, or None if either is missing."""
    start = to_local_date(check_in)
    end = to_local_date(check_out)
    if start is None or end is None:
        return None
    return (end - start).days


def days_in_month(year: int, month: int) -> int:
    """Day count of a month, valid through December of ``date.max.year``."""
    return calendar.monthrange(year, month)[1]


def first_weekday(year: int, month: int) -> int:
    """Weekday of the 1st of the month, 0 (Sunday) to 6 (Saturday)."""
    return (date(year, month, 1).weekday() + 1) % 7


def parse_date_param(value: str | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` query parameter as a local date.

    Used for deep links such as ``?date=2024-03-05``. Anything that is not
    a real calendar date yields None.
    """
    if not value:
        return None
    parts = value.strip().split("-")
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(p) for p in parts)
        return date(year, month, day)
    except ValueError:
        return None


def format_stay_dates(check_in: DateLike, check_out: DateLike) -> str:
    """Human readable stay range, e.g. ``Apr 17 – Apr 19, 2026``.

    The year shown is the check-out year.
    """
    start = to_local_date(check_in)
    end = to_local_date(check_out)
    if start is None or end is None:
        return ""
    return f"{start:%b} {start.day} – {end:%b} {end.day}, {end.year}"
