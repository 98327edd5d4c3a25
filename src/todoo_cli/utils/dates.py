"""Calendar helpers.

All dates are naive local dates: there is no time-of-day or timezone
precision anywhere in the planner.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta

from todoo_cli.utils.logger import get_logger

ISO_FORMAT = "yyyy-MM-dd"
DOTTED_FORMAT = "dd.MM.yyyy"

_DATE_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})\s*$")


def normalize_to_local_midnight(value: date | datetime) -> date:
    """Drop the time-of-day part of *value*."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_date(value: str | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` string into a date.

    Returns None for empty or malformed input instead of raising.
    """
    if not value:
        return None
    match = _DATE_RE.match(value)
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def coerce_date(value: date | datetime | str | None) -> date | None:
    """Turn a date, datetime or ``YYYY-MM-DD`` string into a date."""
    if value is None:
        return None
    if isinstance(value, str):
        return parse_date(value)
    return normalize_to_local_midnight(value)


def format_date(value: date | datetime | str, fmt: str = ISO_FORMAT) -> str:
    """Render a date as ``yyyy-MM-dd`` (default) or ``dd.MM.yyyy``.

    Malformed input falls back to today's date rather than raising.
    """
    day = coerce_date(value) if isinstance(value, (date, str)) else None
    if day is None:
        get_logger().debug("unparseable date %r, rendering today", value)
        day = date.today()

    if fmt == DOTTED_FORMAT:
        return f"{day.day:02d}.{day.month:02d}.{day.year:04d}"
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def weekday_index(value: date | datetime) -> int:
    """Weekday number with 0=Sunday ... 6=Saturday."""
    return (normalize_to_local_midnight(value).weekday() + 1) % 7


def days_between(a: date | datetime, b: date | datetime) -> int:
    """Signed number of whole days from *b* to *a*."""
    return (normalize_to_local_midnight(a) - normalize_to_local_midnight(b)).days


def months_between(a: date | datetime, b: date | datetime) -> int:
    """Signed month difference, ignoring the day of month."""
    return (a.year - b.year) * 12 + (a.month - b.month)


def start_of_week(value: date | datetime) -> date:
    """Monday of the week containing *value*."""
    day = normalize_to_local_midnight(value)
    return day - timedelta(days=(weekday_index(day) + 6) % 7)


def end_of_week(value: date | datetime) -> date:
    """Sunday of the week containing *value*."""
    return start_of_week(value) + timedelta(days=6)


def start_of_month(value: date | datetime) -> date:
    return normalize_to_local_midnight(value).replace(day=1)


def each_day_in_interval(start: date | datetime, end: date | datetime) -> list[date]:
    """Every day from *start* to *end*, both inclusive.

    Returns an empty list when *end* is before *start*.
    """
    first = normalize_to_local_midnight(start)
    last = normalize_to_local_midnight(end)
    return [first + timedelta(days=i) for i in range((last - first).days + 1)]


def add_months(value: date, months: int) -> date:
    """First day of the month *months* away from *value*."""
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)
