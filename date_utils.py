"""
Calendar date helpers: canonical YYYY-MM-DD keys, midnight comparisons, day/month arithmetic.
All dates are naive local calendar dates; a configured timezone only decides what "now" is.
"""
from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time, timedelta

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# Already ISO date
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_RELATIVE = re.compile(r"^(today|tomorrow|yesterday)([+-]\d+)?$")
_RELATIVE_BASE = {"today": 0, "tomorrow": 1, "yesterday": -1}


def now_local(tz_name: str = "") -> datetime:
    """Current naive local datetime. Empty or unknown tz_name = system clock."""
    name = (tz_name or "").strip()
    if not name:
        return datetime.now()
    try:
        tz = ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return datetime.now()
    return datetime.now(tz).replace(tzinfo=None)


def today_local(tz_name: str = "") -> date:
    return now_local(tz_name).date()


def parse_date(value: date | datetime | str) -> date:
    """
    Parse a calendar date. Accepts date/datetime objects, "YYYY-MM-DD", or an ISO datetime
    ("YYYY-MM-DDTHH:MM[:SS]") whose date part is used. Raises ValueError on anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Not a date: {value!r}")
    raw = value.strip()
    if _ISO_DATE.match(raw):
        return date.fromisoformat(raw)
    if "T" in raw and _ISO_DATE.match(raw[:10]):
        return datetime.fromisoformat(raw).date()
    raise ValueError(f"Invalid date {value!r}; expected YYYY-MM-DD")


def date_key(d: date | datetime | str) -> str:
    """Canonical YYYY-MM-DD key; time of day never affects it."""
    return parse_date(d).isoformat()


def compare_dates_only(a: date | datetime | str, b: date | datetime | str) -> int:
    """-1, 0 or 1 comparing a and b truncated to midnight."""
    da, db = parse_date(a), parse_date(b)
    return (da > db) - (da < db)


def add_days(d: date, n: int) -> date:
    return d + timedelta(days=n)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(d: date, n: int) -> date:
    """Shift d by n months, clamping the day to the last day of a shorter target month."""
    index = d.year * 12 + (d.month - 1) + n
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(d.day, days_in_month(year, month)))


def weekday_index(d: date) -> int:
    """Sunday=0 .. Saturday=6 (Python: Mon=0..Sun=6)."""
    return (d.weekday() + 1) % 7


def end_of_day(d: date) -> datetime:
    return datetime.combine(d, time(23, 59, 59))


def resolve_date_expression(value: str | None, tz_name: str = "") -> str | None:
    """
    Resolve a query date expression to YYYY-MM-DD.
    Supports ISO dates plus "today", "tomorrow", "yesterday", each optionally followed by
    +N / -N days (no spaces), e.g. "today+3". Returns None when the expression is not recognized.
    """
    if not value or not str(value).strip():
        return None
    raw = str(value).strip().lower()
    if _ISO_DATE.match(raw):
        return raw
    m = _RELATIVE.match(raw)
    if not m:
        return None
    offset = _RELATIVE_BASE[m.group(1)] + int(m.group(2) or 0)
    return add_days(today_local(tz_name), offset).isoformat()
