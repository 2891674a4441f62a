"""Timezone-safe date helpers.

Every function works on calendar ``date`` values and ``YYYY-MM-DD`` strings.
Nothing here converts through UTC, so a date never shifts by a day because of
the local offset.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Union

DateLike = Union[date, datetime]

_WEEKDAY_FORMATS = {"long": "%A", "short": "%a"}
_MONTH_FORMATS = {"long": "%B", "short": "%b"}


def _as_date(value: Optional[DateLike]) -> date:
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    return value


def date_to_string(value: DateLike) -> str:
    """Return ``value`` as ``YYYY-MM-DD`` using its own year/month/day fields."""
    d = _as_date(value)
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def get_today_string() -> str:
    return date_to_string(date.today())


def parse_date(date_str: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a calendar date.

    Raises:
        ValueError: wrong number of segments, non-numeric segments or an
            impossible calendar date (e.g. ``2024-02-30``).
    """
    if not isinstance(date_str, str):
        raise ValueError(f"Expected a YYYY-MM-DD string, got {date_str!r}")
    parts = date_str.split("-")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid date string {date_str!r}, expected YYYY-MM-DD")
    year, month, day = (int(p) for p in parts)
    return date(year, month, day)


def add_days(date_str: str, days: int) -> str:
    """Return the date ``days`` after ``date_str`` (negative goes back)."""
    return date_to_string(parse_date(date_str) + timedelta(days=days))


def get_next_monday(from_date: Optional[DateLike] = None) -> str:
    """Return the first Monday strictly after ``from_date`` (default: today).

    A Monday advances a full week: Monday -> 7 days, Tuesday -> 6, ...,
    Saturday -> 2, Sunday -> 1.
    """
    d = _as_date(from_date)
    days_until_monday = 7 - d.weekday()
    return date_to_string(d + timedelta(days=days_until_monday))


def get_monday_of_week(from_date: Optional[DateLike] = None) -> str:
    """Return the Monday on or before ``from_date`` (default: today)."""
    d = _as_date(from_date)
    return date_to_string(d - timedelta(days=d.weekday()))


def format_date_string(date_str: str, weekday: Optional[str] = "long",
                       month: Optional[str] = "long", day: Optional[str] = "numeric",
                       year: Optional[str] = None) -> str:
    """Format ``date_str`` for display, US English style.

    Each component is ``None`` to omit it; ``weekday``/``month`` take
    ``"long"`` or ``"short"``, ``day`` takes ``"numeric"`` or ``"2-digit"``,
    ``year`` takes ``"numeric"``. The defaults give ``"Monday, June 10"``.
    Display only: never compare or store the result.
    """
    d = parse_date(date_str)
    month_day = ""
    if month:
        month_day = d.strftime(_MONTH_FORMATS[month])
    if day:
        day_text = f"{d.day:02d}" if day == "2-digit" else str(d.day)
        month_day = f"{month_day} {day_text}".strip()
    if year:
        month_day = f"{month_day}, {d.year}" if month_day else str(d.year)

    pieces = []
    if weekday:
        pieces.append(d.strftime(_WEEKDAY_FORMATS[weekday]))
    if month_day:
        pieces.append(month_day)
    return ", ".join(pieces)


def is_today(date_str: str) -> bool:
    return date_str == get_today_string()


def is_past(date_str: str) -> bool:
    # YYYY-MM-DD strings order the same way as the dates they encode
    return date_str < get_today_string()


def week_dates(start_date: str, days: int = 7) -> list[str]:
    """Return ``days`` consecutive date strings beginning at ``start_date``."""
    return [add_days(start_date, i) for i in range(days)]
