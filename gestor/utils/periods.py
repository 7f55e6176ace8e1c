"""Period values: parsing, formatting and calendar boundaries.

A filter value is a string whose grammar depends on its granularity:

  year  -> "YYYY"
  month -> "YYYY-MM"
  week  -> "YYYY-Www"
  day   -> "YYYY-MM-DD"
  all   -> "" (ignored)

``parse_period`` turns the pair into one of the frozen period types below
exactly once, so callers never re-split strings. Malformed values parse to
``None``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Literal, Optional, Tuple, Union

Granularity = Literal["all", "year", "month", "week", "day"]

GRANULARITIES: Tuple[str, ...] = ("all", "year", "month", "week", "day")

_YEAR_RE = re.compile(r"^(\d{4})$")
_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")
_WEEK_RE = re.compile(r"^(\d{4})-W(\d{2})$")
_DAY_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class AllTime:
    granularity = "all"


@dataclass(frozen=True)
class Year:
    year: int
    granularity = "year"


@dataclass(frozen=True)
class Month:
    year: int
    month: int  # 1-based
    granularity = "month"


@dataclass(frozen=True)
class Week:
    year: int
    week: int  # 1-based
    token: str  # week number exactly as written in the value
    granularity = "week"


@dataclass(frozen=True)
class Day:
    day: date
    granularity = "day"


Period = Union[AllTime, Year, Month, Week, Day]


def is_granularity(value: object) -> bool:
    return isinstance(value, str) and value in GRANULARITIES


def parse_period(granularity: str, value: Optional[str]) -> Optional[Period]:
    """Parse ``value`` according to ``granularity``.

    ``all`` and empty values both yield ``AllTime``. Anything that does not
    match the grammar (or names an impossible month/day/week) yields
    ``None``.
    """
    if granularity == "all" or not value:
        return AllTime()

    value = str(value).strip()

    if granularity == "year":
        m = _YEAR_RE.match(value)
        return Year(int(m.group(1))) if m else None

    if granularity == "month":
        m = _MONTH_RE.match(value)
        if not m:
            return None
        month = int(m.group(2))
        return Month(int(m.group(1)), month) if 1 <= month <= 12 else None

    if granularity == "week":
        m = _WEEK_RE.match(value)
        if not m:
            return None
        week = int(m.group(2))
        return Week(int(m.group(1)), week, m.group(2)) if 1 <= week <= 53 else None

    if granularity == "day":
        m = _DAY_RE.match(value)
        if not m:
            return None
        try:
            return Day(date(int(m.group(1)), int(m.group(2)), int(m.group(3))))
        except ValueError:
            return None

    return None


# -------- local time helpers --------

def local_zone(tz: Optional[tzinfo] = None) -> tzinfo:
    """Return ``tz`` or the zone of the running system."""
    if tz is not None:
        return tz
    return datetime.now().astimezone().tzinfo


def to_local(ts_ms: float, tz: Optional[tzinfo] = None) -> datetime:
    """Epoch milliseconds -> aware datetime in ``tz`` (system zone when ``None``)."""
    return (_EPOCH + timedelta(milliseconds=ts_ms)).astimezone(tz)


def local_date_key(ts_ms: float, tz: Optional[tzinfo] = None) -> str:
    """``YYYY-MM-DD`` of the instant as seen on the local calendar.

    Same as shifting the timestamp by its UTC offset and reading the UTC
    date back.
    """
    return to_local(ts_ms, tz).date().isoformat()


def local_epoch_ms(moment: datetime, tz: Optional[tzinfo] = None) -> float:
    """Naive local wall-clock datetime -> epoch milliseconds."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=tz) if tz is not None else moment.astimezone()
    return (moment - _EPOCH) / timedelta(milliseconds=1)


# -------- week boundaries --------

def week_anchor(year: int, week: int) -> date:
    """Jan 1 of ``year`` moved forward ``week - 1`` whole weeks."""
    return date(year, 1, 1) + timedelta(days=(week - 1) * 7)


def week_start(year: int, week: int) -> date:
    """Monday of week ``week`` of ``year``.

    The anchor date is pulled back to its own Monday when it falls on
    Monday-Thursday and pushed forward to the next Monday otherwise.
    """
    anchor = week_anchor(year, week)
    weekday = anchor.weekday()  # Monday == 0
    if weekday <= 3:
        return anchor - timedelta(days=weekday)
    return anchor + timedelta(days=7 - weekday)


def week_bounds(year: int, week: int, tz: Optional[tzinfo] = None) -> Tuple[float, float]:
    """Inclusive ``(start, end)`` epoch-ms bounds of a week in local time.

    Start is Monday 00:00:00.000, end is Sunday 23:59:59.999.
    """
    monday = week_start(year, week)
    sunday = monday + timedelta(days=6)
    start = datetime(monday.year, monday.month, monday.day)
    end = datetime(sunday.year, sunday.month, sunday.day, 23, 59, 59, 999000)
    return local_epoch_ms(start, tz), local_epoch_ms(end, tz)


# -------- value formatting --------

def format_value(granularity: str, moment: Union[date, datetime]) -> str:
    """Filter value of the period containing ``moment``.

    Weeks use ISO-8601 numbering (the week of the nearest Thursday).
    """
    if granularity == "year":
        return f"{moment.year:04d}"
    if granularity == "month":
        return f"{moment.year:04d}-{moment.month:02d}"
    if granularity == "day":
        return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
    if granularity == "week":
        iso_year, iso_week, _ = moment.isocalendar()[:3]
        return f"{iso_year:04d}-W{iso_week:02d}"
    return ""


__all__ = [
    "AllTime",
    "Day",
    "GRANULARITIES",
    "Granularity",
    "Month",
    "Period",
    "Week",
    "Year",
    "format_value",
    "is_granularity",
    "local_date_key",
    "local_epoch_ms",
    "local_zone",
    "parse_period",
    "to_local",
    "week_anchor",
    "week_bounds",
    "week_start",
]
