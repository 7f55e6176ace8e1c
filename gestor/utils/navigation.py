"""Step-through navigation for the period filter control."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Tuple

import pandas as pd

from .periods import AllTime, Day, Month, Week, Year, format_value, local_zone, parse_period, week_anchor

logger = logging.getLogger("gestor.periods")

DIRECTIONS = ("prev", "next")


def now_local(tz: Optional[tzinfo] = None) -> datetime:
    """Current wall-clock time in ``tz`` as a naive datetime."""
    return datetime.now(local_zone(tz)).replace(tzinfo=None)


def advance_period(reference: datetime, granularity: str, direction: str) -> Tuple[datetime, str]:
    """Move ``reference`` one unit of ``granularity`` and re-derive the value.

    Month and year steps land on the same day number, clamped to the end of
    the target month (2024-01-31 + 1 month -> 2024-02-29).
    """
    if direction not in DIRECTIONS:
        raise ValueError(f"direction must be one of {DIRECTIONS}, got {direction!r}")
    amount = 1 if direction == "next" else -1

    if granularity == "day":
        moved = reference + timedelta(days=amount)
    elif granularity == "week":
        moved = reference + timedelta(days=7 * amount)
    elif granularity == "month":
        moved = (pd.Timestamp(reference) + pd.DateOffset(months=amount)).to_pydatetime()
    elif granularity == "year":
        moved = (pd.Timestamp(reference) + pd.DateOffset(years=amount)).to_pydatetime()
    else:
        moved = reference

    return moved, format_value(granularity, moved)


def derive_reference_date(granularity: str, value: Optional[str], previous: datetime) -> datetime:
    """Cursor date for an externally supplied value, or ``previous`` when unreadable.

    Weeks resolve to Jan 1 plus whole weeks, without snapping to Monday.
    """
    period = parse_period(granularity, value)
    if period is None or isinstance(period, AllTime):
        logger.debug("Keeping cursor; no usable %s value %r", granularity, value)
        return previous
    try:
        if isinstance(period, Day):
            return datetime(period.day.year, period.day.month, period.day.day)
        if isinstance(period, Month):
            return datetime(period.year, period.month, 1)
        if isinstance(period, Year):
            return datetime(period.year, 1, 1)
        if isinstance(period, Week):
            anchor: date = week_anchor(period.year, period.week)
            return datetime(anchor.year, anchor.month, anchor.day)
    except (OverflowError, ValueError) as exc:
        logger.debug("Keeping cursor; cannot rehydrate %s=%r: %s", granularity, value, exc)
        return previous
    return previous


class PeriodCursor:
    """In-memory reference date behind one period filter control.

    Holds the current granularity, value and reference date. Nothing here is
    persisted; a cursor is rebuilt from a value with ``select``.
    """

    def __init__(self, granularity: str = "all", value: str = "", tz: Optional[tzinfo] = None):
        self.tz = tz
        self.granularity = "all"
        self.value = ""
        self.reference = now_local(tz)
        self.select(granularity, value)

    def select(self, granularity: str, value: Optional[str] = None) -> str:
        """Switch granularity; rehydrate from ``value`` if given, else reset to today."""
        self.granularity = granularity
        if granularity == "all":
            self.value = ""
            return self.value
        if value:
            self.value = value
            self.reference = derive_reference_date(granularity, value, self.reference)
            return self.value
        return self.today()

    def sync(self, value: str) -> None:
        """Take a value typed into the control and follow it with the cursor."""
        if not value:
            return
        self.value = value
        self.reference = derive_reference_date(self.granularity, value, self.reference)

    def today(self) -> str:
        self.reference = now_local(self.tz)
        self.value = format_value(self.granularity, self.reference)
        return self.value

    def step(self, direction: str) -> str:
        if self.granularity == "all":
            return self.value
        self.reference, self.value = advance_period(self.reference, self.granularity, direction)
        return self.value

    def prev(self) -> str:
        return self.step("prev")

    def next(self) -> str:
        return self.step("next")


__all__ = ["DIRECTIONS", "PeriodCursor", "advance_period", "derive_reference_date", "now_local"]
