# filter_params.py
from dataclasses import dataclass
from datetime import tzinfo
from typing import Any, Callable, List, Mapping, Optional, Sequence, TypeVar

import pandas as pd

from .periods import (
    AllTime,
    Day,
    Month,
    Period,
    Week,
    Year,
    local_date_key,
    parse_period,
    to_local,
    week_bounds,
)

T = TypeVar("T")


def record_timestamp(record: Any, field: str) -> Optional[float]:
    """Read an epoch-ms field from a mapping or an object; ``None`` if unusable."""
    if isinstance(record, Mapping):
        raw = record.get(field)
    else:
        raw = getattr(record, field, None)
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def local_strftime(ms: pd.Series, fmt: str, tz: Optional[tzinfo] = None) -> pd.Series:
    """Format a column of epoch ms as local calendar strings.

    With an explicit zone the conversion is vectorised. Without one every
    instant is converted with the system rules in force at that instant, so
    winter and summer records each keep their own offset. Unusable values
    come back as missing.
    """
    ms = pd.to_numeric(ms, errors="coerce")
    if tz is not None:
        stamps = pd.to_datetime(ms, unit="ms", utc=True, errors="coerce")
        return stamps.dt.tz_convert(tz).dt.strftime(fmt)

    def fmt_one(value: float) -> Optional[str]:
        if pd.isna(value):
            return None
        try:
            return to_local(value).strftime(fmt)
        except (OverflowError, OSError, ValueError):
            return None

    return ms.map(fmt_one)


def _date_prefix(period: Period) -> Optional[str]:
    if isinstance(period, Year):
        return f"{period.year:04d}"
    if isinstance(period, Month):
        return f"{period.year:04d}-{period.month:02d}"
    if isinstance(period, Day):
        return period.day.isoformat()
    return None


def period_matcher(period: Optional[Period], tz: Optional[tzinfo] = None) -> Callable[[Optional[float]], bool]:
    """Build a predicate over epoch-ms timestamps for ``period``.

    An unparseable period (``None``) matches nothing. Year/month/day compare
    local calendar dates; weeks compare the raw instant against the
    inclusive Monday..Sunday bounds.
    """
    if period is None:
        return lambda ts: False
    if isinstance(period, AllTime):
        return lambda ts: True

    if isinstance(period, Week):
        try:
            start, end = week_bounds(period.year, period.week, tz)
        except (OverflowError, ValueError):
            return lambda ts: False
        return lambda ts: ts is not None and start <= ts <= end

    prefix = _date_prefix(period)

    def match(ts: Optional[float]) -> bool:
        if ts is None:
            return False
        try:
            key = local_date_key(ts, tz)
        except (OverflowError, OSError, ValueError):
            return False
        return key[: len(prefix)] == prefix

    return match


def filter_by_period(
    records: Sequence[T],
    field: str,
    granularity: str,
    value: Optional[str],
    tz: Optional[tzinfo] = None,
) -> List[T]:
    """Keep the records whose ``field`` timestamp falls in the given period.

    ``all`` or an empty value returns ``records`` itself. Otherwise the
    result is a new list in the original order. Malformed values match
    nothing.
    """
    if granularity == "all" or not value:
        return records
    match = period_matcher(parse_period(granularity, value), tz)
    return [r for r in records if match(record_timestamp(r, field))]


@dataclass(frozen=True)
class PeriodFilter:
    granularity: str = "all"
    value: str = ""

    @property
    def active(self) -> bool:
        return self.granularity != "all" and bool(self.value)

    @property
    def period(self) -> Optional[Period]:
        return parse_period(self.granularity, self.value)

    # -------- python path --------
    def filter(self, records: Sequence[T], field: str, tz: Optional[tzinfo] = None) -> List[T]:
        return filter_by_period(records, field, self.granularity, self.value, tz)

    # -------- pandas path --------
    def apply(self, df: pd.DataFrame, date_col: str, tz: Optional[tzinfo] = None) -> pd.DataFrame:
        """
        Return the rows of ``df`` whose ``date_col`` (epoch ms) is in the period.

        Same rules as ``filter_by_period``: inactive filters return ``df``
        untouched, malformed values return an empty frame, row order is kept.
        """
        if not self.active:
            return df

        period = self.period
        if period is None or date_col not in df.columns:
            return df.iloc[0:0]

        ms = pd.to_numeric(df[date_col], errors="coerce")

        if isinstance(period, Week):
            try:
                start, end = week_bounds(period.year, period.week, tz)
            except (OverflowError, ValueError):
                return df.iloc[0:0]
            return df[(ms >= start) & (ms <= end)]

        prefix = _date_prefix(period)
        keys = local_strftime(ms, "%Y-%m-%d", tz)
        mask = keys.map(lambda key: isinstance(key, str) and key.startswith(prefix))
        return df[mask.astype(bool)]


__all__ = ["PeriodFilter", "filter_by_period", "local_strftime", "period_matcher", "record_timestamp"]
