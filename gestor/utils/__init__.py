"""Period filtering engine shared by every list and report view."""

from .filter_params import PeriodFilter, filter_by_period  # noqa: F401
from .labels import period_label  # noqa: F401
from .navigation import PeriodCursor, advance_period, derive_reference_date  # noqa: F401
from .periods import GRANULARITIES, format_value, parse_period, week_bounds  # noqa: F401

__all__ = [
    "GRANULARITIES",
    "PeriodCursor",
    "PeriodFilter",
    "advance_period",
    "derive_reference_date",
    "filter_by_period",
    "format_value",
    "parse_period",
    "period_label",
    "week_bounds",
]
