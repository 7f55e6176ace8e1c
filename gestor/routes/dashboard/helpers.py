"""Shared helper functions for dashboard routes."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from flask import current_app, jsonify

from gestor.utils.filter_params import PeriodFilter
from gestor.utils.labels import period_label
from gestor.utils.periods import GRANULARITIES, is_granularity

from . import bp, get_store, get_tz


class InvalidRequest(ValueError):
    """Request arguments the routes refuse to serve."""


@bp.errorhandler(InvalidRequest)
def _bad_request(exc: InvalidRequest):
    return jsonify({"error": str(exc)}), 400


def build_period(args) -> PeriodFilter:
    """Build ``PeriodFilter`` from ``granularity``/``value`` request args."""
    granularity = (args.get("granularity") or "all").strip().lower()
    if not is_granularity(granularity):
        raise InvalidRequest(f"granularity must be one of {', '.join(GRANULARITIES)}")
    value = (args.get("value") or "").strip()
    return PeriodFilter(granularity=granularity, value=value)


def date_field(kind: str) -> str:
    fields = current_app.config["DATE_FIELDS"]
    if kind not in fields:
        raise InvalidRequest(f"unknown kind: {kind}")
    return fields[kind]


def filtered_records(kind: str, params: PeriodFilter) -> List[Dict[str, Any]]:
    records = get_store().get_all(kind)
    return params.filter(records, date_field(kind), get_tz())


def label_for(params: PeriodFilter) -> str:
    return period_label(params.granularity, params.value, current_app.config.get("LOCALE"))


def error(message: str, status: int = 400) -> Tuple[Any, int]:
    return jsonify({"error": message}), status


def parse_kind(kind: Optional[str]) -> str:
    kind = (kind or "").strip().lower()
    date_field(kind)
    return kind


__all__ = [
    "InvalidRequest",
    "build_period",
    "date_field",
    "error",
    "filtered_records",
    "label_for",
    "parse_kind",
]
