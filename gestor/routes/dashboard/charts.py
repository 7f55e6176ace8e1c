"""Chart data endpoints."""

from __future__ import annotations

from flask import jsonify, request

from gestor.services.metrics import timeline

from . import bp, get_tz
from .helpers import build_period, date_field, filtered_records


@bp.route("/analytics/timeline", methods=["GET"])
def timeline_data():
    """Received vs. pending money over the selected period."""
    params = build_period(request.args)
    orders = filtered_records("orders", params)
    points = timeline(orders, params.granularity, date_field("orders"), get_tz())
    return jsonify(
        {
            "labels": [p["date"] for p in points],
            "received": [p["received"] for p in points],
            "pending": [p["pending"] for p in points],
        }
    )
