"""Dashboard overview."""

from __future__ import annotations

from flask import jsonify, request

from gestor.services.metrics import dashboard_stats, status_breakdown

from . import bp, get_metrics
from .helpers import build_period, filtered_records, label_for


def index():
    params = build_period(request.args)
    orders = filtered_records("orders", params)
    activities = filtered_records("activities", params)

    return jsonify(
        {
            "granularity": params.granularity,
            "value": params.value,
            "label": label_for(params),
            "stats": dashboard_stats(orders),
            "totals": get_metrics().totals(orders),
            "status": status_breakdown(orders),
            "open_activities": sum(1 for a in activities if not a.get("completed")),
        }
    )


bp.add_url_rule("/dashboard", view_func=index, methods=["GET"])
