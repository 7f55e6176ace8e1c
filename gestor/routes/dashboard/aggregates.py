"""Aggregate endpoints: order KPIs and expense totals."""

from __future__ import annotations

from flask import jsonify, request

from gestor.services.metrics import expense_totals, order_kpis, status_breakdown

from . import bp
from .helpers import build_period, filtered_records, label_for


@bp.route("/analytics", methods=["GET"])
def analytics():
    params = build_period(request.args)
    orders = filtered_records("orders", params)
    return jsonify(
        {
            "granularity": params.granularity,
            "value": params.value,
            "label": label_for(params),
            "kpis": order_kpis(orders),
            "status": status_breakdown(orders),
        }
    )


@bp.route("/expenses/summary", methods=["GET"])
def expenses_summary():
    params = build_period(request.args)
    expenses = filtered_records("expenses", params)
    summary = expense_totals(expenses)
    return jsonify(
        {
            "granularity": params.granularity,
            "value": params.value,
            "label": label_for(params),
            "count": len(expenses),
            **summary,
        }
    )
