"""Period-filtered record lists and their upsert/delete endpoints."""

from __future__ import annotations

from flask import jsonify, request

from gestor.models import normalize_record
from gestor.services.metrics import (
    order_search,
    profit_summaries,
    sort_activities,
    sort_expenses,
    sort_messages,
)

from . import bp, get_store
from .helpers import InvalidRequest, build_period, error, filtered_records, label_for, parse_kind


@bp.route("/<kind>", methods=["GET"])
def list_records(kind: str):
    kind = parse_kind(kind)
    params = build_period(request.args)
    items = filtered_records(kind, params)

    if kind == "orders":
        items = order_search(
            items,
            status=request.args.get("status") or "all",
            text=request.args.get("q") or "",
        )
    elif kind == "activities":
        items = sort_activities(items)
    elif kind == "expenses":
        items = sort_expenses(items)
    elif kind == "messages":
        items = sort_messages(items)
    elif kind == "profits":
        items = profit_summaries(items)

    return jsonify(
        {
            "kind": kind,
            "granularity": params.granularity,
            "value": params.value,
            "label": label_for(params),
            "count": len(items),
            "items": items,
        }
    )


@bp.route("/<kind>", methods=["POST"])
def save_record(kind: str):
    kind = parse_kind(kind)
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return error("JSON object body required")
    try:
        record = normalize_record(kind, payload)
    except ValueError as exc:
        raise InvalidRequest(str(exc)) from None
    return jsonify(get_store().save(kind, record))


@bp.route("/<kind>/<record_id>", methods=["DELETE"])
def delete_record(kind: str, record_id: str):
    kind = parse_kind(kind)
    if not get_store().delete(kind, record_id):
        return error("not found", 404)
    return jsonify({"deleted": record_id})
