"""Period filter control endpoints.

The server keeps no cursor between requests: each call rebuilds a
``PeriodCursor`` from the value the client currently shows.
"""

from __future__ import annotations

from flask import current_app, jsonify, request

from gestor.utils.labels import period_label
from gestor.utils.navigation import DIRECTIONS, PeriodCursor

from . import bp, get_tz
from .helpers import InvalidRequest, build_period, label_for


def _cursor_payload(cursor: PeriodCursor):
    return jsonify(
        {
            "granularity": cursor.granularity,
            "value": cursor.value,
            "reference": cursor.reference.isoformat() if cursor.granularity != "all" else None,
            "label": period_label(cursor.granularity, cursor.value, current_app.config.get("LOCALE")),
        }
    )


@bp.route("/period/label", methods=["GET"])
def label():
    params = build_period(request.args)
    return jsonify({"granularity": params.granularity, "value": params.value, "label": label_for(params)})


@bp.route("/period/select", methods=["GET"])
def select():
    """Switch granularity; keeps ``value`` when given, else jumps to today."""
    params = build_period(request.args)
    cursor = PeriodCursor(tz=get_tz())
    cursor.select(params.granularity, params.value or None)
    return _cursor_payload(cursor)


@bp.route("/period/today", methods=["GET"])
def today():
    params = build_period(request.args)
    cursor = PeriodCursor(params.granularity, tz=get_tz())
    return _cursor_payload(cursor)


@bp.route("/period/navigate", methods=["GET"])
def navigate():
    params = build_period(request.args)
    direction = (request.args.get("direction") or "").strip().lower()
    if direction not in DIRECTIONS:
        raise InvalidRequest(f"direction must be one of {', '.join(DIRECTIONS)}")

    cursor = PeriodCursor(params.granularity, params.value, tz=get_tz())
    cursor.step(direction)
    return _cursor_payload(cursor)
