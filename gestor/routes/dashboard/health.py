"""Healthcheck endpoint."""

from __future__ import annotations

from flask import current_app, jsonify

from . import bp, get_store


@bp.route("/health", methods=["GET"])
def health():
    store = get_store()
    try:
        return jsonify({"ok": True, "records": store.counts()}), 200
    except Exception as exc:  # pragma: no cover
        current_app.logger.exception("Healthcheck failed")
        return jsonify({"ok": False, "error": str(exc)}), 500
