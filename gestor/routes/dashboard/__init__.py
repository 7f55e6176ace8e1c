"""Dashboard blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("dashboard", __name__)


def get_metrics():
    from flask import current_app

    return current_app.extensions["metrics"]


def get_store():
    from flask import current_app

    return current_app.extensions["store"]


def get_tz():
    from flask import current_app

    return current_app.extensions.get("tz")


from . import aggregates, charts, downloads, filters, health, records, views  # noqa: E402,F401

__all__ = ["bp", "get_metrics", "get_store", "get_tz"]
