"""Application factory for the gestor back office."""

from __future__ import annotations

import logging

from typing import Any, Mapping, Optional, Union

from flask import Flask

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("gestor")

from .config import Config, tzinfo_for_name
from .routes.dashboard import bp as dashboard_bp
from .services.datastore import DataStore, EntityStore
from .services.metrics import Metrics


def create_app(
    config_object: Optional[Union[str, Mapping[str, Any], type]] = None,
    store: Optional[EntityStore] = None,
) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)

    app.config.from_object(Config)
    if isinstance(config_object, Mapping):
        app.config.from_mapping(config_object)
    elif config_object is not None:
        app.config.from_object(config_object)

    tz = tzinfo_for_name(app.config.get("TIMEZONE"))
    if app.config.get("TIMEZONE") and tz is None:
        logger.warning("Unknown TIMEZONE %r; using the system zone", app.config["TIMEZONE"])

    app.extensions["store"] = store if store is not None else DataStore(app.config)
    app.extensions["metrics"] = Metrics(app.config["METRICS"])
    app.extensions["tz"] = tz

    app.register_blueprint(dashboard_bp)

    return app


__all__ = ["create_app"]
