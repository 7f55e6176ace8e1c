"""Download endpoints for dashboard."""

from __future__ import annotations

import io
from datetime import datetime, timezone

import pandas as pd
from flask import Response, request

from . import bp, get_store, get_tz
from .helpers import build_period, date_field, parse_kind


@bp.route("/download-csv", methods=["GET"])
def download_csv():
    """Download one entity kind, filtered to the selected period, as CSV."""
    kind = parse_kind(request.args.get("kind") or "orders")
    params = build_period(request.args)

    base = pd.DataFrame(get_store().get_all(kind))
    filtered = params.apply(base, date_field(kind), get_tz())

    buf = io.StringIO()
    filtered.to_csv(buf, index=False)
    buf.seek(0)

    ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    filename = f"{kind}_{ts}.csv"

    return Response(
        buf.getvalue(),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
