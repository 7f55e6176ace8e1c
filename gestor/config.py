"""Application configuration objects."""

import os
import sys
from datetime import timezone, tzinfo
from pathlib import Path
from typing import Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from gestor.models import DATE_FIELDS

if getattr(sys, "frozen", False):
    load_dotenv(os.path.join(sys._MEIPASS, ".env"))
else:
    load_dotenv()


class Config:
    """Base configuration for the gestor back office."""

    # -------------------------
    # Storage
    # -------------------------
    # DuckDB database file holding every entity kind
    DUCKDB_PATH = Path(os.getenv("GESTOR_DUCKDB_PATH", "data/gestor.duckdb"))

    # -------------------------
    # Calendar
    # -------------------------
    # IANA zone whose calendar dates the period filter compares against;
    # empty means the zone of the machine running the app
    TIMEZONE = os.getenv("GESTOR_TIMEZONE", "")

    # Label language: "en" or "pt-BR"
    LOCALE = os.getenv("GESTOR_LOCALE", "en")

    # -------------------------
    # Data schema
    # -------------------------
    DATE_FIELDS: Dict[str, str] = dict(DATE_FIELDS)

    METRICS: Dict[str, str] = {
        "totalValue": "Total",
        "paidValue": "Received",
    }


def tzinfo_for_name(name: Optional[str]) -> Optional[tzinfo]:
    """``ZoneInfo`` for an IANA name; ``None`` (system zone) when empty or unknown."""
    name = (name or "").strip()
    if not name:
        return None
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


__all__ = ["Config", "tzinfo_for_name"]
