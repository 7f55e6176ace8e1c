"""Business summaries computed over period-filtered records."""

from __future__ import annotations

from datetime import tzinfo
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from gestor.models import CLOSED_STATUSES, OrderStatus, ProfitCalculation
from gestor.utils.filter_params import local_strftime

Record = Mapping[str, Any]


def _money(record: Record, key: str) -> float:
    try:
        return float(record.get(key) or 0)
    except (TypeError, ValueError):
        return 0.0


def _status(record: Record) -> Optional[OrderStatus]:
    try:
        return OrderStatus(record.get("status"))
    except ValueError:
        return None


class Metrics:
    """Money fields shown on the dashboard and their display labels."""

    def __init__(self, mapping: Dict[str, str]):
        self.mapping = dict(mapping)

    def label(self, key: Optional[str]) -> str:
        if not key:
            return ""
        return self.mapping.get(key, key)

    def totals(self, records: Iterable[Record]) -> Dict[str, Dict[str, Union[float, str]]]:
        records = list(records)
        return {
            key: {"label": self.label(key), "sum": sum(_money(r, key) for r in records)}
            for key in self.mapping
        }


def dashboard_stats(orders: Iterable[Record]) -> Dict[str, Union[int, float]]:
    orders = list(orders)
    total_value = sum(_money(o, "totalValue") for o in orders)
    received = sum(_money(o, "paidValue") for o in orders)
    statuses = [_status(o) for o in orders]
    return {
        "total_value": total_value,
        "received_value": received,
        "pending_value": total_value - received,
        "active_orders": sum(1 for s in statuses if s not in CLOSED_STATUSES),
        "ready_pickup": sum(1 for s in statuses if s == OrderStatus.READY),
        "missing_invoice": sum(
            1
            for o, s in zip(orders, statuses)
            if not o.get("notaFiscalIssued") and s != OrderStatus.CANCELLED
        ),
        "total_orders": len(orders),
    }


def order_kpis(orders: Iterable[Record]) -> Dict[str, Union[int, float]]:
    orders = list(orders)
    revenue = sum(_money(o, "totalValue") for o in orders)
    received = sum(_money(o, "paidValue") for o in orders)
    count = len(orders)
    return {
        "total_revenue": revenue,
        "total_received": received,
        "total_pending": revenue - received,
        "order_count": count,
        "avg_ticket": revenue / count if count > 0 else 0.0,
        "receipt_rate": (received / revenue) * 100 if revenue > 0 else 0.0,
    }


def status_breakdown(orders: Iterable[Record]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for o in orders:
        key = str(o.get("status"))
        counts[key] = counts.get(key, 0) + 1
    return counts


def timeline(
    orders: Iterable[Record],
    granularity: str = "all",
    date_field: str = "createdAt",
    tz: Optional[tzinfo] = None,
) -> List[Dict[str, Union[str, float]]]:
    """Received vs. pending money per bucket, ascending.

    Buckets are months (``YYYY-MM``) for all-time and yearly views, days
    (``YYYY-MM-DD``) otherwise.
    """
    df = pd.DataFrame(list(orders))
    if df.empty or date_field not in df.columns:
        return []

    fmt = "%Y-%m" if granularity in ("all", "year") else "%Y-%m-%d"
    df = df.assign(
        bucket=local_strftime(df[date_field], fmt, tz),
        received=pd.to_numeric(df.get("paidValue", 0), errors="coerce"),
        total=pd.to_numeric(df.get("totalValue", 0), errors="coerce"),
    ).dropna(subset=["bucket"])
    df = df.fillna({"received": 0.0, "total": 0.0})
    df["pending"] = df["total"] - df["received"]

    grp = df.groupby("bucket")[["received", "pending"]].sum().sort_index()
    return [
        {"date": str(bucket), "received": float(row["received"]), "pending": float(row["pending"])}
        for bucket, row in grp.iterrows()
    ]


def expense_totals(expenses: Iterable[Record]) -> Dict[str, Any]:
    df = pd.DataFrame(list(expenses))
    if df.empty or "value" not in df.columns:
        return {"total": 0.0, "by_category": {}}
    values = pd.to_numeric(df["value"], errors="coerce").fillna(0.0)
    if "category" in df.columns:
        categories = df["category"].fillna("other").astype(str)
    else:
        categories = pd.Series("other", index=df.index)
    by_cat = values.groupby(categories).sum().sort_values(ascending=False)
    return {
        "total": float(values.sum()),
        "by_category": {str(k): float(v) for k, v in by_cat.items()},
    }


def order_search(orders: Iterable[Record], status: str = "all", text: str = "") -> List[Record]:
    """Status and free-text narrowing of an order list, newest first."""
    needle = (text or "").strip().lower()
    out = []
    for o in orders:
        if status and status != "all" and o.get("status") != status:
            continue
        if needle:
            haystack = f"{o.get('customerName') or ''} {o.get('description') or ''}".lower()
            if needle not in haystack:
                continue
        out.append(o)
    return sorted(out, key=lambda o: _money(o, "createdAt"), reverse=True)


def sort_activities(activities: Iterable[Record]) -> List[Record]:
    """Open activities first, each group by scheduled date."""
    return sorted(activities, key=lambda a: (bool(a.get("completed")), _money(a, "date")))


def sort_expenses(expenses: Iterable[Record]) -> List[Record]:
    """Newest expense first."""
    return sorted(expenses, key=lambda e: _money(e, "date"), reverse=True)


def sort_messages(messages: Iterable[Record]) -> List[Record]:
    """Chat history oldest first, the order it is read in."""
    return sorted(messages, key=lambda m: _money(m, "timestamp"))


def profit_summaries(records: Iterable[Record]) -> List[Dict[str, Any]]:
    """Stored calculations with total cost, profit and margin filled in.

    Records that do not parse are passed through unchanged.
    """
    out = []
    for r in records:
        try:
            out.append(ProfitCalculation.from_dict(r).summary())
        except (KeyError, TypeError, ValueError):
            out.append(dict(r))
    return out


__all__ = [
    "Metrics",
    "dashboard_stats",
    "expense_totals",
    "order_kpis",
    "order_search",
    "profit_summaries",
    "sort_activities",
    "sort_expenses",
    "sort_messages",
    "status_breakdown",
    "timeline",
]
