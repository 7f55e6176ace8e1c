import os
import time
import unittest
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from gestor.services.metrics import (
    Metrics,
    dashboard_stats,
    expense_totals,
    order_kpis,
    order_search,
    profit_summaries,
    sort_activities,
    sort_expenses,
    sort_messages,
    status_breakdown,
    timeline,
)


def _ms(*args):
    return int(datetime(*args, tzinfo=timezone.utc).timestamp() * 1000)


ORDERS = [
    {"id": "1", "customerName": "Ana Lima", "description": "Camisetas", "totalValue": 100.0, "paidValue": 100.0,
     "status": "delivered", "notaFiscalIssued": True, "createdAt": _ms(2024, 1, 5, 12)},
    {"id": "2", "customerName": "Bruno", "description": "Canecas", "totalValue": 200.0, "paidValue": 50.0,
     "status": "ready", "notaFiscalIssued": False, "createdAt": _ms(2024, 1, 20, 12)},
    {"id": "3", "customerName": "Carla", "description": "Bonés", "totalValue": 50.0, "paidValue": 0.0,
     "status": "cancelled", "notaFiscalIssued": False, "createdAt": _ms(2024, 2, 2, 12)},
    {"id": "4", "customerName": "Ana Souza", "description": "Uniformes", "totalValue": 150.0, "paidValue": 0.0,
     "status": "pending", "notaFiscalIssued": False, "createdAt": _ms(2024, 2, 3, 12)},
]


class TestOrderSummaries(unittest.TestCase):
    def test_dashboard_stats(self):
        stats = dashboard_stats(ORDERS)
        self.assertAlmostEqual(stats["total_value"], 500.0)
        self.assertAlmostEqual(stats["received_value"], 150.0)
        self.assertAlmostEqual(stats["pending_value"], 350.0)
        self.assertEqual(stats["active_orders"], 2)
        self.assertEqual(stats["ready_pickup"], 1)
        self.assertEqual(stats["missing_invoice"], 2)
        self.assertEqual(stats["total_orders"], 4)

    def test_kpis(self):
        kpis = order_kpis(ORDERS)
        self.assertAlmostEqual(kpis["avg_ticket"], 125.0)
        self.assertAlmostEqual(kpis["receipt_rate"], 30.0)
        self.assertEqual(order_kpis([])["avg_ticket"], 0.0)
        self.assertEqual(order_kpis([])["receipt_rate"], 0.0)

    def test_status_breakdown(self):
        self.assertEqual(
            status_breakdown(ORDERS), {"delivered": 1, "ready": 1, "cancelled": 1, "pending": 1}
        )

    def test_timeline_by_month_and_day(self):
        monthly = timeline(ORDERS, "all", tz=timezone.utc)
        self.assertEqual([p["date"] for p in monthly], ["2024-01", "2024-02"])
        self.assertAlmostEqual(monthly[0]["received"], 150.0)
        self.assertAlmostEqual(monthly[0]["pending"], 150.0)
        self.assertAlmostEqual(monthly[1]["pending"], 200.0)

        daily = timeline(ORDERS[:2], "month", tz=timezone.utc)
        self.assertEqual([p["date"] for p in daily], ["2024-01-05", "2024-01-20"])
        self.assertEqual(timeline([], "all"), [])

    def test_metrics_totals(self):
        totals = Metrics({"totalValue": "Total", "paidValue": "Received"}).totals(ORDERS)
        self.assertAlmostEqual(totals["totalValue"]["sum"], 500.0)
        self.assertEqual(totals["paidValue"]["label"], "Received")

    def test_metrics_label_falls_back_to_key(self):
        metrics = Metrics({"totalValue": "Total"})
        self.assertEqual(metrics.label("totalValue"), "Total")
        self.assertEqual(metrics.label("paidValue"), "paidValue")
        self.assertEqual(metrics.label(None), "")

    def test_timeline_skips_out_of_range_dates(self):
        orders = [{"createdAt": 10 ** 16, "totalValue": 5.0}, ORDERS[0]]
        for tz in (timezone.utc, None):
            points = timeline(orders, "all", tz=tz)
            self.assertEqual([p["date"] for p in points], ["2024-01"])
        self.assertEqual(timeline([{"createdAt": "never", "totalValue": 1.0}], "all", tz=timezone.utc), [])


class TestListHelpers(unittest.TestCase):
    def test_order_search(self):
        out = order_search(ORDERS, text="ana")
        self.assertEqual([o["id"] for o in out], ["4", "1"])
        self.assertEqual([o["id"] for o in order_search(ORDERS, status="ready")], ["2"])
        self.assertEqual(len(order_search(ORDERS)), 4)

    def test_expense_totals(self):
        expenses = [
            {"value": 30.0, "category": "material"},
            {"value": 20.0, "category": "rent"},
            {"value": 15.0, "category": "material"},
        ]
        out = expense_totals(expenses)
        self.assertAlmostEqual(out["total"], 65.0)
        self.assertEqual(out["by_category"], {"material": 45.0, "rent": 20.0})
        self.assertEqual(expense_totals([]), {"total": 0.0, "by_category": {}})

    def test_sort_activities(self):
        acts = [
            {"id": "done", "completed": True, "date": 1},
            {"id": "late", "completed": False, "date": 30},
            {"id": "soon", "completed": False, "date": 10},
        ]
        self.assertEqual([a["id"] for a in sort_activities(acts)], ["soon", "late", "done"])

    def test_sort_expenses_newest_first(self):
        expenses = [{"id": "old", "date": 1}, {"id": "new", "date": 30}, {"id": "mid", "date": 10}]
        self.assertEqual([e["id"] for e in sort_expenses(expenses)], ["new", "mid", "old"])

    def test_sort_messages_oldest_first(self):
        messages = [{"id": "b", "timestamp": 20}, {"id": "c", "timestamp": 30}, {"id": "a", "timestamp": 10}]
        self.assertEqual([m["id"] for m in sort_messages(messages)], ["a", "b", "c"])

    def test_profit_summaries(self):
        rows = profit_summaries([
            {"orderId": "o1", "revenue": 200.0, "costFabric": 60.0, "costSewing": 30.0,
             "costPrint": 20.0, "costMisc": 10.0, "lastUpdated": 1},
            {"orderId": "o2", "revenue": 0, "costFabric": 15.0, "lastUpdated": 2},
            {"orderId": "broken"},
        ])
        self.assertAlmostEqual(rows[0]["totalCost"], 120.0)
        self.assertAlmostEqual(rows[0]["profit"], 80.0)
        self.assertAlmostEqual(rows[0]["margin"], 40.0)
        self.assertAlmostEqual(rows[1]["profit"], -15.0)
        self.assertEqual(rows[1]["margin"], 0.0)
        self.assertEqual(rows[2], {"orderId": "broken"})


@unittest.skipUnless(hasattr(time, "tzset"), "needs time.tzset")
class TestTimelineSystemZone(unittest.TestCase):
    def setUp(self):
        self._old_tz = os.environ.get("TZ")
        os.environ["TZ"] = "America/New_York"
        time.tzset()

    def tearDown(self):
        if self._old_tz is None:
            os.environ.pop("TZ", None)
        else:
            os.environ["TZ"] = self._old_tz
        time.tzset()

    def test_buckets_use_each_records_own_offset(self):
        ny = ZoneInfo("America/New_York")
        orders = [
            {"createdAt": int(datetime(2024, 1, 15, 23, 30, tzinfo=ny).timestamp() * 1000), "totalValue": 10.0},
            {"createdAt": int(datetime(2024, 7, 15, 23, 30, tzinfo=ny).timestamp() * 1000), "totalValue": 20.0},
        ]
        points = timeline(orders, "month")
        self.assertEqual([p["date"] for p in points], ["2024-01-15", "2024-07-15"])
        self.assertEqual([p["pending"] for p in points], [10.0, 20.0])


if __name__ == "__main__":
    unittest.main()
