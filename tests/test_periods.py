import unittest
from datetime import date, datetime, timedelta, timezone

from gestor.utils.periods import (
    AllTime,
    Day,
    Month,
    Week,
    Year,
    format_value,
    local_date_key,
    parse_period,
    week_anchor,
    week_bounds,
    week_start,
)

SAO_PAULO = timezone(timedelta(hours=-3))
TOKYO = timezone(timedelta(hours=9))


def _ms(*args, tz=timezone.utc):
    return datetime(*args, tzinfo=tz).timestamp() * 1000


class TestParsePeriod(unittest.TestCase):
    def test_all_and_empty_values(self):
        self.assertEqual(parse_period("all", "2024"), AllTime())
        self.assertEqual(parse_period("month", ""), AllTime())
        self.assertEqual(parse_period("day", None), AllTime())

    def test_valid_values(self):
        self.assertEqual(parse_period("year", "2023"), Year(2023))
        self.assertEqual(parse_period("month", "2023-10"), Month(2023, 10))
        self.assertEqual(parse_period("day", "2024-02-29"), Day(date(2024, 2, 29)))
        self.assertEqual(parse_period("week", "2023-W42"), Week(2023, 42, "42"))

    def test_malformed_values(self):
        for granularity, value in [
            ("year", "23"),
            ("year", "abcd"),
            ("month", "2023-13"),
            ("month", "2023/10"),
            ("day", "2023-02-30"),
            ("day", "2023-2-3"),
            ("week", "2023-42"),
            ("week", "2023-W00"),
            ("week", "2023-W54"),
            ("decade", "2020"),
        ]:
            self.assertIsNone(parse_period(granularity, value), (granularity, value))


class TestWeekBoundaries(unittest.TestCase):
    def test_week_start_matches_iso_calendar(self):
        for year in range(2015, 2031):
            for week in (1, 2, 10, 26, 52):
                self.assertEqual(
                    week_start(year, week), date.fromisocalendar(year, week, 1), (year, week)
                )

    def test_week_one_when_jan_first_is_friday(self):
        # 2021-01-01 is a Friday: week 1 starts the following Monday
        self.assertEqual(week_start(2021, 1), date(2021, 1, 4))

    def test_week_one_when_jan_first_is_sunday(self):
        self.assertEqual(week_start(2023, 1), date(2023, 1, 2))

    def test_week_one_when_jan_first_is_wednesday(self):
        self.assertEqual(week_start(2020, 1), date(2019, 12, 30))

    def test_week_anchor_is_not_snapped(self):
        self.assertEqual(week_anchor(2021, 1), date(2021, 1, 1))
        self.assertEqual(week_anchor(2021, 3), date(2021, 1, 15))

    def test_bounds_are_local_monday_to_sunday(self):
        start, end = week_bounds(2024, 10, SAO_PAULO)
        self.assertEqual(start, _ms(2024, 3, 4, 0, 0, 0, tz=SAO_PAULO))
        self.assertEqual(end, _ms(2024, 3, 10, 23, 59, 59, 999000, tz=SAO_PAULO))


class TestLocalDates(unittest.TestCase):
    def test_late_evening_keeps_local_date(self):
        ts = _ms(2024, 1, 31, 22, 30, tz=SAO_PAULO)  # 2024-02-01 01:30 UTC
        self.assertEqual(local_date_key(ts, SAO_PAULO), "2024-01-31")
        self.assertEqual(local_date_key(ts, timezone.utc), "2024-02-01")

    def test_early_morning_east_of_utc(self):
        ts = _ms(2024, 3, 1, 7, 0, tz=TOKYO)  # 2024-02-29 22:00 UTC
        self.assertEqual(local_date_key(ts, TOKYO), "2024-03-01")


class TestFormatValue(unittest.TestCase):
    def test_formats(self):
        moment = datetime(2024, 3, 5, 14, 30)
        self.assertEqual(format_value("year", moment), "2024")
        self.assertEqual(format_value("month", moment), "2024-03")
        self.assertEqual(format_value("day", moment), "2024-03-05")
        self.assertEqual(format_value("week", moment), "2024-W10")
        self.assertEqual(format_value("all", moment), "")

    def test_iso_week_year_rollover(self):
        self.assertEqual(format_value("week", date(2021, 1, 1)), "2020-W53")
        self.assertEqual(format_value("week", date(2024, 12, 30)), "2025-W01")


if __name__ == "__main__":
    unittest.main()
