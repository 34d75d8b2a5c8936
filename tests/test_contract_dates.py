from __future__ import annotations

import datetime as dt
import unittest

from daygrid.util import dates

D = dt.datetime(2024, 2, 14, 13, 45, 30, 250000)  # Wednesday


class TestDateAlgebraContract(unittest.TestCase):
    def test_start_of_units(self) -> None:
        self.assertEqual(dates.start_of(D, "minutes"), dt.datetime(2024, 2, 14, 13, 45))
        self.assertEqual(dates.start_of(D, "day"), dt.datetime(2024, 2, 14))
        self.assertEqual(dates.start_of(D, "month"), dt.datetime(2024, 2, 1))
        self.assertEqual(dates.start_of(D, "year"), dt.datetime(2024, 1, 1))
        self.assertEqual(dates.start_of(D, "week"), dt.datetime(2024, 2, 12))
        self.assertEqual(dates.start_of(D, "week", first_of_week=6), dt.datetime(2024, 2, 11))

    def test_unknown_unit_raises(self) -> None:
        with self.assertRaises(ValueError):
            dates.start_of(D, "fortnight")

    def test_end_of_and_ceil(self) -> None:
        self.assertEqual(dates.end_of(D, "day"), dt.datetime(2024, 2, 14, 23, 59, 59, 999000))
        self.assertEqual(dates.ceil(D, "hours"), dt.datetime(2024, 2, 14, 14, 0))
        on_the_hour = dt.datetime(2024, 2, 14, 14, 0)
        self.assertEqual(dates.ceil(on_the_hour, "hours"), on_the_hour)

    def test_add_clamps_month_end(self) -> None:
        jan31 = dt.datetime(2024, 1, 31, 9, 0)
        self.assertEqual(dates.add(jan31, 1, "month"), dt.datetime(2024, 2, 29, 9, 0))
        self.assertEqual(dates.add(jan31, -2, "month"), dt.datetime(2023, 11, 30, 9, 0))
        self.assertEqual(dates.add(dt.datetime(2024, 2, 29), 1, "year"), dt.datetime(2025, 2, 28))
        self.assertEqual(dates.add(D, 90, "minutes"), D + dt.timedelta(minutes=90))
        self.assertEqual(dates.add(D, 2, "week"), D + dt.timedelta(days=14))

    def test_comparisons_at_unit_granularity(self) -> None:
        a = dt.datetime(2024, 2, 14, 9, 0, 10)
        b = dt.datetime(2024, 2, 14, 9, 0, 50)
        self.assertTrue(dates.lt(a, b))
        self.assertFalse(dates.lt(a, b, "minutes"))
        self.assertTrue(dates.eq(a, b, "minutes"))
        self.assertTrue(dates.lte(a, b, "minutes"))
        self.assertTrue(dates.gte(a, b, "day"))
        self.assertFalse(dates.gt(a, b, "day"))
        self.assertTrue(dates.neq(a, b))

    def test_merge(self) -> None:
        day = dt.datetime(2024, 2, 14, 23, 0)
        time = dt.datetime(1999, 7, 1, 8, 15, 5)
        self.assertEqual(dates.merge(day, time), dt.datetime(2024, 2, 14, 8, 15, 5))
        self.assertIsNone(dates.merge(None, None))
        self.assertEqual(dates.merge(None, time).time(), time.time())

    def test_merge_reads_aware_time_in_date_zone(self) -> None:
        day = dt.datetime(2024, 2, 14, tzinfo=dt.timezone.utc)
        time = dt.datetime(2024, 2, 14, 10, 0, tzinfo=dt.timezone(dt.timedelta(hours=1)))
        self.assertEqual(dates.merge(day, time), dt.datetime(2024, 2, 14, 9, 0, tzinfo=dt.timezone.utc))

    def test_diff(self) -> None:
        a = dt.datetime(2024, 2, 14, 9, 0)
        b = dt.datetime(2024, 2, 14, 10, 30, 45)
        self.assertEqual(dates.diff(a, b, "minutes"), 90)
        self.assertEqual(dates.diff(b, a, "minutes"), 90)
        self.assertEqual(dates.diff(a, b, "hours"), 1)
        self.assertEqual(dates.diff(a, b), 5445000)
        self.assertEqual(dates.diff(a, dt.datetime(2024, 5, 1), "month"), 3)
        self.assertEqual(dates.diff(a, dt.datetime(2021, 5, 1), "year"), 3)

    def test_ranges_and_visible_days(self) -> None:
        days = dates.date_range(dt.datetime(2024, 2, 27), dt.datetime(2024, 3, 2))
        self.assertEqual([d.day for d in days], [27, 28, 29, 1, 2])

        visible = dates.visible_days(D)
        self.assertEqual(visible[0], dt.datetime(2024, 1, 29))
        self.assertEqual(visible[-1], dt.datetime(2024, 3, 3))
        self.assertEqual(len(visible), 35)

        self.assertEqual(dates.first_visible_day(D, first_of_week=6), dt.datetime(2024, 1, 28))
        self.assertEqual(dates.months_in_year(2024)[11], dt.datetime(2024, 12, 1))

    def test_predicates(self) -> None:
        self.assertTrue(dates.same_month(D, dt.datetime(2024, 2, 1)))
        self.assertFalse(dates.same_month(D, dt.datetime(2023, 2, 14)))
        self.assertTrue(dates.same_date(D, dt.datetime(2024, 2, 14, 1)))
        self.assertTrue(dates.eq_time(D, dt.datetime(2000, 1, 1, 13, 45, 30)))
        self.assertTrue(dates.is_just_date(dt.datetime(2024, 2, 14)))
        self.assertFalse(dates.is_just_date(D))

    def test_duration_total_and_week(self) -> None:
        self.assertEqual(dates.duration(dt.datetime(2024, 2, 3), dt.datetime(2024, 2, 10), "day"), 7)
        self.assertEqual(dates.duration(D, dt.datetime(2024, 2, 14, 9), "hours"), 4)
        epoch_day = dt.datetime(1970, 1, 2, tzinfo=dt.timezone.utc)
        self.assertEqual(dates.total(epoch_day, "day"), 1.0)
        self.assertEqual(dates.total(epoch_day, "minutes"), 1440.0)
        self.assertEqual(dates.week(dt.datetime(2024, 1, 1)), 1)
        self.assertEqual(dates.week(dt.datetime(2021, 1, 3)), 53)

    def test_relative_days(self) -> None:
        today = dates.today("UTC")
        self.assertTrue(dates.is_just_date(today))
        self.assertEqual(dates.tomorrow("UTC") - dates.yesterday("UTC"), dt.timedelta(days=2))
        self.assertTrue(dates.is_today(today, "UTC"))
        self.assertIsNone(dates.now("+05:30").tzinfo)


if __name__ == "__main__":
    unittest.main(verbosity=2)
