from datetime import date, datetime, timedelta
import unittest
from mealplan.domain.errors import InvalidInputError
from mealplan.logic.scheduling.week_window import (
    add_days, date_range, end_of_week, format_iso_date, is_in_week,
    month_grid, parse_iso_date, start_of_week, week_days
)


class TestParseIsoDate(unittest.TestCase):

    def test_accepts_string_date_and_datetime(self):
        self.assertEqual(parse_iso_date("2025-03-01"), date(2025, 3, 1))
        self.assertEqual(parse_iso_date(date(2025, 3, 1)), date(2025, 3, 1))
        self.assertEqual(parse_iso_date(datetime(2025, 3, 1, 18, 30)), date(2025, 3, 1))

    def test_rejects_malformed(self):
        for bad in ("2025-3-1", "01-03-2025", "2025-02-30", "", "tomorrow", 20250301, None):
            with self.assertRaises(InvalidInputError, msg=repr(bad)):
                parse_iso_date(bad)

    def test_format(self):
        self.assertEqual(format_iso_date(date(2025, 1, 5)), "2025-01-05")


class TestWeekWindow(unittest.TestCase):
    # 2025-03-01 is a Saturday

    def test_start_of_week_defaults_to_monday(self):
        self.assertEqual(start_of_week("2025-03-01"), date(2025, 2, 24))
        self.assertEqual(start_of_week("2025-02-24"), date(2025, 2, 24))
        self.assertEqual(start_of_week("2025-03-02"), date(2025, 2, 24))

    def test_start_of_week_configurable(self):
        self.assertEqual(start_of_week("2025-03-01", week_starts_on=0), date(2025, 2, 23))
        self.assertEqual(start_of_week("2025-03-01", week_starts_on=6), date(2025, 3, 1))
        self.assertEqual(start_of_week("2025-02-28", week_starts_on=6), date(2025, 2, 22))

    def test_start_of_week_rejects_bad_config(self):
        for bad in (-1, 7, "1", True):
            with self.assertRaises(InvalidInputError):
                start_of_week("2025-03-01", week_starts_on=bad)

    def test_end_of_week(self):
        self.assertEqual(end_of_week("2025-03-01"), date(2025, 3, 2))
        self.assertEqual(end_of_week("2025-03-01", week_starts_on=0), date(2025, 3, 1))

    def test_add_days_crosses_month_and_year(self):
        self.assertEqual(add_days("2025-02-28", 1), date(2025, 3, 1))
        self.assertEqual(add_days("2024-12-31", 1), date(2025, 1, 1))
        self.assertEqual(add_days("2025-03-01", -7), date(2025, 2, 22))

    def test_week_days_and_membership(self):
        days = week_days("2025-02-24")
        self.assertEqual(len(days), 7)
        self.assertEqual(days[0], date(2025, 2, 24))
        self.assertEqual(days[-1], date(2025, 3, 2))
        self.assertTrue(is_in_week("2025-03-02", "2025-02-24"))
        self.assertFalse(is_in_week("2025-03-03", "2025-02-24"))
        self.assertFalse(is_in_week("2025-02-23", "2025-02-24"))

    def test_date_range(self):
        self.assertEqual(date_range("2025-02-27", "2025-03-02"),
                         [date(2025, 2, 27), date(2025, 2, 28), date(2025, 3, 1), date(2025, 3, 2)])
        self.assertEqual(date_range("2025-03-02", "2025-03-01"), [])


class TestMonthGrid(unittest.TestCase):

    def _assert_contiguous(self, grid):
        for a, b in zip(grid, grid[1:]):
            self.assertEqual((b - a).days, 1)

    def test_march_2025_monday_start(self):
        grid = month_grid(2025, 3)
        self.assertEqual(len(grid), 42)
        self.assertEqual(grid[0], date(2025, 2, 24))
        self.assertEqual(grid[-1], date(2025, 4, 6))
        self._assert_contiguous(grid)
        self.assertEqual(grid[0].weekday(), 0)

    def test_grid_covers_whole_month_in_full_weeks(self):
        for week_starts_on in range(7):
            for month in range(1, 13):
                grid = month_grid(2025, month, week_starts_on)
                self.assertEqual(len(grid) % 7, 0)
                self._assert_contiguous(grid)
                in_month = [d for d in grid if d.month == month]
                self.assertEqual(in_month[0].day, 1)
                self.assertEqual(start_of_week(grid[0], week_starts_on), grid[0])

    def test_february_2026_sunday_start_has_no_lead_days(self):
        grid = month_grid(2026, 2, week_starts_on=0)
        self.assertEqual(len(grid), 28)
        self.assertEqual(grid[0], date(2026, 2, 1))
        self.assertEqual(grid[-1], date(2026, 2, 28))

    def test_rejects_bad_month(self):
        with self.assertRaises(InvalidInputError):
            month_grid(2025, 13)

    def test_rejects_year_outside_calendar(self):
        for year in (0, -5, 10000):
            with self.assertRaises(InvalidInputError, msg=repr(year)):
                month_grid(year, 3)

    def test_last_month_of_calendar_cannot_be_padded(self):
        # 9999-12-31 is a Friday, so its Monday-based week runs into year 10000
        with self.assertRaises(InvalidInputError):
            month_grid(9999, 12)
        grid = month_grid(9999, 12, week_starts_on=6)
        self.assertEqual(grid[-1], date.max)


class TestCalendarEdges(unittest.TestCase):

    def test_add_days_past_calendar_bounds(self):
        with self.assertRaises(InvalidInputError):
            add_days(date.max, 1)
        with self.assertRaises(InvalidInputError):
            add_days(date.min, -1)
        self.assertEqual(add_days(date.max, -1), date.max - timedelta(days=1))

    def test_week_bounds_past_calendar_bounds(self):
        # 0001-01-01 is a Monday; a Sunday-based week would start in year 0
        self.assertEqual(start_of_week(date.min), date.min)
        with self.assertRaises(InvalidInputError):
            start_of_week(date.min, week_starts_on=0)
        with self.assertRaises(InvalidInputError):
            end_of_week(date.max)
        with self.assertRaises(InvalidInputError):
            week_days(date.max)
        self.assertFalse(is_in_week(date.min, date.max))

    def test_small_years_are_zero_padded(self):
        self.assertEqual(format_iso_date(date(999, 1, 2)), "0999-01-02")
        self.assertEqual(parse_iso_date(format_iso_date(date(999, 1, 2))), date(999, 1, 2))
