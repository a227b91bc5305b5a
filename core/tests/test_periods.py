from datetime import date

from django.test import TestCase

from core.utils.periods import month_bounds, previous_month, trailing_days


class PeriodsTestCase(TestCase):

    def test_month_bounds_across_year_end(self):
        start, end = month_bounds(date(2026, 12, 18))

        self.assertEqual(start.date(), date(2026, 12, 1))
        self.assertEqual(end.date(), date(2027, 1, 1))

    def test_previous_month(self):
        self.assertEqual(previous_month(date(2026, 3, 31)), date(2026, 2, 28))
        self.assertEqual(previous_month(date(2026, 1, 5)), date(2025, 12, 31))

    def test_trailing_days_oldest_first(self):
        days = trailing_days(3, today=date(2026, 3, 1))

        self.assertEqual(days, [date(2026, 2, 27), date(2026, 2, 28), date(2026, 3, 1)])
