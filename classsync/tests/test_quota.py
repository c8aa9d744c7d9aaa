import unittest
from datetime import date

from classsync.domain.ClassSchedule import ClassSchedule, Weekday
from classsync.logic.schedule.quota import calculate_initial_class_count, is_count_capped, theoretical_end_date
from classsync.utilities.constants import INITIAL_COUNT_CAP
from classsync.utilities.dates import add_months


class TestInitialClassCount(unittest.TestCase):

    def test_one_month_of_mondays(self):
        schedules = [ClassSchedule(Weekday.MONDAY, "14:00")]
        self.assertEqual(calculate_initial_class_count("2024-01-01", 1, schedules), 5)

    def test_end_day_is_inclusive(self):
        # 2024-07-01 is a Monday and the nominal end of a 6-month plan
        schedules = [ClassSchedule(Weekday.MONDAY, "14:00")]
        self.assertEqual(calculate_initial_class_count(date(2024, 1, 1), 6, schedules), 27)

    def test_two_weekdays(self):
        schedules = [ClassSchedule(Weekday.MONDAY, "14:00"), ClassSchedule(Weekday.THURSDAY, "10:00")]
        # Mondays 1,8,15,22,29 and Thursdays 4,11,18,25 plus Feb 1
        self.assertEqual(calculate_initial_class_count("2024-01-01", 1, schedules), 10)

    def test_empty_schedules_count_zero(self):
        self.assertEqual(calculate_initial_class_count("2024-01-01", 3, []), 0)

    def test_cap(self):
        every_day = [ClassSchedule(Weekday(d)) for d in range(7)]
        count = calculate_initial_class_count("2024-01-01", 72, every_day)
        self.assertEqual(count, INITIAL_COUNT_CAP + 1)
        self.assertTrue(is_count_capped(count))
        self.assertFalse(is_count_capped(INITIAL_COUNT_CAP))


class TestMonthArithmetic(unittest.TestCase):

    def test_theoretical_end(self):
        self.assertEqual(theoretical_end_date("2024-01-01", 1), date(2024, 2, 1))
        self.assertEqual(theoretical_end_date("2024-11-15", 3), date(2025, 2, 15))

    def test_missing_day_clamps_to_month_end(self):
        self.assertEqual(add_months(date(2024, 1, 31), 1), date(2024, 2, 29))
        self.assertEqual(add_months(date(2023, 1, 31), 1), date(2023, 2, 28))
        self.assertEqual(add_months(date(2024, 8, 31), 1), date(2024, 9, 30))


if __name__ == '__main__':
    unittest.main()
