import unittest
from datetime import date

from classsync.domain.AttendanceRecord import AttendanceRecord
from classsync.domain.ClassSchedule import ClassSchedule, Weekday
from classsync.domain.Plan import Plan
from classsync.logic.schedule.recurrence import generate_class_list, is_scheduled_day


def _plan(history=None, schedules=None, total=5, start="2024-01-01"):
    return Plan(
        id="p1",
        student_name="Ana",
        start_date=start,
        duration_months=1,
        total_contracted_classes=total,
        schedules=schedules if schedules is not None else [ClassSchedule(Weekday.MONDAY, "14:00")],
        history=history or [],
    )


MONDAYS_JAN_2024 = [date(2024, 1, d) for d in (1, 8, 15, 22, 29)]


class TestIsScheduledDay(unittest.TestCase):
    def test_matches_configured_weekday(self):
        schedules = [ClassSchedule(Weekday.MONDAY), ClassSchedule(Weekday.THURSDAY)]
        self.assertTrue(is_scheduled_day(date(2024, 1, 1), schedules))   # Monday
        self.assertTrue(is_scheduled_day(date(2024, 1, 4), schedules))   # Thursday
        self.assertFalse(is_scheduled_day(date(2024, 1, 2), schedules))  # Tuesday

    def test_sunday_is_zero(self):
        self.assertTrue(is_scheduled_day(date(2024, 1, 7), [{"dayOfWeek": 0, "time": "09:00"}]))
        self.assertFalse(is_scheduled_day(date(2024, 1, 6), [{"dayOfWeek": 0, "time": "09:00"}]))

    def test_empty_schedules_never_match(self):
        self.assertFalse(is_scheduled_day(date(2024, 1, 1), []))


class TestGenerateClassList(unittest.TestCase):
    def test_empty_history_returns_quota_dates(self):
        classes = generate_class_list(_plan())
        self.assertEqual(list(classes), MONDAYS_JAN_2024)
        self.assertFalse(classes.truncated)

    def test_extending_cancellation_adds_one_slot(self):
        plan = _plan([AttendanceRecord("2024-01-08", "14:00", "cancelled", extends_plan=True)])
        classes = generate_class_list(plan)
        self.assertEqual(list(classes), MONDAYS_JAN_2024 + [date(2024, 2, 5)])

    def test_cancellation_without_flag_extends(self):
        plan = _plan([AttendanceRecord("2024-01-08", "14:00", "cancelled")])
        self.assertEqual(len(generate_class_list(plan)), 6)

    def test_forfeited_cancellation_keeps_quota(self):
        plan = _plan([AttendanceRecord("2024-01-08", "14:00", "cancelled", extends_plan=False)])
        self.assertEqual(list(generate_class_list(plan)), MONDAYS_JAN_2024)

    def test_history_dates_kept_even_off_schedule(self):
        # Wednesday makeup class, not a configured weekday
        plan = _plan([AttendanceRecord("2024-01-10", "10:00", "attended")])
        classes = generate_class_list(plan)
        self.assertIn(date(2024, 1, 10), classes)
        self.assertEqual(len(classes), 5)
        self.assertEqual(list(classes), [date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 10),
                                         date(2024, 1, 15), date(2024, 1, 22)])

    def test_every_history_date_appears_once_and_sorted(self):
        history = [
            AttendanceRecord("2024-01-15", "14:00", "attended"),
            AttendanceRecord("2024-01-01", "14:00", "attended"),
            AttendanceRecord("2024-01-08", "14:00", "cancelled", extends_plan=True),
            AttendanceRecord("2024-01-22", "14:00", "cancelled", extends_plan=False),
        ]
        classes = generate_class_list(_plan(history))
        for record in history:
            self.assertEqual(classes.count(record.day), 1)
        self.assertEqual(list(classes), sorted(set(classes)))
        self.assertEqual(len(classes), 5 + 1)

    def test_pending_record_is_same_as_no_record(self):
        pending = _plan([AttendanceRecord("2024-01-08", "14:00", "pending")])
        self.assertEqual(list(generate_class_list(pending)), list(generate_class_list(_plan())))

    def test_new_schedule_fills_only_from_its_start(self):
        history = [AttendanceRecord("2024-01-01", "14:00", "attended"),
                   AttendanceRecord("2024-01-08", "14:00", "attended")]
        plan = _plan(history, schedules=[ClassSchedule(Weekday.FRIDAY, "18:00")])
        plan.schedules_since = "2024-01-09"
        classes = generate_class_list(plan)
        self.assertNotIn(date(2024, 1, 5), classes)
        self.assertEqual(list(classes), [date(2024, 1, 1), date(2024, 1, 8),
                                         date(2024, 1, 12), date(2024, 1, 19), date(2024, 1, 26)])
        self.assertFalse(classes.truncated)

    def test_schedule_start_before_plan_start_is_ignored(self):
        plan = _plan()
        plan.schedules_since = "2023-12-01"
        self.assertEqual(list(generate_class_list(plan)), MONDAYS_JAN_2024)

    def test_idempotent(self):
        plan = _plan([AttendanceRecord("2024-01-08", "14:00", "cancelled")])
        self.assertEqual(generate_class_list(plan), generate_class_list(plan))

    def test_does_not_mutate_plan(self):
        plan = _plan([AttendanceRecord("2024-01-08", "14:00", "cancelled")])
        before = plan.to_dict()
        generate_class_list(plan)
        self.assertEqual(plan.to_dict(), before)

    def test_empty_schedules_terminates_and_flags_truncation(self):
        plan = _plan(schedules=[], total=3)
        classes = generate_class_list(plan)
        self.assertEqual(list(classes), [])
        self.assertTrue(classes.truncated)
        self.assertEqual(classes.target, 3)

    def test_cap_truncates_and_flags(self):
        plan = _plan(total=50)
        classes = generate_class_list(plan, cap=10)
        self.assertEqual(len(classes), 11)
        self.assertTrue(classes.truncated)

    def test_history_beyond_quota_is_not_truncated(self):
        history = [AttendanceRecord(d.isoformat(), "14:00", "attended") for d in MONDAYS_JAN_2024]
        history.append(AttendanceRecord("2024-02-05", "14:00", "attended"))
        classes = generate_class_list(_plan(history))
        self.assertEqual(len(classes), 6)
        self.assertFalse(classes.truncated)


if __name__ == '__main__':
    unittest.main()
