import unittest
from datetime import date, timedelta

from classsync.domain.AttendanceRecord import AttendanceRecord
from classsync.domain.ClassSchedule import ClassSchedule, Weekday
from classsync.logic.history.ledger import cancel_class, mark_attended, reset_class, slot_time
from classsync.logic.reporting.metrics import calculate_plan_metrics
from classsync.logic.schedule.plans import edit_plan, new_plan
from classsync.logic.schedule.recurrence import generate_class_list
from classsync.utilities.constants import DEFAULT_CANCEL_REASON, DEFAULT_CLASS_TIME


class TestPlanFactory(unittest.TestCase):

    def test_new_plan_freezes_quota(self):
        plan = new_plan(" Carla ", "2024-01-01", 1, [ClassSchedule(Weekday.MONDAY, "14:00")])
        self.assertEqual(plan.student_name, "Carla")
        self.assertEqual(plan.total_contracted_classes, 5)
        self.assertEqual(plan.start_date, "2024-01-01")
        self.assertEqual(plan.history, [])
        self.assertTrue(plan.id)

    def test_new_plan_rejects_bad_input(self):
        monday = [ClassSchedule(Weekday.MONDAY, "14:00")]
        with self.assertRaises(ValueError):
            new_plan("  ", "2024-01-01", 1, monday)
        with self.assertRaises(ValueError):
            new_plan("Carla", "2024-01-01", 1, [])
        with self.assertRaises(ValueError):
            new_plan("Carla", "2024-01-01", 0, monday)

    def test_edit_keeps_quota_and_history(self):
        plan = new_plan("Carla", "2024-01-01", 1, [ClassSchedule(Weekday.MONDAY, "14:00")], plan_id="c1")
        plan = mark_attended(plan, "2024-01-01")
        edited = edit_plan(plan, schedules=[ClassSchedule(Weekday.FRIDAY, "18:00")])
        self.assertEqual(edited.total_contracted_classes, 5)
        self.assertEqual(len(edited.history), 1)
        self.assertEqual(plan.schedules[0].day_of_week, Weekday.MONDAY)
        self.assertEqual(edited.schedules[0].day_of_week, Weekday.FRIDAY)
        self.assertEqual(edited.schedules_since, "2024-01-02")
        self.assertIsNone(plan.schedules_since)

    def test_mid_contract_schedule_change_keeps_owed_classes_ahead(self):
        plan = new_plan("Carla", "2024-01-01", 6, [ClassSchedule(Weekday.MONDAY, "14:00")], plan_id="c2")
        self.assertEqual(plan.total_contracted_classes, 27)
        monday = date(2024, 1, 1)
        for week in range(25):
            plan = mark_attended(plan, monday + timedelta(weeks=week))
        self.assertEqual(plan.history[-1].date, "2024-06-17")

        edited = edit_plan(plan, schedules=[ClassSchedule(Weekday.FRIDAY, "18:00")])
        classes = generate_class_list(edited)
        self.assertEqual(classes[-2:], [date(2024, 6, 21), date(2024, 6, 28)])
        self.assertNotIn(date(2024, 1, 5), classes)

        metrics = calculate_plan_metrics(edited, today=date(2024, 6, 20), class_list=classes)
        self.assertEqual(metrics.current_end_date, date(2024, 6, 28))
        self.assertEqual(metrics.next_class_date, date(2024, 6, 21))
        self.assertEqual(metrics.total_planned_classes, 27)

    def test_edit_with_explicit_effective_date(self):
        plan = new_plan("Carla", "2024-01-01", 1, [ClassSchedule(Weekday.MONDAY, "14:00")], plan_id="c3")
        edited = edit_plan(plan, schedules=[ClassSchedule(Weekday.WEDNESDAY, "10:00")],
                           effective_from="2024-01-15")
        self.assertEqual(edited.schedules_since, "2024-01-15")
        self.assertEqual(list(generate_class_list(edited)),
                         [date(2024, 1, d) for d in (17, 24, 31)] + [date(2024, 2, 7), date(2024, 2, 14)])

    def test_rename_only_keeps_schedule_start(self):
        plan = new_plan("Carla", "2024-01-01", 1, [ClassSchedule(Weekday.MONDAY, "14:00")], plan_id="c4")
        self.assertIsNone(edit_plan(plan, student_name="Carla B.").schedules_since)


class TestLedgerActions(unittest.TestCase):

    def setUp(self):
        self.plan = new_plan("Diego", "2024-01-01", 1, [ClassSchedule(Weekday.MONDAY, "14:00")], plan_id="d1")

    def test_mark_attended_uses_slot_time(self):
        updated = mark_attended(self.plan, date(2024, 1, 8), note="Chapter 3")
        record = updated.get_record("2024-01-08")
        self.assertEqual(record.status, "attended")
        self.assertEqual(record.time, "14:00")
        self.assertEqual(record.note, "Chapter 3")
        self.assertEqual(self.plan.history, [])

    def test_off_schedule_date_gets_default_time(self):
        self.assertEqual(slot_time(self.plan, "2024-01-10"), DEFAULT_CLASS_TIME)

    def test_cancel_defaults(self):
        updated = cancel_class(self.plan, "2024-01-08")
        record = updated.get_record("2024-01-08")
        self.assertEqual(record.status, "cancelled")
        self.assertTrue(record.extends_plan)
        self.assertEqual(record.reason, DEFAULT_CANCEL_REASON)
        self.assertEqual(len(generate_class_list(updated)), 6)

    def test_forfeit(self):
        updated = cancel_class(self.plan, "2024-01-08", extends_plan=False, reason="No show")
        record = updated.get_record("2024-01-08")
        self.assertFalse(record.extends_plan)
        self.assertEqual(record.reason, "No show")
        self.assertEqual(len(generate_class_list(updated)), 5)

    def test_one_record_per_date(self):
        updated = mark_attended(self.plan, "2024-01-08")
        updated = mark_attended(updated, "2024-01-15")
        updated = cancel_class(updated, "2024-01-08")
        self.assertEqual([r.date for r in updated.history], ["2024-01-08", "2024-01-15"])
        self.assertEqual(updated.history[0].status, "cancelled")

    def test_reset_removes_record(self):
        updated = cancel_class(self.plan, "2024-01-08")
        updated = reset_class(updated, "2024-01-08")
        self.assertIsNone(updated.get_record("2024-01-08"))
        self.assertEqual(updated.history, [])

    def test_unknown_status_rejected(self):
        with self.assertRaises(ValueError):
            AttendanceRecord("2024-01-08", "14:00", "late")


if __name__ == '__main__':
    unittest.main()
