import unittest
from datetime import date

from classsync.domain.AttendanceRecord import AttendanceRecord
from classsync.domain.ClassSchedule import ClassSchedule, Weekday
from classsync.domain.Plan import Plan


class TestClassSchedule(unittest.TestCase):

    def test_from_dict_accepts_both_key_styles(self):
        self.assertEqual(ClassSchedule.from_dict({"dayOfWeek": 3, "time": "10:30"}),
                         ClassSchedule(Weekday.WEDNESDAY, "10:30"))
        self.assertEqual(ClassSchedule.from_dict({"day_of_week": 0, "time": "08:00"}).day_of_week,
                         Weekday.SUNDAY)

    def test_to_dict(self):
        self.assertEqual(ClassSchedule(Weekday.SATURDAY, "11:00").to_dict(), {"dayOfWeek": 6, "time": "11:00"})

    def test_label(self):
        self.assertEqual(Weekday.SUNDAY.label, "Sunday")
        self.assertEqual(str(ClassSchedule(Weekday.MONDAY, "14:00")), "Mon (14:00)")


class TestAttendanceRecord(unittest.TestCase):

    def test_optional_fields_omitted(self):
        record = AttendanceRecord("2024-01-01", "14:00", "attended")
        self.assertEqual(record.to_dict(), {"date": "2024-01-01", "time": "14:00", "status": "attended"})

    def test_cancellation_kinds(self):
        unset = AttendanceRecord("2024-01-01", "14:00", "cancelled")
        forfeited = AttendanceRecord.from_dict({"date": "2024-01-08", "time": "14:00",
                                                "status": "cancelled", "extendsPlan": False})
        self.assertTrue(unset.is_extending_cancellation)
        self.assertFalse(unset.is_forfeited_cancellation)
        self.assertTrue(forfeited.is_forfeited_cancellation)
        self.assertEqual(forfeited.to_dict()["extendsPlan"], False)

    def test_timestamp_date_is_truncated(self):
        record = AttendanceRecord.from_dict({"date": "2024-01-08T03:00:00.000Z", "status": "attended"})
        self.assertEqual(record.date, "2024-01-08")
        self.assertEqual(record.day, date(2024, 1, 8))


class TestPlan(unittest.TestCase):

    def setUp(self):
        self.plan = Plan("p9", "Rui", "2024-01-01", 2, 9,
                         [ClassSchedule(Weekday.MONDAY, "14:00"), ClassSchedule(Weekday.THURSDAY, "16:00")],
                         [AttendanceRecord("2024-01-04", "16:00", "attended"),
                          AttendanceRecord("2024-01-08", "14:00", "pending")])

    def test_round_trip(self):
        self.assertEqual(Plan.from_dict(self.plan.to_dict()).to_dict(), self.plan.to_dict())
        self.assertNotIn("schedulesSince", self.plan.to_dict())

    def test_schedule_start(self):
        self.assertEqual(self.plan.schedule_start, date(2024, 1, 1))
        self.plan.schedules_since = "2024-02-05"
        restored = Plan.from_dict(self.plan.to_dict())
        self.assertEqual(restored.to_dict()["schedulesSince"], "2024-02-05")
        self.assertEqual(restored.schedule_start, date(2024, 2, 5))

    def test_get_record_treats_pending_as_missing(self):
        self.assertEqual(self.plan.get_record(date(2024, 1, 4)).status, "attended")
        self.assertIsNone(self.plan.get_record("2024-01-08"))
        self.assertIsNone(self.plan.get_record("2024-01-11"))

    def test_schedule_for(self):
        self.assertEqual(self.plan.schedule_for("2024-01-11").time, "16:00")
        self.assertIsNone(self.plan.schedule_for("2024-01-10"))

    def test_copy_is_independent(self):
        clone = self.plan.copy()
        clone.history.append(AttendanceRecord("2024-01-11", "16:00", "attended"))
        self.assertEqual(len(self.plan.history), 2)


if __name__ == '__main__':
    unittest.main()
