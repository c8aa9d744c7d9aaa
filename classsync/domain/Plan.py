"""Plan domain entity: a student's lesson contract (start, duration, weekly slots, frozen quota, history)."""
from datetime import date
from typing import List, Optional

from classsync.domain.AttendanceRecord import AttendanceRecord
from classsync.domain.ClassSchedule import ClassSchedule
from classsync.utilities.dates import parse_iso_date, to_iso, weekday_of


class Plan:
    def __init__(self, id: str, student_name: str, start_date: str, duration_months: int,
                 total_contracted_classes: int, schedules: Optional[List[ClassSchedule]] = None,
                 history: Optional[List[AttendanceRecord]] = None, schedules_since: Optional[str] = None):
        self.id = id
        self.student_name = student_name
        self.start_date = to_iso(start_date)
        self.duration_months = int(duration_months)
        # Frozen at creation; schedule edits never recompute it
        self.total_contracted_classes = int(total_contracted_classes)
        self.schedules = schedules[:] if schedules else []
        self.history = history[:] if history else []
        # First day the current schedules apply to; None means since start_date
        self.schedules_since = to_iso(schedules_since) if schedules_since else None

    @property
    def start(self) -> date:
        return parse_iso_date(self.start_date)

    @property
    def schedule_start(self) -> date:
        """Day from which unrecorded slots follow the current weekly schedule."""
        if self.schedules_since is None:
            return self.start
        return max(self.start, parse_iso_date(self.schedules_since))

    def get_record(self, day) -> Optional[AttendanceRecord]:
        """Return the history record for a date, or None. Pending records count as no record."""
        iso = to_iso(day)
        for record in self.history:
            if record.date == iso:
                return None if record.is_pending else record
        return None

    def schedule_for(self, day) -> Optional[ClassSchedule]:
        """First schedule entry whose weekday matches the given date."""
        weekday = weekday_of(parse_iso_date(day))
        for schedule in self.schedules:
            if schedule.day_of_week == weekday:
                return schedule
        return None

    def copy(self) -> "Plan":
        return Plan.from_dict(self.to_dict())

    def __str__(self) -> str:
        slots = ", ".join(str(s) for s in self.schedules)
        return (f"{self.student_name} - from {self.start_date} for {self.duration_months} months"
                f" - {self.total_contracted_classes} classes - {slots}")

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a Plan from the stored camelCase dict (snake_case keys are accepted too).'''
        d = dict(data)
        return Plan(
            id=str(d["id"]),
            student_name=d.get("studentName", d.get("student_name", "")),
            start_date=d.get("startDate", d.get("start_date")),
            duration_months=d.get("durationMonths", d.get("duration_months", 1)),
            total_contracted_classes=d.get("totalContractedClasses", d.get("total_contracted_classes", 0)),
            schedules=[ClassSchedule.from_dict(s) for s in d.get("schedules", [])],
            history=[AttendanceRecord.from_dict(h) for h in d.get("history", [])],
            schedules_since=d.get("schedulesSince", d.get("schedules_since")),
        )

    def to_dict(self):
        out = {
            "id": self.id,
            "studentName": self.student_name,
            "startDate": self.start_date,
            "durationMonths": self.duration_months,
            "totalContractedClasses": self.total_contracted_classes,
            "schedules": [s.to_dict() for s in self.schedules],
            "history": [h.to_dict() for h in self.history],
        }
        if self.schedules_since is not None:
            out["schedulesSince"] = self.schedules_since
        return out
