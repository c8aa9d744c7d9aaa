"""ClassSchedule domain entity: one weekly recurring slot (weekday + time)."""
from enum import IntEnum

from classsync.utilities.constants import DAY_NAMES


class Weekday(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def label(self) -> str:
        return DAY_NAMES[self.value]


class ClassSchedule:
    def __init__(self, day_of_week: int = Weekday.MONDAY, time: str = "14:00"):
        self.day_of_week = Weekday(int(day_of_week))
        self.time = time

    def __str__(self) -> str:
        return f"{self.day_of_week.label[:3]} ({self.time})"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, ClassSchedule):
            return NotImplemented
        return (self.day_of_week, self.time) == (other.day_of_week, other.time)

    def __hash__(self):
        return hash((self.day_of_week, self.time))

    @staticmethod
    def from_dict(data):
        '''Creates a ClassSchedule from the stored camelCase dict (snake_case keys are accepted too).'''
        d = dict(data) if isinstance(data, dict) else {}
        day = d.get("dayOfWeek", d.get("day_of_week", Weekday.MONDAY))
        return ClassSchedule(day, d.get("time", "14:00"))

    def to_dict(self):
        return {"dayOfWeek": int(self.day_of_week), "time": self.time}
