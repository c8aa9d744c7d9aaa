"""AttendanceRecord domain entity: the outcome recorded for one class date."""
from datetime import date
from typing import Optional

from classsync.utilities.dates import parse_iso_date, to_iso
from classsync.utilities.constants import DEFAULT_CLASS_TIME

ATTENDED = "attended"
CANCELLED = "cancelled"
PENDING = "pending"
STATUSES = (ATTENDED, CANCELLED, PENDING)


class AttendanceRecord:
    def __init__(self, date: str, time: str = DEFAULT_CLASS_TIME, status: str = PENDING,
                 extends_plan: Optional[bool] = None, reason: Optional[str] = None,
                 note: Optional[str] = None):
        if status not in STATUSES:
            raise ValueError(f"Unknown attendance status: {status!r}")
        self.date = to_iso(date)
        self.time = time
        self.status = status
        # None means "not set", which counts as extending
        self.extends_plan = extends_plan
        self.reason = reason
        self.note = note

    @property
    def day(self) -> date:
        return parse_iso_date(self.date)

    @property
    def is_pending(self) -> bool:
        return self.status == PENDING

    @property
    def is_extending_cancellation(self) -> bool:
        return self.status == CANCELLED and self.extends_plan is not False

    @property
    def is_forfeited_cancellation(self) -> bool:
        return self.status == CANCELLED and self.extends_plan is False

    def __str__(self) -> str:
        parts = [f"{self.date} {self.time} - {self.status}"]
        if self.status == CANCELLED:
            parts.append("lost class" if self.extends_plan is False else "makeup")
        if self.reason:
            parts.append(self.reason)
        return " - ".join(parts)

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, AttendanceRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        '''Creates an AttendanceRecord from a stored dict. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        extends = d.get("extendsPlan", d.get("extends_plan"))
        return AttendanceRecord(
            date=d["date"],
            time=d.get("time") or DEFAULT_CLASS_TIME,
            status=d.get("status", PENDING),
            extends_plan=None if extends is None else bool(extends),
            reason=d.get("reason"),
            note=d.get("note"),
        )

    def to_dict(self):
        '''Converts the record to the stored camelCase dict; optional fields are omitted when unset.'''
        out = {"date": self.date, "time": self.time, "status": self.status}
        if self.extends_plan is not None:
            out["extendsPlan"] = self.extends_plan
        if self.reason is not None:
            out["reason"] = self.reason
        if self.note is not None:
            out["note"] = self.note
        return out
