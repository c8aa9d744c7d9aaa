"""Attendance ledger actions.

Every action returns a new Plan whose history has exactly one record per
date. Setting a date back to pending removes its record instead of storing
a pending entry.
"""
from __future__ import annotations
from typing import Optional

from classsync.domain.AttendanceRecord import AttendanceRecord, ATTENDED, CANCELLED, PENDING
from classsync.domain.Plan import Plan
from classsync.utilities.constants import DEFAULT_CANCEL_REASON, DEFAULT_CLASS_TIME
from classsync.utilities.dates import DateLike, to_iso

__all__ = ["apply_record", "mark_attended", "cancel_class", "reset_class", "slot_time"]


def slot_time(plan: Plan, day: DateLike) -> str:
    """Scheduled time for a date: the existing record's time, else the matching weekly slot."""
    existing = plan.get_record(day)
    if existing is not None and existing.time != DEFAULT_CLASS_TIME:
        return existing.time
    schedule = plan.schedule_for(day)
    return schedule.time if schedule else DEFAULT_CLASS_TIME


def apply_record(plan: Plan, record: AttendanceRecord) -> Plan:
    """Upsert a record by date (in place of the old one), or drop the date when the record is pending."""
    updated = plan.copy()
    if record.status == PENDING:
        updated.history = [h for h in updated.history if h.date != record.date]
        return updated
    for idx, existing in enumerate(updated.history):
        if existing.date == record.date:
            updated.history[idx] = record
            return updated
    updated.history.append(record)
    return updated


def mark_attended(plan: Plan, day: DateLike, time: Optional[str] = None, note: Optional[str] = None) -> Plan:
    record = AttendanceRecord(
        date=to_iso(day), time=time or slot_time(plan, day), status=ATTENDED, note=note
    )
    return apply_record(plan, record)


def cancel_class(plan: Plan, day: DateLike, extends_plan: bool = True, reason: Optional[str] = None,
                 time: Optional[str] = None) -> Plan:
    """Record a cancellation.

    extends_plan=True reschedules the slot (the plan gets one more class);
    False forfeits it.
    """
    record = AttendanceRecord(
        date=to_iso(day),
        time=time or slot_time(plan, day),
        status=CANCELLED,
        extends_plan=bool(extends_plan),
        reason=(reason or "").strip() or DEFAULT_CANCEL_REASON,
    )
    return apply_record(plan, record)


def reset_class(plan: Plan, day: DateLike) -> Plan:
    return apply_record(plan, AttendanceRecord(date=to_iso(day), status=PENDING))
