"""Plan lifecycle helpers: create a plan with a frozen quota, edit its settings.

Both return new Plan objects and leave their inputs untouched.
"""
from __future__ import annotations
import logging
from datetime import timedelta
from typing import Iterable, Optional
from uuid import uuid4

from classsync.domain.ClassSchedule import ClassSchedule
from classsync.domain.Plan import Plan
from classsync.events.event_helpers import publish_capacity_exceeded
from classsync.logic.schedule.quota import calculate_initial_class_count, is_count_capped
from classsync.logic.schedule.recurrence import active_history
from classsync.utilities.constants import INITIAL_COUNT_CAP
from classsync.utilities.dates import DateLike, parse_iso_date, to_iso

logger = logging.getLogger(__name__)

__all__ = ["new_plan_id", "new_plan", "edit_plan"]


def new_plan_id() -> str:
    return uuid4().hex[:9]


def new_plan(student_name: str, start_date: DateLike, duration_months: int,
             schedules: Iterable[ClassSchedule], plan_id: Optional[str] = None) -> Plan:
    """Create a plan, freezing total_contracted_classes from the initial schedule."""
    schedules = list(schedules)
    if not student_name or not student_name.strip():
        raise ValueError("Student name cannot be empty")
    if not schedules:
        raise ValueError("A plan needs at least one weekly schedule")
    if int(duration_months) < 1:
        raise ValueError("Duration must be at least one month")

    total = calculate_initial_class_count(start_date, duration_months, schedules)
    if is_count_capped(total):
        publish_capacity_exceeded("initial_count", INITIAL_COUNT_CAP, total)

    plan = Plan(
        id=plan_id or new_plan_id(),
        student_name=student_name.strip(),
        start_date=to_iso(start_date),
        duration_months=duration_months,
        total_contracted_classes=total,
        schedules=schedules,
        history=[],
    )
    logger.info("Created plan %s for %s with %d contracted classes", plan.id, plan.student_name, total)
    return plan


def edit_plan(plan: Plan, student_name: Optional[str] = None,
              schedules: Optional[Iterable[ClassSchedule]] = None,
              effective_from: Optional[DateLike] = None) -> Plan:
    """Return a copy with a new name and/or weekly schedule.

    The quota and the history are kept as they are. A new schedule applies
    from ``effective_from``, by default the day after the latest recorded
    class (or the plan start when nothing is recorded yet); unrecorded slots
    are only generated from that day on.
    """
    updated = plan.copy()
    if student_name is not None:
        if not student_name.strip():
            raise ValueError("Student name cannot be empty")
        updated.student_name = student_name.strip()
    if schedules is not None:
        schedules = list(schedules)
        if not schedules:
            raise ValueError("A plan needs at least one weekly schedule")
        updated.schedules = schedules
        if effective_from is None:
            recorded = [r.day for r in active_history(updated.history)]
            effective_from = max(recorded) + timedelta(days=1) if recorded else updated.start
        updated.schedules_since = to_iso(max(updated.start, parse_iso_date(effective_from)))
        logger.info("Plan %s follows %s from %s", updated.id, schedules, updated.schedules_since)
    return updated
