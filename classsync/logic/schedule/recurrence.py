"""Weekly recurrence matching and class list generation.

The class list of a plan is its recorded history dates plus enough future
recurrence slots to reach ``total_contracted_classes`` + one slot per
extending cancellation.
"""
from __future__ import annotations
import logging
from datetime import date, timedelta
from typing import Any, Iterable, List, Optional

from classsync.domain.AttendanceRecord import AttendanceRecord
from classsync.utilities.constants import CLASS_LIST_CAP
from classsync.utilities.dates import weekday_of

logger = logging.getLogger(__name__)

__all__ = ["ClassList", "is_scheduled_day", "active_history", "generate_class_list"]

# Any non-empty weekly schedule yields at least one slot per 7 days
DAYS_PER_SLOT_BOUND = 7


class ClassList(list):
    """Ascending list of class dates.

    ``truncated`` is True when generation stopped at a cap before reaching
    ``target``; the list is then incomplete.
    """

    def __init__(self, dates: Iterable[date] = (), target: int = 0, truncated: bool = False):
        super().__init__(dates)
        self.target = target
        self.truncated = truncated


def _day_of_week(schedule: Any) -> int:
    if isinstance(schedule, dict):
        return int(schedule.get("dayOfWeek", schedule.get("day_of_week", -1)))
    return int(schedule.day_of_week)


def is_scheduled_day(day: date, schedules: Iterable[Any]) -> bool:
    """True iff the date falls on the weekday of at least one schedule entry."""
    weekday = weekday_of(day)
    return any(_day_of_week(s) == weekday for s in schedules)


def active_history(history: Iterable[AttendanceRecord]) -> List[AttendanceRecord]:
    """History without pending records (a pending record is the same as no record)."""
    return [r for r in history if not r.is_pending]


def generate_class_list(plan, *, cap: Optional[int] = None) -> ClassList:
    """Build the full ascending list of class dates for a plan.

    History dates are kept verbatim, even when they no longer fall on a
    configured weekday. The remaining slots are the unrecorded recurrence
    days of the *current* schedules, walked from ``plan.schedule_start``
    (the plan start, or the day a schedule edit took effect), so a slot left
    unrecorded before a later record stays in the list.
    """
    limit = CLASS_LIST_CAP if cap is None else cap
    history = active_history(plan.history)
    history_dates = sorted({r.day for r in history})
    recorded = set(history_dates)

    extending = sum(1 for r in history if r.is_extending_cancellation)
    target = plan.total_contracted_classes + extending

    result: List[date] = list(history_dates)
    max_walk_days = (limit + 1) * DAYS_PER_SLOT_BOUND
    current = plan.schedule_start
    walked = 0

    while len(result) < target:
        if current not in recorded and is_scheduled_day(current, plan.schedules):
            result.append(current)
        current += timedelta(days=1)
        walked += 1
        if len(result) > limit or walked > max_walk_days:
            break

    truncated = len(result) < target
    if truncated:
        logger.warning(
            "Class list for plan %s stopped at %d of %d dates (cap %d); schedules=%s",
            plan.id, len(result), target, limit, plan.schedules,
        )
    result.sort()
    return ClassList(result, target=target, truncated=truncated)
