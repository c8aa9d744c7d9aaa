"""Contract quota: how many weekly slots a plan owes, computed once at creation."""
from __future__ import annotations
import logging
from datetime import date, timedelta
from typing import Any, Iterable

from classsync.logic.schedule.recurrence import is_scheduled_day
from classsync.utilities.constants import INITIAL_COUNT_CAP
from classsync.utilities.dates import DateLike, add_months, parse_iso_date

logger = logging.getLogger(__name__)

__all__ = ["theoretical_end_date", "calculate_initial_class_count", "is_count_capped"]


def theoretical_end_date(start: DateLike, duration_months: int) -> date:
    """Nominal contract end: start + duration in calendar months (end day inclusive)."""
    return add_months(parse_iso_date(start), int(duration_months))


def calculate_initial_class_count(start: DateLike, duration_months: int, schedules: Iterable[Any]) -> int:
    """Count scheduled days from start to start + duration_months, both ends inclusive.

    The walk stops as soon as the count exceeds INITIAL_COUNT_CAP, so a capped
    result is INITIAL_COUNT_CAP + 1 (see is_count_capped).
    """
    schedules = list(schedules)
    current = parse_iso_date(start)
    end = theoretical_end_date(current, duration_months)
    count = 0
    while current <= end:
        if is_scheduled_day(current, schedules):
            count += 1
        current += timedelta(days=1)
        if count > INITIAL_COUNT_CAP:
            logger.warning(
                "Initial class count hit the cap of %d between %s and %s", INITIAL_COUNT_CAP, start, end
            )
            break
    return count


def is_count_capped(count: int) -> bool:
    return count > INITIAL_COUNT_CAP
