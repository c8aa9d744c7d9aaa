"""Monthly attendance breakdown."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from classsync.domain.AttendanceRecord import AttendanceRecord, ATTENDED, CANCELLED
from classsync.utilities.constants import MONTH_NAMES

__all__ = ["MonthlyStats", "month_label", "calculate_monthly_stats"]


@dataclass
class MonthlyStats:
    month: str
    month_year: str
    attended: int = 0
    cancelled: int = 0

    def to_dict(self):
        return {
            "month": self.month,
            "month_year": self.month_year,
            "attended": self.attended,
            "cancelled": self.cancelled,
        }


def month_label(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {year}"


def calculate_monthly_stats(history: Iterable[AttendanceRecord]) -> List[MonthlyStats]:
    """Count attended/cancelled records per calendar month, oldest month first.

    Only months holding at least one attended or cancelled record appear.
    """
    buckets: Dict[Tuple[int, int], MonthlyStats] = {}
    for record in history:
        if record.status not in (ATTENDED, CANCELLED):
            continue
        day = record.day
        key = (day.year, day.month)
        if key not in buckets:
            buckets[key] = MonthlyStats(month=f"{day.year:04d}-{day.month:02d}",
                                        month_year=month_label(day.year, day.month))
        if record.status == ATTENDED:
            buckets[key].attended += 1
        else:
            buckets[key].cancelled += 1
    return [buckets[k] for k in sorted(buckets)]
