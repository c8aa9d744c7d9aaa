"""Plan metrics: nominal vs projected end date, totals and the next pending class."""
from __future__ import annotations
from dataclasses import dataclass, asdict
from datetime import date
from typing import Optional

from classsync.domain.AttendanceRecord import ATTENDED, CANCELLED
from classsync.logic.schedule.quota import theoretical_end_date
from classsync.logic.schedule.recurrence import ClassList, active_history, generate_class_list

__all__ = ["PlanMetrics", "calculate_plan_metrics"]


@dataclass(frozen=True)
class PlanMetrics:
    original_end_date: date
    current_end_date: date
    total_planned_classes: int
    total_cancelled: int
    total_cancelled_extending: int
    total_attended: int
    next_class_date: Optional[date]
    is_truncated: bool = False

    @property
    def total_classes(self) -> int:
        """Contracted classes plus one makeup per extending cancellation."""
        return self.total_planned_classes + self.total_cancelled_extending

    @property
    def is_extended(self) -> bool:
        return self.current_end_date > self.original_end_date

    def to_dict(self):
        d = asdict(self)
        for k in ("original_end_date", "current_end_date", "next_class_date"):
            d[k] = d[k].isoformat() if d[k] else None
        d["total_classes"] = self.total_classes
        d["is_extended"] = self.is_extended
        return d


def calculate_plan_metrics(plan, today: Optional[date] = None,
                           class_list: Optional[ClassList] = None) -> PlanMetrics:
    """Derive the summary figures of a plan.

    current_end_date is the last generated class date; it moves one slot later
    per extending cancellation and ignores forfeited ones. next_class_date is
    the first generated date from today on that has no attended/cancelled record.
    """
    today = today or date.today()
    classes = class_list if class_list is not None else generate_class_list(plan)
    original_end = theoretical_end_date(plan.start, plan.duration_months)
    current_end = classes[-1] if classes else original_end

    history = active_history(plan.history)
    recorded = {r.day for r in history}
    next_class = next((d for d in classes if d >= today and d not in recorded), None)

    return PlanMetrics(
        original_end_date=original_end,
        current_end_date=current_end,
        total_planned_classes=plan.total_contracted_classes,
        total_cancelled=sum(1 for r in history if r.status == CANCELLED),
        total_cancelled_extending=sum(1 for r in history if r.is_extending_cancellation),
        total_attended=sum(1 for r in history if r.status == ATTENDED),
        next_class_date=next_class,
        is_truncated=getattr(classes, "truncated", False),
    )
