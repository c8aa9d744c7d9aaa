"""Shareable plain-text attendance report (suitable for pasting into a chat message)."""
from __future__ import annotations
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional, Tuple

from classsync.domain.AttendanceRecord import AttendanceRecord, ATTENDED, CANCELLED
from classsync.logic.reporting.metrics import PlanMetrics, calculate_plan_metrics
from classsync.logic.reporting.monthly import month_label
from classsync.logic.schedule.recurrence import active_history
from classsync.utilities.constants import DAY_NAMES, DISPLAY_DATE_FORMAT
from classsync.utilities.dates import weekday_of

__all__ = ["group_history_by_month", "build_text_report", "format_long_date"]


def format_long_date(d: date) -> str:
    return f"{d.strftime(DISPLAY_DATE_FORMAT)} ({DAY_NAMES[weekday_of(d)]})"


def group_history_by_month(history) -> List[Tuple[str, Dict[str, List[AttendanceRecord]]]]:
    """[(month label, {'attended': [...], 'cancelled': [...]}), ...] oldest month first, records by date."""
    groups: Dict[Tuple[int, int], Dict[str, List[AttendanceRecord]]] = defaultdict(
        lambda: {ATTENDED: [], CANCELLED: []}
    )
    for record in active_history(history):
        d = record.day
        groups[(d.year, d.month)][record.status].append(record)
    out = []
    for (year, month) in sorted(groups):
        data = groups[(year, month)]
        for status in (ATTENDED, CANCELLED):
            data[status].sort(key=lambda r: r.date)
        out.append((month_label(year, month), data))
    return out


def build_text_report(plan, metrics: Optional[PlanMetrics] = None) -> str:
    metrics = metrics or calculate_plan_metrics(plan)
    lines = [
        "*ATTENDANCE REPORT - ClassSync*",
        "---------------------------------------",
        f"*Student:* {plan.student_name}",
        f"*Start:* {format_long_date(plan.start)}",
        f"*Original end:* {format_long_date(metrics.original_end_date)}",
        f"*Projected end:* {format_long_date(metrics.current_end_date)}",
        "",
        "*SUMMARY:*",
        f"Attended: {metrics.total_attended}",
        f"Total cancellations: {metrics.total_cancelled}",
        f"Makeup classes granted: {metrics.total_cancelled_extending}",
        "",
        "*MONTHLY DETAIL:*",
    ]
    for label, data in group_history_by_month(plan.history):
        lines.append("")
        lines.append(f"*{label.upper()}*")
        if data[ATTENDED]:
            lines.append("Attended: " + ", ".join(r.day.strftime("%d/%m") for r in data[ATTENDED]))
        if data[CANCELLED]:
            lines.append("Cancelled:")
            for r in data[CANCELLED]:
                kind = "LOST CLASS" if r.extends_plan is False else "MAKEUP"
                reason = f": {r.reason}" if r.reason else ""
                lines.append(f"- {r.day.strftime('%d/%m')} [{kind}]{reason}")
    if metrics.is_extended:
        lines.append("")
        lines.append(
            f"_Note: rescheduled cancellations moved the original end "
            f"({metrics.original_end_date.strftime(DISPLAY_DATE_FORMAT)}) to "
            f"{format_long_date(metrics.current_end_date)}._"
        )
    lines.append("---------------------------------------")
    lines.append("_Generated automatically by ClassSync_")
    return "\n".join(lines)
