"""Core scheduling and ledger logic (pure functions, no I/O).

Subpackages:
- schedule: recurrence matching, quota calculation, class list generation, plan factory
- history: attendance ledger actions
- reporting: plan metrics, monthly stats, text report
"""
from classsync.logic.schedule.recurrence import ClassList, is_scheduled_day, generate_class_list
from classsync.logic.schedule.quota import calculate_initial_class_count
from classsync.logic.reporting.metrics import PlanMetrics, calculate_plan_metrics
from classsync.logic.reporting.monthly import MonthlyStats, calculate_monthly_stats

__all__ = [
    "schedule", "history", "reporting",
    "ClassList", "is_scheduled_day", "generate_class_list", "calculate_initial_class_count",
    "PlanMetrics", "calculate_plan_metrics", "MonthlyStats", "calculate_monthly_stats",
]
