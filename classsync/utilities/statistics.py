"""
Statistics and overview module for ClassSync.
Summarises every student's plan: progress, next class, plans ending soon and
cancellation patterns.
"""
from collections import Counter
from datetime import date, timedelta
from typing import Dict, List, Optional
import json
from pathlib import Path
import logging

from classsync.domain.AttendanceRecord import CANCELLED
from classsync.infra.Plan_Repository import PlanRepository
from classsync.logic.reporting.metrics import calculate_plan_metrics
from classsync.logic.schedule.recurrence import active_history, generate_class_list
from classsync.utilities.constants import DAY_NAMES, DISPLAY_DATE_FORMAT
from classsync.utilities.dates import weekday_of

logger = logging.getLogger(__name__)


class RosterStats:
    """Generate an overview across all stored plans."""

    def __init__(self, repository: Optional[PlanRepository] = None, today: Optional[date] = None):
        self.repository = repository or PlanRepository()
        self.today = today or date.today()

    def _plans(self):
        return self.repository.list_plans()

    def student_summaries(self) -> List[Dict]:
        """One row per plan, ordered by student name."""
        rows = []
        for plan in self._plans():
            classes = generate_class_list(plan)
            metrics = calculate_plan_metrics(plan, today=self.today, class_list=classes)
            done = metrics.total_attended + metrics.total_cancelled
            total = metrics.total_classes
            rows.append({
                'id': plan.id,
                'student_name': plan.student_name,
                'schedule': ", ".join(str(s) for s in plan.schedules),
                'total_classes': total,
                'attended': metrics.total_attended,
                'cancelled': metrics.total_cancelled,
                'progress_pct': round(done / total * 100, 1) if total else 0.0,
                'next_class_date': metrics.next_class_date.isoformat() if metrics.next_class_date else None,
                'current_end_date': metrics.current_end_date.isoformat(),
                'is_extended': metrics.is_extended,
                'is_truncated': metrics.is_truncated,
            })
        rows.sort(key=lambda r: r['student_name'].lower())
        return rows

    def attendance_rate(self) -> float:
        """Attended share of all recorded outcomes (0-100)."""
        attended = cancelled = 0
        for plan in self._plans():
            for record in active_history(plan.history):
                if record.status == CANCELLED:
                    cancelled += 1
                else:
                    attended += 1
        total = attended + cancelled
        return round(attended / total * 100, 2) if total else 0.0

    def cancellations_by_weekday(self) -> Dict[str, int]:
        counter = Counter()
        for plan in self._plans():
            for record in active_history(plan.history):
                if record.status == CANCELLED:
                    counter[DAY_NAMES[weekday_of(record.day)]] += 1
        return dict(counter.most_common())

    def finishing_soon(self, days: int = 30) -> List[Dict]:
        """Plans whose projected end falls within the next `days` days (already finished ones excluded)."""
        limit = self.today + timedelta(days=days)
        result = []
        for plan in self._plans():
            metrics = calculate_plan_metrics(plan, today=self.today)
            if self.today <= metrics.current_end_date <= limit:
                result.append({
                    'id': plan.id,
                    'student_name': plan.student_name,
                    'current_end_date': metrics.current_end_date.isoformat(),
                    'days_left': (metrics.current_end_date - self.today).days,
                })
        result.sort(key=lambda r: (r['days_left'], r['student_name']))
        return result

    def agenda(self, day: Optional[date] = None) -> List[Dict]:
        """Students with a generated, not yet recorded class on the given day (default today)."""
        day = day or self.today
        result = []
        for plan in self._plans():
            if day in generate_class_list(plan) and plan.get_record(day) is None:
                schedule = plan.schedule_for(day)
                result.append({
                    'id': plan.id,
                    'student_name': plan.student_name,
                    'time': schedule.time if schedule else None,
                })
        result.sort(key=lambda r: (r['time'] or '', r['student_name']))
        return result

    def generate_report(self) -> Dict:
        """Generate the full overview report."""
        return {
            'students': self.student_summaries(),
            'attendance_rate': self.attendance_rate(),
            'cancellations_by_weekday': self.cancellations_by_weekday(),
            'finishing_soon': self.finishing_soon(),
            'agenda_today': self.agenda(),
            'generated_for': self.today.isoformat(),
        }

    def print_report(self):
        """Print a formatted overview report."""
        report = self.generate_report()

        print("\n" + "=" * 60)
        print("CLASSSYNC ROSTER REPORT")
        print("=" * 60)

        print(f"\nSTUDENTS ({len(report['students'])}):")
        for s in report['students']:
            nxt = s['next_class_date'] or '-'
            print(f"  {s['student_name']:25s} {s['attended']:3d}/{s['total_classes']:<3d} "
                  f"({s['progress_pct']:5.1f}%)  next: {nxt}  ends: {s['current_end_date']}")

        print(f"\nATTENDANCE RATE: {report['attendance_rate']:.1f}%")

        print("\nCANCELLATIONS BY WEEKDAY:")
        for day, count in report['cancellations_by_weekday'].items():
            print(f"  {day:10s}: {'#' * count} ({count})")

        print("\nFINISHING IN THE NEXT 30 DAYS:")
        for s in report['finishing_soon']:
            print(f"  - {s['student_name']} ({s['days_left']} days)")

        print(f"\nTODAY ({self.today.strftime(DISPLAY_DATE_FORMAT)}):")
        for s in report['agenda_today']:
            print(f"  {s['time'] or '--:--'}  {s['student_name']}")

        print("\n" + "=" * 60 + "\n")


# CLI interface
if __name__ == "__main__":
    stats = RosterStats()
    stats.print_report()

    report = stats.generate_report()
    output_file = Path("classsync_stats.json")
    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(report, f, indent=2, ensure_ascii=False)
    print(f"Detailed report saved to: {output_file}")
