"""
Export and Import functionality for student plans and their attendance history.
"""
import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

from classsync.domain.Plan import Plan
from classsync.infra.Plan_Repository import PlanRepository

logger = logging.getLogger(__name__)

HISTORY_CSV_FIELDS = ['plan_id', 'student_name', 'date', 'time', 'status', 'extends_plan', 'reason', 'note']


def _timestamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


class DataExporter:
    """Export ClassSync data as JSON or CSV."""

    def __init__(self, repository: Optional[PlanRepository] = None):
        self.repository = repository or PlanRepository()

    def export_plans(self, output_path: Path = None) -> Optional[Path]:
        """Export all plans (with history) to a JSON file in the stored format."""
        output_path = Path(output_path or f"plans_export_{_timestamp()}.json")
        plans = self.repository.list_plans()
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump([p.to_dict() for p in plans], f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Export failed: {e}")
            return None
        logger.info(f"Exported {len(plans)} plans to {output_path}")
        return output_path

    def export_history_csv(self, output_path: Path = None) -> Optional[Path]:
        """Export every attendance record, one row per plan and date, for spreadsheet use."""
        output_path = Path(output_path or f"attendance_export_{_timestamp()}.csv")
        rows = 0
        try:
            with open(output_path, 'w', newline='', encoding='utf-8') as csvfile:
                writer = csv.DictWriter(csvfile, fieldnames=HISTORY_CSV_FIELDS)
                writer.writeheader()
                for plan in self.repository.list_plans():
                    for record in sorted(plan.history, key=lambda r: r.date):
                        if record.is_pending:
                            continue
                        writer.writerow({
                            'plan_id': plan.id,
                            'student_name': plan.student_name,
                            'date': record.date,
                            'time': record.time,
                            'status': record.status,
                            'extends_plan': '' if record.extends_plan is None else str(record.extends_plan).lower(),
                            'reason': record.reason or '',
                            'note': record.note or '',
                        })
                        rows += 1
        except OSError as e:
            logger.error(f"CSV export failed: {e}")
            return None
        logger.info(f"Exported {rows} attendance records to CSV: {output_path}")
        return output_path


class DataImporter:
    """Import ClassSync plans from a JSON export."""

    def __init__(self, repository: Optional[PlanRepository] = None):
        self.repository = repository or PlanRepository()

    def import_plans(self, input_path: Path, merge: bool = False) -> bool:
        """
        Import plans from a JSON file.

        Args:
            input_path: Path to a JSON list of plans
            merge: If True, add plans whose id is not stored yet; if False, replace the whole list
        """
        try:
            with open(input_path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
            new_plans = [Plan.from_dict(entry) for entry in raw]
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Import failed: {e}")
            return False

        if merge:
            existing = self.repository.list_plans()
            known = {p.id for p in existing}
            final_plans = existing + [p for p in new_plans if p.id not in known]
            logger.info(f"Merged {len(final_plans) - len(existing)} new plans with existing data")
        else:
            final_plans = new_plans
            logger.info(f"Importing {len(new_plans)} plans (replace mode)")

        self.repository.replace_all(final_plans)
        return True


# CLI interface
if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description='Export/Import ClassSync data')
    parser.add_argument('action', choices=['export', 'import'], help='Action to perform')
    parser.add_argument('--format', choices=['json', 'csv'], default='json', help='Export format')
    parser.add_argument('--file', help='Input/output file path')
    parser.add_argument('--merge', action='store_true', help='Merge with existing plans on import')

    args = parser.parse_args()

    if args.action == 'export':
        exporter = DataExporter()
        target = Path(args.file) if args.file else None
        if args.format == 'csv':
            result = exporter.export_history_csv(target)
        else:
            result = exporter.export_plans(target)
        print(f"Exported to: {result}")

    elif args.action == 'import':
        if not args.file:
            parser.error("--file is required for import")
        if DataImporter().import_plans(Path(args.file), merge=args.merge):
            print(f"Successfully imported from: {args.file}")
        else:
            print("Import failed")
            raise SystemExit(1)
