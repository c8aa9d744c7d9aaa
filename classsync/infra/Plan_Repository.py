"""Plan repository: JSON file persistence of the whole plan collection."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import Lock
from typing import Callable, List, Optional, Union

from classsync.domain.Plan import Plan
from classsync.infra import paths

logger = logging.getLogger(__name__)

_write_lock = Lock()


class PlanNotFoundError(KeyError):
    """Raised when no plan with the requested id exists."""


class PlanRepository:
    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else paths.PLANS_FILE

    def _load_raw(self) -> list:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f) or []
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in plans file %s: %s", self.path, e)
            return []
        if not isinstance(data, list):
            logger.error("Plans file %s does not hold a list; ignoring it", self.path)
            return []
        return data

    def _atomic_write(self, raw: list) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".plans_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(raw, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def list_plans(self) -> List[Plan]:
        plans = []
        for entry in self._load_raw():
            try:
                plans.append(Plan.from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                logger.error("Skipping malformed plan entry %r: %s", entry.get("id") if isinstance(entry, dict) else entry, e)
        return plans

    def get_plan(self, plan_id: str) -> Plan:
        for plan in self.list_plans():
            if plan.id == plan_id:
                return plan
        raise PlanNotFoundError(plan_id)

    def replace_all(self, plans: List[Plan]) -> None:
        """Whole-list replacement (used by import and cloud pull)."""
        with _write_lock:
            self._atomic_write([p.to_dict() for p in plans])
        logger.info("Stored %d plans in %s", len(plans), self.path)

    def add_plan(self, plan: Plan) -> Plan:
        with _write_lock:
            raw = self._load_raw()
            if any(isinstance(e, dict) and e.get("id") == plan.id for e in raw):
                raise ValueError(f"Plan id already exists: {plan.id}")
            raw.append(plan.to_dict())
            self._atomic_write(raw)
        return plan

    def save_plan(self, plan: Plan) -> Plan:
        """Replace the stored plan with the same id."""
        with _write_lock:
            raw = self._load_raw()
            for idx, entry in enumerate(raw):
                if isinstance(entry, dict) and entry.get("id") == plan.id:
                    raw[idx] = plan.to_dict()
                    break
            else:
                raise PlanNotFoundError(plan.id)
            self._atomic_write(raw)
        return plan

    def update_plan(self, plan_id: str, change: Callable[[Plan], Plan]) -> Plan:
        """Load a plan, apply `change` to it and store the result, all under the write lock."""
        with _write_lock:
            raw = self._load_raw()
            for idx, entry in enumerate(raw):
                if isinstance(entry, dict) and entry.get("id") == plan_id:
                    updated = change(Plan.from_dict(entry))
                    raw[idx] = updated.to_dict()
                    break
            else:
                raise PlanNotFoundError(plan_id)
            self._atomic_write(raw)
        return updated

    def delete_plan(self, plan_id: str) -> Plan:
        with _write_lock:
            raw = self._load_raw()
            for idx, entry in enumerate(raw):
                if isinstance(entry, dict) and entry.get("id") == plan_id:
                    removed = Plan.from_dict(raw.pop(idx))
                    break
            else:
                raise PlanNotFoundError(plan_id)
            self._atomic_write(raw)
        logger.info("Deleted plan %s (%s)", plan_id, removed.student_name)
        return removed
