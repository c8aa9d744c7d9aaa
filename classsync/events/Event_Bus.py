"""In-process publish/subscribe for ClassSync plan, attendance and capacity events.

Events published by the plan factory and the API routes:
  plan.created -> payload {"plan_id": str, "student_name": str, "total_contracted_classes": int}
  plan.deleted -> payload {"plan_id": str, "student_name": str}
  attendance.recorded -> payload {"plan_id": str, "record": AttendanceRecord}
  attendance.reset -> payload {"plan_id": str, "date": str}
  schedule.capacity_exceeded -> payload {"operation": str, "cap": int, "produced": int, "target": int | None}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
PLAN_CREATED = "plan.created"
PLAN_DELETED = "plan.deleted"
ATTENDANCE_RECORDED = "attendance.recorded"
ATTENDANCE_RESET = "attendance.reset"
SCHEDULE_CAPACITY_EXCEEDED = "schedule.capacity_exceeded"


class EventBus:
    """Delivers plan and attendance events to subscribers in publish order.

    Delivery is synchronous on the publishing thread. A subscriber that raises
    is logged and skipped; the request that published still completes.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        if callback not in self._subscribers[event_name]:
            self._subscribers[event_name].append(callback)

    def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        try:
            self._subscribers[event_name].remove(callback)
        except (ValueError, KeyError):
            pass

    def publish(self, event_name: str, payload: Any = None):
        for cb in list(self._subscribers.get(event_name, [])):
            try:
                cb(event_name, payload)
            except Exception:
                logger.exception("Error delivering %s to %r", event_name, cb)


GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> None:
    """Publish an event on the global bus."""
    GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
    'EventBus', 'GLOBAL_EVENT_BUS', 'publish',
    'PLAN_CREATED', 'PLAN_DELETED', 'ATTENDANCE_RECORDED', 'ATTENDANCE_RESET',
    'SCHEDULE_CAPACITY_EXCEEDED',
]
