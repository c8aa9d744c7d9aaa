"""Event helper utilities.

Helpers for publishing plan and attendance events on the global bus.

Quick import:
    from classsync.events.event_helpers import (
        publish_plan_created, publish_attendance_recorded, publish_capacity_exceeded
    )
"""
from __future__ import annotations
from typing import Any, Optional
from .Event_Bus import (
    publish,
    PLAN_CREATED, PLAN_DELETED, ATTENDANCE_RECORDED, ATTENDANCE_RESET,
    SCHEDULE_CAPACITY_EXCEEDED,
)

__all__ = [
    'publish_plan_created', 'publish_plan_deleted', 'publish_attendance_recorded',
    'publish_attendance_reset', 'publish_capacity_exceeded',
]


def publish_plan_created(plan: Any):
    publish(PLAN_CREATED, {
        'plan_id': plan.id,
        'student_name': plan.student_name,
        'total_contracted_classes': plan.total_contracted_classes,
    })


def publish_plan_deleted(plan: Any):
    publish(PLAN_DELETED, {'plan_id': plan.id, 'student_name': plan.student_name})


def publish_attendance_recorded(plan_id: str, record: Any):
    """Publish an attendance.recorded event (attended or cancelled)."""
    publish(ATTENDANCE_RECORDED, {'plan_id': plan_id, 'record': record})


def publish_attendance_reset(plan_id: str, iso_date: str):
    publish(ATTENDANCE_RESET, {'plan_id': plan_id, 'date': iso_date})


def publish_capacity_exceeded(operation: str, cap: int, produced: int, target: Optional[int] = None):
    """Publish a schedule.capacity_exceeded event.

    Payload structure:
        {'operation': 'initial_count' | 'class_list', 'cap': int, 'produced': int, 'target': int | None}
    """
    publish(SCHEDULE_CAPACITY_EXCEEDED, {
        'operation': operation,
        'cap': cap,
        'produced': produced,
        'target': target,
    })
