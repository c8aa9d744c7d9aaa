"""Web-facing observers for plan and attendance events.

Subscribes to the GLOBAL_EVENT_BUS and keeps an in-memory ring buffer of
recent activity that the API exposes at /api/events, so a client can poll
with since=<last_id_seen> and only receive newer entries.

Each entry gets an auto-increment id (cursor). The buffer is per-process and
capped at MAX_EVENTS.
"""
from __future__ import annotations
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, PLAN_CREATED, PLAN_DELETED, ATTENDANCE_RECORDED,
    ATTENDANCE_RESET, SCHEDULE_CAPACITY_EXCEEDED,
)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False

_OBSERVED = (PLAN_CREATED, PLAN_DELETED, ATTENDANCE_RECORDED, ATTENDANCE_RESET, SCHEDULE_CAPACITY_EXCEEDED)


def _record(event_name: str, payload: Any):
    global _next_id
    with _lock:
        evt: Dict[str, Any] = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        }
        if isinstance(payload, dict):
            for k in ('plan_id', 'student_name', 'date', 'operation', 'cap', 'produced', 'target'):
                if k in payload:
                    evt[k] = payload[k]
            record = payload.get('record')
            if record is not None and hasattr(record, 'to_dict'):
                evt.update(record.to_dict())
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in _OBSERVED:
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), or the whole buffer when since is None.

    next_cursor is the largest id seen so the client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events', 'MAX_EVENTS']
