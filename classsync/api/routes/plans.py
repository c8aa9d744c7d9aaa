import logging
from datetime import date as _date
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, HTTPException, Query, Response
from fastapi.responses import PlainTextResponse

from classsync.api.routes.sync import schedule_auto_push
from classsync.domain.Plan import Plan
from classsync.events.event_helpers import (
    publish_attendance_recorded,
    publish_attendance_reset,
    publish_capacity_exceeded,
    publish_plan_created,
    publish_plan_deleted,
)
from classsync.infra.Plan_Repository import PlanNotFoundError, PlanRepository
from classsync.infra.pdf_utils import generate_pdf_for_plan
from classsync.logic.history.ledger import cancel_class, mark_attended, reset_class
from classsync.logic.reporting.metrics import calculate_plan_metrics
from classsync.logic.reporting.monthly import calculate_monthly_stats
from classsync.logic.reporting.report_text import build_text_report
from classsync.logic.schedule.plans import edit_plan, new_plan
from classsync.logic.schedule.recurrence import generate_class_list
from classsync.utilities.constants import CLASS_LIST_CAP
from classsync.utilities.dates import to_iso
from classsync.utilities.validators import (
    AttendanceInput,
    CancellationInput,
    PlanCreateInput,
    PlanUpdateInput,
)

router = APIRouter(prefix="/api/plans", tags=["plans"])
logger = logging.getLogger(__name__)


def _load(plan_id: str) -> Plan:
    try:
        return PlanRepository().get_plan(plan_id)
    except PlanNotFoundError:
        raise HTTPException(status_code=404, detail=f"Plan not found: {plan_id}")


def _update(plan_id: str, change) -> Plan:
    try:
        return PlanRepository().update_plan(plan_id, change)
    except PlanNotFoundError:
        raise HTTPException(status_code=404, detail=f"Plan not found: {plan_id}")


def _class_rows(plan: Plan, classes, today: _date):
    rows = []
    for d in classes:
        record = plan.get_record(d)
        schedule = plan.schedule_for(d)
        rows.append({
            "date": d.isoformat(),
            "time": record.time if record else (schedule.time if schedule else None),
            "status": record.status if record else "pending",
            "extends_plan": record.extends_plan if record else None,
            "reason": record.reason if record else None,
            "is_future": d > today,
        })
    return rows


def _plan_summary(plan: Plan, today: Optional[_date] = None):
    classes = generate_class_list(plan)
    if classes.truncated:
        publish_capacity_exceeded("class_list", CLASS_LIST_CAP, len(classes), classes.target)
    metrics = calculate_plan_metrics(plan, today=today, class_list=classes)
    return classes, metrics


def _plan_detail(plan: Plan):
    today = _date.today()
    classes, metrics = _plan_summary(plan, today)
    return {
        "plan": plan.to_dict(),
        "metrics": metrics.to_dict(),
        "classes": _class_rows(plan, classes, today),
        "monthly_stats": [m.to_dict() for m in calculate_monthly_stats(plan.history)],
    }


@router.get("")
def list_plans():
    plans = PlanRepository().list_plans()
    items = []
    for plan in plans:
        _, metrics = _plan_summary(plan)
        items.append({"plan": plan.to_dict(), "metrics": metrics.to_dict()})
    return {"count": len(items), "plans": items}


@router.post("", status_code=201)
def create_plan(payload: PlanCreateInput, background_tasks: BackgroundTasks):
    plan = new_plan(
        payload.student_name,
        payload.start_date,
        payload.duration_months,
        [s.to_domain() for s in payload.schedules],
    )
    PlanRepository().add_plan(plan)
    publish_plan_created(plan)
    schedule_auto_push(background_tasks)
    return _plan_detail(plan)


@router.get("/{plan_id}")
def get_plan(plan_id: str):
    return _plan_detail(_load(plan_id))


@router.put("/{plan_id}")
def update_plan(plan_id: str, payload: PlanUpdateInput, background_tasks: BackgroundTasks):
    schedules = [s.to_domain() for s in payload.schedules] if payload.schedules is not None else None
    updated = _update(plan_id, lambda plan: edit_plan(
        plan, student_name=payload.student_name, schedules=schedules, effective_from=payload.effective_from,
    ))
    logger.info("Updated settings of plan %s", plan_id)
    schedule_auto_push(background_tasks)
    return _plan_detail(updated)


@router.delete("/{plan_id}")
def delete_plan(plan_id: str, background_tasks: BackgroundTasks):
    try:
        removed = PlanRepository().delete_plan(plan_id)
    except PlanNotFoundError:
        raise HTTPException(status_code=404, detail=f"Plan not found: {plan_id}")
    publish_plan_deleted(removed)
    schedule_auto_push(background_tasks)
    return {"status": "deleted", "id": plan_id}


@router.get("/{plan_id}/classes")
def plan_classes(plan_id: str, view: str = Query(default="pending", pattern="^(pending|all)$")):
    """Generated class dates with their status; view=pending keeps only unrecorded dates."""
    plan = _load(plan_id)
    today = _date.today()
    classes, _ = _plan_summary(plan, today)
    rows = _class_rows(plan, classes, today)
    if view == "pending":
        rows = [r for r in rows if r["status"] == "pending"]
    return {"view": view, "count": len(rows), "truncated": classes.truncated, "classes": rows}


@router.post("/{plan_id}/attendance")
def record_attendance(plan_id: str, payload: AttendanceInput, background_tasks: BackgroundTasks):
    plan = _update(plan_id, lambda p: mark_attended(p, payload.date, time=payload.time, note=payload.note))
    publish_attendance_recorded(plan_id, plan.get_record(payload.date))
    schedule_auto_push(background_tasks)
    return _plan_detail(plan)


@router.post("/{plan_id}/cancellation")
def record_cancellation(plan_id: str, payload: CancellationInput, background_tasks: BackgroundTasks):
    plan = _update(plan_id, lambda p: cancel_class(
        p, payload.date, extends_plan=payload.extends_plan, reason=payload.reason, time=payload.time,
    ))
    publish_attendance_recorded(plan_id, plan.get_record(payload.date))
    schedule_auto_push(background_tasks)
    return _plan_detail(plan)


@router.delete("/{plan_id}/attendance/{day}")
def reset_attendance(plan_id: str, day: _date, background_tasks: BackgroundTasks):
    plan = _update(plan_id, lambda p: reset_class(p, day))
    publish_attendance_reset(plan_id, to_iso(day))
    schedule_auto_push(background_tasks)
    return _plan_detail(plan)


@router.get("/{plan_id}/report", response_class=PlainTextResponse)
def plan_text_report(plan_id: str):
    return build_text_report(_load(plan_id))


@router.get("/{plan_id}/report.pdf")
def plan_pdf_report(plan_id: str):
    plan = _load(plan_id)
    pdf_bytes = generate_pdf_for_plan(plan)
    filename = f"report_{plan.student_name.replace(' ', '_')}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
