import logging
from datetime import datetime
from threading import Lock
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, HTTPException

from classsync.infra.Plan_Repository import PlanRepository
from classsync.infra.cloud_sync import CloudSync, SyncConfig, SyncConfigStore, SyncError
from classsync.utilities.config import SYNC_AUTO_PUSH
from classsync.utilities.validators import SyncConfigInput

router = APIRouter(prefix="/api/sync", tags=["sync"])
logger = logging.getLogger(__name__)

_state_lock = Lock()
_state = {"status": "local", "last_sync": None}


def _mark(status: str):
    with _state_lock:
        _state["status"] = status
        if status == "synced":
            _state["last_sync"] = datetime.now().strftime("%H:%M:%S")


def _snapshot() -> dict:
    with _state_lock:
        return dict(_state)


def _cloud() -> Optional[CloudSync]:
    config = SyncConfigStore().load()
    return CloudSync(config) if config else None


async def push_all() -> int:
    """Push the whole local plan list; raises SyncError when the remote store fails."""
    cloud = _cloud()
    if cloud is None:
        raise HTTPException(status_code=400, detail="Cloud sync is not configured")
    plans = PlanRepository().list_plans()
    _mark("syncing")
    try:
        await cloud.push(plans)
    except SyncError:
        _mark("error")
        raise
    _mark("synced")
    return len(plans)


async def _background_push():
    try:
        await push_all()
    except SyncError as e:
        logger.error("Automatic push failed: %s", e)


def schedule_auto_push(background_tasks: BackgroundTasks) -> None:
    """Queue a push after a mutation when auto push is on and sync is configured."""
    if SYNC_AUTO_PUSH and SyncConfigStore().load() is not None:
        background_tasks.add_task(_background_push)


async def pull_all() -> Optional[int]:
    """Replace the local plan list with the remote one; None when the remote row does not exist."""
    cloud = _cloud()
    if cloud is None:
        raise HTTPException(status_code=400, detail="Cloud sync is not configured")
    _mark("syncing")
    try:
        plans = await cloud.pull()
    except SyncError:
        _mark("error")
        raise
    _mark("synced")
    if plans is None:
        return None
    PlanRepository().replace_all(plans)
    return len(plans)


@router.get("/config")
def get_sync_config():
    config = SyncConfigStore().load()
    state = _snapshot()
    return {
        "configured": config is not None,
        "url": config.url if config else None,
        "status": state["status"],
        "last_sync": state["last_sync"],
    }


@router.post("/config")
async def set_sync_config(payload: SyncConfigInput):
    config = SyncConfigStore().save(SyncConfig.normalized(payload.url, payload.key))
    logger.info("Cloud sync configured for %s", config.url)
    try:
        count = await pull_all()
    except SyncError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"configured": True, "url": config.url, "pulled": count}


@router.delete("/config")
def clear_sync_config():
    SyncConfigStore().clear()
    _mark("local")
    return {"configured": False}


@router.post("/push")
async def api_push():
    try:
        count = await push_all()
    except SyncError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"status": "synced", "count": count, "last_sync": _snapshot()["last_sync"]}


@router.post("/pull")
async def api_pull():
    try:
        count = await pull_all()
    except SyncError as e:
        raise HTTPException(status_code=502, detail=str(e))
    if count is None:
        return {"status": "empty", "count": 0}
    return {"status": "synced", "count": count, "last_sync": _snapshot()["last_sync"]}
