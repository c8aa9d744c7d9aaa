from fastapi import FastAPI, Query
from typing import Optional
import logging

from classsync.api.routes import plans, sync
from classsync.events.web_observers import start as start_event_observers, get_events as get_web_events
from classsync.utilities.statistics import RosterStats

# Logging
logger = logging.getLogger("classsync_app")

# Initialize FastAPI app
app = FastAPI(title="ClassSync Lesson Plans API")

# Include routers
app.include_router(plans.router)
app.include_router(sync.router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for the activity feed when the app starts."""
    start_event_observers()
    logger.info("Web observers for plan events started")


@app.get('/api/events')
def api_events(since: Optional[int] = Query(default=None, ge=0)):
    """Recent plan/attendance activity, newer than `since` when given."""
    return get_web_events(since)


@app.get('/api/stats')
def api_stats():
    return RosterStats().generate_report()


@app.get('/api/health')
def health():
    return {"status": "ok"}
