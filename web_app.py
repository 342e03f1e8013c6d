"""HTTP API for duecal: stateless calendar, dashboard and task-list views over a posted task snapshot."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from config import AppConfig, load as load_config
from dashboard_service import build_dashboard
from date_utils import add_months, now_local, parse_date, resolve_date_expression
from indicator_service import build_indicator_map, tasks_due_on
from models import Task, load_tasks
from task_service import filter_tasks

app = FastAPI(title="duecal", version="1.0")
logger = logging.getLogger("duecal.api")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """When config.debug is True, log API request method and path."""
    try:
        debug = load_config().debug
    except (OSError, ValueError) as e:
        # Unreadable config.json must not take down routes that never read it
        logger.warning("[API] could not load config for request logging: %s", e)
        debug = False
    if debug:
        qs = request.url.query
        logger.warning("[API] %s %s%s", request.method, request.url.path, "?" + qs if qs else "")
    response = await call_next(request)
    if debug:
        logger.warning("[API] %s %s -> %s", request.method, request.url.path, response.status_code)
    return response


# --- API schemas ---


class Snapshot(BaseModel):
    # Raw records: invalid tasks are skipped by load_tasks instead of failing the request
    tasks: list[dict[str, Any]] = Field(default_factory=list)


class IndicatorRequest(Snapshot):
    horizon: str | None = None


class DayRequest(Snapshot):
    date: str


class DashboardRequest(Snapshot):
    window_hours: int | None = Field(None, ge=0)


class FilterRequest(Snapshot):
    status: str = "all"
    priority: str = "all"


def _tasks_out(tasks: list[Task]) -> list[dict[str, Any]]:
    return [t.model_dump(mode="json") for t in tasks]


# --- API routes ---


@app.get("/api/config", response_model=AppConfig)
def get_config() -> AppConfig:
    return load_config()


@app.put("/api/config")
def put_config(body: AppConfig) -> dict[str, str]:
    body.save()
    return {"status": "saved"}


@app.post("/api/calendar/indicators")
def api_indicators(body: IndicatorRequest) -> dict[str, Any]:
    c = load_config()
    today = now_local(c.user_timezone).date()
    try:
        horizon = parse_date(body.horizon) if body.horizon else add_months(today, c.horizon_months)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if horizon < today:
        raise HTTPException(status_code=400, detail="horizon must not be before today")
    indicators = build_indicator_map(load_tasks(body.tasks), horizon=horizon)
    return {"horizon": horizon.isoformat(), "indicators": indicators}


@app.post("/api/calendar/day")
def api_day(body: DayRequest) -> dict[str, Any]:
    c = load_config()
    resolved = resolve_date_expression(body.date, c.user_timezone)
    if resolved is None:
        raise HTTPException(status_code=400, detail=f"Unrecognized date: {body.date}")
    try:
        tasks = tasks_due_on(load_tasks(body.tasks), resolved)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"date": resolved, "tasks": _tasks_out(tasks)}


@app.post("/api/dashboard")
def api_dashboard(body: DashboardRequest) -> dict[str, Any]:
    c = load_config()
    window = body.window_hours if body.window_hours is not None else c.upcoming_window_hours
    dashboard = build_dashboard(load_tasks(body.tasks), now=now_local(c.user_timezone), window_hours=window)
    return dashboard.model_dump(mode="json")


@app.post("/api/tasks/filter")
def api_filter_tasks(body: FilterRequest) -> list[dict[str, Any]]:
    c = load_config()
    try:
        tasks = filter_tasks(
            load_tasks(body.tasks),
            status=body.status,
            priority=body.priority,
            today=now_local(c.user_timezone).date(),
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _tasks_out(tasks)
