"""
Dashboard service: overdue and upcoming lists for the notification panel.
Only non-recurring tasks are considered; recurring ones have no single deadline to miss.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Iterable

from pydantic import BaseModel, computed_field

from date_utils import compare_dates_only, end_of_day, now_local
from models import Task

logger = logging.getLogger("dashboard_service")

UPCOMING_WINDOW_HOURS = 48


class Dashboard(BaseModel):
    overdue: list[Task]
    upcoming: list[Task]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_notifications(self) -> bool:
        return bool(self.overdue or self.upcoming)


def _select_open_one_offs(tasks: Iterable[Task], due_check: Callable[[date], bool]) -> list[Task]:
    """Incomplete one-off tasks whose anchor passes due_check, sorted by deadline. Malformed tasks are skipped."""
    out: list[Task] = []
    for task in tasks:
        if task.is_recurring or task.completions.get(task.deadline):
            continue
        try:
            due = due_check(task.anchor_date)
        except ValueError as e:
            logger.warning("[dashboard_service] skipping task %s: %s", task.id, e)
            continue
        if due:
            out.append(task)
    return sorted(out, key=lambda t: t.deadline)


def overdue_tasks(tasks: Iterable[Task], now: datetime | None = None) -> list[Task]:
    """Incomplete one-off tasks whose deadline is before today, oldest first."""
    now = now or now_local()
    return _select_open_one_offs(tasks, lambda anchor: compare_dates_only(anchor, now) < 0)


def upcoming_tasks(
    tasks: Iterable[Task],
    now: datetime | None = None,
    window_hours: int = UPCOMING_WINDOW_HOURS,
) -> list[Task]:
    """Incomplete one-off tasks whose deadline day ends after now and within window_hours, soonest first."""
    if window_hours < 0:
        raise ValueError("window_hours must not be negative")
    now = now or now_local()
    limit = now + timedelta(hours=window_hours)
    return _select_open_one_offs(tasks, lambda anchor: now < end_of_day(anchor) <= limit)


def build_dashboard(
    tasks: Iterable[Task],
    now: datetime | None = None,
    window_hours: int = UPCOMING_WINDOW_HOURS,
) -> Dashboard:
    snapshot = list(tasks)
    now = now or now_local()
    return Dashboard(
        overdue=overdue_tasks(snapshot, now),
        upcoming=upcoming_tasks(snapshot, now, window_hours),
    )
