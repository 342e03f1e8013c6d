"""
Task service layer: list filtering and per-occurrence edits over task snapshots.
Pure functions only; edits return new Task copies and never touch storage.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from date_utils import compare_dates_only, date_key, parse_date, today_local
from indicator_service import classify_indicator
from models import Indicator, Task

logger = logging.getLogger("task_service")

STATUS_FILTERS = frozenset({"all", "active", "completed"})
PRIORITY_FILTERS = frozenset({"all", "important", "urgent", "combined", "none"})


def relevant_date(task: Task, today: date) -> str:
    """Date whose completion decides a task's list status: today for recurring tasks, else its deadline."""
    return date_key(today) if task.is_recurring else task.deadline


def filter_tasks(
    tasks: Iterable[Task],
    status: str = "all",
    priority: str = "all",
    today: date | None = None,
) -> list[Task]:
    """
    Sort tasks by deadline, then filter by completion status and priority combination.
    status: all | active | completed. priority: all | important | urgent | combined | none,
    where important/urgent mean that flag alone.
    """
    if status not in STATUS_FILTERS:
        raise ValueError(f"status must be one of: {', '.join(sorted(STATUS_FILTERS))}")
    if priority not in PRIORITY_FILTERS:
        raise ValueError(f"priority must be one of: {', '.join(sorted(PRIORITY_FILTERS))}")
    today = today or today_local()
    out = sorted(tasks, key=lambda t: t.deadline)
    if status != "all":
        want_done = status == "completed"
        out = [t for t in out if bool(t.completions.get(relevant_date(t, today))) == want_done]
    if priority != "all":
        wanted = Indicator(priority)
        out = [t for t in out if classify_indicator(t) == wanted]
    return out


def toggle_completion(task: Task, day: date | str) -> Task:
    """Flip the completion of the occurrence on day. Un-completing removes the key."""
    key = date_key(day)
    completions = dict(task.completions)
    if completions.get(key):
        completions.pop(key)
    else:
        completions[key] = True
    logger.info("[task_service] toggle_completion %s %s -> %s", task.id, key, bool(completions.get(key)))
    return task.model_copy(update={"completions": completions})


def set_note(task: Task, day: date | str, text: str | None) -> Task:
    """Store the note for one occurrence; blank text clears it."""
    key = date_key(day)
    notes = dict(task.notes)
    cleaned = (text or "").strip()
    if cleaned:
        notes[key] = cleaned
    else:
        notes.pop(key, None)
    return task.model_copy(update={"notes": notes})


def validate_deadline(deadline: date | str, today: date | None = None) -> str:
    """Return the canonical deadline key; raise ValueError if it is before today."""
    day = parse_date(deadline)
    today = today or today_local()
    if compare_dates_only(day, today) < 0:
        raise ValueError("Deadline cannot be in the past.")
    return date_key(day)
