"""
Indicator service: folds every task's projected occurrences into a date-keyed map of
priority indicators for the calendar, and answers "which tasks are due on day X".
Pure read-side views; recompute from the task snapshot whenever it changes.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Iterable

from date_utils import date_key, parse_date, today_local
from models import Indicator, Priority, Task
from recurrence import default_horizon, is_occurrence, project

logger = logging.getLogger("indicator_service")


def classify_indicator(task: Task) -> Indicator:
    important = Priority.IMPORTANT in task.priority
    urgent = Priority.URGENT in task.priority
    if important and urgent:
        return Indicator.COMBINED
    if important:
        return Indicator.IMPORTANT
    if urgent:
        return Indicator.URGENT
    return Indicator.NONE


def build_indicator_map(
    tasks: Iterable[Task],
    horizon: date | str | None = None,
    today: date | None = None,
) -> dict[str, list[Indicator]]:
    """
    Map YYYY-MM-DD -> indicators of the tasks due that day, in task order.
    Each task is projected from its anchor up to horizon (default: one year from today);
    completed occurrences are left out. A malformed task is logged and skipped.
    """
    limit = parse_date(horizon) if horizon is not None else default_horizon(today or today_local())
    indicators: dict[str, list[Indicator]] = defaultdict(list)
    for task in tasks:
        try:
            keys = _open_occurrence_keys(task, limit)
        except ValueError as e:
            logger.warning("[indicator_service] skipping task %s: %s", task.id, e)
            continue
        indicator = classify_indicator(task)
        for key in keys:
            indicators[key].append(indicator)
    logger.debug("[indicator_service] built indicators for %d dates up to %s", len(indicators), limit)
    return dict(indicators)


def _open_occurrence_keys(task: Task, limit: date) -> list[str]:
    anchor = task.anchor_date
    if anchor > limit:
        return []
    keys = [date_key(d) for d in project(task, anchor, limit)]
    return [k for k in keys if not task.completions.get(k)]


def tasks_due_on(tasks: Iterable[Task], day: date | str) -> list[Task]:
    """Tasks with an occurrence on day, in input order. Completed occurrences are included."""
    target = parse_date(day)
    out: list[Task] = []
    for task in tasks:
        try:
            due = is_occurrence(task, target)
        except ValueError as e:
            logger.warning("[indicator_service] skipping task %s: %s", task.id, e)
            continue
        if due:
            out.append(task)
    return out
