"""
Recurrence evaluation and projection.
is_occurrence answers a single date; project walks a bounded range using each rule's stride.
"""
from __future__ import annotations

from datetime import date
from typing import Iterator

from date_utils import add_days, add_months, days_in_month, parse_date, weekday_index
from models import RepetitionType, Task


def is_occurrence(task: Task, candidate: date | str) -> bool:
    """True if task is due on candidate per its recurrence rule. Dates before the anchor never are."""
    day = parse_date(candidate)
    anchor = task.anchor_date
    if day < anchor:
        return False
    rule = task.repetition.type
    if rule == RepetitionType.NONE:
        return day == anchor
    if rule == RepetitionType.DAILY:
        return True
    if rule == RepetitionType.WEEKLY:
        return (day - anchor).days % 7 == 0
    if rule == RepetitionType.MONTHLY:
        # 31st-anchored tasks land on the last day of shorter months
        return day.day == min(anchor.day, days_in_month(day.year, day.month))
    if rule == RepetitionType.CUSTOM:
        return weekday_index(day) in (task.repetition.days or frozenset())
    return False


def default_horizon(today: date) -> date:
    """Projection limit for the calendar: one year from today."""
    return add_months(today, 12)


def project(task: Task, range_start: date | str, range_end: date | str) -> Iterator[date]:
    """
    Yield occurrence dates of task within [max(anchor, range_start), range_end], ascending.
    Raises ValueError if range_end is before range_start. Every loop stops once the
    advancing date passes range_end, whatever the rule.
    """
    start = parse_date(range_start)
    end = parse_date(range_end)
    if end < start:
        raise ValueError(f"range_end {end} is before range_start {start}")
    return _project(task, start, end)


def _project(task: Task, start: date, end: date) -> Iterator[date]:
    anchor = task.anchor_date
    current = max(anchor, start)
    rule = task.repetition.type

    if rule == RepetitionType.NONE:
        if start <= anchor <= end:
            yield anchor
        return

    if rule == RepetitionType.DAILY:
        while current <= end:
            yield current
            current = add_days(current, 1)
        return

    if rule == RepetitionType.WEEKLY:
        current = add_days(current, -(current - anchor).days % 7)
        while current <= end:
            yield current
            current = add_days(current, 7)
        return

    if rule == RepetitionType.MONTHLY:
        # Always step from the anchor so a clamped February does not drag later months to the 29th
        k = (current.year - anchor.year) * 12 + (current.month - anchor.month)
        occurrence = add_months(anchor, k)
        while occurrence <= end:
            if occurrence >= current:
                yield occurrence
            k += 1
            occurrence = add_months(anchor, k)
        return

    if rule == RepetitionType.CUSTOM and not task.repetition.days:
        return

    while current <= end:
        if is_occurrence(task, current):
            yield current
        current = add_days(current, 1)
