"""
Task records as seen by the calendar engine.
Tasks are frozen snapshots; editing helpers in task_service return new copies.
"""
from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator, model_validator

from date_utils import date_key, parse_date

logger = logging.getLogger("models")


class Priority(str, Enum):
    IMPORTANT = "important"
    URGENT = "urgent"


class Indicator(str, Enum):
    IMPORTANT = "important"
    URGENT = "urgent"
    COMBINED = "combined"
    NONE = "none"


class RepetitionType(str, Enum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class Repetition(BaseModel):
    """Recurrence rule. Only CUSTOM carries days (weekday indices, Sunday=0)."""

    model_config = ConfigDict(frozen=True)

    type: RepetitionType = RepetitionType.NONE
    days: frozenset[int] | None = None

    @model_validator(mode="before")
    @classmethod
    def _days_only_for_custom(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("type", RepetitionType.NONE) == RepetitionType.CUSTOM:
            if data.get("days") is None:
                data["days"] = frozenset()
        else:
            data["days"] = None
        return data

    @field_validator("days")
    @classmethod
    def _days_in_week(cls, v: frozenset[int] | None) -> frozenset[int] | None:
        if v is not None and any(d < 0 or d > 6 for d in v):
            raise ValueError("custom days must be weekday indices 0-6 (Sunday=0)")
        return v

    @field_serializer("days", when_used="json")
    def _days_sorted(self, v: frozenset[int] | None) -> list[int] | None:
        return sorted(v) if v is not None else None


class Task(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    text: str
    deadline: str
    priority: frozenset[Priority] = frozenset()
    repetition: Repetition = Field(default_factory=Repetition)
    completions: dict[str, bool] = Field(default_factory=dict)
    notes: dict[str, str] = Field(default_factory=dict)

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("text is required")
        return v

    @field_validator("deadline", mode="before")
    @classmethod
    def _deadline_is_date(cls, v: Any) -> str:
        return date_key(v)

    @field_validator("repetition", mode="before")
    @classmethod
    def _null_repetition(cls, v: Any) -> Any:
        return Repetition() if v is None else v

    @field_validator("priority", mode="before")
    @classmethod
    def _null_priority(cls, v: Any) -> Any:
        return frozenset() if v is None else v

    @field_serializer("priority", when_used="json")
    def _priority_sorted(self, v: frozenset[Priority]) -> list[str]:
        return sorted(p.value for p in v)

    @property
    def anchor_date(self) -> date:
        return parse_date(self.deadline)

    @property
    def is_recurring(self) -> bool:
        return self.repetition.type != RepetitionType.NONE

    def is_completed_on(self, d: date | str) -> bool:
        return bool(self.completions.get(date_key(d)))

    def note_on(self, d: date | str) -> str:
        return self.notes.get(date_key(d), "")


def load_tasks(raw: Iterable[Task | dict[str, Any]]) -> list[Task]:
    """Coerce raw records into Tasks, keeping input order. Invalid records are logged and skipped."""
    out: list[Task] = []
    for i, item in enumerate(raw):
        if isinstance(item, Task):
            out.append(item)
            continue
        try:
            out.append(Task.model_validate(item))
        except ValidationError as e:
            task_id = item.get("id") if isinstance(item, dict) else None
            logger.warning("[models] skipping invalid task #%s (id=%s): %s", i, task_id, e.errors(include_url=False))
    return out
