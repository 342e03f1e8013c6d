"""Shared fixtures for duecal tests.

Tasks are built with make_task(); tests pass explicit today/now values instead of
relying on the wall clock.
"""
from __future__ import annotations

from typing import Any

import pytest

import config
from models import Repetition, Task


def make_task(
    id: str = "t1",
    deadline: str = "2024-06-10",
    repetition: str = "none",
    days: list[int] | None = None,
    priority: list[str] | None = None,
    completions: dict[str, bool] | None = None,
    text: str = "",
    **extra: Any,
) -> Task:
    rep: dict[str, Any] = {"type": repetition}
    if days is not None:
        rep["days"] = days
    return Task(
        id=id,
        text=text or f"Task {id}",
        deadline=deadline,
        repetition=rep,
        priority=priority or [],
        completions=completions or {},
        **extra,
    )


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    """Point config.json at a temporary file."""
    path = tmp_path / "config.json"
    monkeypatch.setattr(config, "CONFIG_PATH", path)
    return path


def corrupt_tasks(id: str = "bad") -> list[Task]:
    """Tasks whose deadline bypassed validation: an edit via model_copy and a model_construct."""
    return [
        make_task(id=id).model_copy(update={"deadline": "junk"}),
        Task.model_construct(
            id=id,
            text="Bad",
            deadline="2024-02-30",
            priority=frozenset(),
            repetition=Repetition(),
            completions={},
            notes={},
        ),
    ]
