"""Tests for models: task validation and repetition normalization."""
from __future__ import annotations

import logging
from datetime import date

import pytest
from pydantic import ValidationError

from conftest import make_task
from models import Priority, Repetition, RepetitionType, Task, load_tasks


class TestRepetition:
    def test_default_is_none(self):
        assert Repetition().type == RepetitionType.NONE

    def test_custom_without_days_is_empty_set(self):
        assert Repetition(type="custom").days == frozenset()

    def test_non_custom_drops_days(self):
        assert Repetition(type="weekly", days=[1, 2]).days is None

    def test_non_custom_ignores_out_of_range_days(self):
        assert Repetition(type="weekly", days=[9]).days is None

    def test_custom_days_serialize_sorted(self):
        rep = Repetition(type="custom", days=[6, 0, 3])
        assert rep.model_dump(mode="json") == {"type": "custom", "days": [0, 3, 6]}

    def test_custom_days_out_of_range(self):
        with pytest.raises(ValidationError):
            Repetition(type="custom", days=[7])

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Repetition(type="yearly")


class TestTask:
    def test_deadline_normalized_to_key(self):
        assert make_task(deadline="2024-06-16T10:00").deadline == "2024-06-16"

    def test_anchor_date(self):
        assert make_task(deadline="2024-06-10").anchor_date == date(2024, 6, 10)

    @pytest.mark.parametrize("bad", ["", "10-06-2024", "2024-02-30", "soon"])
    def test_malformed_deadline_rejected(self, bad):
        with pytest.raises(ValidationError):
            make_task(deadline=bad)

    def test_blank_text_rejected(self):
        with pytest.raises(ValidationError):
            Task(id="x", text="   ", deadline="2024-06-10")

    def test_null_repetition_and_priority(self):
        t = Task(id="x", text="a", deadline="2024-06-10", repetition=None, priority=None)
        assert t.repetition.type == RepetitionType.NONE
        assert t.priority == frozenset()
        assert not t.is_recurring

    def test_priority_flags(self):
        t = make_task(priority=["urgent", "important"])
        assert t.priority == {Priority.IMPORTANT, Priority.URGENT}

    def test_priority_serializes_sorted(self):
        for flags in (["urgent", "important"], ["important", "urgent"]):
            assert make_task(priority=flags).model_dump(mode="json")["priority"] == ["important", "urgent"]

    def test_completion_and_note_lookup(self):
        t = make_task(completions={"2024-06-10": True}, notes={"2024-06-10": "done early"})
        assert t.is_completed_on(date(2024, 6, 10))
        assert not t.is_completed_on("2024-06-11")
        assert t.note_on("2024-06-10") == "done early"
        assert t.note_on("2024-06-11") == ""

    def test_frozen(self):
        t = make_task()
        with pytest.raises(ValidationError):
            t.text = "changed"  # type: ignore[misc]


class TestLoadTasks:
    def test_skips_invalid_and_keeps_order(self, caplog):
        raw = [
            {"id": "a", "text": "A", "deadline": "2024-06-10"},
            {"id": "bad", "text": "B", "deadline": "not-a-date"},
            make_task(id="c"),
            {"id": "d", "text": "D", "deadline": "2024-06-12", "repetition": {"type": "daily"}},
        ]
        with caplog.at_level(logging.WARNING, logger="models"):
            tasks = load_tasks(raw)
        assert [t.id for t in tasks] == ["a", "c", "d"]
        assert "bad" in caplog.text
