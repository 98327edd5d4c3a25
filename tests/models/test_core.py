"""Tests for the core domain models."""

import pytest
from pydantic import ValidationError

from todoo_cli.models import (
    CompletionStats,
    OccurrenceRef,
    RecurringRule,
    Task,
    TaskBlueprint,
    TemplateTask,
)


class TestTask:
    def test_camel_case_aliases(self):
        task = Task.model_validate(
            {
                "id": "a",
                "text": "T",
                "subTasks": [{"id": "s", "text": "S"}],
                "createdAt": "2024-01-01T00:00:00",
            }
        )
        assert task.sub_tasks[0].text == "S"
        assert task.created_at == "2024-01-01T00:00:00"

    def test_completed_on_legacy_map_round_trip(self):
        task = Task.model_validate(
            {"id": "a", "text": "T", "completedOn": {"2024-01-02": True, "2024-01-01": True}}
        )
        assert task.completed_on == {"2024-01-01", "2024-01-02"}
        dumped = task.model_dump(by_alias=True)
        assert dumped["completedOn"] == {"2024-01-01": True, "2024-01-02": True}

    def test_completed_on_list_accepted(self):
        task = Task(id="a", text="T", completed_on=["2024-01-01"])
        assert task.completed_on == frozenset({"2024-01-01"})

    def test_frozen(self):
        task = Task(id="a", text="T")
        with pytest.raises(ValidationError):
            task.text = "other"

    def test_unknown_priority_rejected(self):
        with pytest.raises(ValidationError):
            Task(id="a", text="T", priority="urgent")

    def test_unknown_fields_kept(self):
        task = Task.model_validate({"id": "a", "text": "T", "color": "red"})
        assert task.model_dump(by_alias=True)["color"] == "red"

    def test_is_recurring(self):
        assert Task(id="a", text="T", recurring=RecurringRule(type="daily")).is_recurring
        assert not Task(id="a", text="T").is_recurring


def test_rule_keeps_unknown_type():
    rule = RecurringRule.model_validate({"type": "yearly", "byMonth": 3})
    assert rule.type == "yearly"
    assert rule.effective_interval == 1


def test_template_task_defaults_priority():
    assert TemplateTask(text="x", priority=None).priority == "medium"


def test_blueprint_drops_recurring():
    blueprint = TaskBlueprint.model_validate({"text": "x", "recurring": {"type": "daily"}})
    assert "recurring" not in blueprint.model_dump()


def test_occurrence_ref_key():
    assert OccurrenceRef(base_id="a", date="2024-01-01").key == "a-2024-01-01"


def test_completion_percent_rounds():
    assert CompletionStats(total=3, completed=1).percent == 33
    assert CompletionStats().percent == 0
