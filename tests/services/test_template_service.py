"""Tests for task templates."""

from datetime import date

from todoo_cli.models import RecurringRule, SubTask
from todoo_cli.services.template_service import (
    create_template_from_task,
    delete_template,
    use_template,
)


def _source(make_task):
    return make_task(
        id="src",
        text="Weekly review",
        date="2024-01-01",
        time="17:00",
        priority="high",
        completed=True,
        pinned=True,
        sub_tasks=[SubTask(id="s1", text="Inbox zero")],
        recurring=RecurringRule(type="weekly", start_date="2024-01-01"),
        completed_on={"2024-01-01": True},
    )


def test_create_strips_identity_and_state(make_task):
    task = _source(make_task)
    [template] = create_template_from_task([], [task], "src", "Review", lambda: "t1")
    assert template.id == "t1"
    assert template.name == "Review"
    dumped = template.task.model_dump()
    assert "id" not in dumped
    assert "completed_on" not in dumped
    assert "date" not in dumped
    assert template.task.time == "17:00"
    assert template.task.recurring.type == "weekly"


def test_create_from_virtual_id(make_task):
    task = _source(make_task)
    [template] = create_template_from_task([], [task], "src-2024-01-08", "", lambda: "t1")
    assert template.name == "Weekly review"


def test_create_from_unknown_task(make_task):
    assert create_template_from_task([], [_source(make_task)], "nope", "x") == []


def test_use_template_adds_dated_task(make_task):
    task = _source(make_task)
    templates = create_template_from_task([], [task], "src", "Review", lambda: "t1")
    tasks = use_template([task], templates, "t1", date(2024, 2, 5), lambda: "new")
    new = tasks[-1]
    assert new.id == "new"
    assert new.date == "2024-02-05"
    assert new.completed is False
    assert new.pinned is False
    assert new.completed_on == frozenset()
    assert new.text == "Weekly review"


def test_use_unknown_template(make_task):
    tasks = [_source(make_task)]
    assert use_template(tasks, [], "missing", date(2024, 1, 1)) == tasks


def test_delete_template(make_task):
    templates = create_template_from_task([], [_source(make_task)], "src", "R", lambda: "t1")
    assert delete_template(templates, "t1") == []
