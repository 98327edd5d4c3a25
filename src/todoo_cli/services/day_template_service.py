"""Day templates.

A day template bundles task blueprints for particular weekdays or dates.
Applying it to a day creates independent, single-day tasks; nothing links
them back to the template afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime

from todoo_cli.models import (
    DEFAULT_PRIORITY,
    ApplyResult,
    DayTemplate,
    DayTemplateWhen,
    SubTask,
    Task,
    TaskBlueprint,
    TaskCreate,
)
from todoo_cli.utils.dates import format_date, weekday_index
from todoo_cli.utils.logger import get_logger
from todoo_cli.utils.uuid_utils import create_id


def applies_on(on: date | datetime, template: DayTemplate) -> bool:
    """Check whether *template* is meant for the day *on*."""
    if format_date(on) in template.when.dates:
        return True
    weekdays = template.when.weekdays
    return bool(weekdays) and weekday_index(on) in weekdays


def find_applicable_templates(
    on: date | datetime, templates: Iterable[DayTemplate]
) -> list[DayTemplate]:
    return [template for template in templates if applies_on(on, template)]


def generate_task_payloads(
    on: date | datetime,
    template: DayTemplate,
    id_factory: Callable[[], str] = create_id,
) -> list[TaskCreate]:
    """Turn each blueprint of *template* into a task payload dated *on*.

    Sub-tasks get fresh ids. Generated tasks never recur.
    """
    date_key = format_date(on)
    payloads = []
    for index, blueprint in enumerate(template.tasks):
        sub_tasks = [
            SubTask(
                id=f"{index}-{sub_index}-{id_factory()}",
                text=sub.text,
                completed=sub.completed,
            )
            for sub_index, sub in enumerate(blueprint.sub_tasks)
        ]
        payloads.append(
            TaskCreate(
                text=blueprint.text,
                priority=blueprint.priority or DEFAULT_PRIORITY,
                project=blueprint.project,
                time=blueprint.time,
                notes=blueprint.notes,
                sub_tasks=sub_tasks,
                order=blueprint.order,
                duration=blueprint.duration,
                date=date_key,
            )
        )
    return payloads


def _dedupe_key(date_key: str | None, text: str | None, project: str | None, time: str | None):
    return (date_key, (text or "").strip().lower(), project or "", time or "")


def apply_day_template(
    on: date | datetime,
    template: DayTemplate,
    existing_tasks: Sequence[Task],
    add_task: Callable[[TaskCreate], object],
    *,
    dedupe: bool = True,
    id_factory: Callable[[], str] = create_id,
) -> ApplyResult:
    """Materialize *template* for the day *on*.

    With *dedupe*, a payload is skipped when *existing_tasks* already holds a
    task with the same date, time, project and (case-insensitive, trimmed)
    text. Priority, notes and sub-tasks are not compared.

    Args:
        on: Target day
        template: Day template to apply
        existing_tasks: Snapshot of the task collection to dedupe against
        add_task: Called once per payload that is not skipped
        dedupe: Whether to skip duplicates
        id_factory: Id generator for sub-tasks

    Returns:
        ApplyResult with added/skipped counts; never raises for duplicates
    """
    existing = {
        _dedupe_key(task.date, task.text, task.project, task.time)
        for task in existing_tasks
    }
    added = 0
    skipped = 0
    for payload in generate_task_payloads(on, template, id_factory):
        key = _dedupe_key(payload.date, payload.text, payload.project, payload.time)
        if dedupe and key in existing:
            skipped += 1
            continue
        add_task(payload)
        added += 1

    get_logger().info(
        "applied day template %s on %s: %d added, %d skipped",
        template.id,
        format_date(on),
        added,
        skipped,
    )
    return ApplyResult(added=added, skipped=skipped)


# ---------------------------------------------------------------------------
# Editing
# ---------------------------------------------------------------------------


def create_day_template(
    templates: Sequence[DayTemplate],
    name: str,
    id_factory: Callable[[], str] = create_id,
    when: DayTemplateWhen | None = None,
) -> list[DayTemplate]:
    """Prepend a new, empty day template. Blank names are ignored."""
    trimmed = (name or "").strip()
    if not trimmed:
        return list(templates)
    template = DayTemplate(
        id=id_factory(),
        name=trimmed,
        when=when or DayTemplateWhen(),
        tasks=[],
    )
    return [template, *templates]


def update_day_template(
    templates: Sequence[DayTemplate], updated: DayTemplate
) -> list[DayTemplate]:
    return [updated if t.id == updated.id else t for t in templates]


def delete_day_template(
    templates: Sequence[DayTemplate], template_id: str
) -> list[DayTemplate]:
    return [t for t in templates if t.id != template_id]


def _edit_tasks(
    templates: Sequence[DayTemplate],
    template_id: str,
    edit: Callable[[list[TaskBlueprint]], list[TaskBlueprint]],
) -> list[DayTemplate]:
    return [
        t.model_copy(update={"tasks": edit(list(t.tasks))}) if t.id == template_id else t
        for t in templates
    ]


def add_blueprint(
    templates: Sequence[DayTemplate], template_id: str, blueprint: TaskBlueprint
) -> list[DayTemplate]:
    """Append a blueprint. Blueprints with blank text are ignored."""
    text = (blueprint.text or "").strip()
    if not text:
        return list(templates)
    blueprint = blueprint.model_copy(update={"text": text})
    return _edit_tasks(templates, template_id, lambda items: [*items, blueprint])


def update_blueprint(
    templates: Sequence[DayTemplate], template_id: str, index: int, **patch
) -> list[DayTemplate]:
    """Patch fields of the blueprint at *index*; out-of-range indexes are ignored."""

    def edit(items: list[TaskBlueprint]) -> list[TaskBlueprint]:
        if 0 <= index < len(items):
            items[index] = items[index].model_copy(update=patch)
        return items

    return _edit_tasks(templates, template_id, edit)


def delete_blueprint(
    templates: Sequence[DayTemplate], template_id: str, index: int
) -> list[DayTemplate]:
    return _edit_tasks(
        templates,
        template_id,
        lambda items: [b for i, b in enumerate(items) if i != index],
    )
