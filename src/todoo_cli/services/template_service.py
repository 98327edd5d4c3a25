"""Task templates - reusable task shapes."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date, datetime

from todoo_cli.models import Task, TaskCreate, Template, TemplateTask
from todoo_cli.services.task_service import add_task, find_task
from todoo_cli.utils.dates import format_date
from todoo_cli.utils.logger import get_logger
from todoo_cli.utils.uuid_utils import create_id


def create_template_from_task(
    templates: Sequence[Template],
    tasks: Sequence[Task],
    task_id: str,
    name: str,
    id_factory: Callable[[], str] = create_id,
) -> list[Template]:
    """Save a task's content as a template.

    Identity, date and completion state are not copied. Unknown task ids
    leave the templates unchanged.
    """
    task = find_task(tasks, task_id)
    if task is None:
        get_logger().debug("ignoring template from unknown task %s", task_id)
        return list(templates)
    content = TemplateTask(
        text=task.text,
        priority=task.priority,
        project=task.project,
        time=task.time,
        notes=task.notes,
        sub_tasks=task.sub_tasks,
        order=task.order,
        duration=task.duration,
        recurring=task.recurring,
    )
    template = Template(id=id_factory(), name=(name or "").strip() or task.text, task=content)
    return [*templates, template]


def use_template(
    tasks: Sequence[Task],
    templates: Sequence[Template],
    template_id: str,
    on: date | datetime,
    id_factory: Callable[[], str] = create_id,
) -> list[Task]:
    """Add a task built from a template, dated *on*."""
    template = next((t for t in templates if t.id == template_id), None)
    if template is None:
        get_logger().debug("ignoring unknown template %s", template_id)
        return list(tasks)
    payload = TaskCreate(**template.task.model_dump(), date=format_date(on))
    return add_task(tasks, payload, id_factory)


def delete_template(templates: Sequence[Template], template_id: str) -> list[Template]:
    return [t for t in templates if t.id != template_id]
