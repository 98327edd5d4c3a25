"""Task service - pure transforms over the task collection.

Every function takes the current collection and returns a new one. Ids may
be virtual occurrence ids; they are resolved to the stored base id before
anything is touched. Ids that match no task are ignored.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

from todoo_cli.models import SubTask, Task, TaskCreate
from todoo_cli.utils.logger import get_logger
from todoo_cli.utils.occurrence_id import base_id_of
from todoo_cli.utils.uuid_utils import create_id


def validate_task_text(text: str | None) -> str:
    """Return trimmed task text.

    Raises:
        ValueError: If the text is empty after trimming
    """
    trimmed = (text or "").strip()
    if not trimmed:
        raise ValueError("Task text cannot be empty")
    return trimmed


def find_task(tasks: Sequence[Task], task_id: str) -> Task | None:
    """Find the stored task behind a base or virtual id."""
    base_id = base_id_of(task_id)
    for task in tasks:
        if task.id == base_id:
            return task
    # A stored id may itself end in a date
    for task in tasks:
        if task.id == task_id:
            return task
    return None


def _update(
    tasks: Sequence[Task], task_id: str, mutate: Callable[[Task], Task]
) -> list[Task]:
    target = find_task(tasks, task_id)
    if target is None:
        get_logger().debug("ignoring update of unknown task %s", task_id)
        return list(tasks)
    return [mutate(task) if task.id == target.id else task for task in tasks]


def add_task(
    tasks: Sequence[Task],
    payload: TaskCreate,
    id_factory: Callable[[], str] = create_id,
    now: datetime | None = None,
) -> list[Task]:
    """Append a new task built from *payload*.

    Args:
        tasks: Current task collection
        payload: Task content and scheduling
        id_factory: Id generator
        now: Creation timestamp (defaults to the current time)

    Returns:
        New collection with the task appended
    """
    stamp = (now or datetime.now()).isoformat(timespec="seconds")
    task = Task(
        **payload.model_dump(),
        id=id_factory(),
        completed=False,
        pinned=False,
        created_at=stamp,
    )
    return [*tasks, task]


def delete_task(tasks: Sequence[Task], task_id: str) -> list[Task]:
    """Delete the base task, and with it every occurrence of a recurring task."""
    target = find_task(tasks, task_id)
    if target is None:
        get_logger().debug("ignoring delete of unknown task %s", task_id)
        return list(tasks)
    return [task for task in tasks if task.id != target.id]


def toggle_pin(tasks: Sequence[Task], task_id: str) -> list[Task]:
    return _update(tasks, task_id, lambda t: t.model_copy(update={"pinned": not t.pinned}))


def update_text(tasks: Sequence[Task], task_id: str, text: str) -> list[Task]:
    return _update(tasks, task_id, lambda t: t.model_copy(update={"text": text}))


def update_notes(tasks: Sequence[Task], task_id: str, notes: str | None) -> list[Task]:
    return _update(tasks, task_id, lambda t: t.model_copy(update={"notes": notes or ""}))


def add_sub_task(
    tasks: Sequence[Task],
    task_id: str,
    text: str,
    id_factory: Callable[[], str] = create_id,
) -> list[Task]:
    """Append a sub-task. Blank text is ignored."""
    trimmed = (text or "").strip()
    if not trimmed:
        return list(tasks)
    sub = SubTask(id=id_factory(), text=trimmed, completed=False)
    return _update(
        tasks, task_id, lambda t: t.model_copy(update={"sub_tasks": [*t.sub_tasks, sub]})
    )


def toggle_sub_task(tasks: Sequence[Task], task_id: str, sub_task_id: str) -> list[Task]:
    def mutate(task: Task) -> Task:
        subs = [
            s.model_copy(update={"completed": not s.completed}) if s.id == sub_task_id else s
            for s in task.sub_tasks
        ]
        return task.model_copy(update={"sub_tasks": subs})

    return _update(tasks, task_id, mutate)


def delete_sub_task(tasks: Sequence[Task], task_id: str, sub_task_id: str) -> list[Task]:
    def mutate(task: Task) -> Task:
        subs = [s for s in task.sub_tasks if s.id != sub_task_id]
        return task.model_copy(update={"sub_tasks": subs})

    return _update(tasks, task_id, mutate)


def get_project_tasks(tasks: Sequence[Task], project_id: str) -> list[Task]:
    return [task for task in tasks if task.project == project_id]


def clear_project(tasks: Sequence[Task], project_id: str) -> list[Task]:
    """Detach every task from *project_id* without deleting any task."""
    return [
        task.model_copy(update={"project": None}) if task.project == project_id else task
        for task in tasks
    ]
