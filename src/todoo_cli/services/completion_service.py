"""Per-occurrence completion tracking.

Non-recurring tasks carry a single ``completed`` flag. Recurring tasks keep
the set of days they were completed on in ``completed_on``; marking a day
undone removes it from the set.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime

from todoo_cli.models import CompletionStats, DayView, Task
from todoo_cli.services.task_service import find_task
from todoo_cli.utils.dates import format_date
from todoo_cli.utils.logger import get_logger
from todoo_cli.utils.occurrence_id import date_suffix_of
from todoo_cli.utils.recurrence import get_occurrences_for_date


def is_completed_on(task: Task, on: date | datetime) -> bool:
    """Check whether *task*'s occurrence on *on* is done."""
    key = format_date(on)
    if key in task.completed_on:
        return True
    return not task.is_recurring and task.date == key and task.completed


def _toggled(task: Task, key: str | None) -> Task | None:
    if key is None:
        return task.model_copy(update={"completed": not task.completed})
    if task.is_recurring:
        done = task.completed_on
        done = done - {key} if key in done else done | {key}
        return task.model_copy(update={"completed_on": done})
    if task.date == key:
        return task.model_copy(update={"completed": not task.completed})
    # Stale occurrence id pointing at another day
    return None


def toggle_completion(
    tasks: Sequence[Task],
    task_id: str,
    on: date | datetime | str | None = None,
) -> list[Task]:
    """Flip completion of one task occurrence.

    Args:
        tasks: Current task collection
        task_id: Base or virtual (``<id>-YYYY-MM-DD``) task id
        on: Occurrence day; defaults to the date carried by a virtual id

    Returns:
        New task collection. Unknown ids, and days that do not belong to a
        non-recurring task, leave the collection unchanged.
    """
    target = find_task(tasks, task_id)
    if target is None:
        get_logger().debug("ignoring toggle of unknown task %s", task_id)
        return list(tasks)

    # A stored id ending in a date is not an occurrence id
    suffix = date_suffix_of(task_id) if task_id != target.id else None
    raw_day = on if on is not None else suffix
    key = format_date(raw_day) if raw_day is not None else None

    updated = _toggled(target, key)
    if updated is None:
        get_logger().debug(
            "ignoring toggle of %s on %s: task is dated %s", target.id, key, target.date
        )
        return list(tasks)
    return [updated if task.id == target.id else task for task in tasks]


def completion_stats_for_day(tasks: Iterable[Task], on: date | datetime) -> CompletionStats:
    """Count occurrences on *on* and how many of them are done."""
    visible = get_occurrences_for_date(tasks, on)
    done = sum(1 for task in visible if is_completed_on(task, on))
    return CompletionStats(total=len(visible), completed=done)


def completion_stats_for_days(days: Iterable[DayView]) -> CompletionStats:
    """Aggregate completion over already-built day views (e.g. a week)."""
    total = 0
    done = 0
    for day in days:
        total += len(day.tasks)
        done += sum(1 for task in day.tasks if is_completed_on(task, day.date))
    return CompletionStats(total=total, completed=done)
