"""Same-day ordering of tasks.

Tasks sharing a ``date`` are kept in an explicit order (``order`` field,
steps of 10) so that manual reordering survives independently of their time
of day. Tasks without an order fall back to time, then collection order.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from todoo_cli.models import Task
from todoo_cli.services.task_service import find_task
from todoo_cli.utils.logger import get_logger

ORDER_STEP = 10


def time_to_minutes(value: str | None) -> float:
    """Minutes since midnight of an ``HH:MM`` string, or +inf if missing/unparseable."""
    if not value:
        return math.inf
    parts = value.split(":")
    if len(parts) < 2:
        return math.inf
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return math.inf
    return hours * 60 + minutes


def sort_key(task: Task) -> tuple[float, float]:
    """Explicit order first, then time of day; both missing sort last."""
    order = math.inf if task.order is None else task.order
    return order, time_to_minutes(task.time)


def sort_by_time(tasks: Sequence[Task]) -> list[Task]:
    return sorted(tasks, key=lambda task: time_to_minutes(task.time))


def _renumber(ids: list[str]) -> dict[str, int]:
    return {task_id: index * ORDER_STEP for index, task_id in enumerate(ids)}


def _apply_orders(tasks: Sequence[Task], orders: dict[str, int]) -> list[Task]:
    result = []
    for task in tasks:
        new_order = orders.get(task.id)
        if new_order is not None and task.order != new_order:
            task = task.model_copy(update={"order": new_order})
        result.append(task)
    return result


def normalize_group(group: Sequence[Task]) -> list[Task]:
    """Renumber one date group when any of its tasks lacks an order.

    The group keeps its input sequence; only ``order`` values change.
    """
    if all(task.order is not None for task in group):
        return list(group)
    ranked = sorted(group, key=sort_key)
    return _apply_orders(group, _renumber([task.id for task in ranked]))


def normalize_orders(tasks: Sequence[Task]) -> list[Task]:
    """Normalize every date group of the collection.

    Undated tasks are left alone.
    """
    groups: dict[str, list[Task]] = {}
    for task in tasks:
        if task.date:
            groups.setdefault(task.date, []).append(task)

    orders: dict[str, int] = {}
    for group in groups.values():
        if any(task.order is None for task in group):
            ranked = sorted(group, key=sort_key)
            orders.update(_renumber([task.id for task in ranked]))
    if not orders:
        return list(tasks)
    return _apply_orders(tasks, orders)


def move_task(
    tasks: Sequence[Task],
    task_id: str,
    source_date: str,
    dest_date: str,
    dest_index: int,
) -> list[Task]:
    """Move a task to *dest_index* within the tasks of *dest_date*.

    The moved task takes *dest_date* as its date. Both the source and
    destination groups are renumbered in steps of 10; other tasks are left
    untouched.

    Args:
        tasks: Current task collection
        task_id: Base or virtual id of the dragged task
        source_date: Date group the task was dragged from (YYYY-MM-DD)
        dest_date: Date group the task was dropped on (YYYY-MM-DD)
        dest_index: Position in the destination group, clamped to its bounds

    Returns:
        New task collection; unchanged if the task does not exist
    """
    target = find_task(tasks, task_id)
    if target is None:
        get_logger().debug("ignoring move of unknown task %s", task_id)
        return list(tasks)
    base_id = target.id

    moved = [
        task.model_copy(update={"date": dest_date}) if task.id == base_id else task
        for task in tasks
    ]

    def ranked_ids(date_key: str) -> list[str]:
        group = [task for task in moved if task.date == date_key and task.id != base_id]
        return [task.id for task in sorted(group, key=sort_key)]

    source_ids = ranked_ids(source_date)
    dest_ids = ranked_ids(dest_date)
    position = max(0, min(dest_index, len(dest_ids)))
    dest_ids.insert(position, base_id)

    orders = _renumber(source_ids)
    orders.update(_renumber(dest_ids))
    return _apply_orders(moved, orders)
