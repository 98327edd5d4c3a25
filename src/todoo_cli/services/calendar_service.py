"""Day, week and month views over the task collection."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta

from todoo_cli.models import DayView, MonthCell, Task
from todoo_cli.services.ordering_service import sort_key
from todoo_cli.utils.dates import (
    add_months,
    each_day_in_interval,
    end_of_week,
    normalize_to_local_midnight,
    start_of_month,
    start_of_week,
)
from todoo_cli.utils.recurrence import get_occurrences_for_date

MONTH_GRID_DAYS = 42


def sort_for_day(tasks: Sequence[Task]) -> list[Task]:
    """Display order within a day: explicit order, then time of day."""
    return sorted(tasks, key=sort_key)


def get_day_view(tasks: Sequence[Task], on: date | datetime) -> DayView:
    day = normalize_to_local_midnight(on)
    return DayView(date=day, tasks=sort_for_day(get_occurrences_for_date(tasks, day)))


def get_week_view(
    tasks: Sequence[Task], selected: date | datetime, week_offset: int = 0
) -> list[DayView]:
    """Monday-to-Sunday views of the week *week_offset* weeks from *selected*."""
    anchor = normalize_to_local_midnight(selected) + timedelta(weeks=week_offset)
    days = each_day_in_interval(start_of_week(anchor), end_of_week(anchor))
    return [get_day_view(tasks, day) for day in days]


def get_month_view(
    tasks: Sequence[Task], selected: date | datetime, month_offset: int = 0
) -> list[list[MonthCell]]:
    """Six Monday-first weeks covering the month *month_offset* months from *selected*.

    Days outside the displayed month are included to fill the grid and are
    flagged with ``is_current_month=False``.
    """
    month = add_months(start_of_month(selected), month_offset)
    first = start_of_week(month)
    days = each_day_in_interval(first, first + timedelta(days=MONTH_GRID_DAYS - 1))

    weeks: list[list[MonthCell]] = []
    for start in range(0, len(days), 7):
        weeks.append(
            [
                MonthCell(
                    date=day,
                    tasks=sort_for_day(get_occurrences_for_date(tasks, day)),
                    is_current_month=day.month == month.month,
                )
                for day in days[start : start + 7]
            ]
        )
    return weeks
