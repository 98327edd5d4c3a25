"""Tests for calendar views."""

from datetime import date

from todoo_cli.models import RecurringRule
from todoo_cli.services.calendar_service import (
    MONTH_GRID_DAYS,
    get_day_view,
    get_month_view,
    get_week_view,
    sort_for_day,
)


def test_sort_for_day(make_task):
    a = make_task(time="10:00")
    b = make_task(order=10, time="23:00")
    c = make_task(order=0)
    assert sort_for_day([a, b, c]) == [c, b, a]


def test_day_view_includes_occurrences(make_task):
    single = make_task(date="2024-01-03", time="12:00")
    recurring = make_task(
        time="08:00", recurring=RecurringRule(type="daily", start_date="2024-01-01")
    )
    view = get_day_view([single, recurring], date(2024, 1, 3))
    assert view.date == date(2024, 1, 3)
    assert view.tasks == [recurring, single]


class TestWeekView:
    def test_monday_to_sunday(self):
        days = get_week_view([], date(2024, 1, 3))
        assert [d.date for d in days][0] == date(2024, 1, 1)
        assert [d.date for d in days][-1] == date(2024, 1, 7)
        assert len(days) == 7

    def test_offset(self):
        days = get_week_view([], date(2024, 1, 3), week_offset=-1)
        assert days[0].date == date(2023, 12, 25)


class TestMonthView:
    def test_fixed_grid(self):
        weeks = get_month_view([], date(2024, 2, 14))
        assert len(weeks) == 6
        assert all(len(week) == 7 for week in weeks)
        assert sum(len(week) for week in weeks) == MONTH_GRID_DAYS
        # February 2024 starts on a Thursday
        assert weeks[0][0].date == date(2024, 1, 29)
        assert weeks[0][0].is_current_month is False
        assert weeks[0][3].date == date(2024, 2, 1)
        assert weeks[0][3].is_current_month is True

    def test_offset_crosses_year(self):
        weeks = get_month_view([], date(2024, 12, 10), month_offset=1)
        current = [c.date for week in weeks for c in week if c.is_current_month]
        assert current[0] == date(2025, 1, 1)
        assert current[-1] == date(2025, 1, 31)

    def test_cells_hold_tasks(self, make_task):
        task = make_task(date="2024-02-14")
        weeks = get_month_view([task], date(2024, 2, 1))
        cell = next(c for week in weeks for c in week if c.date == date(2024, 2, 14))
        assert cell.tasks == [task]
