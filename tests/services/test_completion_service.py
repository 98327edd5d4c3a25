"""Tests for per-occurrence completion."""

from datetime import date

from todoo_cli.models import DayView, RecurringRule
from todoo_cli.services.completion_service import (
    completion_stats_for_day,
    completion_stats_for_days,
    is_completed_on,
    toggle_completion,
)


def _daily(make_task, **kwargs):
    return make_task(
        recurring=RecurringRule(type="daily", start_date="2024-01-01"), **kwargs
    )


class TestToggleRecurring:
    def test_single_toggle_adds_only_that_day(self, make_task):
        task = _daily(make_task, completed_on={"2024-01-02": True})
        [updated] = toggle_completion([task], f"{task.id}-2024-01-05")
        assert updated.completed_on == {"2024-01-02", "2024-01-05"}
        assert updated.completed is False

    def test_double_toggle_restores_structure(self, make_task):
        task = _daily(make_task)
        once = toggle_completion([task], task.id, date(2024, 1, 3))
        twice = toggle_completion(once, task.id, date(2024, 1, 3))
        assert once[0].completed_on == {"2024-01-03"}
        assert twice[0].completed_on == frozenset()
        assert twice[0].model_dump(by_alias=True)["completedOn"] == {}

    def test_explicit_date_wins_over_none(self, make_task):
        task = _daily(make_task)
        [updated] = toggle_completion([task], task.id, "2024-01-09")
        assert is_completed_on(updated, date(2024, 1, 9))
        assert not is_completed_on(updated, date(2024, 1, 10))

    def test_impossible_date_suffix_is_noop(self, make_task):
        task = _daily(make_task, id="abc")
        assert toggle_completion([task], "abc-2024-13-45") == [task]


class TestToggleSingle:
    def test_flag_flips(self, make_task):
        task = make_task(date="2024-01-05")
        [updated] = toggle_completion([task], task.id)
        assert updated.completed is True
        assert updated.completed_on == frozenset()

    def test_matching_virtual_id_flips(self, make_task):
        task = make_task(date="2024-01-05")
        [updated] = toggle_completion([task], f"{task.id}-2024-01-05")
        assert updated.completed is True

    def test_stale_virtual_id_is_noop(self, make_task):
        task = make_task(date="2024-01-05")
        assert toggle_completion([task], f"{task.id}-2024-01-06") == [task]

    def test_unknown_id_is_noop(self, make_task):
        task = make_task(date="2024-01-05")
        assert toggle_completion([task], "missing-2024-01-05") == [task]

    def test_stored_id_ending_in_date(self, make_task):
        task = make_task(id="imported-2024-01-05", date="2024-01-07")
        [updated] = toggle_completion([task], task.id)
        assert updated.completed is True


def test_other_tasks_untouched(make_task):
    a = make_task(date="2024-01-05")
    b = make_task(date="2024-01-05")
    result = toggle_completion([a, b], a.id)
    assert result[1] is b


class TestStats:
    def test_day_stats(self, make_task):
        tasks = [
            make_task(date="2024-01-05", completed=True),
            make_task(date="2024-01-05"),
            _daily(make_task, completed_on={"2024-01-05": True}),
            make_task(date="2024-01-06", completed=True),
        ]
        stats = completion_stats_for_day(tasks, date(2024, 1, 5))
        assert (stats.total, stats.completed) == (3, 2)
        assert stats.percent == 67

    def test_empty_day_is_zero_percent(self):
        stats = completion_stats_for_day([], date(2024, 1, 5))
        assert stats.total == 0
        assert stats.percent == 0

    def test_recurring_completed_flag_does_not_count(self, make_task):
        task = _daily(make_task, completed=True)
        assert completion_stats_for_day([task], date(2024, 1, 5)).completed == 0

    def test_aggregate_over_days(self, make_task):
        recurring = _daily(make_task, completed_on={"2024-01-01": True})
        days = [
            DayView(date=date(2024, 1, 1), tasks=[recurring]),
            DayView(date=date(2024, 1, 2), tasks=[recurring]),
        ]
        stats = completion_stats_for_days(days)
        assert (stats.total, stats.completed, stats.percent) == (2, 1, 50)
