"""Tests for same-day ordering."""

import math

from todoo_cli.services.ordering_service import (
    move_task,
    normalize_group,
    normalize_orders,
    sort_by_time,
    sort_key,
    time_to_minutes,
)


def _orders(tasks):
    return {task.id: task.order for task in tasks}


class TestTimeToMinutes:
    def test_parses(self):
        assert time_to_minutes("07:30") == 450

    def test_missing_or_bad_sorts_last(self):
        assert time_to_minutes(None) == math.inf
        assert time_to_minutes("soon") == math.inf
        assert time_to_minutes("ab:cd") == math.inf


class TestNormalize:
    def test_existing_order_ranks_before_unordered(self, make_task):
        tasks = [
            make_task(id="a", date="2024-01-01", time="09:00"),
            make_task(id="b", date="2024-01-01", time="08:00", order=5),
            make_task(id="c", date="2024-01-01", time="07:00"),
        ]
        assert _orders(normalize_orders(tasks)) == {"b": 0, "c": 10, "a": 20}

    def test_unordered_group_sorted_by_time(self, make_task):
        tasks = [
            make_task(id="a", date="2024-01-01", time="09:00"),
            make_task(id="b", date="2024-01-01"),
            make_task(id="c", date="2024-01-01", time="07:00"),
        ]
        assert _orders(normalize_orders(tasks)) == {"c": 0, "a": 10, "b": 20}

    def test_fully_ordered_group_untouched(self, make_task):
        tasks = [
            make_task(date="2024-01-01", order=3),
            make_task(date="2024-01-01", order=7),
        ]
        assert normalize_orders(tasks) == tasks

    def test_groups_are_independent(self, make_task):
        tasks = [
            make_task(id="a", date="2024-01-01", order=40),
            make_task(id="b", date="2024-01-01", order=50),
            make_task(id="c", date="2024-01-02"),
        ]
        assert _orders(normalize_orders(tasks)) == {"a": 40, "b": 50, "c": 0}

    def test_undated_tasks_left_alone(self, make_task):
        task = make_task()
        assert normalize_orders([task])[0].order is None

    def test_collection_sequence_kept(self, make_task):
        tasks = [
            make_task(id="a", date="2024-01-01", time="09:00"),
            make_task(id="b", date="2024-01-01", time="07:00"),
        ]
        assert [t.id for t in normalize_group(tasks)] == ["a", "b"]


def test_sort_helpers(make_task):
    late = make_task(time="18:00")
    early = make_task(time="06:00")
    ordered = make_task(order=0, time="23:00")
    assert sort_by_time([late, early]) == [early, late]
    assert sorted([late, early, ordered], key=sort_key) == [ordered, early, late]


class TestMoveTask:
    def _board(self, make_task):
        return [
            make_task(id="a1", date="2024-01-01", order=0),
            make_task(id="a2", date="2024-01-01", order=10),
            make_task(id="a3", date="2024-01-01", order=20),
            make_task(id="b1", date="2024-01-02", order=0),
            make_task(id="b2", date="2024-01-02", order=10),
        ]

    def test_cross_day_move(self, make_task):
        moved = move_task(self._board(make_task), "a2", "2024-01-01", "2024-01-02", 1)
        by_id = {t.id: t for t in moved}
        assert by_id["a2"].date == "2024-01-02"
        day_a = sorted((t for t in moved if t.date == "2024-01-01"), key=sort_key)
        day_b = sorted((t for t in moved if t.date == "2024-01-02"), key=sort_key)
        assert [(t.id, t.order) for t in day_a] == [("a1", 0), ("a3", 10)]
        assert [(t.id, t.order) for t in day_b] == [("b1", 0), ("a2", 10), ("b2", 20)]

    def test_same_day_reorder(self, make_task):
        moved = move_task(self._board(make_task), "a3", "2024-01-01", "2024-01-01", 0)
        assert _orders(moved)["a3"] == 0
        assert _orders(moved)["a1"] == 10
        assert _orders(moved)["a2"] == 20

    def test_index_is_clamped(self, make_task):
        moved = move_task(self._board(make_task), "a1", "2024-01-01", "2024-01-02", 99)
        assert _orders(moved)["a1"] == 20

    def test_virtual_id_moves_base(self, make_task):
        moved = move_task(
            self._board(make_task), "b1-2024-01-02", "2024-01-02", "2024-01-01", 0
        )
        assert {t.id: t.date for t in moved}["b1"] == "2024-01-01"

    def test_unknown_task_is_noop(self, make_task):
        board = self._board(make_task)
        assert move_task(board, "zz", "2024-01-01", "2024-01-02", 0) == board

    def test_stored_id_ending_in_date_moves(self, make_task):
        board = [
            make_task(id="imported-2024-01-05", date="2024-01-01", order=0),
            make_task(id="b1", date="2024-01-02", order=0),
        ]
        moved = move_task(board, "imported-2024-01-05", "2024-01-01", "2024-01-02", 0)
        by_id = {t.id: t for t in moved}
        assert by_id["imported-2024-01-05"].date == "2024-01-02"
        assert _orders(moved) == {"imported-2024-01-05": 0, "b1": 10}
