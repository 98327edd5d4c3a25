"""Tests for JsonFileRepository."""

import json
from unittest.mock import patch

from todoo_cli.adapters import JsonFileRepository


def test_writes_one_file_per_kind(tmp_path):
    repo = JsonFileRepository(tmp_path)
    repo.save("u1", "tasks", [{"id": "a"}])
    path = tmp_path / "todoapp" / "u1" / "tasks.json"
    assert json.loads(path.read_text(encoding="utf-8")) == [{"id": "a"}]
    assert repo.load("u1", "tasks") == [{"id": "a"}]


def test_missing_file_returns_default(tmp_path):
    repo = JsonFileRepository(tmp_path)
    assert repo.load("u1", "tasks") == []
    assert repo.load("u1", "tasks", {"x": 1}) == {"x": 1}


def test_corrupt_file_returns_default(tmp_path):
    repo = JsonFileRepository(tmp_path)
    path = tmp_path / "todoapp" / "u1" / "tasks.json"
    path.parent.mkdir(parents=True)
    path.write_text("{oops", encoding="utf-8")
    assert repo.load("u1", "tasks") == []


def test_write_failure_falls_back_to_memory(tmp_path):
    repo = JsonFileRepository(tmp_path)
    with patch("pathlib.Path.write_text", side_effect=OSError("disk full")):
        repo.save("u1", "tasks", [{"id": "a"}])
    assert repo.load("u1", "tasks") == [{"id": "a"}]
    assert repo.list_kinds("u1") == ["tasks"]
    assert not (tmp_path / "todoapp" / "u1" / "tasks.json").exists()


def test_successful_write_clears_fallback(tmp_path):
    repo = JsonFileRepository(tmp_path)
    with patch("pathlib.Path.write_text", side_effect=OSError("disk full")):
        repo.save("u1", "tasks", [{"id": "old"}])
    repo.save("u1", "tasks", [{"id": "new"}])
    assert repo.load("u1", "tasks") == [{"id": "new"}]
    assert JsonFileRepository(tmp_path).load("u1", "tasks") == [{"id": "new"}]


def test_unserializable_data_is_ignored(tmp_path):
    repo = JsonFileRepository(tmp_path)
    repo.save("u1", "tasks", [{"id": "a"}])
    repo.save("u1", "tasks", [object()])
    assert repo.load("u1", "tasks") == [{"id": "a"}]


def test_remove_and_list_kinds(tmp_path):
    repo = JsonFileRepository(tmp_path)
    repo.save("u1", "tasks", [])
    repo.save("u1", "projects", [])
    repo.save("u2", "tasks", [])
    assert repo.list_kinds("u1") == ["projects", "tasks"]
    repo.remove("u1", "tasks")
    repo.remove("u1", "missing")
    assert repo.list_kinds("u1") == ["projects"]


def test_write_failure_is_logged(tmp_path):
    repo = JsonFileRepository(tmp_path / "data")
    with patch("pathlib.Path.write_text", side_effect=OSError("disk full")):
        repo.save("u1", "tasks", [])
    log = (tmp_path / "logs" / "todoo.log").read_text(encoding="utf-8")
    assert "disk full" in log
