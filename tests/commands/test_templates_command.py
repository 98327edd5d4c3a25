"""Tests for the templates command group."""

import json

from typer.testing import CliRunner

from todoo_cli.main import app

runner = CliRunner()


def _state(config_service):
    return config_service.open_store().state


def _template_from_new_task(cli_env):
    runner.invoke(
        app, ["tasks", "add", "Weekly review", "--date", "2024-01-05", "--time", "17:00"]
    )
    [task] = _state(cli_env).tasks
    result = runner.invoke(app, ["templates", "create", task.id, "Review"])
    assert result.exit_code == 0, result.output
    return _state(cli_env).templates[0]


def test_create_and_list(cli_env):
    template = _template_from_new_task(cli_env)
    assert template.name == "Review"
    assert template.task.time == "17:00"

    result = runner.invoke(app, ["templates", "list", "-o", "json"])
    [row] = json.loads(result.output)
    assert row["name"] == "Review"
    assert row["text"] == "Weekly review"


def test_use_creates_dated_task(cli_env):
    template = _template_from_new_task(cli_env)
    result = runner.invoke(app, ["templates", "use", template.id[:8], "--date", "2024-02-02"])
    assert result.exit_code == 0, result.output
    dates = sorted(t.date for t in _state(cli_env).tasks)
    assert dates == ["2024-01-05", "2024-02-02"]


def test_use_unknown_template(cli_env):
    result = runner.invoke(app, ["templates", "use", "missing"])
    assert result.exit_code == 5


def test_create_from_unknown_task(cli_env):
    result = runner.invoke(app, ["templates", "create", "missing", "Name"])
    assert result.exit_code == 5


def test_delete(cli_env):
    template = _template_from_new_task(cli_env)
    result = runner.invoke(app, ["templates", "delete", template.id])
    assert result.exit_code == 0
    assert _state(cli_env).templates == []
