"""Tests for the projects command group."""

import json

from typer.testing import CliRunner

from todoo_cli.main import app

runner = CliRunner()


def _state(config_service):
    return config_service.open_store().state


def test_create_and_list(cli_env):
    result = runner.invoke(app, ["projects", "create", "Work", "--color", "#2980B9"])
    assert result.exit_code == 0, result.output
    [project] = _state(cli_env).projects
    assert project.name == "Work"
    assert project.color == "#2980B9"

    listed = runner.invoke(app, ["projects", "list", "-o", "json"])
    assert json.loads(listed.output) == [
        {"id": project.id, "name": "Work", "color": "#2980B9", "tasks": 0}
    ]


def test_list_pretty(cli_env):
    runner.invoke(app, ["projects", "create", "Home"])
    result = runner.invoke(app, ["projects", "list"])
    assert result.exit_code == 0
    assert "Home" in result.output


def test_blank_name(cli_env):
    result = runner.invoke(app, ["projects", "create", "  "])
    assert result.exit_code == 2


def test_task_uses_project_by_name(cli_env):
    runner.invoke(app, ["projects", "create", "Work"])
    result = runner.invoke(app, ["tasks", "add", "Report", "--project", "work"])
    assert result.exit_code == 0, result.output
    state = _state(cli_env)
    assert state.tasks[0].project == state.projects[0].id


def test_delete_keeps_tasks(cli_env):
    runner.invoke(app, ["projects", "create", "Work"])
    runner.invoke(app, ["tasks", "add", "Report", "--project", "Work"])
    result = runner.invoke(app, ["projects", "delete", "Work", "--yes"])
    assert result.exit_code == 0, result.output
    state = _state(cli_env)
    assert state.projects == []
    assert state.tasks[0].project is None


def test_delete_unknown(cli_env):
    result = runner.invoke(app, ["projects", "delete", "Nope", "--yes"])
    assert result.exit_code == 5
