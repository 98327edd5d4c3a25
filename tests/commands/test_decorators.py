"""Tests for command_wrapper and AppError."""

import pytest
import typer

from todoo_cli.commands.decorators import AppError, command_wrapper


def test_passes_through_result():
    @command_wrapper
    def ok():
        return 42

    assert ok() == 42


def test_app_error_exit_code(capsys):
    @command_wrapper
    def failing():
        raise AppError("bad input", exit_code=2)

    with pytest.raises(typer.Exit) as exc:
        failing()
    assert exc.value.exit_code == 2
    assert "bad input" in capsys.readouterr().out


def test_unexpected_error_exits_one(capsys, tmp_path):
    @command_wrapper
    def crashing():
        raise RuntimeError("boom")

    with pytest.raises(typer.Exit) as exc:
        crashing()
    assert exc.value.exit_code == 1
    assert "unexpected error" in capsys.readouterr().out
    log = (tmp_path / "logs" / "todoo.log").read_text(encoding="utf-8")
    assert "Traceback" in log


def test_typer_exit_is_reraised():
    @command_wrapper
    def leaving():
        raise typer.Exit(0)

    with pytest.raises(typer.Exit):
        leaving()
