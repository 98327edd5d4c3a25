"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from todoo_cli.models import Task


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send log output to *tmp_path* and reset the logger singleton."""
    import todoo_cli.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("todoo_cli").handlers.clear()
    with patch(
        "todoo_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")
    ):
        yield
    logger_mod._logger = None
    logging.getLogger("todoo_cli").handlers.clear()


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from todoo_cli.services.config_service import ConfigService, get_config_service

    get_config_service.cache_clear()
    with patch(
        "todoo_cli.services.config_service.user_config_dir",
        return_value=str(tmp_path / "config"),
    ):
        with patch(
            "todoo_cli.services.config_service.user_data_dir",
            return_value=str(tmp_path / "data"),
        ):
            yield ConfigService()
    get_config_service.cache_clear()


@pytest.fixture()
def cli_env(tmp_path):
    """Point the shared config service used by commands at *tmp_path*."""
    from todoo_cli.services.config_service import get_config_service

    get_config_service.cache_clear()
    with patch(
        "todoo_cli.services.config_service.user_config_dir",
        return_value=str(tmp_path / "config"),
    ):
        with patch(
            "todoo_cli.services.config_service.user_data_dir",
            return_value=str(tmp_path / "data"),
        ):
            yield get_config_service()
    get_config_service.cache_clear()


@pytest.fixture()
def make_task():
    """Factory for Task instances with sensible defaults."""
    counter = {"n": 0}

    def _make(**kwargs) -> Task:
        counter["n"] += 1
        kwargs.setdefault("id", f"task-{counter['n']}")
        kwargs.setdefault("text", f"Task {counter['n']}")
        return Task(**kwargs)

    return _make
