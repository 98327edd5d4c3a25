"""Configuration service for managing Todoo CLI configuration.

This module provides the ConfigService class, which is the single source of truth
for configuration and storage wiring in Todoo CLI. It handles:

- Loading and saving config.json
- Config file initialization with sensible defaults
- Building the repository and store used by commands
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

from todoo_cli.adapters import JsonFileRepository
from todoo_cli.models.config_models import AppConfig
from todoo_cli.repositories import UserDataRepository
from todoo_cli.services.store import PersistenceHook, TaskStore, load_state
from todoo_cli.utils.logger import set_log_level


class ConfigService:
    """Service for managing application configuration.

    The configuration is loaded lazily on first access and written to disk
    with defaults on first run.
    """

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir("todoo_cli"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("todoo_cli"))

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None
        self._repository: UserDataRepository | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config  # Return cached config if already loaded

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        set_log_level(self._config.log_level)
        return self._config

    def save_config(self):
        """Save the current configuration to storage."""
        if self._config is None:
            raise RuntimeError("No configuration to save")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self._config.model_dump_json(indent=4))
        except Exception as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def reset_config(self):
        """Reset configuration to defaults."""
        self._config = None
        self._repository = None
        if self.config_path.exists():
            self.config_path.unlink()
        self._config = AppConfig()
        self.save_config()

    @property
    def storage_dir(self) -> Path:
        """Directory holding the JSON data files."""
        configured = self.config.storage.data_dir
        return Path(configured).expanduser() if configured else self.data_dir

    def get_repository(self) -> UserDataRepository:
        """Get the repository for the configured storage location."""
        if self._repository is None:
            self._repository = JsonFileRepository(
                self.storage_dir, namespace=self.config.storage.namespace
            )
        return self._repository

    def open_store(self) -> TaskStore:
        """Load the active user's state into a store that persists changes."""
        repository = self.get_repository()
        user_id = self.config.user_id
        state = load_state(repository, user_id)
        store = TaskStore(state)
        store.subscribe(PersistenceHook(repository, user_id, initial=state))
        return store


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get the shared ConfigService instance."""
    return ConfigService()
