"""Application logger.

Everything the planner logs (ignored stale ids, storage fallbacks, command
failures) goes to a rotating ``todoo.log`` in the platform log directory.
The level starts at DEBUG and follows ``AppConfig.log_level`` once the
configuration is loaded.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

LOGGER_NAME = "todoo_cli"
LOG_FILE = "todoo.log"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LEVEL = "DEBUG"

_ROTATE_BYTES = 5 * 1024 * 1024
_ROTATE_KEEP = 3

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    return Path(user_log_dir(LOGGER_NAME)) / LOG_FILE


def _build_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=_ROTATE_BYTES, backupCount=_ROTATE_KEEP, encoding="utf-8"
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def get_logger() -> logging.Logger:
    """Return the planner's logger, attaching the file handler on first use."""
    global _logger
    if _logger is not None:
        return _logger

    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        logger.addHandler(_build_handler(log_file_path()))
        logger.setLevel(DEFAULT_LEVEL)
    logger.propagate = False

    _logger = logger
    return _logger


def set_log_level(level: str) -> None:
    """Apply a configured level name such as ``"INFO"``.

    Raises:
        ValueError: If *level* is not one of LOG_LEVELS
    """
    name = level.strip().upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level '{level}'. Choose from: {', '.join(LOG_LEVELS)}")
    get_logger().setLevel(name)
