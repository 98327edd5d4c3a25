"""Argument parsing helpers shared by commands."""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date, timedelta

from todoo_cli.models import PRIORITY_LEVELS, Project
from todoo_cli.utils.dates import parse_date
from todoo_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from todoo_cli.utils.ui.formatters import OUTPUT_FORMATS
from todoo_cli.utils.uuid_utils import resolve_id

from .decorators import AppError

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

_RELATIVE_DAYS = {"yesterday": -1, "today": 0, "tomorrow": 1}


def parse_date_option(value: str | None) -> date:
    """Parse today/tomorrow/yesterday or YYYY-MM-DD; None means today."""
    if value is None:
        return date.today()
    key = value.strip().lower()
    if key in _RELATIVE_DAYS:
        return date.today() + timedelta(days=_RELATIVE_DAYS[key])
    parsed = parse_date(value)
    if parsed is None:
        raise AppError(
            f"Invalid date '{value}'. Use today, tomorrow or YYYY-MM-DD",
            ERROR_INVALID_ARGS,
        )
    return parsed


def parse_time_option(value: str | None) -> str | None:
    if value is None:
        return None
    if not _TIME_RE.match(value.strip()):
        raise AppError(f"Invalid time '{value}'. Use HH:MM (24-hour)", ERROR_INVALID_ARGS)
    return value.strip()


def parse_priority_option(value: str | None) -> str | None:
    if value is None:
        return None
    key = value.strip().lower()
    if key not in PRIORITY_LEVELS:
        raise AppError(
            f"Invalid priority '{value}'. Choose from: {', '.join(PRIORITY_LEVELS)}",
            ERROR_INVALID_ARGS,
        )
    return key


def parse_weekdays(value: str | None) -> list[int]:
    """Parse a comma separated weekday list (0=Sunday ... 6=Saturday)."""
    if not value:
        return []
    days = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        if not part.isdigit() or not 0 <= int(part) <= 6:
            raise AppError(
                f"Invalid weekday '{part}'. Use numbers 0 (Sunday) to 6 (Saturday)",
                ERROR_INVALID_ARGS,
            )
        if int(part) not in days:
            days.append(int(part))
    return days


def parse_date_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [
        parse_date_option(part).isoformat() for part in value.split(",") if part.strip()
    ]


def check_output_format(value: str) -> str:
    if value not in OUTPUT_FORMATS:
        raise AppError(
            f"Unknown output format '{value}'. Choose from: {', '.join(OUTPUT_FORMATS)}",
            ERROR_INVALID_ARGS,
        )
    return value


def resolve_or_fail(raw_id: str, items: Sequence, kind: str) -> str:
    """resolve_id, reporting failures as AppError."""
    try:
        return resolve_id(raw_id, items, kind)
    except ValueError as e:
        code = ERROR_INVALID_ARGS if str(e).startswith("Ambiguous") else ERROR_NOT_FOUND
        raise AppError(str(e), code) from e


def resolve_project(value: str | None, projects: Sequence[Project]) -> str | None:
    """Resolve a project given by name or id."""
    if value is None:
        return None
    wanted = value.strip().lower()
    for project in projects:
        if project.name.lower() == wanted:
            return project.id
    return resolve_or_fail(value, projects, "Project")
