"""Occurrence ids.

A recurring task is displayed once per day it occurs on. Each displayed
occurrence gets a virtual id, ``<baseId>-<yyyy-mm-dd>``, so that actions on
it (complete, pin, delete) can be routed back to the stored base task and the
right day. Storage only ever holds base ids.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from todoo_cli.models import OccurrenceRef
from todoo_cli.utils.dates import format_date, parse_date

# Trailing "-YYYY-MM-DD" after a non-empty base id
VIRTUAL_ID_PATTERN = re.compile(r"(?P<base>.+)-(?P<date>\d{4}-\d{2}-\d{2})", re.DOTALL)


def make_virtual_id(base_id: str, on: date | datetime | str) -> str:
    """Build the display id of *base_id*'s occurrence on *on*."""
    return OccurrenceRef(base_id=base_id, date=format_date(on)).key


def parse_occurrence_id(task_id: str) -> OccurrenceRef | None:
    """Split a virtual id into its base id and date.

    Returns:
        OccurrenceRef, or None if *task_id* carries no suffix naming a real
        calendar day
    """
    match = VIRTUAL_ID_PATTERN.fullmatch(task_id or "")
    if match is None or parse_date(match.group("date")) is None:
        return None
    return OccurrenceRef(base_id=match.group("base"), date=match.group("date"))


def base_id_of(task_id: str) -> str:
    """Strip a trailing ``-YYYY-MM-DD`` suffix, if present."""
    ref = parse_occurrence_id(task_id)
    return ref.base_id if ref else task_id


def date_suffix_of(task_id: str) -> str | None:
    ref = parse_occurrence_id(task_id)
    return ref.date if ref else None


def is_virtual_id(task_id: str) -> bool:
    return parse_occurrence_id(task_id) is not None
