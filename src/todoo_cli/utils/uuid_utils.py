"""UUID utility functions for Todoo CLI.

Provides id generation, UUID validation, short UUID display, and resolution
of short ids typed on the command line.
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Sequence
from typing import Protocol

from todoo_cli.utils.occurrence_id import parse_occurrence_id

# Relaxed UUID pattern (any version)
UUID_RELAXED_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


class _HasId(Protocol):
    id: str


def create_id() -> str:
    """Generate a new unique id."""
    return str(uuid.uuid4())


def is_valid_uuid(value: str) -> bool:
    """Check if a string is a valid UUID.

    Args:
        value: String to validate

    Returns:
        True if value is a valid UUID
    """
    if not isinstance(value, str):
        return False
    return UUID_RELAXED_PATTERN.match(value) is not None


def shorten_uuid(uuid_str: str, length: int = 8) -> str:
    """Get shortened version of UUID.

    Args:
        uuid_str: Full UUID string
        length: Number of characters to return (default 8)

    Returns:
        First N characters of UUID
    """
    return uuid_str[:length]


def resolve_id(short_or_full_id: str, items: Sequence[_HasId], kind: str = "Task") -> str:
    """Resolve a full id, virtual occurrence id or id prefix to a stored item.

    A virtual id (``<id>-YYYY-MM-DD``) is returned unchanged when its base
    id exists, so callers keep the occurrence date.

    Args:
        short_or_full_id: Full id, occurrence id, or unique prefix
        items: Items to search
        kind: Item name used in error messages

    Returns:
        The resolved id

    Raises:
        ValueError: If nothing matches or the prefix is ambiguous
    """
    wanted = short_or_full_id.strip()
    ids = [item.id for item in items]
    if wanted in ids:
        return wanted

    ref = parse_occurrence_id(wanted)
    if ref is not None:
        base = resolve_id(ref.base_id, items, kind)
        return f"{base}-{ref.date}"

    matches = [item_id for item_id in ids if item_id.startswith(wanted)] if wanted else []
    if not matches:
        raise ValueError(f"{kind} not found: {wanted}")
    if len(matches) > 1:
        shown = ", ".join(shorten_uuid(m) for m in matches[:5])
        if len(matches) > 5:
            shown += f", ... ({len(matches)} total)"
        raise ValueError(
            f"Ambiguous ID '{wanted}' matches {len(matches)} {kind.lower()}s: {shown}"
        )
    return matches[0]
