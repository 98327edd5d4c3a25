"""Recurrence evaluation.

Decides whether a task occurs on a given calendar day. Malformed rules
(missing type, missing or unparseable anchor) never occur; they are not
treated as errors.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date, datetime

from todoo_cli.models import RecurringRule, Task
from todoo_cli.utils.dates import (
    days_between,
    format_date,
    months_between,
    normalize_to_local_midnight,
    parse_date,
    weekday_index,
)

DAILY = "daily"
WEEKLY = "weekly"
MONTHLY = "monthly"
SPECIFIC_DAYS = "specific-days"

RECURRENCE_TYPES = (DAILY, WEEKLY, MONTHLY, SPECIFIC_DAYS)

# Human-friendly pattern names accepted by the CLI
RECURRENCE_PATTERNS: dict[str, dict] = {
    "daily": {"type": DAILY},
    "weekly": {"type": WEEKLY},
    "bi-weekly": {"type": WEEKLY, "interval": 2},
    "monthly": {"type": MONTHLY},
    "weekdays": {"type": SPECIFIC_DAYS, "specific_days": [1, 2, 3, 4, 5]},
    "weekends": {"type": SPECIFIC_DAYS, "specific_days": [0, 6]},
    "specific-days": {"type": SPECIFIC_DAYS},
}

VALID_PATTERNS = list(RECURRENCE_PATTERNS.keys())

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

_Matcher = Callable[[date, date, int, int, RecurringRule], bool]


def _daily(day: date, start: date, diff_days: int, interval: int, rule) -> bool:
    return diff_days % interval == 0


def _weekly(day: date, start: date, diff_days: int, interval: int, rule) -> bool:
    if weekday_index(day) != weekday_index(start):
        return False
    return (diff_days // 7) % interval == 0


def _monthly(day: date, start: date, diff_days: int, interval: int, rule) -> bool:
    # A day-of-month missing from a shorter month is simply skipped
    if day.day != start.day:
        return False
    return months_between(day, start) % interval == 0


def _specific_days(day: date, start: date, diff_days: int, interval: int, rule) -> bool:
    # Interval does not apply to weekday sets
    if day < start:
        return False
    return weekday_index(day) in rule.specific_days


_MATCHERS: dict[str, _Matcher] = {
    DAILY: _daily,
    WEEKLY: _weekly,
    MONTHLY: _monthly,
    SPECIFIC_DAYS: _specific_days,
}


def anchor_date(task: Task) -> date | None:
    """Reference date recurrence offsets are computed from."""
    if task.recurring is None:
        return parse_date(task.date)
    return parse_date(task.recurring.start_date or task.date)


def occurs_on(task: Task, on: date | datetime) -> bool:
    """Check whether *task* shows up on the day *on*.

    Args:
        task: Task to evaluate
        on: Candidate calendar day

    Returns:
        True for a non-recurring task dated *on*, or a recurring task whose
        rule produces an occurrence on *on*
    """
    day = normalize_to_local_midnight(on)
    rule = task.recurring
    if rule is None:
        return task.date == format_date(day)

    start = anchor_date(task)
    if start is None:
        return False

    diff_days = days_between(day, start)
    if diff_days < 0:
        return False

    matcher = _MATCHERS.get(rule.type or "")
    if matcher is None:
        return False
    return matcher(day, start, diff_days, rule.effective_interval, rule)


def get_occurrences_for_date(tasks: Iterable[Task], on: date | datetime) -> list[Task]:
    """All tasks occurring on *on*, in collection order."""
    return [task for task in tasks if occurs_on(task, on)]


def resolve_rule(
    pattern: str,
    *,
    interval: int | None = None,
    specific_days: list[int] | None = None,
    start_date: str | None = None,
) -> RecurringRule | None:
    """Build a rule from a pattern name such as ``daily`` or ``weekdays``.

    Args:
        pattern: Pattern name (see VALID_PATTERNS)
        interval: Override the pattern's interval
        specific_days: Override the pattern's weekdays (0=Sunday)
        start_date: Anchor date (YYYY-MM-DD)

    Returns:
        RecurringRule, or None if pattern is not recognized
    """
    preset = RECURRENCE_PATTERNS.get(pattern.lower())
    if preset is None:
        return None
    data = dict(preset)
    if interval is not None:
        data["interval"] = interval
    if specific_days:
        data["specific_days"] = sorted(set(specific_days))
    if start_date:
        data["start_date"] = start_date
    return RecurringRule(**data)


def describe_rule(rule: RecurringRule | None) -> str:
    """Human-readable summary of a rule, e.g. ``every 2 weeks``."""
    if rule is None:
        return ""
    interval = rule.effective_interval
    units = {DAILY: "day", WEEKLY: "week", MONTHLY: "month"}
    if rule.type in units:
        unit = units[rule.type]
        return f"every {unit}" if interval == 1 else f"every {interval} {unit}s"
    if rule.type == SPECIFIC_DAYS:
        names = [WEEKDAY_NAMES[d] for d in sorted(rule.specific_days) if 0 <= d <= 6]
        return "on " + ", ".join(names) if names else "never"
    return rule.type or "never"
