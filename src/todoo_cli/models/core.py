"""Core domain models.

Entities are frozen: every mutation produces a new instance via
``model_copy(update=...)``. Field aliases are camelCase so that JSON written
by earlier versions of the app (``completedOn``, ``subTasks``, ``startDate``)
loads and saves unchanged.
"""

from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

Priority = Literal["lowest", "low", "medium", "high", "highest"]

# Ordered from least to most important
PRIORITY_LEVELS: tuple[str, ...] = ("lowest", "low", "medium", "high", "highest")

DEFAULT_PRIORITY = "medium"

_ENTITY_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


def _default_priority(value):
    return DEFAULT_PRIORITY if value is None else value


class SubTask(BaseModel):
    """Checklist item attached to a task."""

    model_config = _ENTITY_CONFIG

    id: str
    text: str
    completed: bool = False


class RecurringRule(BaseModel):
    """Recurrence rule of a task.

    Attributes:
        type: One of ``daily``, ``weekly``, ``monthly``, ``specific-days``.
            Kept as a free string so that rules with an unknown type still
            load; they simply never occur.
        start_date: Anchor date (YYYY-MM-DD). Falls back to the task's date.
        interval: Every N days/weeks/months. Clamped to at least 1.
        specific_days: Weekday numbers (0=Sunday ... 6=Saturday), only used
            by ``specific-days``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )

    type: str | None = None
    start_date: str | None = None
    interval: int | None = None
    specific_days: list[int] = Field(default_factory=list)

    @property
    def effective_interval(self) -> int:
        return max(1, self.interval or 1)


class TemplateTask(BaseModel):
    """Task content without identity, scheduling date or completion state."""

    model_config = _ENTITY_CONFIG

    text: str
    priority: Priority = DEFAULT_PRIORITY
    project: str | None = None
    time: str | None = None
    notes: str | None = None
    sub_tasks: list[SubTask] = Field(default_factory=list)
    order: int | None = None
    duration: int | None = None
    recurring: RecurringRule | None = None

    @field_validator("priority", mode="before")
    @classmethod
    def _coerce_priority(cls, value):
        return _default_priority(value)


class TaskCreate(TemplateTask):
    """Payload for creating a task.

    Identity (``id``) and state (``completed``, ``pinned``, ``completedOn``)
    are assigned when the task is added.
    """

    date: str | None = None


class Task(BaseModel):
    """A task.

    A task with ``recurring`` set is an occurrence generator: its ``date`` and
    ``completed`` fields describe the rule anchor, and per-occurrence
    completion lives in ``completed_on``.

    Attributes:
        id: Opaque unique identifier, never changes
        text: Task title
        completed: Completion flag of a non-recurring task
        pinned: Whether the task is pinned
        date: Calendar date (YYYY-MM-DD)
        time: Time of day (HH:mm, 24-hour)
        project: Project id
        priority: One of PRIORITY_LEVELS
        notes: Free-form notes
        sub_tasks: Ordered checklist
        order: Sort position among tasks of the same date
        duration: Planned duration in minutes
        recurring: Recurrence rule
        completed_on: Dates (YYYY-MM-DD) on which a recurring task was done
        created_at: ISO timestamp
        updated_at: ISO timestamp
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )

    id: str
    text: str
    completed: bool = False
    pinned: bool = False
    date: str | None = None
    time: str | None = None
    project: str | None = None
    priority: Priority = DEFAULT_PRIORITY
    notes: str | None = None
    sub_tasks: list[SubTask] = Field(default_factory=list)
    order: int | None = None
    duration: int | None = None
    recurring: RecurringRule | None = None
    completed_on: frozenset[str] = Field(default_factory=frozenset)
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("priority", mode="before")
    @classmethod
    def _coerce_priority(cls, value):
        return _default_priority(value)

    @field_validator("completed_on", mode="before")
    @classmethod
    def _coerce_completed_on(cls, value):
        # Legacy payloads store a sparse {date: true} map
        if value is None:
            return frozenset()
        if isinstance(value, dict):
            return frozenset(key for key, done in value.items() if done)
        return value

    @field_serializer("completed_on")
    def _serialize_completed_on(self, value: frozenset[str]) -> dict[str, bool]:
        return {key: True for key in sorted(value)}

    @property
    def is_recurring(self) -> bool:
        return self.recurring is not None


class Project(BaseModel):
    """Project grouping tasks.

    Attributes:
        id: Unique identifier
        name: Display name
        color: Hex color code
        order: Optional sort position
        created_at: ISO timestamp
        updated_at: ISO timestamp
    """

    model_config = _ENTITY_CONFIG

    id: str
    name: str
    color: str | None = None
    order: int | None = None
    created_at: str | None = None
    updated_at: str | None = None


class Template(BaseModel):
    """Named, reusable task shape."""

    model_config = _ENTITY_CONFIG

    id: str
    name: str
    task: TemplateTask


class BlueprintSubTask(BaseModel):
    model_config = _ENTITY_CONFIG

    id: str | None = None
    text: str
    completed: bool = False


class TaskBlueprint(BaseModel):
    """Content-only task shape inside a day template.

    Recurrence is deliberately not part of a blueprint; a stray ``recurring``
    key in stored data is dropped on load.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    text: str
    priority: Priority | None = None
    project: str | None = None
    time: str | None = None
    notes: str | None = None
    sub_tasks: list[BlueprintSubTask] = Field(default_factory=list)
    order: int | None = None
    duration: int | None = None


class DayTemplateWhen(BaseModel):
    """When a day template applies.

    Attributes:
        weekdays: 0=Sunday ... 6=Saturday
        dates: Exact dates (YYYY-MM-DD)
    """

    model_config = _ENTITY_CONFIG

    weekdays: list[int] = Field(default_factory=list)
    dates: list[str] = Field(default_factory=list)


class DayTemplate(BaseModel):
    """Bundle of task blueprints applicable to weekdays or dates."""

    model_config = _ENTITY_CONFIG

    id: str
    name: str
    when: DayTemplateWhen = Field(default_factory=DayTemplateWhen)
    tasks: list[TaskBlueprint] = Field(default_factory=list)


class ApplyResult(BaseModel):
    """Outcome of materializing a day template."""

    model_config = _ENTITY_CONFIG

    added: int = 0
    skipped: int = 0


class OccurrenceRef(BaseModel):
    """A (base task, occurrence date) pair."""

    model_config = _ENTITY_CONFIG

    base_id: str
    date: str

    @property
    def key(self) -> str:
        """Flat ``<baseId>-<yyyy-mm-dd>`` form used as a display id."""
        return f"{self.base_id}-{self.date}"


class DayView(BaseModel):
    """Tasks visible on one calendar day."""

    model_config = _ENTITY_CONFIG

    date: dt.date
    tasks: list[Task] = Field(default_factory=list)


class MonthCell(DayView):
    """Day cell of a month grid."""

    is_current_month: bool = True


class CompletionStats(BaseModel):
    model_config = _ENTITY_CONFIG

    total: int = 0
    completed: int = 0

    @property
    def percent(self) -> int:
        if not self.total:
            return 0
        return round(self.completed / self.total * 100)


class TaskState(BaseModel):
    """Complete application state handed between transforms."""

    model_config = _ENTITY_CONFIG

    tasks: list[Task] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    templates: list[Template] = Field(default_factory=list)
    day_templates: list[DayTemplate] = Field(default_factory=list)
