"""Todoo CLI domain models.

This package contains Pydantic models for tasks, projects, templates and day
templates, plus the view and configuration models built on top of them.
"""

from .config_models import AppConfig, OutputConfig, StorageConfig
from .core import (
    DEFAULT_PRIORITY,
    PRIORITY_LEVELS,
    ApplyResult,
    BlueprintSubTask,
    CompletionStats,
    DayTemplate,
    DayTemplateWhen,
    DayView,
    MonthCell,
    OccurrenceRef,
    Priority,
    Project,
    RecurringRule,
    SubTask,
    Task,
    TaskBlueprint,
    TaskCreate,
    TaskState,
    Template,
    TemplateTask,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "SubTask",
    "RecurringRule",
    "Priority",
    "PRIORITY_LEVELS",
    "DEFAULT_PRIORITY",
    "OccurrenceRef",
    # Project models
    "Project",
    # Template models
    "Template",
    "TemplateTask",
    "DayTemplate",
    "DayTemplateWhen",
    "TaskBlueprint",
    "BlueprintSubTask",
    "ApplyResult",
    # Views
    "DayView",
    "MonthCell",
    "CompletionStats",
    "TaskState",
    # Config models
    "AppConfig",
    "OutputConfig",
    "StorageConfig",
]
