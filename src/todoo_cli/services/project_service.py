"""Project service - pure transforms over projects."""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from datetime import datetime

from todoo_cli.models import Project, TaskState
from todoo_cli.services.task_service import clear_project
from todoo_cli.utils.uuid_utils import create_id

PROJECT_COLORS = ("#27AE60", "#2980B9", "#E74C3C", "#F39C12", "#9B59B6", "#1ABC9C")


def create_project(
    projects: Sequence[Project],
    name: str,
    id_factory: Callable[[], str] = create_id,
    color: str | None = None,
    now: datetime | None = None,
) -> list[Project]:
    """Append a project. Blank names are ignored.

    Args:
        projects: Current projects
        name: Project name
        id_factory: Id generator
        color: Hex color; a palette color is picked when omitted
        now: Creation timestamp

    Returns:
        New project list
    """
    trimmed = (name or "").strip()
    if not trimmed:
        return list(projects)
    project = Project(
        id=id_factory(),
        name=trimmed,
        color=color or random.choice(PROJECT_COLORS),
        created_at=(now or datetime.now()).isoformat(timespec="seconds"),
    )
    return [*projects, project]


def delete_project(state: TaskState, project_id: str) -> TaskState:
    """Remove a project and clear it from every task that referenced it."""
    return state.model_copy(
        update={
            "projects": [p for p in state.projects if p.id != project_id],
            "tasks": clear_project(state.tasks, project_id),
        }
    )
