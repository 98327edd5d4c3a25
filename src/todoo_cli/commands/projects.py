"""Project management commands."""

import typer

from todoo_cli.services.config_service import get_config_service
from todoo_cli.services.project_service import create_project, delete_project
from todoo_cli.services.store import update_collection
from todoo_cli.utils.exit_codes import ERROR_INVALID_ARGS
from todoo_cli.utils.typer_helpers import SuggestingGroup
from todoo_cli.utils.ui.formatters import (
    format_output,
    format_success,
    format_warning,
    project_to_row,
)
from todoo_cli.utils.uuid_utils import create_id

from .decorators import AppError, command_wrapper
from .helpers import check_output_format, resolve_project

app = typer.Typer(cls=SuggestingGroup, help="Project management commands")


@app.command("list")
@command_wrapper
def list_projects(
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """List projects."""
    check_output_format(output)
    state = get_config_service().open_store().state
    format_output([project_to_row(p, state.tasks) for p in state.projects], output)


@app.command("create")
@command_wrapper
def create(
    name: str = typer.Argument(..., help="Project name"),
    color: str | None = typer.Option(None, "--color", help="Hex color, e.g. #27AE60"),
) -> None:
    """Create a new project."""
    if not name.strip():
        raise AppError("Project name cannot be empty", ERROR_INVALID_ARGS)

    project_id = create_id()
    store = get_config_service().open_store()
    store.dispatch(
        update_collection(
            "projects",
            lambda projects: create_project(projects, name, lambda: project_id, color),
        )
    )
    format_success(f"Project created: {project_id}")


@app.command("delete")
@command_wrapper
def delete(
    project: str = typer.Argument(..., help="Project name or ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a project. Its tasks are kept without a project."""
    store = get_config_service().open_store()
    project_id = resolve_project(project, store.state.projects)

    if not yes and not typer.confirm(f"Are you sure you want to delete project {project}?"):
        format_warning("Cancelled")
        raise typer.Exit(0)

    store.dispatch(lambda state: delete_project(state, project_id))
    format_success(f"Project deleted: {project_id}")
