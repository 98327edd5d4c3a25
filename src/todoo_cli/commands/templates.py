"""Task template commands for Todoo CLI."""

import typer

from todoo_cli.services.config_service import get_config_service
from todoo_cli.services.ordering_service import normalize_orders
from todoo_cli.services.store import update_collection
from todoo_cli.services.template_service import (
    create_template_from_task,
    delete_template,
    use_template,
)
from todoo_cli.utils.dates import format_date
from todoo_cli.utils.recurrence import describe_rule
from todoo_cli.utils.typer_helpers import SuggestingGroup
from todoo_cli.utils.ui.formatters import format_output, format_success
from todoo_cli.utils.uuid_utils import create_id

from .decorators import command_wrapper
from .helpers import check_output_format, parse_date_option, resolve_or_fail

app = typer.Typer(cls=SuggestingGroup, help="Manage task templates")


@app.command("create")
@command_wrapper
def create(
    task_id: str = typer.Argument(..., help="Task to copy"),
    name: str = typer.Argument(..., help="Template name"),
) -> None:
    """Save a task as a reusable template."""
    store = get_config_service().open_store()
    resolved = resolve_or_fail(task_id, store.state.tasks, "Task")

    template_id = create_id()
    store.dispatch(
        lambda state: state.model_copy(
            update={
                "templates": create_template_from_task(
                    state.templates, state.tasks, resolved, name, lambda: template_id
                )
            }
        )
    )
    format_success(f"Template created: {template_id}")


@app.command("list")
@command_wrapper
def list_templates(
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """List all task templates."""
    check_output_format(output)
    templates = get_config_service().open_store().state.templates
    rows = [
        {
            "id": t.id,
            "name": t.name,
            "text": t.task.text,
            "priority": t.task.priority,
            "time": t.task.time,
            "repeat": describe_rule(t.task.recurring) or None,
        }
        for t in templates
    ]
    format_output(rows, output)


@app.command("use")
@command_wrapper
def use(
    template_id: str = typer.Argument(..., help="Template ID"),
    date: str | None = typer.Option(None, "--date", "-d", help="Date of the new task"),
) -> None:
    """Create a task from a template."""
    store = get_config_service().open_store()
    resolved = resolve_or_fail(template_id, store.state.templates, "Template")
    on = parse_date_option(date)

    task_id = create_id()
    store.dispatch(
        lambda state: state.model_copy(
            update={
                "tasks": normalize_orders(
                    use_template(state.tasks, state.templates, resolved, on, lambda: task_id)
                )
            }
        )
    )
    format_success(f"Task added from template on {format_date(on)}: {task_id}")


@app.command("delete")
@command_wrapper
def delete(template_id: str = typer.Argument(..., help="Template ID")) -> None:
    """Delete a template."""
    store = get_config_service().open_store()
    resolved = resolve_or_fail(template_id, store.state.templates, "Template")
    store.dispatch(
        update_collection("templates", lambda templates: delete_template(templates, resolved))
    )
    format_success(f"Template deleted: {resolved}")
