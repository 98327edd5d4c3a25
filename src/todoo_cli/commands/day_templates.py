"""Day template commands.

A day template is a named set of tasks for particular weekdays or dates,
applied to a day on request.
"""

import typer

from todoo_cli.models import DayTemplateWhen, TaskBlueprint
from todoo_cli.services.config_service import get_config_service
from todoo_cli.services.day_template_service import (
    add_blueprint,
    apply_day_template,
    create_day_template,
    delete_day_template,
    find_applicable_templates,
)
from todoo_cli.services.ordering_service import normalize_orders
from todoo_cli.services.store import update_collection
from todoo_cli.services.task_service import add_task
from todoo_cli.utils.dates import format_date
from todoo_cli.utils.exit_codes import ERROR_INVALID_ARGS
from todoo_cli.utils.recurrence import WEEKDAY_NAMES
from todoo_cli.utils.typer_helpers import SuggestingGroup
from todoo_cli.utils.ui.formatters import format_info, format_output, format_success
from todoo_cli.utils.uuid_utils import create_id

from .decorators import AppError, command_wrapper
from .helpers import (
    check_output_format,
    parse_date_list,
    parse_date_option,
    parse_priority_option,
    parse_time_option,
    parse_weekdays,
    resolve_or_fail,
    resolve_project,
)

app = typer.Typer(cls=SuggestingGroup, help="Day template commands")


@app.command("create")
@command_wrapper
def create(
    name: str = typer.Argument(..., help="Template name"),
    weekdays: str | None = typer.Option(
        None, "--weekdays", "-w", help="Weekdays it applies on (0=Sun, e.g. 1,3)"
    ),
    dates: str | None = typer.Option(
        None, "--dates", help="Dates it applies on (comma separated YYYY-MM-DD)"
    ),
) -> None:
    """Create an empty day template."""
    if not name.strip():
        raise AppError("Template name cannot be empty", ERROR_INVALID_ARGS)

    when = DayTemplateWhen(weekdays=parse_weekdays(weekdays), dates=parse_date_list(dates))
    template_id = create_id()
    store = get_config_service().open_store()
    store.dispatch(
        update_collection(
            "day_templates",
            lambda templates: create_day_template(templates, name, lambda: template_id, when),
        )
    )
    format_success(f"Day template created: {template_id}")


@app.command("add-task")
@command_wrapper
def add_task_to_template(
    template_id: str = typer.Argument(..., help="Day template ID"),
    text: str = typer.Argument(..., help="Task text"),
    time: str | None = typer.Option(None, "--time", "-t", help="Time of day (HH:MM)"),
    priority: str | None = typer.Option(None, "--priority", "-p", help="Priority"),
    project: str | None = typer.Option(None, "--project", help="Project name or ID"),
    notes: str | None = typer.Option(None, "--notes", help="Notes"),
) -> None:
    """Add a task blueprint to a day template."""
    if not text.strip():
        raise AppError("Task text cannot be empty", ERROR_INVALID_ARGS)

    store = get_config_service().open_store()
    resolved = resolve_or_fail(template_id, store.state.day_templates, "Day template")
    blueprint = TaskBlueprint(
        text=text,
        time=parse_time_option(time),
        priority=parse_priority_option(priority),
        project=resolve_project(project, store.state.projects),
        notes=notes,
    )
    store.dispatch(
        update_collection(
            "day_templates", lambda templates: add_blueprint(templates, resolved, blueprint)
        )
    )
    format_success(f"Added '{text.strip()}' to day template {resolved}")


def _describe_when(when: DayTemplateWhen) -> str:
    parts = [WEEKDAY_NAMES[d] for d in sorted(when.weekdays) if 0 <= d <= 6]
    parts.extend(sorted(when.dates))
    return ", ".join(parts) if parts else "on demand"


@app.command("list")
@command_wrapper
def list_day_templates(
    date: str | None = typer.Option(
        None, "--date", "-d", help="Only templates that apply on this day"
    ),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """List day templates."""
    check_output_format(output)
    templates = get_config_service().open_store().state.day_templates
    if date is not None:
        templates = find_applicable_templates(parse_date_option(date), templates)
    rows = [
        {
            "id": t.id,
            "name": t.name,
            "applies": _describe_when(t.when),
            "tasks": [b.text for b in t.tasks],
        }
        for t in templates
    ]
    format_output(rows, output)


@app.command("apply")
@command_wrapper
def apply(
    template_id: str = typer.Argument(..., help="Day template ID"),
    date: str | None = typer.Option(None, "--date", "-d", help="Day to apply it to"),
    dedupe: bool | None = typer.Option(
        None, "--dedupe/--no-dedupe", help="Skip tasks that already exist on the day"
    ),
) -> None:
    """Create the template's tasks on a day."""
    config_service = get_config_service()
    store = config_service.open_store()
    resolved = resolve_or_fail(template_id, store.state.day_templates, "Day template")
    template = next(t for t in store.state.day_templates if t.id == resolved)
    on = parse_date_option(date)
    if dedupe is None:
        dedupe = config_service.config.dedupe_day_templates

    payloads = []
    result = apply_day_template(
        on, template, store.state.tasks, payloads.append, dedupe=dedupe
    )

    def add_all(tasks):
        for payload in payloads:
            tasks = add_task(tasks, payload)
        return normalize_orders(tasks)

    store.dispatch(update_collection("tasks", add_all))
    format_success(
        f"Applied '{template.name}' on {format_date(on)}: {result.added} added"
    )
    if result.skipped:
        format_info(f"{result.skipped} already present, skipped")


@app.command("delete")
@command_wrapper
def delete(template_id: str = typer.Argument(..., help="Day template ID")) -> None:
    """Delete a day template."""
    store = get_config_service().open_store()
    resolved = resolve_or_fail(template_id, store.state.day_templates, "Day template")
    store.dispatch(
        update_collection(
            "day_templates", lambda templates: delete_day_template(templates, resolved)
        )
    )
    format_success(f"Day template deleted: {resolved}")
