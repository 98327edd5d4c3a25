"""Task management commands."""

import typer

from todoo_cli.models import TaskCreate
from todoo_cli.services.calendar_service import get_day_view, get_month_view, get_week_view
from todoo_cli.services.completion_service import is_completed_on, toggle_completion
from todoo_cli.services.config_service import get_config_service
from todoo_cli.services.ordering_service import move_task, normalize_orders
from todoo_cli.services.store import update_collection
from todoo_cli.services.task_service import (
    add_task,
    delete_task,
    find_task,
    toggle_pin,
    validate_task_text,
)
from todoo_cli.utils.dates import format_date
from todoo_cli.utils.exit_codes import ERROR_INVALID_ARGS
from todoo_cli.utils.occurrence_id import date_suffix_of
from todoo_cli.utils.recurrence import VALID_PATTERNS, resolve_rule
from todoo_cli.utils.typer_helpers import SuggestingGroup
from todoo_cli.utils.ui.formatters import (
    day_to_dict,
    format_month_grid,
    format_output,
    format_success,
    format_warning,
    task_to_row,
)
from todoo_cli.utils.uuid_utils import create_id

from .decorators import AppError, command_wrapper
from .helpers import (
    check_output_format,
    parse_date_option,
    parse_priority_option,
    parse_time_option,
    parse_weekdays,
    resolve_or_fail,
    resolve_project,
)

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")

OUTPUT_HELP = "Output format (pretty, table, json, yaml)"


@app.command("add")
@command_wrapper
def add(
    text: str = typer.Argument(..., help="Task text"),
    date: str | None = typer.Option(None, "--date", "-d", help="Date (today/tomorrow/YYYY-MM-DD)"),
    time: str | None = typer.Option(None, "--time", "-t", help="Time of day (HH:MM)"),
    priority: str | None = typer.Option(None, "--priority", "-p", help="Priority"),
    project: str | None = typer.Option(None, "--project", help="Project name or ID"),
    notes: str | None = typer.Option(None, "--notes", help="Notes"),
    recur: str | None = typer.Option(
        None, "--recur", "-r", help=f"Recurrence ({', '.join(VALID_PATTERNS)})"
    ),
    interval: int | None = typer.Option(None, "--interval", help="Repeat every N units"),
    days: str | None = typer.Option(
        None, "--days", help="Weekdays for specific-days (0=Sun, e.g. 1,3)"
    ),
    start: str | None = typer.Option(None, "--start", help="Recurrence start date"),
) -> None:
    """Add a task."""
    try:
        text = validate_task_text(text)
    except ValueError as e:
        raise AppError(str(e), ERROR_INVALID_ARGS) from e

    store = get_config_service().open_store()
    on = format_date(parse_date_option(date))

    recurring = None
    if recur is not None:
        recurring = resolve_rule(
            recur,
            interval=interval,
            specific_days=parse_weekdays(days),
            start_date=format_date(parse_date_option(start)) if start else None,
        )
        if recurring is None:
            raise AppError(
                f"Unknown recurrence '{recur}'. Choose from: {', '.join(VALID_PATTERNS)}",
                ERROR_INVALID_ARGS,
            )

    payload = TaskCreate(
        text=text,
        date=on,
        time=parse_time_option(time),
        priority=parse_priority_option(priority),
        project=resolve_project(project, store.state.projects),
        notes=notes,
        recurring=recurring,
    )
    task_id = create_id()
    store.dispatch(
        update_collection(
            "tasks", lambda tasks: normalize_orders(add_task(tasks, payload, lambda: task_id))
        )
    )
    format_success(f"Task added: {task_id}")


@app.command("today")
@command_wrapper
def today(
    date: str | None = typer.Option(None, "--date", "-d", help="Show another day"),
    output: str = typer.Option("pretty", "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Show the tasks of a day (today by default)."""
    check_output_format(output)
    state = get_config_service().open_store().state
    view = get_day_view(state.tasks, parse_date_option(date))
    format_output(day_to_dict(view, state.projects), output)


@app.command("week")
@command_wrapper
def week(
    date: str | None = typer.Option(None, "--date", "-d", help="Any day of the week"),
    offset: int = typer.Option(0, "--offset", help="Weeks before (-) or after (+)"),
    output: str = typer.Option("pretty", "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Show a Monday-to-Sunday week."""
    check_output_format(output)
    state = get_config_service().open_store().state
    views = get_week_view(state.tasks, parse_date_option(date), offset)
    format_output([day_to_dict(view, state.projects) for view in views], output)


@app.command("month")
@command_wrapper
def month(
    date: str | None = typer.Option(None, "--date", "-d", help="Any day of the month"),
    offset: int = typer.Option(0, "--offset", help="Months before (-) or after (+)"),
    output: str = typer.Option("pretty", "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Show a month calendar."""
    check_output_format(output)
    state = get_config_service().open_store().state
    weeks = get_month_view(state.tasks, parse_date_option(date), offset)

    if output in ("json", "yaml"):
        data = [
            [
                {**day_to_dict(cell, state.projects), "current_month": cell.is_current_month}
                for cell in week_cells
            ]
            for week_cells in weeks
        ]
        format_output(data, output)
        return

    shown = next(cell.date for cell in weeks[1] if cell.is_current_month)
    format_month_grid(weeks, shown.strftime("%B %Y"))


@app.command("done")
@command_wrapper
def done(
    task_id: str = typer.Argument(..., help="Task ID, prefix or occurrence ID"),
    date: str | None = typer.Option(
        None, "--date", "-d", help="Occurrence day of a recurring task"
    ),
) -> None:
    """Toggle completion of a task occurrence."""
    store = get_config_service().open_store()
    resolved = resolve_or_fail(task_id, store.state.tasks, "Task")
    task = find_task(store.state.tasks, resolved)
    # A stored id ending in a date carries no occurrence
    suffix = date_suffix_of(resolved) if resolved != task.id else None

    if task.is_recurring:
        on = suffix or format_date(parse_date_option(date))
        store.dispatch(
            update_collection("tasks", lambda tasks: toggle_completion(tasks, task.id, on))
        )
        updated = find_task(store.state.tasks, task.id)
        state_word = "done" if is_completed_on(updated, on) else "not done"
        format_success(f"{task.text} on {on} marked {state_word}")
        return

    on = suffix or (format_date(parse_date_option(date)) if date is not None else None)
    if on is not None and on != task.date:
        format_warning(f"Task is dated {task.date or 'nowhere'}, nothing changed")
        return
    store.dispatch(
        update_collection("tasks", lambda tasks: toggle_completion(tasks, task.id, on))
    )
    updated = find_task(store.state.tasks, task.id)
    format_success(f"{task.text} marked {'done' if updated.completed else 'not done'}")


@app.command("pin")
@command_wrapper
def pin(task_id: str = typer.Argument(..., help="Task ID")) -> None:
    """Pin or unpin a task."""
    store = get_config_service().open_store()
    resolved = resolve_or_fail(task_id, store.state.tasks, "Task")
    store.dispatch(update_collection("tasks", lambda tasks: toggle_pin(tasks, resolved)))
    task = find_task(store.state.tasks, resolved)
    format_success(f"{task.text} {'pinned' if task.pinned else 'unpinned'}")


@app.command("delete")
@command_wrapper
def delete(
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task (all occurrences of a recurring task)."""
    store = get_config_service().open_store()
    resolved = resolve_or_fail(task_id, store.state.tasks, "Task")
    task = find_task(store.state.tasks, resolved)

    prompt = f"Delete '{task.text}'"
    if task.is_recurring:
        prompt += " and all of its occurrences"
    if not yes and not typer.confirm(prompt + "?"):
        format_warning("Cancelled")
        raise typer.Exit(0)

    store.dispatch(update_collection("tasks", lambda tasks: delete_task(tasks, resolved)))
    format_success(f"Task deleted: {task.id}")


@app.command("move")
@command_wrapper
def move(
    task_id: str = typer.Argument(..., help="Task ID"),
    to: str = typer.Option(..., "--to", help="Destination date"),
    source: str | None = typer.Option(
        None, "--from", help="Source date (defaults to the task's date)"
    ),
    index: int | None = typer.Option(
        None, "--index", "-i", help="Position on the destination day (0 = first)"
    ),
) -> None:
    """Move a task to another day and/or position."""
    store = get_config_service().open_store()
    resolved = resolve_or_fail(task_id, store.state.tasks, "Task")
    task = find_task(store.state.tasks, resolved)

    dest_date = format_date(parse_date_option(to))
    source_date = format_date(parse_date_option(source)) if source else task.date
    position = len(store.state.tasks) if index is None else index

    store.dispatch(
        update_collection(
            "tasks",
            lambda tasks: move_task(tasks, task.id, source_date, dest_date, position),
        )
    )
    format_success(f"{task.text} moved to {dest_date}")


@app.command("show")
@command_wrapper
def show(
    task_id: str = typer.Argument(..., help="Task ID"),
    output: str = typer.Option("pretty", "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Show task details."""
    check_output_format(output)
    state = get_config_service().open_store().state
    resolved = resolve_or_fail(task_id, state.tasks, "Task")
    task = find_task(state.tasks, resolved)

    row = task_to_row(task, date_suffix_of(resolved), state.projects)
    row["notes"] = task.notes
    row["subtasks"] = [
        f"{'✓' if sub.completed else '○'} {sub.text}" for sub in task.sub_tasks
    ]
    if task.is_recurring:
        row["completed_on"] = sorted(task.completed_on)
    format_output(row, output)
