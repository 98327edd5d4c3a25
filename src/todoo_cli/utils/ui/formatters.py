"""Output formatters for different formats."""

import json
from collections.abc import Iterable, Sequence
from typing import Any

import yaml
from rich.console import Console
from rich.table import Table
from rich.text import Text

from todoo_cli.models import DayView, MonthCell, Project, Task
from todoo_cli.services.completion_service import (
    completion_stats_for_days,
    is_completed_on,
)
from todoo_cli.utils.dates import format_date
from todoo_cli.utils.occurrence_id import make_virtual_id, parse_occurrence_id
from todoo_cli.utils.recurrence import describe_rule
from todoo_cli.utils.uuid_utils import shorten_uuid

console = Console()

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml")


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    elif output_format == "table":
        format_table(data)
    else:
        format_pretty(data)


# ============================================================================
# Row builders
# ============================================================================


def task_display_id(task: Task, day: str | None) -> str:
    """Id shown for a task on *day*: recurring tasks get an occurrence id."""
    if task.is_recurring and day:
        return make_virtual_id(task.id, day)
    return task.id


def task_to_row(
    task: Task, day: str | None = None, projects: Sequence[Project] = ()
) -> dict:
    """Flatten a task occurrence into a display row."""
    project_names = {p.id: p.name for p in projects}
    done = is_completed_on(task, day) if day else task.completed
    return {
        "id": task_display_id(task, day),
        "text": task.text,
        "date": day or task.date,
        "time": task.time,
        "priority": task.priority,
        "project": project_names.get(task.project, task.project) if task.project else None,
        "done": done,
        "pinned": task.pinned,
        "repeat": describe_rule(task.recurring) or None,
        "order": task.order,
    }


def day_to_dict(day: DayView, projects: Sequence[Project] = ()) -> dict:
    key = format_date(day.date)
    stats = completion_stats_for_days([day])
    return {
        "date": key,
        "completed": stats.completed,
        "total": stats.total,
        "tasks": [task_to_row(task, key, projects) for task in day.tasks],
    }


def project_to_row(project: Project, tasks: Iterable[Task] = ()) -> dict:
    return {
        "id": project.id,
        "name": project.name,
        "color": project.color,
        "tasks": sum(1 for task in tasks if task.project == project.id),
    }


# ============================================================================
# Table Format
# ============================================================================


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict) and "tasks" in data[0] and "date" in data[0]:
            for day in data:
                console.print(f"[bold cyan]{day['date']}[/bold cyan]")
                format_dict_table(day["tasks"])
        elif isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        if "tasks" in data and isinstance(data["tasks"], list):
            format_dict_table(data["tasks"])
        else:
            format_single_item(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title(), overflow="fold")
    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))
    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white", overflow="fold")
    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))
    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


# ============================================================================
# Pretty Format Implementation
# ============================================================================

PRIORITY_ICONS = {
    "highest": "🔴",
    "high": "🟠",
    "medium": "🟡",
    "low": "🟢",
    "lowest": "⚪",
}

PRIORITY_COLORS = {
    "highest": "bold red",
    "high": "bold orange3",
    "medium": "yellow",
    "low": "green",
    "lowest": "dim",
}

STATUS_ICONS = {
    "open": "⬜",
    "completed": "☑️",
    "recurring": "🔄",
    "pinned": "📌",
}


def format_pretty(data: Any) -> None:
    """Format data in pretty format with colors and icons."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        first = data[0]
        if isinstance(first, dict) and "tasks" in first and "date" in first:
            format_days_pretty(data)
        elif isinstance(first, dict) and "text" in first and "done" in first:
            for task in data:
                format_task_item(task, indent="  ")
        elif isinstance(first, dict) and "color" in first:
            format_projects_pretty(data)
        else:
            format_generic_list_pretty(data)
    elif isinstance(data, dict):
        if "tasks" in data and "date" in data:
            format_day_pretty(data)
        else:
            format_single_item(data)
    else:
        console.print(data)


def format_day_pretty(day: dict) -> None:
    """Format one day of tasks."""
    header = Text()
    header.append(f"📅 {day['date']} ", style="bold cyan")
    header.append(f"({day['completed']}/{day['total']} done)", style="dim")
    console.print(header)
    if not day["tasks"]:
        console.print("  [dim]Nothing planned[/dim]")
    for task in day["tasks"]:
        format_task_item(task, indent="  ")


def format_days_pretty(days: list[dict]) -> None:
    total = sum(day["total"] for day in days)
    done = sum(day["completed"] for day in days)
    pct = round(done / total * 100) if total else 0
    console.print(
        Text.from_markup(
            f"[bold]Week[/bold] {get_progress_bar(pct)} "
            f"[{get_completion_color(pct)}]{pct}%[/{get_completion_color(pct)}] "
            f"[dim]({done}/{total})[/dim]"
        )
    )
    console.print()
    for day in days:
        format_day_pretty(day)
        console.print()


def format_task_item(task: dict, indent: str = "") -> None:
    """Format a single task row."""
    if task.get("done"):
        status_icon = STATUS_ICONS["completed"]
    elif task.get("repeat"):
        status_icon = STATUS_ICONS["recurring"]
    else:
        status_icon = STATUS_ICONS["open"]

    line = Text(f"{indent}{status_icon} ")
    if task.get("time"):
        line.append(f"{task['time']} ", style="cyan")
    line.append(task.get("text") or "Untitled", style="dim" if task.get("done") else "")
    if task.get("pinned"):
        line.append(f" {STATUS_ICONS['pinned']}")
    console.print(line)

    priority = task.get("priority") or "medium"
    meta = [(f"{PRIORITY_ICONS.get(priority, '')} {priority}", PRIORITY_COLORS.get(priority, ""))]
    if task.get("project"):
        meta.append((f"📁 {task['project']}", "blue"))
    if task.get("repeat"):
        meta.append((task["repeat"], "magenta"))
    if task.get("id"):
        meta.append((f"#{short_display_id(task['id'])}", "dim"))

    meta_line = Text()
    meta_line.append(f"{indent}   └─ ", style="dim")
    for i, (text, style) in enumerate(meta):
        if i > 0:
            meta_line.append(" • ", style="dim")
        meta_line.append(text, style=style)
    console.print(meta_line)


def format_projects_pretty(projects: list[dict]) -> None:
    """Format projects in pretty format."""
    header = Text()
    header.append("📁 Projects ", style="bold cyan")
    header.append(f"({len(projects)})", style="dim")
    console.print(header)
    console.print()
    for project in projects:
        line = Text("  ")
        line.append("● ", style=project.get("color") or "white")
        line.append(project.get("name", "Untitled"), style="bold")
        line.append(f"  {project.get('tasks', 0)} tasks", style="dim")
        line.append(f"  #{shorten_uuid(project.get('id', ''))}", style="dim")
        console.print(line)


def format_generic_list_pretty(items: list) -> None:
    """Format generic list of items."""
    for item in items:
        if isinstance(item, dict) and "name" in item:
            console.print(f"• {item['name']}  [dim]#{shorten_uuid(item.get('id', ''))}[/dim]")
        else:
            console.print(f"• {item}")


def format_month_grid(weeks: list[list[MonthCell]], title: str) -> None:
    """Render a month grid as a Monday-first calendar table."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for name in ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"):
        table.add_column(name, justify="center")
    for week in weeks:
        cells = []
        for cell in week:
            stats = completion_stats_for_days([cell])
            label = str(cell.date.day)
            if stats.total:
                label += f"\n{stats.completed}/{stats.total}"
            cells.append(label if cell.is_current_month else f"[dim]{label}[/dim]")
        table.add_row(*cells)
    console.print(table)


def short_display_id(task_id: str) -> str:
    """Shorten the base part of an id, keeping an occurrence date suffix."""
    ref = parse_occurrence_id(task_id)
    if ref is None:
        return shorten_uuid(task_id)
    return f"{shorten_uuid(ref.base_id)}-{ref.date}"


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = int(percentage / 10)
    empty = 10 - filled
    return "▓" * filled + "░" * empty


def get_completion_color(percentage: float) -> str:
    """Get color based on completion percentage."""
    if percentage >= 80:
        return "green"
    if percentage >= 40:
        return "yellow"
    return "red"
