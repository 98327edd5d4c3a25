"""Main entry point for Todoo CLI."""

import typer
from rich.console import Console

from todoo_cli import __version__
from todoo_cli.commands import day_templates, projects, tasks, templates
from todoo_cli.utils.typer_helpers import SuggestingGroup

# Create main app with custom group class
app = typer.Typer(
    name="todoo",
    cls=SuggestingGroup,
    help="Plan your days: tasks, recurring tasks and day templates",
    no_args_is_help=True,
)

console = Console()


# Add subcommands
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(projects.app, name="projects", help="Project management commands")
app.add_typer(templates.app, name="templates", help="Manage task templates")
app.add_typer(
    day_templates.app, name="day-templates", help="Task sets for weekdays or dates"
)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Todoo CLI[/bold] version [cyan]{__version__}[/cyan]")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
