"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of schedules, sessions and stats.
"""

from rich.console import Console
from rich.table import Table

from ..core.models import LifetimeStats, Schedule, SessionRecord, TemplateStats, WorkoutSelection
from ..core.schedule import day_name, validate_assignment

console = Console()

_KIND_STYLES = {
    "rest": "dim",
    "weights": "bold magenta",
    "cardio": "bold cyan",
    "mobility": "green",
}


def _fmt_selection(selection: WorkoutSelection) -> str:
    style = _KIND_STYLES.get(selection.kind, "")
    label = selection.label or selection.ref or selection.kind
    return f"[{style}]{label}[/{style}]" if style else label


def _fmt_selections(selections: list[WorkoutSelection]) -> str:
    if not selections:
        return "[dim]Not set[/dim]"
    return " + ".join(_fmt_selection(s) for s in selections)


def format_schedule_table(
    schedule: Schedule,
    cycle_length: int,
    current_day: int | None = None,
) -> Table:
    """
    Format a full cycle as a Rich table.

    Unconfigured days show as "Not set"; today's row is marked with an
    arrow and days with three or more workouts get a warning marker.
    """
    table = Table(title=f"{cycle_length}-day cycle", show_header=True, header_style="bold")
    table.add_column("", width=2)
    table.add_column("Day", justify="right")
    table.add_column("Name")
    table.add_column("Workouts")

    for day in range(1, cycle_length + 1):
        selections = schedule.get(day, [])
        marker = "→" if day == current_day else ""
        workouts = _fmt_selections(selections)
        if validate_assignment(selections).advisory:
            workouts += " [yellow]⚠[/yellow]"
        table.add_row(marker, str(day), day_name(day), workouts)

    return table


def print_schedule(schedule: Schedule, cycle_length: int, current_day: int | None = None) -> None:
    console.print()
    console.print(format_schedule_table(schedule, cycle_length, current_day))
    console.print()


def print_today(cycle_day: int, cycle_length: int, selections: list[WorkoutSelection]) -> None:
    """Print today's cycle position and assignment."""
    console.print()
    console.print(f"[bold]Day {cycle_day} of {cycle_length}[/bold] ({day_name(cycle_day)})")
    console.print(f"  {_fmt_selections(selections)}")
    console.print()


def format_session_table(sessions: list[SessionRecord]) -> Table:
    """Format session history as a Rich table."""
    table = Table(title="Session History", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Workout")
    table.add_column("Started")
    table.add_column("Completed")

    for i, s in enumerate(sessions, 1):
        completed = s.completed_at or "[yellow]in progress[/yellow]"
        table.add_row(str(i), s.label or s.ref, s.started_at, completed)

    return table


def print_history(sessions: list[SessionRecord]) -> None:
    if not sessions:
        print_info("No sessions logged yet.")
        return
    console.print()
    console.print(format_session_table(sessions))
    console.print()


def print_activity_stats(streak: int, weekly_count: int, lifetime: LifetimeStats) -> None:
    """Print streak, weekly and lifetime stats."""
    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Current streak", f"{streak} day{'s' if streak != 1 else ''}")
    table.add_row("Active days this week", str(weekly_count))
    table.add_row("Total workouts", str(lifetime.total_workouts))
    table.add_row("Longest streak", str(lifetime.longest_streak))
    table.add_row("Favorite", lifetime.favorite)
    console.print()
    console.print(table)
    console.print()


def print_template_stats(label: str, stats: TemplateStats) -> None:
    """Print the per-template card."""
    console.print()
    console.print(f"[bold]{label}[/bold]")
    console.print(f"  {stats.summary}")
    if stats.last_session is not None:
        console.print(f"  Last completed: {stats.last_session.completed_at}")
    console.print(f"  This week: {stats.weekly_count}")
    if stats.next_scheduled_day is None:
        console.print("  [dim]Not scheduled in this cycle[/dim]")
    else:
        day = stats.next_scheduled_day
        console.print(f"  Next: day {day} ({day_name(day)})")
    console.print()


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")

