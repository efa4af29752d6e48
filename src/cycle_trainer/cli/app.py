"""Shared Typer app object, shared option types, and store utilities."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..io.schedule_store import ScheduleStore, get_default_data_dir
from . import views

# Shared --data-dir option type used across all commands
DataDirOption = Annotated[
    Optional[Path],
    typer.Option("--data-dir", "-d", help="Directory holding profile, schedule and sessions"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="cycle-trainer",
    help="Repeating N-day training cycle planner with streaks and stats.",
    no_args_is_help=True,
)


def get_store(data_dir: Path | None) -> ScheduleStore:
    """Get a store for the given directory or the default location."""
    if data_dir is None:
        data_dir = get_default_data_dir()
    return ScheduleStore(data_dir)


def require_store(data_dir: Path | None) -> ScheduleStore:
    """Like get_store(), but exit with an error when no profile exists yet."""
    store = get_store(data_dir)
    if not store.exists():
        views.print_error(f"Profile not found in {store.data_dir}")
        views.print_info("Run 'init' first to create a profile and schedule.")
        raise typer.Exit(1)
    return store
