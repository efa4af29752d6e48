"""Schedule commands: show-schedule, generate, set-day, clear-day."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.catalog import load_catalog
from ...core.cycle_clock import current_cycle_day
from ...core.errors import InvalidConfig
from ...core.generator import generate_schedule, to_selection
from ...core.models import UserPreferences, WorkoutSelection
from ...core.schedule import add_selection, remove_selection, scheduled_for_day, set_rest
from ...io.serializers import ValidationError, schedule_to_dict
from .. import views
from ..app import DataDirOption, JsonOption, app, require_store

CatalogOption = Annotated[
    Optional[Path],
    typer.Option("--catalog", help="Workout catalog YAML (default: bundled)"),
]


@app.command("show-schedule")
def show_schedule(
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show the full cycle with today's day highlighted.
    """
    store = require_store(data_dir)

    try:
        config = store.load_profile()
        schedule = store.load_schedule()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps(schedule_to_dict(schedule), indent=2))
        return

    views.print_schedule(schedule, config.cycle_length, current_cycle_day(config))


@app.command()
def generate(
    data_dir: DataDirOption = None,
    focus: Annotated[
        Optional[str],
        typer.Option("--focus", help="all-weights, all-cardio or mix (default: profile)"),
    ] = None,
    rest_days: Annotated[
        Optional[int],
        typer.Option("--rest-days", help="Rest days per cycle (default: profile)"),
    ] = None,
    mobility: Annotated[
        Optional[bool],
        typer.Option("--mobility/--no-mobility", help="Add mobility sessions"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show the draft without saving it"),
    ] = False,
    catalog_path: CatalogOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Auto-generate a full cycle and replace the saved schedule.
    """
    store = require_store(data_dir)

    try:
        config = store.load_profile()
        saved = store.load_preferences()
        preferences = UserPreferences(
            focus=focus or saved.focus,
            rest_days=rest_days if rest_days is not None else saved.rest_days,
            include_mobility=mobility if mobility is not None else saved.include_mobility,
        )
        schedule = generate_schedule(config.cycle_length, load_catalog(catalog_path), preferences)
    except (InvalidConfig, ValidationError) as e:
        views.print_error(f"Couldn't build your schedule: {e}")
        raise typer.Exit(1)

    if not dry_run:
        store.save_schedule(schedule)

    if json_out:
        print(json.dumps(schedule_to_dict(schedule), indent=2))
        return

    views.print_schedule(schedule, config.cycle_length, current_cycle_day(config))
    if dry_run:
        views.print_info("Dry run: schedule not saved.")
    else:
        views.print_success("Schedule saved.")


@app.command("set-day")
def set_day(
    day: Annotated[int, typer.Argument(help="Cycle day number")],
    data_dir: DataDirOption = None,
    rest: Annotated[
        bool,
        typer.Option("--rest", help="Make this a rest day (replaces everything)"),
    ] = False,
    add: Annotated[
        Optional[list[str]],
        typer.Option("--add", "-a", help="Catalog id to add (repeatable)"),
    ] = None,
    remove: Annotated[
        Optional[list[str]],
        typer.Option("--remove", "-r", help="Catalog id to remove (repeatable)"),
    ] = None,
    catalog_path: CatalogOption = None,
) -> None:
    """
    Edit one cycle day.

    --rest replaces the day's workouts; adding a workout to a rest day
    replaces the rest marker.
    """
    store = require_store(data_dir)

    try:
        config = store.load_profile()
        schedule = store.load_schedule()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if not 1 <= day <= config.cycle_length:
        views.print_error(f"Day must be between 1 and {config.cycle_length}")
        raise typer.Exit(1)

    selections: list[WorkoutSelection] = scheduled_for_day(schedule, day)
    if rest:
        selections = set_rest(selections)

    catalog = load_catalog(catalog_path)
    for ref in add or []:
        found = catalog.find(ref)
        if found is None:
            views.print_error(f"Unknown workout '{ref}'")
            raise typer.Exit(1)
        kind, entry = found
        selections = add_selection(selections, to_selection(kind, entry))

    for ref in remove or []:
        selections = remove_selection(selections, ref)

    if selections:
        try:
            advisory = store.upsert_day(day, selections)
        except ValidationError as e:
            views.print_error(str(e))
            raise typer.Exit(1)
        if advisory:
            views.print_warning(advisory)
    else:
        store.delete_day(day)

    views.print_success(f"Day {day} updated.")


@app.command("clear-day")
def clear_day(
    day: Annotated[int, typer.Argument(help="Cycle day number")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Mark a cycle day as not configured.
    """
    store = require_store(data_dir)
    store.delete_day(day)
    views.print_success(f"Day {day} cleared.")
