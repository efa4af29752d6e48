"""Profile commands: init, today."""

import json
from pathlib import Path
from typing import Annotated, Optional
from zoneinfo import ZoneInfoNotFoundError

import typer

from ...core.catalog import load_catalog
from ...core.cycle_clock import compute_cycle_day, today_in_timezone
from ...core.engine.config_loader import load_defaults
from ...core.errors import InvalidConfig
from ...core.generator import default_schedule
from ...core.models import CycleConfig, UserPreferences
from ...core.schedule import day_name, scheduled_for_day
from ...io.serializers import ValidationError, selection_to_dict
from .. import views
from ..app import DataDirOption, JsonOption, app, get_store, require_store


@app.command()
def init(
    data_dir: DataDirOption = None,
    cycle_length: Annotated[
        Optional[int],
        typer.Option("--cycle-length", "-n", help="Days in the training cycle"),
    ] = None,
    start_date: Annotated[
        Optional[str],
        typer.Option("--start-date", help="Cycle day 1 (YYYY-MM-DD, default: today)"),
    ] = None,
    timezone: Annotated[
        Optional[str],
        typer.Option("--timezone", "-z", help="IANA time zone, e.g. America/Chicago"),
    ] = None,
    focus: Annotated[
        Optional[str],
        typer.Option("--focus", help="Default focus: all-weights, all-cardio, mix"),
    ] = None,
    rest_days: Annotated[
        Optional[int],
        typer.Option("--rest-days", help="Default rest days per cycle"),
    ] = None,
    mobility: Annotated[
        Optional[bool],
        typer.Option("--mobility/--no-mobility", help="Include mobility by default"),
    ] = None,
    catalog_path: Annotated[
        Optional[Path],
        typer.Option("--catalog", help="Workout catalog YAML (default: bundled)"),
    ] = None,
) -> None:
    """
    Create or update the profile and seed a default schedule.

    The default schedule (weights days with evenly spread rest) is
    written when no schedule exists yet, and again whenever the cycle
    length changes so no day beyond the new cycle is left behind.
    """
    defaults = load_defaults()
    cycle_defaults = defaults.get("cycle", {})
    pref_defaults = defaults.get("preferences", {})

    tz = timezone or cycle_defaults.get("timezone", "UTC")
    n = cycle_length if cycle_length is not None else int(cycle_defaults.get("cycle_length", 7))
    if rest_days is None:
        rest_days = min(int(pref_defaults.get("rest_days", 2)), max(n - 1, 1))

    try:
        config = CycleConfig(
            cycle_length=n,
            start_date=start_date or today_in_timezone(tz).isoformat(),
            timezone=tz,
        )
        preferences = UserPreferences(
            focus=focus or pref_defaults.get("focus", "mix"),
            rest_days=rest_days,
            include_mobility=mobility if mobility is not None else bool(pref_defaults.get("include_mobility", False)),
        )
        preferences.check_against(n)
    except (InvalidConfig, ValueError, ZoneInfoNotFoundError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store = get_store(data_dir)
    try:
        previous = store.load_profile().cycle_length if store.exists() else None
        store.init()
        store.save_profile(config, preferences)
        schedule = store.load_schedule()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if not schedule or (previous is not None and previous != n):
        store.save_schedule(default_schedule(n, load_catalog(catalog_path)))
        views.print_info("Seeded the default schedule.")

    views.print_success(
        f"Profile saved: {n}-day cycle starting {config.start_date} ({config.timezone})"
    )


@app.command()
def today(
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show today's cycle day and scheduled workouts.
    """
    store = require_store(data_dir)

    try:
        config = store.load_profile()
        schedule = store.load_schedule()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    cycle_day = compute_cycle_day(config, today_in_timezone(config.timezone))
    selections = scheduled_for_day(schedule, cycle_day)

    if json_out:
        print(json.dumps({
            "cycle_day": cycle_day,
            "cycle_length": config.cycle_length,
            "day_name": day_name(cycle_day),
            "selections": [selection_to_dict(s) for s in selections],
        }, indent=2))
        return

    views.print_today(cycle_day, config.cycle_length, selections)
