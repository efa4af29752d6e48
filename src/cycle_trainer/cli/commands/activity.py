"""Activity commands: log-session, complete-session, history, stats, template-stats."""

import json
import uuid
from dataclasses import asdict
from datetime import datetime
from typing import Annotated, Optional
from zoneinfo import ZoneInfo

import typer

from ...core.analytics import (
    calculate_streak,
    get_lifetime_stats,
    get_template_stats,
    get_weekly_count,
)
from ...core.catalog import load_catalog
from ...core.config import STREAK_LOOKBACK_DAYS, WEEK_START_DAY
from ...core.cycle_clock import compute_cycle_day, today_in_timezone
from ...core.engine.config_loader import load_defaults
from ...core.models import SessionRecord
from ...io.serializers import ValidationError
from .. import views
from ..app import DataDirOption, JsonOption, app, require_store


def _analytics_settings() -> tuple[int, int]:
    """(streak lookback days, week start day) from the merged defaults."""
    analytics = load_defaults().get("analytics", {})
    return (
        int(analytics.get("streak_lookback_days", STREAK_LOOKBACK_DAYS)),
        int(analytics.get("week_start_day", WEEK_START_DAY)),
    )


@app.command("log-session")
def log_session(
    ref: Annotated[str, typer.Argument(help="Catalog id of the workout done")],
    data_dir: DataDirOption = None,
    at: Annotated[
        Optional[str],
        typer.Option("--at", help="Completion time, ISO-8601 (default: now)"),
    ] = None,
    started: Annotated[
        bool,
        typer.Option("--started", help="Record as started but not yet completed"),
    ] = False,
) -> None:
    """
    Log a workout session.
    """
    store = require_store(data_dir)

    try:
        config = store.load_profile()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if at is None:
        at = datetime.now(ZoneInfo(config.timezone)).isoformat(timespec="seconds")
    else:
        try:
            datetime.fromisoformat(at)
        except ValueError:
            views.print_error(f"Invalid timestamp: {at}")
            raise typer.Exit(1)

    found = load_catalog().find(ref)
    kind, label = (found[0], found[1].name) if found else (None, None)

    session = SessionRecord(
        id=uuid.uuid4().hex[:12],
        ref=ref,
        started_at=at,
        completed_at=None if started else at,
        label=label,
        kind=kind,
    )
    try:
        store.append_session(session)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    state = "Started" if started else "Logged"
    views.print_success(f"{state} {label or ref} ({session.id})")


@app.command("complete-session")
def complete_session(
    session_id: Annotated[str, typer.Argument(help="Id printed by log-session --started")],
    data_dir: DataDirOption = None,
    at: Annotated[
        Optional[str],
        typer.Option("--at", help="Completion time, ISO-8601 (default: now)"),
    ] = None,
) -> None:
    """
    Mark a started session as completed.
    """
    store = require_store(data_dir)

    try:
        config = store.load_profile()
        at = at or datetime.now(ZoneInfo(config.timezone)).isoformat(timespec="seconds")
        store.complete_session(session_id, at)
    except KeyError:
        views.print_error(f"No session with id {session_id}")
        raise typer.Exit(1)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Completed {session_id}")


@app.command()
def history(
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show all logged sessions.
    """
    store = require_store(data_dir)

    try:
        sessions = store.load_sessions()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps([asdict(s) for s in sessions], indent=2))
        return

    views.print_history(sessions)


@app.command()
def stats(
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show current streak, this week's active days and lifetime totals.
    """
    store = require_store(data_dir)

    try:
        config = store.load_profile()
        sessions = store.load_sessions()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    lookback, week_start_day = _analytics_settings()
    today_date = today_in_timezone(config.timezone)

    streak = calculate_streak(sessions, today_date, lookback, timezone=config.timezone)
    weekly = get_weekly_count(sessions, today_date, week_start_day, timezone=config.timezone)
    lifetime = get_lifetime_stats(sessions, timezone=config.timezone)

    if json_out:
        print(json.dumps({
            "current_streak": streak,
            "weekly_count": weekly,
            **asdict(lifetime),
        }, indent=2))
        return

    views.print_activity_stats(streak, weekly, lifetime)


@app.command("template-stats")
def template_stats(
    ref: Annotated[str, typer.Argument(help="Catalog id of the workout")],
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show history and next scheduled day for one workout.
    """
    store = require_store(data_dir)

    try:
        config = store.load_profile()
        schedule = store.load_schedule()
        sessions = store.load_sessions()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    _, week_start_day = _analytics_settings()
    today_date = today_in_timezone(config.timezone)

    result = get_template_stats(
        ref,
        sessions,
        schedule,
        compute_cycle_day(config, today_date),
        reference_date=today_date,
        cycle_length=config.cycle_length,
        week_start_day=week_start_day,
        timezone=config.timezone,
    )

    if json_out:
        print(json.dumps(asdict(result), indent=2))
        return

    found = load_catalog().find(ref)
    views.print_template_stats(found[1].name if found else ref, result)
