"""
JSON serialization for cycle-trainer data models.

Handles conversion between dataclasses and JSON-compatible dicts.
"""

import json
import re
from datetime import datetime
from typing import Any

from ..core.config import FOCUS_OPTIONS, SELECTION_KINDS, WORKOUT_KINDS
from ..core.errors import InvalidConfig
from ..core.models import (
    CycleConfig,
    Schedule,
    SessionRecord,
    UserPreferences,
    WorkoutSelection,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_kind(kind: str, allowed: tuple[str, ...] = SELECTION_KINDS) -> str:
    """
    Validate a selection / workout kind.

    Raises:
        ValidationError: If kind is not one of *allowed*
    """
    if kind not in allowed:
        raise ValidationError(f"Invalid kind: {kind!r}. Must be one of {allowed}")
    return kind


def validate_day_number(value: Any) -> int:
    """
    Validate a cycle day number (JSON object keys arrive as strings).

    Raises:
        ValidationError: If value is not a positive integer
    """
    try:
        day = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid day number: {value!r}") from e
    if day < 1:
        raise ValidationError(f"Day number must be positive, got {day}")
    return day


def cycle_config_to_dict(config: CycleConfig) -> dict[str, Any]:
    return {
        "cycle_length": config.cycle_length,
        "start_date": config.start_date,
        "timezone": config.timezone,
    }


def dict_to_cycle_config(data: dict[str, Any]) -> CycleConfig:
    """
    Convert dict to CycleConfig.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        return CycleConfig(
            cycle_length=int(data["cycle_length"]),
            start_date=validate_date(data["start_date"]),
            timezone=str(data.get("timezone", "UTC")),
        )
    except (KeyError, TypeError, ValueError, InvalidConfig) as e:
        raise ValidationError(f"Invalid cycle config: {e}") from e


def preferences_to_dict(preferences: UserPreferences) -> dict[str, Any]:
    return {
        "focus": preferences.focus,
        "rest_days": preferences.rest_days,
        "include_mobility": preferences.include_mobility,
    }


def dict_to_preferences(data: dict[str, Any]) -> UserPreferences:
    """
    Convert dict to UserPreferences.

    Raises:
        ValidationError: If data is invalid
    """
    focus = data.get("focus", "mix")
    if focus not in FOCUS_OPTIONS:
        raise ValidationError(f"Invalid focus: {focus!r}. Must be one of {FOCUS_OPTIONS}")
    try:
        return UserPreferences(
            focus=focus,
            rest_days=int(data.get("rest_days", 2)),
            include_mobility=bool(data.get("include_mobility", False)),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid preferences: {e}") from e


def selection_to_dict(selection: WorkoutSelection) -> dict[str, Any]:
    """
    Convert WorkoutSelection to JSON-compatible dict.

    Rest is stored compactly as {"kind": "rest"}.
    """
    if selection.is_rest:
        return {"kind": "rest"}
    d: dict[str, Any] = {
        "kind": selection.kind,
        "ref": selection.ref,
        "label": selection.label,
    }
    if selection.category is not None:
        d["category"] = selection.category
    return d


def dict_to_selection(data: dict[str, Any]) -> WorkoutSelection:
    """
    Convert dict to WorkoutSelection.

    Raises:
        ValidationError: If data is invalid
    """
    kind = validate_kind(data.get("kind", ""))
    if kind == "rest":
        return WorkoutSelection.rest()
    try:
        return WorkoutSelection(
            kind=kind,  # type: ignore[arg-type]
            ref=str(data["ref"]),
            label=str(data.get("label", data["ref"])),
            category=data.get("category"),
        )
    except (KeyError, ValueError) as e:
        raise ValidationError(f"Invalid selection {data!r}: {e}") from e


def schedule_to_dict(schedule: Schedule) -> dict[str, Any]:
    """Convert a schedule to {"<day>": [selection, ...]} ordered by day."""
    return {
        str(day): [selection_to_dict(s) for s in schedule[day]]
        for day in sorted(schedule)
    }


def dict_to_schedule(data: dict[str, Any]) -> Schedule:
    """
    Convert dict to a schedule mapping.

    Raises:
        ValidationError: If any day or selection is invalid
    """
    schedule: Schedule = {}
    for key, raw in data.items():
        day = validate_day_number(key)
        if not isinstance(raw, list):
            raise ValidationError(f"Day {day}: expected a list of selections")
        schedule[day] = [dict_to_selection(s) for s in raw]
    return dict(sorted(schedule.items()))


def session_to_dict(session: SessionRecord) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": session.id,
        "ref": session.ref,
        "started_at": session.started_at,
        "completed_at": session.completed_at,
    }
    if session.label is not None:
        d["label"] = session.label
    if session.kind is not None:
        d["kind"] = session.kind
    return d


def dict_to_session(data: dict[str, Any]) -> SessionRecord:
    """
    Convert dict to SessionRecord.

    completed_at is kept verbatim; a malformed value is only detected
    (and skipped) by the analytics that read it.

    Raises:
        ValidationError: If a required field is missing
    """
    for key in ("id", "ref", "started_at"):
        if not data.get(key):
            raise ValidationError(f"Session record missing {key!r}")
    kind = data.get("kind")
    if kind is not None:
        validate_kind(kind, WORKOUT_KINDS)
    completed_at = data.get("completed_at")
    return SessionRecord(
        id=str(data["id"]),
        ref=str(data["ref"]),
        started_at=str(data["started_at"]),
        completed_at=str(completed_at) if completed_at is not None else None,
        label=data.get("label"),
        kind=kind,
    )


def session_to_json_line(session: SessionRecord) -> str:
    """Serialize one session as a compact JSONL line."""
    return json.dumps(session_to_dict(session), separators=(",", ":"))
