"""
Schedule contract: the shape of a day's assignment and its invariants.

A day holds an ordered list of selections.  A rest entry, if present,
must be the only entry: selecting rest replaces whatever the day held,
and adding a workout to a rest day replaces the rest marker.  The number
of workouts on a day is not capped; three or more only earns an
advisory for the presentation layer.
"""

from typing import Mapping, Sequence

from .config import DAY_NAMES, OVERTRAINING_SELECTION_THRESHOLD
from .errors import ScheduleInvariantError
from .models import REST, AssignmentCheck, WorkoutSelection


def validate_assignment(selections: Sequence[WorkoutSelection]) -> AssignmentCheck:
    """
    Check a day's selection list against the rest-exclusivity rule.

    Args:
        selections: Ordered selections for one day

    Returns:
        AssignmentCheck with ok=False and an error when rest coexists
        with other entries, or ok=True with an optional overtraining
        advisory when the day holds OVERTRAINING_SELECTION_THRESHOLD or
        more selections.
    """
    has_rest = any(s.is_rest for s in selections)
    if has_rest and len(selections) > 1:
        return AssignmentCheck(
            ok=False,
            error="A rest day cannot hold other workouts",
        )

    if len(selections) >= OVERTRAINING_SELECTION_THRESHOLD:
        return AssignmentCheck(
            ok=True,
            advisory=(
                f"{len(selections)} workouts on one day; "
                "consider spreading them out to limit overtraining risk"
            ),
        )

    return AssignmentCheck(ok=True)


def ensure_valid_schedule(schedule: Mapping[int, Sequence[WorkoutSelection]], cycle_length: int | None = None) -> None:
    """
    Assert that every day of a schedule honours the contract.

    Raises:
        ScheduleInvariantError: If a day mixes rest with workouts, or a
            day number falls outside 1..cycle_length
    """
    for day_number, selections in schedule.items():
        if day_number < 1 or (cycle_length is not None and day_number > cycle_length):
            raise ScheduleInvariantError(
                f"Day {day_number} is outside the cycle 1..{cycle_length}"
            )
        check = validate_assignment(selections)
        if not check.ok:
            raise ScheduleInvariantError(f"Day {day_number}: {check.error}")


def set_rest(selections: Sequence[WorkoutSelection]) -> list[WorkoutSelection]:
    """Selecting rest always replaces prior selections."""
    return [REST]


def add_selection(
    selections: Sequence[WorkoutSelection],
    selection: WorkoutSelection,
) -> list[WorkoutSelection]:
    """
    Return a new list with *selection* added to a day.

    Rest replaces everything; a workout added to a rest day replaces the
    rest marker; otherwise the workout is appended.  Adding the same ref
    twice is a no-op.
    """
    if selection.is_rest:
        return set_rest(selections)
    current = [s for s in selections if not s.is_rest]
    if any(s.kind == selection.kind and s.ref == selection.ref for s in current):
        return current
    return current + [selection]


def remove_selection(
    selections: Sequence[WorkoutSelection],
    ref: str,
) -> list[WorkoutSelection]:
    """Return a new list without any selection matching *ref*."""
    return [s for s in selections if s.ref != ref]


def scheduled_for_day(schedule: Mapping[int, Sequence[WorkoutSelection]], day_number: int) -> list[WorkoutSelection]:
    """Selections for a cycle day; empty when the day is unconfigured."""
    return list(schedule.get(day_number, []))


def day_name(day_number: int) -> str:
    """Weekday-style label for cycle days 1..7, "Day N" beyond that."""
    if 1 <= day_number <= len(DAY_NAMES):
        return DAY_NAMES[day_number - 1]
    return f"Day {day_number}"
