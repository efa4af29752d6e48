"""Find the next cycle day a workout is scheduled on."""

from typing import Mapping, Sequence

from .errors import InvalidConfig
from .models import WorkoutSelection
from .schedule import ensure_valid_schedule


def next_occurrence(
    ref: str,
    schedule: Mapping[int, Sequence[WorkoutSelection]],
    current_day: int,
    cycle_length: int,
) -> int | None:
    """
    Scan forward from the day after *current_day*, wrapping around the cycle.

    candidate(i) = ((current_day - 1 + i) mod N) + 1,  i = 1..N

    current_day itself is only reached at i = N, i.e. when the workout
    is scheduled today and nowhere else in the cycle.

    Args:
        ref: Catalog id to look for
        schedule: Mapping day_number -> selections
        current_day: Today's cycle day (1-based)
        cycle_length: Days in the cycle (N)

    Returns:
        The first matching cycle day, or None if ref is never scheduled

    Raises:
        InvalidConfig: If cycle_length <= 0
        ScheduleInvariantError: If the schedule mixes rest with workouts
    """
    if cycle_length <= 0:
        raise InvalidConfig(f"cycle_length must be positive, got {cycle_length}")
    ensure_valid_schedule(schedule)

    for i in range(1, cycle_length + 1):
        candidate = ((current_day - 1 + i) % cycle_length) + 1
        if any(s.ref == ref for s in schedule.get(candidate, ())):
            return candidate
    return None
