"""
Auto-schedule generation for cycle-trainer.

Builds a complete cycle assignment from the workout catalog and the
user's preferences.  Generation is deterministic: no randomness, so the
same (cycle_length, catalog, preferences) always yields the same draft.
The draft replaces any previous one but is not persisted here.

Out-of-range input (cycle_length <= 0, rest days outside [1, N-1]) is
the failure outcome of generation.  It is reported by raising
InvalidConfig instead of returning a success/failure value; the CLI
catches it and prints an error line.
"""

import math
from typing import Sequence

from .config import DEFAULT_REST_DAYS, MOBILITY_EXCLUDED_CATEGORY
from .errors import InvalidConfig
from .models import REST, Catalog, CatalogEntry, Schedule, UserPreferences, WorkoutSelection


def spread_rest_days(cycle_length: int, rest_days: int) -> list[int]:
    """
    Choose rest positions spread evenly across 1..cycle_length.

    position_k = ceil(k * N / rest_days),  k = 1..rest_days

    The last position is always N.  For a 7-day cycle this gives
    {7}, {4, 7} and {3, 5, 7} for one, two and three rest days.

    Args:
        cycle_length: Days in the cycle (N)
        rest_days: Number of rest days, 1..N-1

    Returns:
        Ascending list of rest day numbers

    Raises:
        InvalidConfig: If rest_days is outside [1, N-1]
    """
    if cycle_length < 1:
        raise InvalidConfig(f"cycle_length must be positive, got {cycle_length}")
    if not 1 <= rest_days <= cycle_length - 1:
        raise InvalidConfig(
            f"rest_days must be between 1 and {cycle_length - 1}, got {rest_days}"
        )
    return [-(-k * cycle_length // rest_days) for k in range(1, rest_days + 1)]


def training_positions(cycle_length: int, rest_positions: Sequence[int]) -> list[int]:
    """Cycle days that are not rest, ascending."""
    rest = set(rest_positions)
    return [day for day in range(1, cycle_length + 1) if day not in rest]


def to_selection(kind: str, entry: CatalogEntry) -> WorkoutSelection:
    """Build a schedule selection referencing a catalog entry."""
    return WorkoutSelection(kind=kind, ref=entry.id, label=entry.name, category=entry.category)


def _assign_round_robin(
    schedule: Schedule,
    positions: Sequence[int],
    entries: Sequence[CatalogEntry],
    kind: str,
) -> list[int]:
    """
    Assign entries to positions in catalog order, wrapping by index.

    Returns the positions actually assigned (none when entries is empty).
    """
    if not entries:
        return []
    for i, day in enumerate(positions):
        schedule[day] = [to_selection(kind, entries[i % len(entries)])]
    return list(positions)


def mobility_pool(catalog: Catalog) -> list[CatalogEntry]:
    """
    Mobility templates eligible for auto-placement.

    Duplicate display names are collapsed first.  Templates in the
    MOBILITY_EXCLUDED_CATEGORY are dropped unless that empties the pool.
    """
    unique = catalog.unique_mobility()
    preferred = [
        entry for entry in unique
        if (entry.category or "").lower() != MOBILITY_EXCLUDED_CATEGORY
    ]
    return preferred or unique


def mobility_targets(cardio_days: Sequence[int], weights_days: Sequence[int]) -> list[int]:
    """
    Pick the days that receive a mobility session.

    Candidates are cardio days then weights days (each ascending); the
    first and last candidates are chosen for maximum spread.
    """
    candidates = list(cardio_days) + list(weights_days)
    if len(candidates) >= 2:
        return [candidates[0], candidates[-1]]
    return candidates


def generate_schedule(
    cycle_length: int,
    catalog: Catalog,
    preferences: UserPreferences,
) -> Schedule:
    """
    Generate a full cycle assignment.

    Steps:
    1. Rest days via spread_rest_days().
    2. Training positions = remaining days, ascending.
    3. Fill by focus.  all-weights / all-cardio round-robin through one
       catalog list.  mix puts weights on the first
       min(len(weights), ceil(T / 2)) training positions and cardio on
       the rest.
    4. With include_mobility, append (never replace) a mobility
       selection on the first and last cardio-then-weights candidate,
       rotating through the mobility pool.

    Days that no catalog entry could fill stay absent (unconfigured).

    Args:
        cycle_length: Days in the cycle (N)
        catalog: Ordered weights / cardio / mobility catalog
        preferences: Focus, rest day count, mobility toggle

    Returns:
        Mapping day_number -> selections, ordered by day

    Raises:
        InvalidConfig: If cycle_length <= 0 or rest_days is outside [1, N-1]
    """
    preferences.check_against(cycle_length)

    rest_positions = spread_rest_days(cycle_length, preferences.rest_days)
    schedule: Schedule = {day: [REST] for day in rest_positions}
    training = training_positions(cycle_length, rest_positions)

    if preferences.focus == "all-weights":
        weights_slots, cardio_slots = training, []
    elif preferences.focus == "all-cardio":
        weights_slots, cardio_slots = [], training
    else:
        weights_count = min(len(catalog.weights), math.ceil(len(training) / 2))
        weights_slots, cardio_slots = training[:weights_count], training[weights_count:]

    weights_days = _assign_round_robin(schedule, weights_slots, catalog.weights, "weights")
    cardio_days = _assign_round_robin(schedule, cardio_slots, catalog.cardio, "cardio")

    if preferences.include_mobility:
        pool = mobility_pool(catalog)
        if pool:
            for i, day in enumerate(mobility_targets(cardio_days, weights_days)):
                schedule[day] = schedule[day] + [to_selection("mobility", pool[i % len(pool)])]

    return dict(sorted(schedule.items()))


def default_schedule(cycle_length: int, catalog: Catalog) -> Schedule:
    """
    Onboarding default: weights days round-robin with evenly spread rest.

    A 7-day cycle with three weights days gives
    W1, W2, W3, Rest, W1, W2, Rest.  A one-day cycle has no rest.
    """
    if cycle_length < 1:
        raise InvalidConfig(f"cycle_length must be positive, got {cycle_length}")

    rest_days = min(DEFAULT_REST_DAYS, cycle_length - 1)
    rest_positions = spread_rest_days(cycle_length, rest_days) if rest_days else []
    schedule: Schedule = {day: [REST] for day in rest_positions}
    _assign_round_robin(
        schedule,
        training_positions(cycle_length, rest_positions),
        catalog.weights,
        "weights",
    )
    return dict(sorted(schedule.items()))
