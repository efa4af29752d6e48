"""
Core engine for cycle-trainer.

Everything under core/ is pure: no file or network I/O, inputs are never
mutated, and every function returns new values.
"""

from .analytics import (
    calculate_longest_streak,
    calculate_streak,
    get_lifetime_stats,
    get_template_stats,
    get_weekly_count,
)
from .cycle_clock import compute_cycle_day
from .errors import InvalidConfig, MalformedSessionWarning, ScheduleInvariantError
from .generator import default_schedule, generate_schedule, spread_rest_days
from .occurrence import next_occurrence
from .schedule import validate_assignment

__all__ = [
    "InvalidConfig",
    "MalformedSessionWarning",
    "ScheduleInvariantError",
    "calculate_longest_streak",
    "calculate_streak",
    "compute_cycle_day",
    "default_schedule",
    "generate_schedule",
    "get_lifetime_stats",
    "get_template_stats",
    "get_weekly_count",
    "next_occurrence",
    "spread_rest_days",
    "validate_assignment",
]
