"""
Configuration constants for the cycle scheduling engine.

All adjustable parameters are centralized here.  User-tunable values
(timezone, week start, streak lookback, default preferences) can be
overridden through ~/.cycle-trainer/config.yaml; see
core/engine/config_loader.py.
"""

from typing import Final

# =============================================================================
# CYCLE
# =============================================================================

DEFAULT_CYCLE_LENGTH: Final[int] = 7
DEFAULT_TIMEZONE: Final[str] = "UTC"

# =============================================================================
# SCHEDULE CONTRACT
# =============================================================================

# Days holding this many selections or more get an overtraining advisory
OVERTRAINING_SELECTION_THRESHOLD: Final[int] = 3

WORKOUT_KINDS: Final[tuple[str, ...]] = ("weights", "cardio", "mobility")
SELECTION_KINDS: Final[tuple[str, ...]] = ("rest",) + WORKOUT_KINDS

# =============================================================================
# AUTO-SCHEDULE GENERATION
# =============================================================================

FOCUS_OPTIONS: Final[tuple[str, ...]] = ("all-weights", "all-cardio", "mix")
DEFAULT_FOCUS: Final[str] = "mix"
DEFAULT_REST_DAYS: Final[int] = 2
DEFAULT_INCLUDE_MOBILITY: Final[bool] = False

# Mobility templates in this category are only used when nothing else is left
MOBILITY_EXCLUDED_CATEGORY: Final[str] = "core"

# =============================================================================
# ANALYTICS
# =============================================================================

STREAK_LOOKBACK_DAYS: Final[int] = 30

# First day of the calendar week, Python weekday numbering (Mon=0 .. Sun=6)
WEEK_START_DAY: Final[int] = 6

DAY_NAMES: Final[tuple[str, ...]] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
