"""
Data models for cycle-trainer.

All core dataclasses representing cycle configuration, schedule
assignments, the workout catalog, and completed-session history.
Calendar dates are ISO strings (YYYY-MM-DD); timestamps are ISO-8601
strings and are only parsed when analytics need them.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import FOCUS_OPTIONS, SELECTION_KINDS, WORKOUT_KINDS
from .errors import InvalidConfig

SelectionKind = Literal["rest", "weights", "cardio", "mobility"]
WorkoutKind = Literal["weights", "cardio", "mobility"]
Focus = Literal["all-weights", "all-cardio", "mix"]


def parse_iso_date(date_str: str) -> date:
    """Parse a YYYY-MM-DD string, raising ValueError on anything else."""
    try:
        return date.fromisoformat(date_str[:10])
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid date: {date_str!r}. Expected YYYY-MM-DD") from e


@dataclass
class CycleConfig:
    """
    A repeating N-day training cycle anchored at a start date.

    Created at onboarding or on plan change; only explicit user action
    mutates it.
    """

    cycle_length: int
    start_date: str  # ISO format: YYYY-MM-DD
    timezone: str = "UTC"  # IANA zone name

    def __post_init__(self) -> None:
        """Validate cycle configuration."""
        if not isinstance(self.cycle_length, int) or self.cycle_length < 1:
            raise InvalidConfig(
                f"cycle_length must be a positive integer, got {self.cycle_length!r}"
            )
        try:
            parse_iso_date(self.start_date)
        except ValueError as e:
            raise InvalidConfig(str(e)) from e
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise InvalidConfig(f"Unknown timezone: {self.timezone!r}") from e

    @property
    def start(self) -> date:
        return parse_iso_date(self.start_date)

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


@dataclass(frozen=True)
class WorkoutSelection:
    """
    One entry in a day's ordered selection list.

    Either a rest marker (kind="rest", no ref) or a reference to a
    weights day, cardio template, or mobility template.
    """

    kind: SelectionKind
    ref: str | None = None  # stable catalog id; None only for rest
    label: str = ""
    category: str | None = None

    def __post_init__(self) -> None:
        if self.kind not in SELECTION_KINDS:
            raise ValueError(f"Invalid selection kind: {self.kind!r}")
        if self.kind == "rest" and self.ref is not None:
            raise ValueError("A rest selection cannot carry a ref")
        if self.kind != "rest" and not self.ref:
            raise ValueError(f"A {self.kind} selection needs a ref")

    @property
    def is_rest(self) -> bool:
        return self.kind == "rest"

    @classmethod
    def rest(cls) -> "WorkoutSelection":
        return cls(kind="rest", label="Rest")


REST = WorkoutSelection.rest()

# dayNumber -> ordered selections; absent keys are unconfigured days
Schedule = dict[int, list[WorkoutSelection]]


@dataclass
class ScheduleDay:
    """A single cycle day's assignment as held by the schedule store."""

    day_number: int
    selections: list[WorkoutSelection] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.day_number < 1:
            raise ValueError("day_number must be positive")

    @property
    def is_rest(self) -> bool:
        return len(self.selections) == 1 and self.selections[0].is_rest


@dataclass
class SessionRecord:
    """
    A started or completed workout session.

    Owned by the persistence layer; immutable once completed.
    completed_at is None while the session is still in progress.
    """

    id: str
    ref: str
    started_at: str  # ISO-8601 timestamp
    completed_at: str | None = None  # ISO-8601 timestamp
    label: str | None = None  # display name at log time
    kind: WorkoutKind | None = None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


@dataclass
class UserPreferences:
    """Generator input: training focus, rest days per cycle, mobility toggle."""

    focus: Focus = "mix"
    rest_days: int = 2
    include_mobility: bool = False

    def __post_init__(self) -> None:
        if self.focus not in FOCUS_OPTIONS:
            raise InvalidConfig(
                f"Invalid focus: {self.focus!r}. Must be one of {FOCUS_OPTIONS}"
            )
        if not isinstance(self.rest_days, int) or self.rest_days < 1:
            raise InvalidConfig(f"rest_days must be at least 1, got {self.rest_days!r}")

    def check_against(self, cycle_length: int) -> None:
        """Raise InvalidConfig unless rest_days lies in [1, cycle_length - 1]."""
        if cycle_length < 1:
            raise InvalidConfig(f"cycle_length must be positive, got {cycle_length}")
        if not 1 <= self.rest_days <= cycle_length - 1:
            raise InvalidConfig(
                f"rest_days must be between 1 and {cycle_length - 1} "
                f"for a {cycle_length}-day cycle, got {self.rest_days}"
            )


@dataclass(frozen=True)
class CatalogEntry:
    """A weights-day definition or a cardio/mobility template."""

    id: str
    name: str
    category: str | None = None


@dataclass
class Catalog:
    """
    Ordered workout catalog consumed by the generator.

    Order matters: round-robin assignment walks each list front to back.
    """

    weights: list[CatalogEntry] = field(default_factory=list)
    cardio: list[CatalogEntry] = field(default_factory=list)
    mobility: list[CatalogEntry] = field(default_factory=list)

    def entries(self, kind: str) -> list[CatalogEntry]:
        """Return the catalog list for a workout kind."""
        if kind not in WORKOUT_KINDS:
            raise ValueError(f"Invalid workout kind: {kind!r}")
        return getattr(self, kind)

    def unique_mobility(self) -> list[CatalogEntry]:
        """Mobility templates with duplicate display names collapsed (first wins)."""
        seen: set[str] = set()
        unique: list[CatalogEntry] = []
        for entry in self.mobility:
            if entry.name in seen:
                continue
            seen.add(entry.name)
            unique.append(entry)
        return unique

    def find(self, ref: str) -> tuple[str, CatalogEntry] | None:
        """Look up (kind, entry) by id across all lists."""
        for kind in WORKOUT_KINDS:
            for entry in self.entries(kind):
                if entry.id == ref:
                    return kind, entry
        return None


@dataclass
class AssignmentCheck:
    """
    Outcome of validate_assignment().

    ok=False carries a blocking error; advisory is a non-blocking hint
    for the presentation layer (e.g. overtraining risk).
    """

    ok: bool
    error: str | None = None
    advisory: str | None = None


@dataclass
class TemplateStats:
    """Per-template summary shown on a workout card."""

    last_session: SessionRecord | None
    summary: str
    weekly_count: int
    next_scheduled_day: int | None


@dataclass
class LifetimeStats:
    """All-time totals derived from the full session history."""

    total_workouts: int
    longest_streak: int
    favorite: str  # "None" when there is no history
