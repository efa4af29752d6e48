"""
Activity analytics computed from session history.

All functions are pure.  A "day" is a local calendar date in the user's
time zone; only sessions with a completion timestamp count.  Sessions
whose completion timestamp cannot be parsed are skipped with a
MalformedSessionWarning instead of failing the whole computation.
"""

import warnings
from collections import Counter
from datetime import date, datetime, timedelta, timezone as dt_timezone
from typing import Iterable, Mapping, Sequence
from zoneinfo import ZoneInfo

from .config import STREAK_LOOKBACK_DAYS, WEEK_START_DAY
from .cycle_clock import local_date
from .errors import MalformedSessionWarning
from .models import LifetimeStats, SessionRecord, TemplateStats, WorkoutSelection
from .occurrence import next_occurrence


def _zone(timezone: str | None) -> ZoneInfo | None:
    return ZoneInfo(timezone) if timezone else None


def _warn_malformed(session: SessionRecord) -> None:
    warnings.warn(
        f"Skipping session {session.id!r}: unparsable completed_at "
        f"{session.completed_at!r}",
        MalformedSessionWarning,
        stacklevel=3,
    )


def completion_instant(session: SessionRecord, zone: ZoneInfo | None = None) -> datetime | None:
    """
    Parse a session's completion timestamp into an aware datetime.

    Naive timestamps are taken as local to *zone* (UTC without one).
    Returns None for in-progress sessions and for malformed timestamps.
    """
    if session.completed_at is None:
        return None
    try:
        moment = datetime.fromisoformat(session.completed_at)
    except (TypeError, ValueError):
        _warn_malformed(session)
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=zone or dt_timezone.utc)
    return moment


def completion_date(session: SessionRecord, zone: ZoneInfo | None = None) -> date | None:
    """Local calendar date a session was completed on, or None."""
    if session.completed_at is None:
        return None
    try:
        return local_date(session.completed_at, zone)
    except (TypeError, ValueError):
        _warn_malformed(session)
        return None


def completed_dates(sessions: Iterable[SessionRecord], timezone: str | None = None) -> set[date]:
    """Distinct local dates holding at least one completed session."""
    zone = _zone(timezone)
    dates: set[date] = set()
    for session in sessions:
        day = completion_date(session, zone)
        if day is not None:
            dates.add(day)
    return dates


def week_start(reference_date: date, week_start_day: int = WEEK_START_DAY) -> date:
    """
    First day of the calendar week containing reference_date.

    Args:
        reference_date: Any date in the week
        week_start_day: Python weekday the week starts on (Mon=0 .. Sun=6)

    Returns:
        The week's first date (local midnight is implied)
    """
    return reference_date - timedelta(days=(reference_date.weekday() - week_start_day) % 7)


def calculate_streak(
    sessions: Sequence[SessionRecord],
    reference_date: date | datetime | str,
    lookback_limit: int = STREAK_LOOKBACK_DAYS,
    timezone: str | None = None,
) -> int:
    """
    Count consecutive days with a completed session, walking back from reference_date.

    The walk stops at the first day without a session, except that the
    first two days scanned (i = 0, 1) never stop it: a missing today or
    yesterday is tolerated and scanning continues one day further.  At
    most lookback_limit days are scanned.

    Args:
        sessions: Session history
        reference_date: Day the walk starts from (usually today)
        lookback_limit: Maximum number of days to scan
        timezone: IANA zone used to resolve completion timestamps

    Returns:
        Streak length in days (0 for an empty history)
    """
    dates = completed_dates(sessions, timezone)
    if not dates:
        return 0

    start = local_date(reference_date, _zone(timezone))
    streak = 0
    for i in range(lookback_limit):
        if start - timedelta(days=i) in dates:
            streak += 1
        elif i > 1:
            break
    return streak


def calculate_longest_streak(sessions: Sequence[SessionRecord], timezone: str | None = None) -> int:
    """Longest run of consecutive local dates with a completed session."""
    dates = sorted(completed_dates(sessions, timezone))
    if not dates:
        return 0

    longest = current = 1
    for previous, day in zip(dates, dates[1:]):
        if (day - previous).days == 1:
            current += 1
        else:
            longest = max(longest, current)
            current = 1
    return max(longest, current)


def get_weekly_count(
    sessions: Sequence[SessionRecord],
    reference_date: date | datetime | str,
    week_start_day: int = WEEK_START_DAY,
    timezone: str | None = None,
) -> int:
    """
    Number of distinct days in the current calendar week with a completed session.

    Two completions on the same day count once.

    Args:
        sessions: Session history
        reference_date: Any date in the week of interest
        week_start_day: Python weekday the week starts on (Mon=0 .. Sun=6)
        timezone: IANA zone used to resolve completion timestamps

    Returns:
        Count of active days this week (0..7)
    """
    first = week_start(local_date(reference_date, _zone(timezone)), week_start_day)
    last = first + timedelta(days=7)
    return sum(1 for day in completed_dates(sessions, timezone) if first <= day < last)


def session_summary(count: int) -> str:
    if count == 0:
        return "No sessions yet"
    return f"{count} session{'s' if count != 1 else ''} completed"


def get_template_stats(
    ref: str,
    sessions: Sequence[SessionRecord],
    schedule: Mapping[int, Sequence[WorkoutSelection]],
    current_day: int,
    reference_date: date | datetime | str | None = None,
    cycle_length: int | None = None,
    week_start_day: int = WEEK_START_DAY,
    timezone: str | None = None,
) -> TemplateStats:
    """
    Summarise one workout template's history and its next scheduled day.

    Args:
        ref: Catalog id of the template
        sessions: Session history (any refs; filtered here)
        schedule: Mapping day_number -> selections
        current_day: Today's cycle day
        reference_date: Day used for the weekly count (default: today)
        cycle_length: Days in the cycle (default: highest scheduled day)
        week_start_day: Python weekday the week starts on
        timezone: IANA zone used to resolve completion timestamps

    Returns:
        TemplateStats with the latest completed session, a summary line,
        this week's active-day count, and the next scheduled cycle day
    """
    zone = _zone(timezone)

    timed: list[tuple[datetime, SessionRecord]] = []
    for session in sessions:
        if session.ref != ref:
            continue
        moment = completion_instant(session, zone)
        if moment is not None:
            timed.append((moment, session))
    timed.sort(key=lambda pair: pair[0], reverse=True)
    completed = [session for _, session in timed]

    if reference_date is None:
        reference_date = datetime.now(zone) if zone else date.today()

    n = cycle_length if cycle_length is not None else max(schedule, default=0)
    next_day = next_occurrence(ref, schedule, current_day, n) if n > 0 else None

    return TemplateStats(
        last_session=completed[0] if completed else None,
        summary=session_summary(len(completed)),
        weekly_count=get_weekly_count(completed, reference_date, week_start_day, timezone),
        next_scheduled_day=next_day,
    )


def get_lifetime_stats(sessions: Sequence[SessionRecord], timezone: str | None = None) -> LifetimeStats:
    """
    All-time totals: completed workouts, longest streak, favourite workout.

    The favourite is the most completed label (falling back to ref);
    ties go to the one seen first.
    """
    zone = _zone(timezone)
    completed = [s for s in sessions if completion_date(s, zone) is not None]
    counts = Counter(s.label or s.ref for s in completed)

    favorite = "None"
    best = 0
    for name, count in counts.items():
        if count > best:
            favorite, best = name, count

    return LifetimeStats(
        total_workouts=len(completed),
        longest_streak=calculate_longest_streak(completed, timezone),
        favorite=favorite,
    )
