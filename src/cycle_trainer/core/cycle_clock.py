"""
Cycle clock: calendar date -> position within a repeating N-day cycle.

The cycle is independent of weekday.  Day offsets are counted in civil
(calendar) days in the user's configured time zone, so a late-evening
timestamp never slips into the next or previous cycle day because of
UTC conversion or a DST transition.

An invalid cycle length is the one failure outcome here.  It raises
InvalidConfig rather than returning a result value, so every caller
gets either a valid cycle day or an exception.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from .errors import InvalidConfig
from .models import CycleConfig, parse_iso_date


def local_date(value: date | datetime | str, zone: ZoneInfo | None = None) -> date:
    """
    Resolve a date-like value to a calendar date in *zone*.

    Aware datetimes (and ISO timestamps with an offset) are converted to
    the zone first; without a zone they keep their own offset.  Naive
    datetimes and plain dates are taken as already local.

    Raises:
        ValueError: If a string value cannot be parsed
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value) if len(value) > 10 else parse_iso_date(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None and zone is not None:
            value = value.astimezone(zone)
        return value.date()
    return value


def today_in_timezone(timezone: str, now: datetime | None = None) -> date:
    """Return today's calendar date as seen in an IANA time zone."""
    zone = ZoneInfo(timezone)
    moment = now if now is not None else datetime.now(zone)
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(zone).date()


def civil_days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative when end precedes start)."""
    return (end - start).days


def compute_cycle_day(config: CycleConfig, when: date | datetime | str) -> int:
    """
    Calculate the 1-based cycle day a calendar date falls on.

    cycle_day = ((offset mod N) + N) mod N + 1

    The double modulo keeps the result in [1, N] when *when* precedes
    the start date.  compute_cycle_day(config, start_date) is always 1
    and the result repeats every N days.

    Args:
        config: Cycle configuration (length, start date, time zone)
        when: Date, datetime, or ISO string to resolve

    Returns:
        Cycle day in [1, cycle_length]

    Raises:
        InvalidConfig: If cycle_length <= 0
    """
    n = config.cycle_length
    if n <= 0:
        raise InvalidConfig(f"cycle_length must be positive, got {n}")

    offset = civil_days_between(config.start, local_date(when, config.zone))
    return ((offset % n) + n) % n + 1


def current_cycle_day(config: CycleConfig, now: datetime | None = None) -> int:
    """Cycle day for today in the configured time zone."""
    return compute_cycle_day(config, today_in_timezone(config.timezone, now))
