"""
Datetime utilities for consistent timezone handling across the engine.

This module is the time grid of the availability engine. It converts between
clock-time strings ("HH:MM"), minute offsets from midnight and absolute
timezone-aware datetimes anchored to a calendar date in the practice's local
time zone.

Nothing here reads the wall clock. Callers pass `now` explicitly so a multi-day
computation sees one consistent instant.
"""

import logging
from datetime import datetime, date, time, timedelta, tzinfo
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.config import PRACTICE_TIMEZONE
from core.constants import MINUTES_PER_DAY

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def get_practice_tz(name: Optional[str] = None) -> tzinfo:
    """
    Get the practice time zone.

    Args:
        name: IANA time zone name; defaults to PRACTICE_TIMEZONE from config

    Returns:
        tzinfo for the practice

    Raises:
        ValueError: If the time zone name is unknown
    """
    tz_name = name or PRACTICE_TIMEZONE
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown time zone: {tz_name}") from e


def ensure_practice_tz(dt: datetime, tz: tzinfo) -> datetime:
    """
    Ensure a datetime is timezone-aware in the practice time zone.

    Args:
        dt: Datetime to normalize
        tz: Practice time zone

    Returns:
        Timezone-aware datetime in the practice time zone
    """
    if dt.tzinfo is None:
        # If naive, assume it's already in practice time and localize it
        return dt.replace(tzinfo=tz)
    else:
        # If already timezone-aware, convert to practice timezone
        return dt.astimezone(tz)


def weekday_index(d: date) -> int:
    """
    Day-of-week index used by work schedules: 0=Monday .. 6=Sunday.

    Every place that maps a date to a schedule weekday goes through here.
    """
    return d.weekday()


def parse_clock_time(value: str) -> int:
    """
    Parse a clock-time string into minutes from midnight.

    Accepts "HH:MM" and "HH:MM:SS" (seconds are ignored). "24:00" is accepted
    as the end of the day.

    Args:
        value: Clock-time string

    Returns:
        Minutes from midnight (0..1440)

    Raises:
        ValueError: If the string is not a valid clock time
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Clock time cannot be empty")

    parts = value.strip().split(':')
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid clock time format (expected HH:MM): {value}")

    try:
        hour = int(parts[0])
        minute = int(parts[1])
    except ValueError as e:
        raise ValueError(f"Invalid clock time format (expected HH:MM): {value}") from e

    if hour == 24 and minute == 0:
        return MINUTES_PER_DAY
    if hour < 0 or hour > 23 or minute < 0 or minute > 59:
        raise ValueError(f"Invalid clock time: {value}")

    return hour * 60 + minute


def format_minutes(minutes: int) -> str:
    """Format minutes from midnight as an HH:MM string."""
    if minutes < 0 or minutes > MINUTES_PER_DAY:
        raise ValueError(f"Minute offset out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def minutes_to_datetime(d: date, minutes: int, tz: tzinfo) -> datetime:
    """
    Anchor a minute offset to a calendar date in the practice time zone.

    Offsets past midnight roll over to the next day (an interval ending at 24:00
    ends at 00:00 of the following date).
    """
    local_midnight = datetime.combine(d, time(0, 0))
    naive = local_midnight + timedelta(minutes=minutes)
    return naive.replace(tzinfo=tz)


def datetime_to_minutes(dt: datetime, tz: tzinfo) -> tuple[date, int]:
    """
    Split an absolute datetime into its practice-local date and minute offset.

    Seconds are truncated.
    """
    local = ensure_practice_tz(dt, tz)
    return local.date(), local.hour * 60 + local.minute


def start_of_day(d: date, tz: tzinfo) -> datetime:
    """Local midnight of a date in the practice time zone."""
    return minutes_to_datetime(d, 0, tz)


def practice_today(now: datetime, tz: tzinfo) -> date:
    """Calendar date of `now` in the practice time zone."""
    return ensure_practice_tz(now, tz).date()


def parse_date_string(date_str: str) -> date:
    """
    Parse a date string in YYYY-MM-DD or YYYY/MM/DD format.

    Accepts both formats:
    - YYYY-MM-DD (e.g., "2026-01-05", "2026-1-5")
    - YYYY/MM/DD (e.g., "2026/01/05", "2026/1/5")

    Automatically normalizes single-digit months/days.

    Args:
        date_str: Date string in YYYY-MM-DD or YYYY/MM/DD format

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    if not date_str or not date_str.strip():
        raise ValueError("Date string cannot be empty")

    date_str = date_str.strip()

    # Normalize separators and pad single-digit months/days
    if '/' in date_str:
        parts = date_str.split('/')
    elif '-' in date_str:
        parts = date_str.split('-')
    else:
        raise ValueError(f"Invalid date format (expected YYYY-MM-DD or YYYY/MM/DD): {date_str}")

    if len(parts) != 3:
        raise ValueError(f"Invalid date format (expected YYYY-MM-DD or YYYY/MM/DD): {date_str}")

    year = parts[0].zfill(4)
    month = parts[1].zfill(2)
    day = parts[2].zfill(2)

    normalized = f"{year}-{month}-{day}"

    try:
        return datetime.strptime(normalized, '%Y-%m-%d').date()
    except ValueError as e:
        raise ValueError(f"Invalid date format (expected YYYY-MM-DD or YYYY/MM/DD): {date_str}") from e


def iter_dates(start: date, end: date):
    """Yield every calendar date from start to end, inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
