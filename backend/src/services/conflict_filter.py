"""
Conflict filter: removes candidate slots that cannot be booked.

A candidate is dropped when, as an absolute [start, end) in the practice time
zone, it
- starts before `now`,
- starts before the notice cutoff (local midnight of today + min_notice_days),
- overlaps any blocking booking of the same provider.

Bookings are expected to be pre-filtered to blocking statuses (ScheduleSnapshot
does this). Overlap is the half-open test in utils.interval_utils, so a slot ending
exactly when a booking starts survives.
"""

import logging
from datetime import datetime, timedelta, tzinfo
from typing import Iterable, List, Sequence, Tuple

from shared_types import CandidateSlot
from utils.datetime_utils import ensure_practice_tz, minutes_to_datetime, practice_today, start_of_day
from utils.interval_utils import overlaps_any

logger = logging.getLogger(__name__)


def notice_cutoff(now: datetime, min_notice_days: int, tz: tzinfo) -> datetime:
    """Earliest bookable instant: local midnight of today + min_notice_days, or now if later."""
    earliest_day = practice_today(now, tz) + timedelta(days=min_notice_days)
    return max(ensure_practice_tz(now, tz), start_of_day(earliest_day, tz))


def slot_bounds(slot: CandidateSlot, tz: tzinfo) -> Tuple[datetime, datetime]:
    """Absolute [start, end) of a candidate slot."""
    return (
        minutes_to_datetime(slot.date, slot.start_minutes, tz),
        minutes_to_datetime(slot.date, slot.end_minutes, tz),
    )


def is_slot_bookable(
    slot_start: datetime,
    slot_end: datetime,
    bookings: Sequence[Tuple[datetime, datetime]],
    cutoff: datetime,
) -> bool:
    """Single-slot version of the filter, shared with the booking check."""
    if slot_start < cutoff:
        return False
    return not overlaps_any(slot_start, slot_end, bookings)


def filter_conflicts(
    candidates: Iterable[CandidateSlot],
    bookings: Sequence[Tuple[datetime, datetime]],
    now: datetime,
    min_notice_days: int,
    tz: tzinfo,
) -> List[CandidateSlot]:
    """
    Filter candidate slots against bookings and the notice window.

    Args:
        candidates: Candidate slots of a single provider
        bookings: Blocking (start, end) ranges of that provider, timezone-aware
        now: Injected current instant
        min_notice_days: Notice requirement from the booking window policy
        tz: Practice time zone

    Returns:
        Candidates that survive, in input order
    """
    cutoff = notice_cutoff(now, min_notice_days, tz)
    surviving: List[CandidateSlot] = []
    for slot in candidates:
        slot_start, slot_end = slot_bounds(slot, tz)
        if is_slot_bookable(slot_start, slot_end, bookings, cutoff):
            surviving.append(slot)
    return surviving

