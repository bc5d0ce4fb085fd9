"""
Per-request schedule data snapshot.

The engine never fetches its own inputs. The caller reads providers, schedules,
exceptions and bookings in a few batched queries and hands them over here. The
snapshot indexes those rows once, normalizes booking timestamps into the
practice time zone and drops malformed records, remembering each one as a
DataIntegrityWarning.

A snapshot is never mutated after construction, so one instance can be read
from many worker threads at the same time.
"""

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional, Tuple

from models import Booking, Provider, ScheduleException, WorkSchedule, ExceptionType
from shared_types import DataIntegrityWarning
from utils.datetime_utils import ensure_practice_tz, get_practice_tz, start_of_day, weekday_index
from utils.interval_utils import overlaps

logger = logging.getLogger(__name__)


class ScheduleSnapshot:
    """
    Indexed, validated view of the rows relevant to one availability request.

    Attributes:
        tz: Practice time zone
        providers: Provider roster keyed by id
        warnings: Records skipped because they were malformed
    """

    def __init__(
        self,
        providers: Iterable[Provider],
        schedules: Iterable[WorkSchedule] = (),
        exceptions: Iterable[ScheduleException] = (),
        bookings: Iterable[Booking] = (),
        tz: Optional[tzinfo] = None,
    ):
        self.tz: tzinfo = tz or get_practice_tz()
        self.providers: Dict[str, Provider] = {}
        self.warnings: List[DataIntegrityWarning] = []

        for provider in providers:
            if provider.id not in self.providers:
                self.providers[provider.id] = provider

        self._schedules: Dict[Tuple[str, int], List[WorkSchedule]] = defaultdict(list)
        self._exceptions: Dict[Tuple[str, date], ScheduleException] = {}
        self._bookings: Dict[str, List[Tuple[datetime, datetime]]] = defaultdict(list)

        self._index_schedules(schedules)
        self._index_exceptions(exceptions)
        self._index_bookings(bookings)

        # Freeze: lookups below must never insert through defaultdict
        self._schedules = dict(self._schedules)
        self._bookings = dict(self._bookings)

        if self.warnings:
            logger.warning(
                f"Skipped {len(self.warnings)} malformed record(s): "
                f"{', '.join(w.record_type + ':' + w.record_id for w in self.warnings)}"
            )

    def _warn(self, record_type: str, record_id: str, reason: str) -> None:
        self.warnings.append(DataIntegrityWarning(record_type, record_id, reason))

    def _index_schedules(self, schedules: Iterable[WorkSchedule]) -> None:
        for schedule in schedules:
            if schedule.start_minutes >= schedule.end_minutes:
                self._warn(
                    "schedule", schedule.id,
                    f"start_time {schedule.start_time} is not before end_time {schedule.end_time}"
                )
                continue
            self._schedules[(schedule.provider_id, schedule.day_of_week)].append(schedule)

        for (provider_id, day_of_week), rows in self._schedules.items():
            rows.sort(key=lambda s: (s.start_minutes, s.end_minutes, s.id))
            # Same-day rows that overlap each other are kept but reported
            for i, first in enumerate(rows):
                for second in rows[i + 1:]:
                    if (first.valid_until == second.valid_until
                            and first.is_active and second.is_active
                            and overlaps(first.start_minutes, first.end_minutes,
                                         second.start_minutes, second.end_minutes)):
                        self._warn(
                            "schedule", second.id,
                            f"overlaps schedule {first.id} for provider {provider_id} on weekday {day_of_week}"
                        )

    def _index_exceptions(self, exceptions: Iterable[ScheduleException]) -> None:
        for exception in exceptions:
            if exception.exception_type == ExceptionType.MODIFIED_HOURS:
                if not exception.start_time or not exception.end_time:
                    self._warn("exception", exception.id, "modified hours without start_time and end_time")
                    continue
                if exception.start_time >= exception.end_time:
                    self._warn(
                        "exception", exception.id,
                        f"start_time {exception.start_time} is not before end_time {exception.end_time}"
                    )
                    continue
            key = (exception.provider_id, exception.exception_date)
            if key in self._exceptions:
                self._warn(
                    "exception", exception.id,
                    f"duplicate exception for provider {exception.provider_id} on "
                    f"{exception.exception_date.isoformat()}; {self._exceptions[key].id} applies"
                )
                continue
            self._exceptions[key] = exception

    def _index_bookings(self, bookings: Iterable[Booking]) -> None:
        for booking in bookings:
            if not booking.blocks_time:
                continue
            start = ensure_practice_tz(booking.start_time, self.tz)
            end = ensure_practice_tz(booking.end_time, self.tz)
            if start >= end:
                self._warn(
                    "booking", booking.id,
                    f"start_time {booking.start_time.isoformat()} is not before end_time {booking.end_time.isoformat()}"
                )
                continue
            self._bookings[booking.provider_id].append((start, end))

        for ranges in self._bookings.values():
            ranges.sort()

    @property
    def provider_ids(self) -> List[str]:
        return sorted(self.providers)

    def get_provider(self, provider_id: str) -> Optional[Provider]:
        return self.providers.get(provider_id)

    def schedules_for(self, provider_id: str, d: date) -> List[WorkSchedule]:
        """Active schedule rows for the provider's weekday of `d`, valid on `d`, sorted by start."""
        rows = self._schedules.get((provider_id, weekday_index(d)), [])
        return [row for row in rows if row.is_valid_on(d)]

    def exception_for(self, provider_id: str, d: date) -> Optional[ScheduleException]:
        return self._exceptions.get((provider_id, d))

    def bookings_for(self, provider_id: str, d: date) -> List[Tuple[datetime, datetime]]:
        """Blocking booking ranges of the provider that touch the practice-local day `d`."""
        day_start = start_of_day(d, self.tz)
        day_end = start_of_day(d + timedelta(days=1), self.tz)
        return [
            (start, end) for start, end in self._bookings.get(provider_id, [])
            if overlaps(start, end, day_start, day_end)
        ]
