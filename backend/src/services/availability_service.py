"""
Availability service: computes bookable slots for providers and dates.

This module orchestrates the schedule resolver, slot generator and conflict
filter per (provider, date) pair, merges the results across providers and
dates, and checks individual booking requests. It is a pure computation over
a ScheduleSnapshot and an injected `now`; it performs no I/O and keeps no state
between calls.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date as date_type, datetime
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

from core.config import AVAILABILITY_MAX_WORKERS, AVAILABILITY_PARALLEL_THRESHOLD
from core.constants import MINUTES_PER_DAY
from models import BookingWindowPolicy
from services.booking_window_service import BookingWindowService
from services.conflict_filter import filter_conflicts, is_slot_bookable, notice_cutoff
from services.errors import AvailabilityValidationError
from services.schedule_data import ScheduleSnapshot
from services.schedule_resolver import ScheduleResolver
from services.slot_generator import generate_slot_starts
from shared_types import (
    AvailabilityStatus, BookingCheck, CandidateSlot, DailyAvailability, DateAvailability,
    DaySchedule, ProviderSummary, RangeAvailability, ScheduleStatus
)
from utils.datetime_utils import (
    datetime_to_minutes, ensure_practice_tz, format_minutes, iter_dates,
    minutes_to_datetime, parse_date_string, practice_today
)
from utils.interval_utils import contains

logger = logging.getLogger(__name__)

# Result of one (provider, date) computation
ProviderDayResult = Tuple[DaySchedule, List[CandidateSlot]]


class AvailabilityService:
    """
    Service class for availability operations.

    Contains the availability pipeline shared by the provider-scoped screen
    (single provider, single day), the practice-wide booking screen (many
    providers, date range) and the booking flow (is this start still free).
    """

    @staticmethod
    def _parse_date(value: Union[date_type, str, None], field: str) -> date_type:
        """Accept a date or a YYYY-MM-DD string; raise a field-specific error otherwise."""
        if value is None or value == "":
            raise AvailabilityValidationError(field, "is required")
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date_type):
            return value
        if not isinstance(value, str):
            raise AvailabilityValidationError(field, f"must be a date, got {type(value).__name__}")
        try:
            return parse_date_string(value)
        except ValueError:
            raise AvailabilityValidationError(field, f"invalid date format (expected YYYY-MM-DD): {value}")

    @staticmethod
    def _validate_duration(duration_minutes: Optional[int]) -> int:
        if duration_minutes is None:
            raise AvailabilityValidationError("duration_minutes", "is required")
        if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int):
            raise AvailabilityValidationError("duration_minutes", "must be an integer number of minutes")
        if duration_minutes <= 0:
            raise AvailabilityValidationError("duration_minutes", "must be a positive number of minutes")
        return duration_minutes

    @staticmethod
    def _validate_now(now: Optional[datetime]) -> datetime:
        if now is None:
            raise AvailabilityValidationError("now", "is required")
        return now

    @staticmethod
    def _calculate_provider_slots(
        snapshot: ScheduleSnapshot,
        provider_id: str,
        requested_date: date_type,
        duration_minutes: int,
        now: datetime,
        min_notice_days: int
    ) -> ProviderDayResult:
        """
        Run the single-day pipeline for one provider.

        resolve schedule -> generate candidates per interval -> filter conflicts.

        Returns:
            (day schedule, surviving slots sorted by start time)
        """
        day_schedule = ScheduleResolver(snapshot).resolve(provider_id, requested_date)
        if not day_schedule.is_available:
            return day_schedule, []

        # Overlapping intervals could produce the same start twice
        starts: Set[int] = set()
        candidates: List[CandidateSlot] = []
        for interval in day_schedule.intervals:
            for start in generate_slot_starts(interval, duration_minutes):
                if start in starts:
                    continue
                starts.add(start)
                candidates.append(CandidateSlot(
                    date=requested_date,
                    start_minutes=start,
                    end_minutes=start + duration_minutes,
                    provider_id=provider_id,
                ))
        candidates.sort()

        bookings = snapshot.bookings_for(provider_id, requested_date)
        slots = filter_conflicts(candidates, bookings, now, min_notice_days, snapshot.tz)
        logger.debug(
            f"Provider {provider_id} on {requested_date.isoformat()}: "
            f"{len(candidates)} candidate(s), {len(slots)} available"
        )
        return day_schedule, slots

    @staticmethod
    def get_daily_availability(
        snapshot: ScheduleSnapshot,
        provider_id: str,
        date: Union[date_type, str],
        duration_minutes: int,
        policy: BookingWindowPolicy,
        now: datetime
    ) -> DailyAvailability:
        """
        Get available slots for one provider on one date.

        Used by the provider-scoped booking screen.

        Args:
            snapshot: Schedule data supplied by the caller
            provider_id: Provider id
            date: Date (or YYYY-MM-DD string)
            duration_minutes: Required appointment duration
            policy: Practice booking window policy
            now: Current instant, injected by the caller

        Returns:
            DailyAvailability with slots ascending by start time and a status of
            ok, no_eligible_providers, no_schedule_configured or no_availability

        Raises:
            AvailabilityValidationError: If an input is missing or malformed
            BookingWindowError: If the date is outside the booking window
        """
        if not provider_id or not str(provider_id).strip():
            raise AvailabilityValidationError("provider_id", "is required")
        requested_date = AvailabilityService._parse_date(date, "date")
        duration_minutes = AvailabilityService._validate_duration(duration_minutes)
        now = AvailabilityService._validate_now(now)

        today = practice_today(now, snapshot.tz)
        window = BookingWindowService.ensure_bookable(requested_date, policy, today)

        if snapshot.get_provider(provider_id) is None:
            return DailyAvailability(
                provider_id=provider_id,
                date=requested_date,
                duration_minutes=duration_minutes,
                slots=[],
                status=AvailabilityStatus.NO_ELIGIBLE_PROVIDERS,
                min_date=window.min_date,
                max_date=window.max_date,
                warnings=list(snapshot.warnings),
            )

        day_schedule, slots = AvailabilityService._calculate_provider_slots(
            snapshot, provider_id, requested_date, duration_minutes, now, policy.min_notice_days
        )

        if day_schedule.status == ScheduleStatus.NO_SCHEDULE:
            result_status = AvailabilityStatus.NO_SCHEDULE_CONFIGURED
        elif not slots:
            result_status = AvailabilityStatus.NO_AVAILABILITY
        else:
            result_status = AvailabilityStatus.OK

        return DailyAvailability(
            provider_id=provider_id,
            date=requested_date,
            duration_minutes=duration_minutes,
            slots=slots,
            status=result_status,
            min_date=window.min_date,
            max_date=window.max_date,
            warnings=list(snapshot.warnings),
        )

    @staticmethod
    def _run_pairs(
        snapshot: ScheduleSnapshot,
        pairs: List[Tuple[date_type, str]],
        duration_minutes: int,
        now: datetime,
        min_notice_days: int,
        max_workers: Optional[int] = None
    ) -> List[ProviderDayResult]:
        """
        Compute every (date, provider) pair, fanning out on a thread pool when large.

        Pairs are independent and the snapshot is read-only, so no locking is
        needed; the caller sorts while merging.
        """
        def compute(pair: Tuple[date_type, str]) -> ProviderDayResult:
            requested_date, provider_id = pair
            return AvailabilityService._calculate_provider_slots(
                snapshot, provider_id, requested_date, duration_minutes, now, min_notice_days
            )

        workers = max_workers or AVAILABILITY_MAX_WORKERS
        if len(pairs) <= AVAILABILITY_PARALLEL_THRESHOLD or workers <= 1:
            return [compute(pair) for pair in pairs]

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="availability") as executor:
            return list(executor.map(compute, pairs))

    @staticmethod
    def _merge_results(
        snapshot: ScheduleSnapshot,
        results: Iterable[ProviderDayResult]
    ) -> Dict[date_type, DateAvailability]:
        """
        Merge per-provider slots into a date-indexed result.

        Start times are deduplicated per date (two providers free at 10:00 give
        one 10:00 entry). Dates without any slot are omitted.
        """
        slot_providers_by_date: Dict[date_type, Dict[str, Set[str]]] = {}
        for day_schedule, slots in results:
            if not slots:
                continue
            per_date = slot_providers_by_date.setdefault(day_schedule.date, {})
            for slot in slots:
                per_date.setdefault(slot.start_time, set()).add(slot.provider_id)

        by_date: Dict[date_type, DateAvailability] = {}
        for d in sorted(slot_providers_by_date):
            per_date = slot_providers_by_date[d]
            contributing: Set[str] = set()
            for provider_ids in per_date.values():
                contributing.update(provider_ids)
            providers: List[ProviderSummary] = []
            for pid in sorted(contributing):
                provider = snapshot.get_provider(pid)
                display_name = provider.display_name if provider else pid
                providers.append(ProviderSummary(id=pid, display_name=display_name))
            by_date[d] = DateAvailability(
                slots=sorted(per_date),
                providers=providers,
                slot_providers={start: sorted(per_date[start]) for start in sorted(per_date)},
            )
        return by_date

    @staticmethod
    def get_range_availability(
        snapshot: ScheduleSnapshot,
        provider_ids: Optional[List[str]],
        start_date: Union[date_type, str],
        end_date: Union[date_type, str],
        duration_minutes: int,
        policy: BookingWindowPolicy,
        now: datetime,
        max_workers: Optional[int] = None
    ) -> RangeAvailability:
        """
        Get merged availability for several providers across a date range.

        The range is clamped to the booking window rather than rejected; the
        clamped bounds are returned so the caller can say part of the range was
        ignored.

        Args:
            snapshot: Schedule data supplied by the caller
            provider_ids: Eligible providers, or None for every provider in the snapshot
            start_date: First date (inclusive)
            end_date: Last date (inclusive)
            duration_minutes: Required appointment duration
            policy: Practice booking window policy
            now: Current instant, injected by the caller
            max_workers: Worker pool size override

        Returns:
            RangeAvailability keyed by date; dates with no slot are omitted

        Raises:
            AvailabilityValidationError: If an input is missing or malformed
        """
        requested_start = AvailabilityService._parse_date(start_date, "start_date")
        requested_end = AvailabilityService._parse_date(end_date, "end_date")
        duration_minutes = AvailabilityService._validate_duration(duration_minutes)
        now = AvailabilityService._validate_now(now)

        if requested_end < requested_start:
            raise AvailabilityValidationError("end_date", "must not be before start_date")

        def empty_result(result_status: AvailabilityStatus, clamped_start=None, clamped_end=None, was_clamped=False):
            return RangeAvailability(
                by_date={},
                requested_start=requested_start,
                requested_end=requested_end,
                start_date=clamped_start,
                end_date=clamped_end,
                was_clamped=was_clamped,
                duration_minutes=duration_minutes,
                status=result_status,
                warnings=list(snapshot.warnings),
            )

        if provider_ids is None:
            eligible = snapshot.provider_ids
        else:
            eligible = sorted({pid for pid in provider_ids if snapshot.get_provider(pid) is not None})
            unknown = sorted({pid for pid in provider_ids if snapshot.get_provider(pid) is None})
            if unknown:
                logger.warning(f"Ignoring providers missing from roster: {', '.join(unknown)}")

        today = practice_today(now, snapshot.tz)
        clamped = BookingWindowService.clamp_range(requested_start, requested_end, policy, today)

        if not eligible:
            if clamped is None:
                return empty_result(AvailabilityStatus.NO_ELIGIBLE_PROVIDERS, was_clamped=True)
            return empty_result(
                AvailabilityStatus.NO_ELIGIBLE_PROVIDERS, clamped.start_date, clamped.end_date, clamped.was_clamped
            )
        if clamped is None:
            return empty_result(AvailabilityStatus.NO_AVAILABILITY, was_clamped=True)

        pairs = [
            (d, pid)
            for d in iter_dates(clamped.start_date, clamped.end_date)
            for pid in eligible
        ]
        results = AvailabilityService._run_pairs(
            snapshot, pairs, duration_minutes, now, policy.min_notice_days, max_workers
        )
        by_date = AvailabilityService._merge_results(snapshot, results)

        if by_date:
            result_status = AvailabilityStatus.OK
        elif all(day_schedule.status == ScheduleStatus.NO_SCHEDULE for day_schedule, _ in results):
            result_status = AvailabilityStatus.NO_SCHEDULE_CONFIGURED
        else:
            result_status = AvailabilityStatus.NO_AVAILABILITY

        logger.debug(
            f"Range {clamped.start_date.isoformat()}..{clamped.end_date.isoformat()} "
            f"for {len(eligible)} provider(s): {len(by_date)} date(s) with availability"
        )

        return RangeAvailability(
            by_date=by_date,
            requested_start=requested_start,
            requested_end=requested_end,
            start_date=clamped.start_date,
            end_date=clamped.end_date,
            was_clamped=clamped.was_clamped,
            duration_minutes=duration_minutes,
            status=result_status,
            warnings=list(snapshot.warnings),
        )

    @staticmethod
    def _check_provider_at(
        snapshot: ScheduleSnapshot,
        provider_id: str,
        requested_date: date_type,
        start_minutes: int,
        end_minutes: int,
        cutoff: datetime
    ) -> Optional[str]:
        """
        Check one provider for one proposed slot.

        Returns:
            None if bookable, otherwise the reason it is not
        """
        day_schedule = ScheduleResolver(snapshot).resolve(provider_id, requested_date)
        if not day_schedule.is_available:
            return "outside_working_hours"
        if not any(
            contains(interval.start_minutes, interval.end_minutes, start_minutes, end_minutes)
            for interval in day_schedule.intervals
        ):
            return "outside_working_hours"

        slot_start = minutes_to_datetime(requested_date, start_minutes, snapshot.tz)
        slot_end = minutes_to_datetime(requested_date, end_minutes, snapshot.tz)
        if slot_start < cutoff:
            return "too_soon"
        bookings = snapshot.bookings_for(provider_id, requested_date)
        if not is_slot_bookable(slot_start, slot_end, bookings, cutoff):
            return "conflict"
        return None

    @staticmethod
    def check_booking(
        snapshot: ScheduleSnapshot,
        start: datetime,
        duration_minutes: int,
        policy: BookingWindowPolicy,
        now: datetime,
        provider_id: Optional[str] = None
    ) -> BookingCheck:
        """
        Check whether a proposed appointment start is still bookable.

        With a provider_id, checks that provider only. Without one, picks the
        first provider (by id) who is working and free at that time.

        The start does not need to be on the slot grid; it must fit inside a
        working interval, respect the booking window and notice cutoff, and not
        overlap a blocking booking.

        Args:
            snapshot: Schedule data supplied by the caller
            start: Proposed start (naive values are practice-local)
            duration_minutes: Required appointment duration
            policy: Practice booking window policy
            now: Current instant, injected by the caller
            provider_id: Specific provider, or None to auto-assign

        Returns:
            BookingCheck; when unavailable, reason is one of too_soon,
            too_far_out, outside_working_hours, conflict, provider_not_found,
            no_provider_available

        Raises:
            AvailabilityValidationError: If an input is missing or malformed
        """
        if start is None:
            raise AvailabilityValidationError("start", "is required")
        duration_minutes = AvailabilityService._validate_duration(duration_minutes)
        now = AvailabilityService._validate_now(now)

        local_start = ensure_practice_tz(start, snapshot.tz)
        requested_date, start_minutes = datetime_to_minutes(local_start, snapshot.tz)
        end_minutes = start_minutes + duration_minutes
        start_label = format_minutes(start_minutes)
        end_label = format_minutes(end_minutes if end_minutes <= MINUTES_PER_DAY else end_minutes % MINUTES_PER_DAY)

        def unavailable(reason: str, pid: Optional[str] = provider_id) -> BookingCheck:
            return BookingCheck(
                available=False, provider_id=pid, start_time=start_label, end_time=end_label,
                reason=reason, warnings=list(snapshot.warnings),
            )

        today = practice_today(now, snapshot.tz)
        window = BookingWindowService.validate(requested_date, policy, today)
        if window.reason is not None:
            return unavailable(window.reason)
        if end_minutes > MINUTES_PER_DAY:
            return unavailable("outside_working_hours")

        cutoff = notice_cutoff(now, policy.min_notice_days, snapshot.tz)

        if provider_id is not None:
            if snapshot.get_provider(provider_id) is None:
                return unavailable("provider_not_found")
            reason = AvailabilityService._check_provider_at(
                snapshot, provider_id, requested_date, start_minutes, end_minutes, cutoff
            )
            if reason is not None:
                return unavailable(reason)
            return BookingCheck(
                available=True, provider_id=provider_id, start_time=start_label,
                end_time=end_label, warnings=list(snapshot.warnings),
            )

        if minutes_to_datetime(requested_date, start_minutes, snapshot.tz) < cutoff:
            return unavailable("too_soon", None)

        for candidate_id in snapshot.provider_ids:
            reason = AvailabilityService._check_provider_at(
                snapshot, candidate_id, requested_date, start_minutes, end_minutes, cutoff
            )
            if reason is None:
                logger.debug(f"Assigned provider {candidate_id} for {requested_date.isoformat()} {start_label}")
                return BookingCheck(
                    available=True, provider_id=candidate_id, start_time=start_label,
                    end_time=end_label, warnings=list(snapshot.warnings),
                )
        return unavailable("no_provider_available", None)
