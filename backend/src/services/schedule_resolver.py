"""
Schedule resolver: effective working intervals of a provider on a date.

Precedence, highest first:
1. ABSENCE exception for the date -> unavailable
2. MODIFIED_HOURS exception for the date -> one interval from the exception,
   replacing (not merging with) the recurring schedule
3. Recurring weekly schedule rows for the weekday, valid on the date
4. Nothing configured -> unavailable
"""

import logging
from datetime import date
from typing import List

from core.config import DEFAULT_SLOT_GRANULARITY_MINUTES
from services.schedule_data import ScheduleSnapshot
from shared_types import DaySchedule, ScheduleStatus, WorkingInterval
from utils.datetime_utils import parse_clock_time

logger = logging.getLogger(__name__)


class ScheduleResolver:
    """Resolves day schedules against a ScheduleSnapshot. Stateless beyond the snapshot."""

    def __init__(self, snapshot: ScheduleSnapshot):
        self.snapshot = snapshot

    def resolve(self, provider_id: str, d: date) -> DaySchedule:
        """
        Resolve the working intervals of a provider on a date.

        Args:
            provider_id: Provider id
            d: Practice-local calendar date

        Returns:
            DaySchedule with status AVAILABLE and a non-empty, start-sorted list of
            intervals, or status ABSENCE / NO_SCHEDULE and no intervals
        """
        base_schedules = self.snapshot.schedules_for(provider_id, d)
        exception = self.snapshot.exception_for(provider_id, d)

        if exception is not None:
            if exception.is_absence:
                logger.debug(f"Provider {provider_id} absent on {d.isoformat()} (exception {exception.id})")
                return DaySchedule(provider_id, d, ScheduleStatus.ABSENCE)

            # Modified hours keep the granularity of the regular schedule for that weekday
            granularity = (
                base_schedules[0].slot_granularity_minutes
                if base_schedules else DEFAULT_SLOT_GRANULARITY_MINUTES
            )
            if exception.start_time is None or exception.end_time is None:
                raise ValueError(f"Modified hours exception {exception.id} has no start_time/end_time")
            interval = WorkingInterval(
                start_minutes=parse_clock_time(exception.start_time),
                end_minutes=parse_clock_time(exception.end_time),
                granularity_minutes=granularity,
            )
            return DaySchedule(provider_id, d, ScheduleStatus.AVAILABLE, [interval])

        if not base_schedules:
            return DaySchedule(provider_id, d, ScheduleStatus.NO_SCHEDULE)

        intervals: List[WorkingInterval] = [
            WorkingInterval(
                start_minutes=schedule.start_minutes,
                end_minutes=schedule.end_minutes,
                granularity_minutes=schedule.slot_granularity_minutes,
            )
            for schedule in base_schedules
        ]
        return DaySchedule(provider_id, d, ScheduleStatus.AVAILABLE, intervals)
