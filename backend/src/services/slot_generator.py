"""
Slot generator: candidate start times inside a working interval.
"""

from typing import List

from services.errors import AvailabilityValidationError
from shared_types import WorkingInterval


def generate_slot_starts(interval: WorkingInterval, duration_minutes: int) -> List[int]:
    """
    Enumerate candidate start offsets (minutes from midnight) for an interval.

    Starts at interval.start_minutes and steps by interval.granularity_minutes,
    keeping every start whose slot still ends within the interval. A duration
    longer than the interval yields an empty list.

    Args:
        interval: Working interval with its granularity
        duration_minutes: Required appointment duration

    Returns:
        Strictly ascending list of start offsets

    Raises:
        AvailabilityValidationError: If duration or granularity is not positive
    """
    if duration_minutes <= 0:
        raise AvailabilityValidationError("duration_minutes", "must be a positive number of minutes")
    if interval.granularity_minutes <= 0:
        raise AvailabilityValidationError("granularity_minutes", "must be a positive number of minutes")

    last_start = interval.end_minutes - duration_minutes
    if last_start < interval.start_minutes:
        return []
    return list(range(interval.start_minutes, last_start + 1, interval.granularity_minutes))
