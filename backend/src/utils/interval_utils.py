"""
Interval primitives shared by every conflict check.

All intervals are half-open: [start, end). Two intervals that only touch at an
endpoint do not overlap. Works for any ordered values (minute offsets,
datetimes, times).
"""

from typing import Any, Iterable, Tuple


def overlaps(start1: Any, end1: Any, start2: Any, end2: Any) -> bool:
    """Check if [start1, end1) and [start2, end2) overlap."""
    return start1 < end2 and start2 < end1


def contains(outer_start: Any, outer_end: Any, start: Any, end: Any) -> bool:
    """Check if [start, end) lies entirely within [outer_start, outer_end)."""
    return outer_start <= start and end <= outer_end


def overlaps_any(start: Any, end: Any, intervals: Iterable[Tuple[Any, Any]]) -> bool:
    """Check if [start, end) overlaps any interval in `intervals`."""
    for other_start, other_end in intervals:
        if overlaps(start, end, other_start, other_end):
            return True
    return False
