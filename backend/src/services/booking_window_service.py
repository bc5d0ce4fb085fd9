"""
Booking window service.

Single-date requests outside the window are rejected; range requests are
clamped to the window because a partial range is still useful to the caller.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from models import BookingWindowPolicy
from services.errors import BookingWindowError
from shared_types import BookingWindowResult, ClampedRange

logger = logging.getLogger(__name__)


class BookingWindowService:
    """
    Service class for booking window checks.

    All methods take `today` explicitly (the practice-local date of the
    injected `now`).
    """

    @staticmethod
    def get_window(policy: BookingWindowPolicy, today: date) -> tuple[date, date]:
        """Return (min_date, max_date) of the window, both inclusive."""
        return (
            today + timedelta(days=policy.min_notice_days),
            today + timedelta(days=policy.max_advance_days),
        )

    @staticmethod
    def validate(requested_date: date, policy: BookingWindowPolicy, today: date) -> BookingWindowResult:
        """
        Check a single requested date against the window.

        Args:
            requested_date: Date the caller wants to book on
            policy: Practice booking window policy
            today: Practice-local date of `now`

        Returns:
            BookingWindowResult, with reason "too_soon" or "too_far_out" when rejected
        """
        min_date, max_date = BookingWindowService.get_window(policy, today)

        if requested_date < min_date:
            return BookingWindowResult(ok=False, min_date=min_date, max_date=max_date, reason="too_soon")
        if requested_date > max_date:
            return BookingWindowResult(ok=False, min_date=min_date, max_date=max_date, reason="too_far_out")
        return BookingWindowResult(ok=True, min_date=min_date, max_date=max_date)

    @staticmethod
    def ensure_bookable(requested_date: date, policy: BookingWindowPolicy, today: date) -> BookingWindowResult:
        """
        Same as validate(), but raises on rejection.

        Raises:
            BookingWindowError: With the reason and the computed min/max dates
        """
        result = BookingWindowService.validate(requested_date, policy, today)
        if result.reason is not None:
            raise BookingWindowError(result.reason, result.min_date, result.max_date, requested_date)
        return result

    @staticmethod
    def clamp_range(
        start_date: date,
        end_date: date,
        policy: BookingWindowPolicy,
        today: date
    ) -> Optional[ClampedRange]:
        """
        Clamp a requested date range to the booking window.

        Returns:
            ClampedRange, or None if no date of the range is bookable
        """
        min_date, max_date = BookingWindowService.get_window(policy, today)
        clamped_start = max(start_date, min_date)
        clamped_end = min(end_date, max_date)

        if clamped_start > clamped_end:
            logger.debug(
                f"Range {start_date.isoformat()}..{end_date.isoformat()} lies outside "
                f"window {min_date.isoformat()}..{max_date.isoformat()}"
            )
            return None

        return ClampedRange(
            start_date=clamped_start,
            end_date=clamped_end,
            was_clamped=(clamped_start != start_date or clamped_end != end_date),
        )
