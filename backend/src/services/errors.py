"""
Errors raised by the availability services.

Both subclass ValueError so any transport that maps ValueError to a client
error (as main.py does) handles them without special cases.
"""

from datetime import date
from typing import Optional


class AvailabilityValidationError(ValueError):
    """A request field is missing or malformed. Raised before any computation."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class BookingWindowError(ValueError):
    """A single-date request falls outside the practice's booking window."""

    def __init__(self, reason: str, min_date: date, max_date: date, requested_date: Optional[date] = None):
        self.reason = reason
        self.min_date = min_date
        self.max_date = max_date
        self.requested_date = requested_date
        if reason == "too_soon":
            message = f"Date must be on or after {min_date.isoformat()}"
        else:
            message = f"Date must be on or before {max_date.isoformat()}"
        super().__init__(message)
