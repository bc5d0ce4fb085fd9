"""
Booking model: an existing reservation occupying provider time.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator

from core.constants import EXCLUDED_BOOKING_STATUSES


class Booking(BaseModel):
    """
    Existing reservation for a provider.

    start_time/end_time are absolute. Naive datetimes are read as practice-local
    time by the engine. Cancelled and no-show bookings never block a slot.
    """
    id: str
    provider_id: str
    start_time: datetime
    end_time: datetime
    status: str = "SCHEDULED"

    @field_validator('status', mode='before')
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def blocks_time(self) -> bool:
        """True if this booking participates in conflict detection."""
        return self.status not in EXCLUDED_BOOKING_STATUSES
