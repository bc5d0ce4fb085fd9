"""
Booking window policy for a practice.

Practices store their booking settings as a loose JSON blob. This model is the
validated form of that blob; defaults are applied once, when the policy is
built, never at the point of use.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_validator

from core.config import DEFAULT_MIN_NOTICE_DAYS, DEFAULT_MAX_ADVANCE_DAYS
from core.constants import MAX_ADVANCE_DAYS_LIMIT


class BookingWindowPolicy(BaseModel):
    """Schema for booking window settings."""
    min_notice_days: int = Field(
        default=DEFAULT_MIN_NOTICE_DAYS,
        ge=0,
        description="Earliest bookable day, counted from today. 0 allows same-day booking, 1 means tomorrow at the earliest."
    )
    max_advance_days: int = Field(
        default=DEFAULT_MAX_ADVANCE_DAYS,
        ge=0,
        le=MAX_ADVANCE_DAYS_LIMIT,
        description="Latest bookable day, counted from today."
    )

    @model_validator(mode='before')
    @classmethod
    def migrate_legacy_keys(cls, data: Any) -> Any:
        """
        Accept the camelCase keys stored by the web app.

        `bookingWindowDays` is the old name of max_advance_days. Explicit
        snake_case keys win over legacy ones.
        """
        if isinstance(data, dict):
            data = dict(data)  # type: ignore[reportUnknownArgumentType]
            if 'min_notice_days' not in data and 'minNoticeDays' in data:
                data['min_notice_days'] = data.pop('minNoticeDays')
            if 'max_advance_days' not in data:
                for legacy_key in ('maxAdvanceDays', 'bookingWindowDays'):
                    if legacy_key in data:
                        data['max_advance_days'] = data.pop(legacy_key)
                        break
            # Null in the stored blob means "not configured"
            for key in ('min_notice_days', 'max_advance_days'):
                if key in data and data[key] is None:
                    del data[key]
        return data

    @model_validator(mode='after')
    def check_window_order(self) -> "BookingWindowPolicy":
        if self.max_advance_days < self.min_notice_days:
            raise ValueError(
                f"max_advance_days ({self.max_advance_days}) must be >= "
                f"min_notice_days ({self.min_notice_days})"
            )
        return self

    @classmethod
    def from_settings(cls, settings: Optional[Dict[str, Any]]) -> "BookingWindowPolicy":
        """
        Build a policy from a practice settings blob.

        Looks for a nested "booking" section first (the web app's layout), then
        falls back to the top level. Missing settings yield the defaults.
        """
        if not settings:
            return cls()
        booking = settings.get('booking')
        if isinstance(booking, dict):
            return cls.model_validate(booking)
        return cls.model_validate(settings)
