"""
Work schedule models: the recurring weekly template and date-specific exceptions.

Rows are created and edited by practice staff and handed to the engine
read-only. Format problems (a time that is not HH:MM) are rejected here;
ordering problems (start not before end) are data-integrity faults that the
engine skips and reports, so they are allowed through.
"""

from datetime import date
from enum import Enum
from typing import Optional, Any

from pydantic import BaseModel, Field, field_validator

from core.config import DEFAULT_SLOT_GRANULARITY_MINUTES
from core.constants import ABSENCE_EXCEPTION_ALIASES
from utils.datetime_utils import parse_clock_time, format_minutes


def _normalize_clock_time(value: Any) -> Any:
    """Normalize "9:00" / "09:00:00" to "09:00"; leave non-strings for pydantic."""
    if isinstance(value, str):
        return format_minutes(parse_clock_time(value))
    return value


class ExceptionType(str, Enum):
    """Kind of date-specific override."""
    ABSENCE = "ABSENCE"
    MODIFIED_HOURS = "MODIFIED_HOURS"


class WorkSchedule(BaseModel):
    """Recurring weekly work interval for a provider."""
    id: str
    provider_id: str
    day_of_week: int = Field(ge=0, le=6, description="0=Monday .. 6=Sunday, practice-local week")
    start_time: str = Field(description="Clock time HH:MM")
    end_time: str = Field(description="Clock time HH:MM")
    slot_granularity_minutes: int = Field(default=DEFAULT_SLOT_GRANULARITY_MINUTES, ge=1, le=240)
    is_active: bool = True
    valid_until: Optional[date] = None

    @field_validator('start_time', 'end_time', mode='before')
    @classmethod
    def normalize_times(cls, v: Any) -> Any:
        return _normalize_clock_time(v)

    @property
    def start_minutes(self) -> int:
        return parse_clock_time(self.start_time)

    @property
    def end_minutes(self) -> int:
        return parse_clock_time(self.end_time)

    def is_valid_on(self, d: date) -> bool:
        """Active, and not superseded before the given date."""
        if not self.is_active:
            return False
        return self.valid_until is None or self.valid_until >= d


class ScheduleException(BaseModel):
    """One-off override of a provider's schedule on a single date."""
    id: str
    provider_id: str
    exception_date: date
    exception_type: ExceptionType
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    @field_validator('exception_type', mode='before')
    @classmethod
    def map_absence_aliases(cls, v: Any) -> Any:
        """
        Accept the legacy HOLIDAY and SICK types as absences.

        Any other unknown value is left for enum validation to reject.
        """
        if isinstance(v, str):
            upper = v.strip().upper()
            if upper in ABSENCE_EXCEPTION_ALIASES:
                return ExceptionType.ABSENCE.value
            return upper
        return v

    @field_validator('start_time', 'end_time', mode='before')
    @classmethod
    def normalize_times(cls, v: Any) -> Any:
        return _normalize_clock_time(v)

    @property
    def is_absence(self) -> bool:
        return self.exception_type == ExceptionType.ABSENCE
