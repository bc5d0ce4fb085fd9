"""
Shared types for availability-related functionality.

This module contains shared data classes and types used across availability services
to ensure type safety and consistency. These are engine-internal values produced
per request; nothing here is persisted.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from utils.datetime_utils import format_minutes


class ScheduleStatus(str, Enum):
    """Outcome of resolving a provider's schedule for one date."""
    AVAILABLE = "available"
    ABSENCE = "absence"
    NO_SCHEDULE = "no_schedule"


class AvailabilityStatus(str, Enum):
    """
    Top-level signal returned with every availability result.

    Lets callers tell "nobody can do this" apart from "fully booked".
    """
    OK = "ok"
    NO_ELIGIBLE_PROVIDERS = "no_eligible_providers"
    NO_SCHEDULE_CONFIGURED = "no_schedule_configured"
    NO_AVAILABILITY = "no_availability"


@dataclass(frozen=True)
class WorkingInterval:
    """Contiguous clock-time range, in minutes from midnight, with its slot step."""
    start_minutes: int
    end_minutes: int
    granularity_minutes: int


@dataclass(frozen=True)
class DaySchedule:
    """Effective working intervals of a provider on a date, after exceptions."""
    provider_id: str
    date: date
    status: ScheduleStatus
    intervals: List[WorkingInterval] = field(default_factory=list)

    @property
    def is_available(self) -> bool:
        return self.status == ScheduleStatus.AVAILABLE and bool(self.intervals)


@dataclass(frozen=True, order=True)
class CandidateSlot:
    """A bookable start/end pair of the requested duration."""
    date: date
    start_minutes: int
    end_minutes: int
    provider_id: str

    @property
    def start_time(self) -> str:
        return format_minutes(self.start_minutes)

    @property
    def end_time(self) -> str:
        return format_minutes(self.end_minutes)

    def to_dict(self) -> Dict[str, str]:
        """Convert to the clock-time form shown to callers."""
        return {"start_time": self.start_time, "end_time": self.end_time}


@dataclass(frozen=True)
class DataIntegrityWarning:
    """A malformed input record that was skipped."""
    record_type: str  # "schedule", "exception" or "booking"
    record_id: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "record_type": self.record_type,
            "record_id": self.record_id,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class ProviderSummary:
    id: str
    display_name: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "display_name": self.display_name}


@dataclass
class DailyAvailability:
    """Open slots for one provider on one date."""
    provider_id: str
    date: date
    duration_minutes: int
    slots: List[CandidateSlot]
    status: AvailabilityStatus
    min_date: date  # booking window in force for the request
    max_date: date
    warnings: List[DataIntegrityWarning] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider_id": self.provider_id,
            "date": self.date.isoformat(),
            "duration_minutes": self.duration_minutes,
            "slots": [slot.to_dict() for slot in self.slots],
            "status": self.status.value,
            "min_date": self.min_date.isoformat(),
            "max_date": self.max_date.isoformat(),
            "warnings": [w.to_dict() for w in self.warnings],
        }


@dataclass
class DateAvailability:
    """
    Merged availability of several providers on one date.

    slots holds distinct start times; slot_providers maps each start time to
    the ids of the providers free at that time.
    """
    slots: List[str]
    providers: List[ProviderSummary]
    slot_providers: Dict[str, List[str]]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slots": list(self.slots),
            "providers": [p.to_dict() for p in self.providers],
            "slot_providers": {k: list(v) for k, v in self.slot_providers.items()},
        }


@dataclass
class RangeAvailability:
    """Date-indexed availability for a range of dates and a set of providers."""
    by_date: Dict[date, DateAvailability]
    requested_start: date
    requested_end: date
    start_date: Optional[date]  # Clamped bounds; None if nothing was left
    end_date: Optional[date]
    was_clamped: bool
    duration_minutes: int
    status: AvailabilityStatus
    warnings: List[DataIntegrityWarning] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "by_date": {d.isoformat(): v.to_dict() for d, v in self.by_date.items()},
            "requested_start": self.requested_start.isoformat(),
            "requested_end": self.requested_end.isoformat(),
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "was_clamped": self.was_clamped,
            "duration_minutes": self.duration_minutes,
            "status": self.status.value,
            "warnings": [w.to_dict() for w in self.warnings],
        }


@dataclass(frozen=True)
class BookingWindowResult:
    """Verdict of the booking window check for a single date."""
    ok: bool
    min_date: date
    max_date: date
    reason: Optional[str] = None  # "too_soon" or "too_far_out"


@dataclass(frozen=True)
class ClampedRange:
    start_date: date
    end_date: date
    was_clamped: bool


@dataclass(frozen=True)
class BookingCheck:
    """Whether a proposed appointment start is still bookable, and with whom."""
    available: bool
    provider_id: Optional[str]
    start_time: str
    end_time: str
    reason: Optional[str] = None
    warnings: List[DataIntegrityWarning] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "available": self.available,
            "provider_id": self.provider_id,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "reason": self.reason,
            "warnings": [w.to_dict() for w in self.warnings],
        }
