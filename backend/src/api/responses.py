"""
Shared response models for API endpoints.

This module contains Pydantic response models that are shared across
the availability endpoints to ensure consistency and reduce duplication.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel


class AvailableSlotResponse(BaseModel):
    """Response model for one available slot."""
    start_time: str  # Format: "HH:MM"
    end_time: str    # Format: "HH:MM"


class IntegrityWarningResponse(BaseModel):
    """A malformed input record that was skipped."""
    record_type: str
    record_id: str
    reason: str


class DailyAvailabilityResponse(BaseModel):
    """Response model for single-provider, single-day availability."""
    provider_id: str
    date: str  # Format: "YYYY-MM-DD"
    duration_minutes: int
    slots: List[AvailableSlotResponse]
    status: str  # ok | no_eligible_providers | no_schedule_configured | no_availability
    min_date: str  # first bookable date
    max_date: str  # last bookable date
    warnings: List[IntegrityWarningResponse] = []


class ProviderSummaryResponse(BaseModel):
    id: str
    display_name: str


class DateAvailabilityResponse(BaseModel):
    """Merged availability of all providers on one date."""
    slots: List[str]
    providers: List[ProviderSummaryResponse]
    slot_providers: Dict[str, List[str]]


class RangeAvailabilityResponse(BaseModel):
    """Response model for multi-provider, date-range availability."""
    by_date: Dict[str, DateAvailabilityResponse]
    requested_start: str
    requested_end: str
    start_date: Optional[str]  # Clamped to the booking window
    end_date: Optional[str]
    was_clamped: bool
    duration_minutes: int
    status: str
    warnings: List[IntegrityWarningResponse] = []


class BookingCheckResponse(BaseModel):
    """Response model for checking a proposed appointment start."""
    available: bool
    provider_id: Optional[str]
    start_time: str
    end_time: str
    reason: Optional[str] = None
    warnings: List[IntegrityWarningResponse] = []


class AppointmentTypeResponse(BaseModel):
    """Response model for appointment type."""
    appointment_type: str
    duration_minutes: int


class AppointmentTypeListResponse(BaseModel):
    """Response model for listing appointment types."""
    appointment_types: List[AppointmentTypeResponse]
