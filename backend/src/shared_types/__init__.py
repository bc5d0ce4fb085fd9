"""
Shared type definitions for the availability engine.

This module contains dataclasses and types that are used across multiple services.
"""

from shared_types.availability import (
    AvailabilityStatus,
    BookingCheck,
    BookingWindowResult,
    CandidateSlot,
    ClampedRange,
    DailyAvailability,
    DataIntegrityWarning,
    DateAvailability,
    DaySchedule,
    ProviderSummary,
    RangeAvailability,
    ScheduleStatus,
    WorkingInterval,
)

__all__ = [
    "AvailabilityStatus",
    "BookingCheck",
    "BookingWindowResult",
    "CandidateSlot",
    "ClampedRange",
    "DailyAvailability",
    "DataIntegrityWarning",
    "DateAvailability",
    "DaySchedule",
    "ProviderSummary",
    "RangeAvailability",
    "ScheduleStatus",
    "WorkingInterval",
]
