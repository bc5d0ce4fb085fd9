# pyright: reportMissingTypeStubs=false
"""
Availability API endpoints.

Thin HTTP wrapper around AvailabilityService. The engine owns no storage, so
each request carries the schedule data the caller has already fetched, plus
the instant to treat as `now`.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field, ValidationError

from api.responses import (
    AppointmentTypeListResponse, BookingCheckResponse, DailyAvailabilityResponse,
    RangeAvailabilityResponse
)
from models import Booking, BookingWindowPolicy, Provider, ScheduleException, WorkSchedule
from services import AppointmentTypeService, AvailabilityService, ScheduleSnapshot
from services.errors import AvailabilityValidationError
from utils.datetime_utils import get_practice_tz

logger = logging.getLogger(__name__)

router = APIRouter()


# ===== Request Models =====

class ScheduleDataRequest(BaseModel):
    """Schedule data shared by every availability request."""
    providers: List[Provider] = []
    schedules: List[WorkSchedule] = []
    exceptions: List[ScheduleException] = []
    bookings: List[Booking] = []
    booking_settings: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Practice booking settings blob; defaults apply to missing keys"
    )
    appointment_type_durations: Optional[Dict[str, int]] = None
    timezone: Optional[str] = Field(default=None, description="IANA time zone; defaults to PRACTICE_TIMEZONE")
    now: datetime


class DailyAvailabilityRequest(ScheduleDataRequest):
    provider_id: str
    date: str  # Format: "YYYY-MM-DD"
    appointment_type: Optional[str] = None
    duration_minutes: Optional[int] = None


class RangeAvailabilityRequest(ScheduleDataRequest):
    provider_ids: Optional[List[str]] = None  # None means every provider in the roster
    start_date: str
    end_date: str
    appointment_type: Optional[str] = None
    duration_minutes: Optional[int] = None


class BookingCheckRequest(ScheduleDataRequest):
    provider_id: Optional[str] = None  # None lets the engine pick a provider
    start: datetime
    appointment_type: Optional[str] = None
    duration_minutes: Optional[int] = None


# ===== Helpers =====

def _build_snapshot(request: ScheduleDataRequest) -> ScheduleSnapshot:
    try:
        tz = get_practice_tz(request.timezone)
    except ValueError as e:
        raise AvailabilityValidationError("timezone", str(e))
    return ScheduleSnapshot(
        providers=request.providers,
        schedules=request.schedules,
        exceptions=request.exceptions,
        bookings=request.bookings,
        tz=tz,
    )


def _build_policy(request: ScheduleDataRequest) -> BookingWindowPolicy:
    try:
        return BookingWindowPolicy.from_settings(request.booking_settings)
    except ValidationError as e:
        raise AvailabilityValidationError("booking_settings", str(e.errors()[0].get("msg", e)))


def _resolve_duration(appointment_type: Optional[str], duration_minutes: Optional[int],
                      request: ScheduleDataRequest) -> int:
    return AppointmentTypeService.resolve_duration(
        appointment_type, duration_minutes, request.appointment_type_durations
    )


# ===== Endpoints =====

@router.post(
    "/daily",
    summary="Get daily availability",
    description="Available slots for one provider on one date",
    response_model=DailyAvailabilityResponse,
)
def get_daily_availability(request: DailyAvailabilityRequest) -> DailyAvailabilityResponse:
    duration = _resolve_duration(request.appointment_type, request.duration_minutes, request)
    snapshot = _build_snapshot(request)
    result = AvailabilityService.get_daily_availability(
        snapshot=snapshot,
        provider_id=request.provider_id,
        date=request.date,
        duration_minutes=duration,
        policy=_build_policy(request),
        now=request.now,
    )
    return DailyAvailabilityResponse.model_validate(result.to_dict())


@router.post(
    "/range",
    summary="Get range availability",
    description="Merged availability for several providers across a date range",
    response_model=RangeAvailabilityResponse,
)
def get_range_availability(request: RangeAvailabilityRequest) -> RangeAvailabilityResponse:
    duration = _resolve_duration(request.appointment_type, request.duration_minutes, request)
    snapshot = _build_snapshot(request)
    result = AvailabilityService.get_range_availability(
        snapshot=snapshot,
        provider_ids=request.provider_ids,
        start_date=request.start_date,
        end_date=request.end_date,
        duration_minutes=duration,
        policy=_build_policy(request),
        now=request.now,
    )
    return RangeAvailabilityResponse.model_validate(result.to_dict())


@router.post(
    "/check",
    summary="Check a proposed appointment",
    description="Whether a start time is still bookable, optionally assigning a provider",
    response_model=BookingCheckResponse,
)
def check_booking(request: BookingCheckRequest) -> BookingCheckResponse:
    duration = _resolve_duration(request.appointment_type, request.duration_minutes, request)
    snapshot = _build_snapshot(request)
    result = AvailabilityService.check_booking(
        snapshot=snapshot,
        start=request.start,
        duration_minutes=duration,
        policy=_build_policy(request),
        now=request.now,
        provider_id=request.provider_id,
    )
    return BookingCheckResponse.model_validate(result.to_dict())


@router.get(
    "/appointment-types",
    summary="List appointment types",
    description="Default appointment types and their durations",
    response_model=AppointmentTypeListResponse,
)
def list_appointment_types() -> AppointmentTypeListResponse:
    return AppointmentTypeListResponse.model_validate(
        {"appointment_types": AppointmentTypeService.list_appointment_types()}
    )
