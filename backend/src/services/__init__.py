"""
Services package for the availability engine.

This package contains the service classes and pipeline stages that compute
bookable slots. Transports (the FastAPI routers in api/) call into these
without modification.
"""

from .availability_service import AvailabilityService
from .appointment_type_service import AppointmentTypeService
from .booking_window_service import BookingWindowService
from .errors import AvailabilityValidationError, BookingWindowError
from .schedule_data import ScheduleSnapshot
from .schedule_resolver import ScheduleResolver

__all__ = [
    "AvailabilityService",
    "AppointmentTypeService",
    "BookingWindowService",
    "AvailabilityValidationError",
    "BookingWindowError",
    "ScheduleSnapshot",
    "ScheduleResolver",
]
