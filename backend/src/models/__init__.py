# Package initialization
# Input records handed to the availability engine by its caller
from .provider import Provider
from .work_schedule import WorkSchedule, ScheduleException, ExceptionType
from .booking import Booking
from .booking_policy import BookingWindowPolicy

__all__ = [
    "Provider",
    "WorkSchedule",
    "ScheduleException",
    "ExceptionType",
    "Booking",
    "BookingWindowPolicy",
]
