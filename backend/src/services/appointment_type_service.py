"""
Appointment type service for resolving appointment types to durations.

The catalog is configuration-like: a fixed mapping from appointment-type
identifier to minutes. A practice may pass its own catalog; an explicit
duration override always wins.
"""

import logging
from typing import Dict, List, Mapping, Optional

from core.constants import APPOINTMENT_TYPE_DURATIONS
from services.errors import AvailabilityValidationError

logger = logging.getLogger(__name__)


class AppointmentTypeService:
    """
    Service class for appointment type operations.
    """

    @staticmethod
    def get_catalog(overrides: Optional[Mapping[str, int]] = None) -> Dict[str, int]:
        """
        Get the appointment type catalog.

        Args:
            overrides: Practice-specific durations merged over the defaults

        Returns:
            Mapping of upper-case type identifier to duration in minutes
        """
        catalog = dict(APPOINTMENT_TYPE_DURATIONS)
        if overrides:
            for type_id, minutes in overrides.items():
                catalog[type_id.strip().upper()] = minutes
        return catalog

    @staticmethod
    def list_appointment_types(overrides: Optional[Mapping[str, int]] = None) -> List[Dict[str, object]]:
        """List appointment types sorted by identifier."""
        catalog = AppointmentTypeService.get_catalog(overrides)
        return [
            {"appointment_type": type_id, "duration_minutes": minutes}
            for type_id, minutes in sorted(catalog.items())
        ]

    @staticmethod
    def resolve_duration(
        appointment_type: Optional[str] = None,
        duration_override: Optional[int] = None,
        catalog: Optional[Mapping[str, int]] = None
    ) -> int:
        """
        Resolve the required duration for a request.

        Args:
            appointment_type: Appointment type identifier (case-insensitive)
            duration_override: Explicit duration in minutes; takes precedence
            catalog: Practice-specific durations merged over the defaults

        Returns:
            Duration in minutes

        Raises:
            AvailabilityValidationError: If neither is given, the type is unknown,
                or the resulting duration is not positive
        """
        if duration_override is not None:
            if duration_override <= 0:
                raise AvailabilityValidationError("duration_minutes", "must be a positive number of minutes")
            return duration_override

        if not appointment_type or not appointment_type.strip():
            raise AvailabilityValidationError(
                "appointment_type", "either appointment_type or duration_minutes is required"
            )

        durations = AppointmentTypeService.get_catalog(catalog)
        key = appointment_type.strip().upper()
        if key not in durations:
            raise AvailabilityValidationError("appointment_type", f"unknown appointment type: {appointment_type}")

        minutes = durations[key]
        if minutes <= 0:
            raise AvailabilityValidationError(
                "appointment_type", f"appointment type {key} has a non-positive duration"
            )
        return minutes
