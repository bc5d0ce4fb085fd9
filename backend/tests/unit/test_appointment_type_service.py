"""
Unit tests for AppointmentTypeService.
"""

import pytest

from services.appointment_type_service import AppointmentTypeService
from services.errors import AvailabilityValidationError


class TestResolveDuration:
    """Test duration resolution."""

    @pytest.mark.parametrize("appointment_type,minutes", [
        ("CHECKUP", 20),
        ("treatment", 45),
        (" Consultation ", 30),
        ("HYGIENE", 30),
        ("EMERGENCY", 30),
    ])
    def test_default_catalog(self, appointment_type, minutes):
        assert AppointmentTypeService.resolve_duration(appointment_type) == minutes

    def test_override_wins(self):
        assert AppointmentTypeService.resolve_duration("CHECKUP", duration_override=60) == 60

    def test_override_without_type(self):
        assert AppointmentTypeService.resolve_duration(duration_override=15) == 15

    def test_practice_catalog_merged(self):
        catalog = {"checkup": 25, "WHITENING": 90}

        assert AppointmentTypeService.resolve_duration("CHECKUP", catalog=catalog) == 25
        assert AppointmentTypeService.resolve_duration("WHITENING", catalog=catalog) == 90
        assert AppointmentTypeService.resolve_duration("TREATMENT", catalog=catalog) == 45

    def test_unknown_type(self):
        with pytest.raises(AvailabilityValidationError) as exc_info:
            AppointmentTypeService.resolve_duration("SURGERY")

        assert exc_info.value.field == "appointment_type"

    def test_neither_given(self):
        with pytest.raises(AvailabilityValidationError):
            AppointmentTypeService.resolve_duration()

    def test_non_positive_override(self):
        with pytest.raises(AvailabilityValidationError) as exc_info:
            AppointmentTypeService.resolve_duration("CHECKUP", duration_override=0)

        assert exc_info.value.field == "duration_minutes"

    def test_non_positive_catalog_entry(self):
        with pytest.raises(AvailabilityValidationError):
            AppointmentTypeService.resolve_duration("BROKEN", catalog={"BROKEN": 0})


class TestListAppointmentTypes:

    def test_sorted_by_identifier(self):
        types = AppointmentTypeService.list_appointment_types()

        assert [t["appointment_type"] for t in types] == [
            "CHECKUP", "CONSULTATION", "EMERGENCY", "HYGIENE", "TREATMENT"
        ]
        assert types[0]["duration_minutes"] == 20
