"""
Unit tests for configuration defaults.

The test run never loads a .env file, so these are the built-in defaults.
"""

from core import config
from core.constants import APPOINTMENT_TYPE_DURATIONS, MAX_ADVANCE_DAYS_LIMIT


class TestConfigDefaults:

    def test_testing_detected(self):
        assert config.is_testing

    def test_booking_window_defaults(self):
        assert config.DEFAULT_MIN_NOTICE_DAYS == 1
        assert config.DEFAULT_MAX_ADVANCE_DAYS == 90
        assert config.DEFAULT_SLOT_GRANULARITY_MINUTES == 15

    def test_worker_pool_defaults(self):
        assert config.AVAILABILITY_MAX_WORKERS >= 1
        assert config.AVAILABILITY_PARALLEL_THRESHOLD >= 0

    def test_practice_timezone_name_from_environment(self, monkeypatch):
        monkeypatch.setenv("PRACTICE_TIMEZONE", "Europe/Brussels")

        assert config.get_practice_timezone_name() == "Europe/Brussels"

    def test_advance_days_limit(self):
        assert MAX_ADVANCE_DAYS_LIMIT == 365

    def test_appointment_type_durations(self):
        assert APPOINTMENT_TYPE_DURATIONS["CHECKUP"] == 20
        assert APPOINTMENT_TYPE_DURATIONS["TREATMENT"] == 45
