"""
Unit tests for BookingWindowService.
"""

import pytest
from datetime import date

from models import BookingWindowPolicy
from services.booking_window_service import BookingWindowService
from services.errors import BookingWindowError
from tests.builders import MONDAY, SUNDAY


class TestValidate:
    """Test single-date window checks."""

    def test_tomorrow_allowed_with_one_day_notice(self, default_policy):
        result = BookingWindowService.validate(MONDAY, default_policy, SUNDAY)

        assert result.ok
        assert result.min_date == MONDAY
        assert result.max_date == date(2026, 4, 4)

    def test_today_too_soon(self, default_policy):
        result = BookingWindowService.validate(SUNDAY, default_policy, SUNDAY)

        assert not result.ok
        assert result.reason == "too_soon"

    def test_last_day_allowed(self, default_policy):
        assert BookingWindowService.validate(date(2026, 4, 4), default_policy, SUNDAY).ok

    def test_too_far_out(self, default_policy):
        result = BookingWindowService.validate(date(2026, 4, 5), default_policy, SUNDAY)

        assert not result.ok
        assert result.reason == "too_far_out"

    def test_same_day_booking(self):
        policy = BookingWindowPolicy(min_notice_days=0, max_advance_days=0)

        assert BookingWindowService.validate(SUNDAY, policy, SUNDAY).ok
        assert not BookingWindowService.validate(MONDAY, policy, SUNDAY).ok


class TestEnsureBookable:

    def test_returns_window_when_bookable(self, default_policy):
        result = BookingWindowService.ensure_bookable(MONDAY, default_policy, SUNDAY)

        assert result.ok
        assert result.reason is None
        assert result.min_date == MONDAY
        assert result.max_date == date(2026, 4, 4)

    def test_raises_with_window_bounds(self, default_policy):
        with pytest.raises(BookingWindowError) as exc_info:
            BookingWindowService.ensure_bookable(SUNDAY, default_policy, SUNDAY)

        error = exc_info.value
        assert error.reason == "too_soon"
        assert error.min_date == MONDAY
        assert error.requested_date == SUNDAY
        assert str(error) == "Date must be on or after 2026-01-05"

    def test_too_far_message(self, default_policy):
        with pytest.raises(BookingWindowError, match="on or before 2026-04-04"):
            BookingWindowService.ensure_bookable(date(2026, 6, 1), default_policy, SUNDAY)

    def test_booking_window_error_is_value_error(self, default_policy):
        with pytest.raises(ValueError):
            BookingWindowService.ensure_bookable(SUNDAY, default_policy, SUNDAY)


class TestClampRange:
    """Test range clamping."""

    def test_inside_window_unchanged(self, default_policy):
        clamped = BookingWindowService.clamp_range(MONDAY, date(2026, 1, 9), default_policy, SUNDAY)

        assert clamped.start_date == MONDAY
        assert clamped.end_date == date(2026, 1, 9)
        assert not clamped.was_clamped

    def test_start_clamped_to_min_date(self, default_policy):
        clamped = BookingWindowService.clamp_range(date(2026, 1, 1), date(2026, 1, 9), default_policy, SUNDAY)

        assert clamped.start_date == MONDAY
        assert clamped.was_clamped

    def test_end_clamped_to_max_date(self, default_policy):
        clamped = BookingWindowService.clamp_range(date(2026, 3, 20), date(2026, 4, 15), default_policy, SUNDAY)

        assert clamped.end_date == date(2026, 4, 4)
        assert clamped.was_clamped

    def test_fully_outside_returns_none(self, default_policy):
        assert BookingWindowService.clamp_range(date(2025, 12, 1), SUNDAY, default_policy, SUNDAY) is None
