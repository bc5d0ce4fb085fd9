"""
Unit tests for ScheduleResolver precedence rules.
"""

import pytest
from unittest.mock import patch

from services.schedule_resolver import ScheduleResolver
from shared_types import ScheduleStatus, WorkingInterval
from tests.builders import MONDAY, PRACTICE_TZ, TUESDAY, make_exception, make_schedule, make_snapshot


class TestScheduleResolver:
    """Test ScheduleResolver.resolve()."""

    def test_recurring_schedule(self, provider_a, monday_schedule_a):
        snapshot = make_snapshot([provider_a], [monday_schedule_a], tz=PRACTICE_TZ)

        day = ScheduleResolver(snapshot).resolve("A", MONDAY)

        assert day.status == ScheduleStatus.AVAILABLE
        assert day.intervals == [WorkingInterval(540, 1020, 15)]
        assert day.is_available

    def test_no_schedule_for_weekday(self, provider_a, monday_schedule_a):
        snapshot = make_snapshot([provider_a], [monday_schedule_a], tz=PRACTICE_TZ)

        day = ScheduleResolver(snapshot).resolve("A", TUESDAY)

        assert day.status == ScheduleStatus.NO_SCHEDULE
        assert day.intervals == []
        assert not day.is_available

    def test_absence_overrides_schedule(self, provider_a, monday_schedule_a):
        snapshot = make_snapshot(
            [provider_a], [monday_schedule_a], [make_exception("A", MONDAY, "HOLIDAY")], tz=PRACTICE_TZ
        )

        day = ScheduleResolver(snapshot).resolve("A", MONDAY)

        assert day.status == ScheduleStatus.ABSENCE
        assert not day.is_available

    def test_modified_hours_replace_schedule(self, provider_a, monday_schedule_a):
        exception = make_exception("A", MONDAY, "MODIFIED_HOURS", "10:00", "12:00")
        snapshot = make_snapshot([provider_a], [monday_schedule_a], [exception], tz=PRACTICE_TZ)

        day = ScheduleResolver(snapshot).resolve("A", MONDAY)

        assert day.status == ScheduleStatus.AVAILABLE
        assert day.intervals == [WorkingInterval(600, 720, 15)]

    def test_modified_hours_keep_schedule_granularity(self, provider_a):
        schedule = make_schedule("A", 0, "09:00", "17:00", granularity=30)
        exception = make_exception("A", MONDAY, "MODIFIED_HOURS", "10:00", "12:00")
        snapshot = make_snapshot([provider_a], [schedule], [exception], tz=PRACTICE_TZ)

        day = ScheduleResolver(snapshot).resolve("A", MONDAY)

        assert day.intervals[0].granularity_minutes == 30

    def test_modified_hours_on_day_off(self, provider_a, monday_schedule_a):
        """Extra opening on a day without a recurring schedule uses the default granularity."""
        exception = make_exception("A", TUESDAY, "MODIFIED_HOURS", "08:00", "10:00")
        snapshot = make_snapshot([provider_a], [monday_schedule_a], [exception], tz=PRACTICE_TZ)

        day = ScheduleResolver(snapshot).resolve("A", TUESDAY)

        assert day.is_available
        assert day.intervals == [WorkingInterval(480, 600, 15)]

    def test_split_shift_gives_two_intervals(self, provider_a):
        schedules = [
            make_schedule("A", 0, "13:00", "17:00"),
            make_schedule("A", 0, "09:00", "12:00"),
        ]
        snapshot = make_snapshot([provider_a], schedules, tz=PRACTICE_TZ)

        day = ScheduleResolver(snapshot).resolve("A", MONDAY)

        assert [(i.start_minutes, i.end_minutes) for i in day.intervals] == [(540, 720), (780, 1020)]

    def test_inactive_schedule_ignored(self, provider_a):
        schedule = make_schedule("A", 0, "09:00", "17:00", is_active=False)
        snapshot = make_snapshot([provider_a], [schedule], tz=PRACTICE_TZ)

        assert ScheduleResolver(snapshot).resolve("A", MONDAY).status == ScheduleStatus.NO_SCHEDULE

    def test_modified_hours_without_times_raises(self, provider_a):
        """An exception that bypassed snapshot validation is rejected, not resolved to garbage."""
        snapshot = make_snapshot([provider_a], tz=PRACTICE_TZ)
        broken = make_exception("A", MONDAY, "MODIFIED_HOURS", exception_id="broken")

        with patch.object(snapshot, "exception_for", return_value=broken):
            with pytest.raises(ValueError, match="broken"):
                ScheduleResolver(snapshot).resolve("A", MONDAY)
