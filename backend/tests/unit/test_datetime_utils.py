"""
Unit tests for datetime utilities.

Tests practice time zone handling and the clock-time grid conversions.
"""

import pytest
from datetime import date, datetime, timezone

from utils.datetime_utils import (
    datetime_to_minutes, ensure_practice_tz, format_minutes, get_practice_tz, iter_dates,
    minutes_to_datetime, parse_clock_time, parse_date_string, practice_today, start_of_day, weekday_index
)


class TestPracticeTimezone:
    """Test practice time zone lookup."""

    def test_default_time_zone_is_configured_practice_zone(self):
        tz = get_practice_tz()
        assert str(tz) == "Europe/Amsterdam"

    def test_named_time_zone(self):
        tz = get_practice_tz("America/New_York")
        assert str(tz) == "America/New_York"

    def test_unknown_time_zone_raises_value_error(self):
        with pytest.raises(ValueError, match="Unknown time zone"):
            get_practice_tz("Mars/Olympus_Mons")


class TestEnsurePracticeTz:
    """Test ensure_practice_tz function."""

    def test_naive_datetime_is_read_as_practice_time(self, practice_tz):
        result = ensure_practice_tz(datetime(2026, 1, 5, 9, 0), practice_tz)

        assert result.tzinfo == practice_tz
        assert result.hour == 9

    def test_aware_datetime_is_converted(self, practice_tz):
        """08:00 UTC is 09:00 in Amsterdam during winter time."""
        result = ensure_practice_tz(datetime(2026, 1, 5, 8, 0, tzinfo=timezone.utc), practice_tz)

        assert result.hour == 9
        assert result.tzinfo == practice_tz

    def test_summer_time_conversion(self, practice_tz):
        result = ensure_practice_tz(datetime(2026, 7, 6, 7, 0, tzinfo=timezone.utc), practice_tz)

        assert result.hour == 9
        assert result.date() == date(2026, 7, 6)


class TestWeekdayIndex:
    """Test the single date -> schedule weekday conversion."""

    def test_monday_is_zero(self):
        assert weekday_index(date(2026, 1, 5)) == 0

    def test_sunday_is_six(self):
        assert weekday_index(date(2026, 1, 4)) == 6


class TestClockTimes:
    """Test parse_clock_time and format_minutes."""

    @pytest.mark.parametrize("value,expected", [
        ("00:00", 0),
        ("09:00", 540),
        ("9:05", 545),
        ("17:30:00", 1050),
        ("23:59", 1439),
        ("24:00", 1440),
    ])
    def test_parse_valid(self, value, expected):
        assert parse_clock_time(value) == expected

    @pytest.mark.parametrize("value", ["", "   ", "9", "25:00", "12:60", "ab:cd", "24:30", "1:2:3:4"])
    def test_parse_invalid(self, value):
        with pytest.raises(ValueError):
            parse_clock_time(value)

    def test_format_minutes(self):
        assert format_minutes(0) == "00:00"
        assert format_minutes(545) == "09:05"
        assert format_minutes(1440) == "24:00"

    def test_format_minutes_out_of_range(self):
        with pytest.raises(ValueError):
            format_minutes(-1)
        with pytest.raises(ValueError):
            format_minutes(1441)


class TestMinuteAnchoring:
    """Test conversions between minute offsets and absolute datetimes."""

    def test_minutes_to_datetime(self, practice_tz):
        result = minutes_to_datetime(date(2026, 1, 5), 570, practice_tz)

        assert result == datetime(2026, 1, 5, 9, 30, tzinfo=practice_tz)

    def test_end_of_day_rolls_over(self, practice_tz):
        result = minutes_to_datetime(date(2026, 1, 5), 1440, practice_tz)

        assert result == datetime(2026, 1, 6, 0, 0, tzinfo=practice_tz)

    def test_datetime_to_minutes_uses_practice_date(self, practice_tz):
        """23:30 UTC on the 4th is already 00:30 on the 5th in Amsterdam."""
        d, minutes = datetime_to_minutes(datetime(2026, 1, 4, 23, 30, tzinfo=timezone.utc), practice_tz)

        assert d == date(2026, 1, 5)
        assert minutes == 30

    def test_wall_clock_preserved_across_dst(self, practice_tz):
        """09:00 stays 09:00 local on the day after the spring-forward change."""
        result = minutes_to_datetime(date(2026, 3, 30), 540, practice_tz)

        assert result.hour == 9
        assert result.utcoffset().total_seconds() == 2 * 3600

    def test_start_of_day(self, practice_tz):
        assert start_of_day(date(2026, 1, 5), practice_tz) == datetime(2026, 1, 5, tzinfo=practice_tz)

    def test_practice_today(self, practice_tz):
        assert practice_today(datetime(2026, 1, 4, 23, 30, tzinfo=timezone.utc), practice_tz) == date(2026, 1, 5)


class TestParsing:
    """Test date string parsing."""

    def test_parse_date_string_formats(self):
        assert parse_date_string("2026-01-05") == date(2026, 1, 5)
        assert parse_date_string("2026/1/5") == date(2026, 1, 5)

    @pytest.mark.parametrize("value", ["", "20260105", "2026-13-01", "2026-02-30"])
    def test_parse_date_string_invalid(self, value):
        with pytest.raises(ValueError):
            parse_date_string(value)


class TestIterDates:

    def test_inclusive(self):
        assert list(iter_dates(date(2026, 1, 30), date(2026, 2, 1))) == [
            date(2026, 1, 30), date(2026, 1, 31), date(2026, 2, 1)
        ]

    def test_empty_when_reversed(self):
        assert list(iter_dates(date(2026, 2, 1), date(2026, 1, 30))) == []
