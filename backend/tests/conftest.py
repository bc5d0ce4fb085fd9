"""
Test configuration and shared fixtures for the availability engine test suite.

The engine is pure, so there is no database: every test builds the schedule
data it needs and passes `now` explicitly.
"""

import pytest

from models import BookingWindowPolicy, Provider, WorkSchedule
from tests.builders import PRACTICE_TZ, SUNDAY_NOON


@pytest.fixture
def practice_tz():
    """Practice time zone used by the tests."""
    return PRACTICE_TZ


@pytest.fixture
def sunday_noon():
    """Sunday 12:00 practice time, the default `now` of the suite."""
    return SUNDAY_NOON


@pytest.fixture
def default_policy():
    """Booking window with the practice defaults (1 day notice, 90 days ahead)."""
    return BookingWindowPolicy(min_notice_days=1, max_advance_days=90)


@pytest.fixture
def provider_a():
    return Provider(id="A", display_name="Dr. Anna de Vries", role="DENTIST")


@pytest.fixture
def provider_b():
    return Provider(id="B", display_name="Bram Jansen", role="HYGIENIST")


@pytest.fixture
def monday_schedule_a():
    """Provider A works Monday 09:00-17:00 with 15 minute slots."""
    return WorkSchedule(
        id="sched-a-mon",
        provider_id="A",
        day_of_week=0,
        start_time="09:00",
        end_time="17:00",
        slot_granularity_minutes=15,
    )
