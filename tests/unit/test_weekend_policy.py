from datetime import date, timedelta

import pytest

from leavesync.services.leave.weekend_policy import (
    FRIDAY_SATURDAY_REGIONS,
    is_weekend,
    weekend_days_for,
)

# Monday 2024-07-08 .. Sunday 2024-07-14
WEEK = [date(2024, 7, 8) + timedelta(days=i) for i in range(7)]


def test_friday_saturday_regions_are_fixed():
    assert FRIDAY_SATURDAY_REGIONS == frozenset({"Johor", "Kedah", "Kelantan", "Terengganu"})


@pytest.mark.parametrize("region", sorted(FRIDAY_SATURDAY_REGIONS))
def test_friday_saturday_convention(region):
    weekend = [d for d in WEEK if is_weekend(d, region)]
    assert [d.strftime("%A") for d in weekend] == ["Friday", "Saturday"]


@pytest.mark.parametrize("region", ["Selangor", "Penang", "Kuala Lumpur", "Sabah"])
def test_saturday_sunday_convention(region):
    weekend = [d for d in WEEK if is_weekend(d, region)]
    assert [d.strftime("%A") for d in weekend] == ["Saturday", "Sunday"]


@pytest.mark.parametrize("region", ["Atlantis", "", "johor", "JOHOR"])
def test_unknown_regions_default_to_saturday_sunday(region):
    assert weekend_days_for(region) == frozenset({5, 6})
    assert is_weekend(date(2024, 7, 12), region) is False  # Friday
    assert is_weekend(date(2024, 7, 14), region) is True  # Sunday


def test_is_weekend_is_deterministic():
    day = date(2024, 7, 12)
    assert [is_weekend(day, "Johor") for _ in range(3)] == [True, True, True]
