"""
Weekend conventions per region.

Most Malaysian states rest on Saturday and Sunday; a fixed set of states rests
on Friday and Saturday instead. Any region not in that set, including unknown
ones, uses the Saturday/Sunday convention.
"""

from datetime import date

from leavesync.models.domain.leave_domain import Region

# date.weekday(): Monday == 0 ... Sunday == 6
FRIDAY = 4
SATURDAY = 5
SUNDAY = 6

FRIDAY_SATURDAY_REGIONS: frozenset[Region] = frozenset({"Johor", "Kedah", "Kelantan", "Terengganu"})

FRIDAY_SATURDAY_WEEKEND: frozenset[int] = frozenset({FRIDAY, SATURDAY})
SATURDAY_SUNDAY_WEEKEND: frozenset[int] = frozenset({SATURDAY, SUNDAY})


def weekend_days_for(region: Region) -> frozenset[int]:
    """Weekday numbers treated as non-working in the region."""
    if region in FRIDAY_SATURDAY_REGIONS:
        return FRIDAY_SATURDAY_WEEKEND
    return SATURDAY_SUNDAY_WEEKEND


def is_weekend(day: date, region: Region) -> bool:
    """True when `day` is a weekend day under the region's convention."""
    return day.weekday() in weekend_days_for(region)
