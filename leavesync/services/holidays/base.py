"""
Holiday lookup contract shared by the classifier and the cached lookup.
"""

from datetime import date
from typing import Protocol


class HolidayLookupError(Exception):
    """Failure while querying, fetching or storing holiday data."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


class HolidayLookup(Protocol):
    """Answers whether a date is a holiday for a region.

    True if a holiday exists on exactly `day` whose scope is `region` or the
    universal scope.
    """

    async def has_holiday(self, day: date, region: str) -> bool: ...
