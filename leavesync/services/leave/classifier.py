"""
Connected-leave classification.

A leave is "Connected" when the day before it starts or the day after it ends
is a non-working day for the employee's region, either a weekend day or a
public holiday. Holiday data is best-effort: a failing lookup counts as "no
holiday" so classification always produces a result.
"""

from datetime import date, timedelta

from leavesync.infrastructure.observability.logging import get_logger
from leavesync.models.domain.leave_domain import LeaveInterval, LeaveType, Region
from leavesync.services.holidays.base import HolidayLookup
from leavesync.services.leave.weekend_policy import is_weekend

logger = get_logger(__name__)

ONE_DAY = timedelta(days=1)


class ConnectedLeaveClassifier:
    """Classifies leave intervals as Normal or Connected."""

    def __init__(self, holiday_lookup: HolidayLookup):
        self._holiday_lookup = holiday_lookup

    async def classify(self, start_date: date, end_date: date, region: Region) -> LeaveType:
        """
        Classify a leave interval for a region.

        Args:
            start_date: First day of leave
            end_date: Last day of leave (inclusive)
            region: Employee's region

        Returns:
            LeaveType.CONNECTED if either neighbouring day is non-working,
            otherwise LeaveType.NORMAL

        Raises:
            InvalidIntervalError: end_date is before start_date
        """
        interval = LeaveInterval.of(start_date, end_date)

        day_before_start = interval.start_date - ONE_DAY
        if await self._is_non_working(day_before_start, region):
            logger.debug(
                "Leave connected before start",
                start_date=interval.start_date.isoformat(),
                adjacent_day=day_before_start.isoformat(),
                region=region,
            )
            return LeaveType.CONNECTED

        day_after_end = interval.end_date + ONE_DAY
        if await self._is_non_working(day_after_end, region):
            logger.debug(
                "Leave connected after end",
                end_date=interval.end_date.isoformat(),
                adjacent_day=day_after_end.isoformat(),
                region=region,
            )
            return LeaveType.CONNECTED

        return LeaveType.NORMAL

    async def _is_non_working(self, day: date, region: Region) -> bool:
        # Weekend first: local and free, the holiday lookup may hit I/O
        if is_weekend(day, region):
            return True
        return await self._safe_has_holiday(day, region)

    async def _safe_has_holiday(self, day: date, region: Region) -> bool:
        try:
            return bool(await self._holiday_lookup.has_holiday(day, region))
        except Exception as e:
            logger.warning(
                "Holiday lookup failed, treating date as non-holiday",
                day=day.isoformat(),
                region=region,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
