"""
Cached holiday lookup.

Holidays are read from the public_holiday table. The first time a
(year, region) pair is queried with no cached rows, the table is populated
from the external holiday source. Population failures are logged and
swallowed; the lookup then answers from whatever is cached.
"""

import asyncio
from datetime import date
from typing import Protocol

from leavesync.config import settings
from leavesync.db.helpers import DatabaseError
from leavesync.infrastructure.observability.logging import get_logger
from leavesync.models.domain.holiday_domain import Holiday
from leavesync.services.holidays import holiday_repository
from leavesync.services.holidays.base import HolidayLookupError
from leavesync.services.holidays.calendarific_client import STATE_LOCATION_MAP, CalendarificClient

logger = get_logger(__name__)


class HolidaySource(Protocol):
    async def fetch_holidays(self, year: int, region: str) -> list[Holiday]: ...


class CachedHolidayLookup:
    """Populate-on-miss, degrade-on-populate-failure holiday lookup."""

    def __init__(
        self,
        source: HolidaySource | None,
        repository=holiday_repository,
        source_enabled: bool | None = None,
        known_regions: frozenset[str] | None = None,
    ):
        self._source = source
        self._repository = repository
        self._source_enabled = (
            source_enabled if source_enabled is not None else settings.holiday_source_enabled()
        )
        # Only these regions trigger a fetch; anything else reads universal rows from the cache
        self._known_regions = known_regions if known_regions is not None else frozenset(STATE_LOCATION_MAP)
        self._populated: set[tuple[int, str]] = set()
        self._locks: dict[tuple[int, str], asyncio.Lock] = {}

    async def has_holiday(self, day: date, region: str) -> bool:
        await self._ensure_populated(day.year, region)
        return await self._repository.holiday_exists(day, region)

    async def get_holidays(self, region: str, year: int | None = None) -> list[Holiday]:
        """List holidays for a region; populates the current year when no year is given."""
        await self._ensure_populated(year or date.today().year, region)
        return await self._repository.list_holidays(region, year)

    async def refresh(self, year: int, region: str) -> int:
        """
        Fetch holidays for (year, region) from the source and store them.

        Unlike lookups, a refresh reports failures to the caller.

        Returns:
            Number of holidays written

        Raises:
            HolidayLookupError: unknown region, source disabled, fetch failure or storage failure
        """
        if region not in self._known_regions:
            raise HolidayLookupError(f"Unknown region: {region}", error_code="unknown_region")
        if self._source is None or not self._source_enabled:
            raise HolidayLookupError("Holiday source is not configured", error_code="no_api_key")

        key = (year, region)
        async with self._lock_for(key):
            written = await self._populate(year, region)
            self._populated.add(key)
        return written

    async def close(self) -> None:
        if self._source is not None and hasattr(self._source, "close"):
            await self._source.close()

    def _lock_for(self, key: tuple[int, str]) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    async def _ensure_populated(self, year: int, region: str) -> None:
        key = (year, region)
        if key in self._populated:
            return

        if self._source is None or not self._source_enabled:
            return

        if region not in self._known_regions:
            return

        async with self._lock_for(key):
            # Another caller may have populated while we waited
            if key in self._populated:
                return
            try:
                cached = await self._repository.count_holidays(year, region)
                if cached == 0:
                    logger.info("No cached holidays, populating", year=year, region=region)
                    await self._populate(year, region)
                self._populated.add(key)
            except Exception as e:
                logger.warning(
                    "Holiday cache population failed",
                    year=year,
                    region=region,
                    error=str(e),
                    error_type=type(e).__name__,
                )

    async def _populate(self, year: int, region: str) -> int:
        holidays = await self._source.fetch_holidays(year, region)
        try:
            written = await self._repository.upsert_holidays(holidays)
        except DatabaseError as e:
            raise HolidayLookupError(f"Failed to store holidays: {e}", error_code="storage") from e

        logger.info("Cached holidays", year=year, region=region, holiday_count=written)
        return written


holiday_lookup = CachedHolidayLookup(CalendarificClient())
