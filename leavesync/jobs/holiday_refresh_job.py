"""
Holiday refresh job.

Pre-populates the public holiday cache for every known state so the first
leave of the year does not pay for an external fetch.
"""

import os
from datetime import date

from leavesync.db.pool import db_pool
from leavesync.infrastructure.observability.logging import get_logger
from leavesync.services.holidays.base import HolidayLookupError
from leavesync.services.holidays.calendarific_client import STATE_LOCATION_MAP
from leavesync.services.holidays.holiday_lookup import holiday_lookup

logger = get_logger(__name__)


def _target_year() -> int:
    override = os.getenv("HOLIDAY_REFRESH_YEAR", "").strip()
    return int(override) if override else date.today().year


async def refresh_all_regions(year: int | None = None, regions: list[str] | None = None) -> dict:
    """
    Refresh holidays for each region, continuing past failures.

    Returns:
        dict with per-region counts and failures
    """
    year = year or _target_year()
    regions = regions or sorted(STATE_LOCATION_MAP)

    refreshed: dict[str, int] = {}
    failed: dict[str, str] = {}

    for region in regions:
        try:
            refreshed[region] = await holiday_lookup.refresh(year, region)
        except HolidayLookupError as e:
            logger.warning("Holiday refresh failed for region", region=region, year=year, error=str(e))
            failed[region] = str(e)

    logger.info(
        "Holiday refresh finished",
        year=year,
        refreshed_regions=len(refreshed),
        failed_regions=len(failed),
    )
    return {"year": year, "refreshed": refreshed, "failed": failed}


async def run_holiday_refresh() -> None:
    """Worker entrypoint: opens the pool, refreshes, and cleans up."""
    await db_pool.initialize()
    try:
        await refresh_all_regions()
    finally:
        await holiday_lookup.close()
        await db_pool.close()
