"""
Public holiday persistence (record store side of the holiday cache).
"""

from datetime import date

from leavesync.config import settings
from leavesync.db.helpers import execute_many, fetch_all, fetch_one, fetch_val, with_db_retry
from leavesync.infrastructure.observability.logging import get_logger
from leavesync.models.domain.holiday_domain import Holiday

logger = get_logger(__name__)


def _universal() -> str:
    return settings.HOLIDAY_UNIVERSAL_REGION


def _row_to_holiday(row: dict) -> Holiday:
    return Holiday(
        date=row["date"],
        region=row["state"],
        name=row["holiday_name"],
        holiday_type=row["type"],
    )


@with_db_retry(max_retries=2, base_delay=0.1)
async def holiday_exists(day: date, region: str) -> bool:
    """True if a holiday on `day` applies to `region` or to everyone."""
    query = """
    SELECT id FROM public_holiday
    WHERE date = %s AND (state = %s OR state = %s)
    LIMIT 1
    """
    row = await fetch_one(query, (day, region, _universal()))
    return row is not None


@with_db_retry(max_retries=2, base_delay=0.1)
async def count_holidays(year: int, region: str) -> int:
    """Number of cached holidays scoped to the region itself in a year.

    Universal rows are excluded: they may have been cached by another region's fetch.
    """
    query = """
    SELECT COUNT(*) AS holiday_count FROM public_holiday
    WHERE state = %s
      AND date >= %s AND date < %s
    """
    count = await fetch_val(query, (region, date(year, 1, 1), date(year + 1, 1, 1)))
    return int(count or 0)


@with_db_retry(max_retries=2, base_delay=0.1)
async def list_holidays(region: str, year: int | None = None) -> list[Holiday]:
    """Holidays applying to a region, oldest first, optionally limited to one year."""
    query = """
    SELECT date, state, holiday_name, type FROM public_holiday
    WHERE (state = %s OR state = %s)
    """
    params: list = [region, _universal()]

    if year is not None:
        query += " AND date >= %s AND date < %s"
        params.extend([date(year, 1, 1), date(year + 1, 1, 1)])

    query += " ORDER BY date ASC, holiday_name ASC"

    rows = await fetch_all(query, tuple(params))
    return [_row_to_holiday(row) for row in rows]


async def upsert_holidays(holidays: list[Holiday]) -> int:
    """Insert holidays, refreshing the type of rows that already exist."""
    query = """
    INSERT INTO public_holiday (date, state, holiday_name, type)
    VALUES (%s, %s, %s, %s)
    ON CONFLICT (date, state, holiday_name)
    DO UPDATE SET type = EXCLUDED.type
    """
    written = await execute_many(
        query,
        [(h.date, h.region, h.name, h.holiday_type) for h in holidays],
    )
    logger.debug("Holidays upserted", holiday_count=written)
    return written
