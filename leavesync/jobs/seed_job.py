"""
Demo data seed: sample staff and the 2024-2025 Malaysian national holidays.
Wipes existing leaves, holidays and users first.
"""

from datetime import date
from pathlib import Path

from leavesync.config import settings
from leavesync.db.helpers import execute_many, execute_query
from leavesync.db.pool import db_pool
from leavesync.infrastructure.observability.logging import get_logger
from leavesync.models.domain.holiday_domain import Holiday
from leavesync.services.holidays.holiday_repository import upsert_holidays

logger = get_logger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "db" / "schema.sql"

SEED_USERS = [
    ("Ahmad Bin Ali", "ahmad@company.com", "Engineering", "Selangor"),
    ("Siti Nurhaliza", "siti@company.com", "Marketing", "Selangor"),
    ("Raj Kumar", "raj@company.com", "Engineering", "Penang"),
    ("Mei Ling Wong", "meiling@company.com", "HR", "Kuala Lumpur"),
    ("Fatimah Hassan", "fatimah@company.com", "Finance", "Johor"),
    ("David Tan", "david@company.com", "Engineering", "Selangor"),
    ("Nora Abdullah", "nora@company.com", "Sales", "Penang"),
    ("Kumar Selvam", "kumar@company.com", "Operations", "Kuala Lumpur"),
]

SEED_NATIONAL_HOLIDAYS = [
    ("2024-01-01", "New Year's Day"),
    ("2024-01-25", "Thaipusam"),
    ("2024-02-01", "Federal Territory Day"),
    ("2024-02-10", "Chinese New Year"),
    ("2024-02-11", "Chinese New Year (Day 2)"),
    ("2024-03-28", "Nuzul Al-Quran"),
    ("2024-04-10", "Hari Raya Aidilfitri"),
    ("2024-04-11", "Hari Raya Aidilfitri (Day 2)"),
    ("2024-05-01", "Labour Day"),
    ("2024-05-22", "Vesak Day"),
    ("2024-06-03", "Yang di-Pertuan Agong's Birthday"),
    ("2024-06-17", "Hari Raya Aidiladha"),
    ("2024-07-07", "Awal Muharram"),
    ("2024-08-31", "Merdeka Day"),
    ("2024-09-16", "Malaysia Day"),
    ("2024-09-16", "Prophet Muhammad's Birthday"),
    ("2024-10-24", "Deepavali"),
    ("2024-12-25", "Christmas"),
    ("2025-01-01", "New Year's Day"),
    ("2025-01-29", "Chinese New Year"),
    ("2025-01-30", "Chinese New Year (Day 2)"),
    ("2025-03-31", "Hari Raya Aidilfitri"),
    ("2025-04-01", "Hari Raya Aidilfitri (Day 2)"),
    ("2025-05-01", "Labour Day"),
    ("2025-05-12", "Vesak Day"),
    ("2025-06-07", "Hari Raya Aidiladha"),
    ("2025-06-28", "Awal Muharram"),
    ("2025-08-31", "Merdeka Day"),
    ("2025-09-16", "Malaysia Day"),
    ("2025-10-20", "Deepavali"),
    ("2025-12-25", "Christmas"),
]


def seed_holidays() -> list[Holiday]:
    return [
        Holiday(date=date.fromisoformat(day), region=settings.HOLIDAY_UNIVERSAL_REGION, name=name)
        for day, name in SEED_NATIONAL_HOLIDAYS
    ]


async def seed_database() -> None:
    # Multi-statement script: must run without bound parameters
    async with db_pool.connection() as conn:
        await conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
    logger.info("Schema ensured")

    for table in ("leave_record", "public_holiday", "users"):
        await execute_query(f"DELETE FROM {table}")
    logger.info("Cleared existing data")

    await execute_many(
        "INSERT INTO users (name, email, department, state) VALUES (%s, %s, %s, %s)",
        SEED_USERS,
    )
    logger.info("Seeded users", user_count=len(SEED_USERS))

    holiday_count = await upsert_holidays(seed_holidays())
    logger.info("Seeded public holidays", holiday_count=holiday_count)


async def run_seed() -> None:
    """Worker entrypoint."""
    await db_pool.initialize()
    try:
        await seed_database()
    finally:
        await db_pool.close()
