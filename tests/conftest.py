from datetime import date

import pytest

from leavesync.models.domain.holiday_domain import Holiday


class FakeHolidayLookup:
    """In-memory lookup keyed by (date, region); 'National' applies everywhere."""

    def __init__(self, holidays: set[tuple[date, str]] | None = None):
        self.holidays = holidays or set()
        self.calls: list[tuple[date, str]] = []

    async def has_holiday(self, day: date, region: str) -> bool:
        self.calls.append((day, region))
        return (day, region) in self.holidays or (day, "National") in self.holidays


class FakeHolidayRepository:
    def __init__(self, holidays: list[Holiday] | None = None):
        self.holidays: list[Holiday] = list(holidays or [])
        self.upsert_calls = 0

    def _applies(self, holiday: Holiday, region: str) -> bool:
        return holiday.region in (region, "National")

    async def holiday_exists(self, day: date, region: str) -> bool:
        return any(h.date == day and self._applies(h, region) for h in self.holidays)

    async def count_holidays(self, year: int, region: str) -> int:
        return sum(1 for h in self.holidays if h.date.year == year and h.region == region)

    async def list_holidays(self, region: str, year: int | None = None) -> list[Holiday]:
        return sorted(
            (
                h
                for h in self.holidays
                if self._applies(h, region) and (year is None or h.date.year == year)
            ),
            key=lambda h: h.date,
        )

    async def upsert_holidays(self, holidays: list[Holiday]) -> int:
        self.upsert_calls += 1
        self.holidays.extend(holidays)
        return len(holidays)


class FakeHolidaySource:
    def __init__(self, holidays: list[Holiday] | None = None, error: Exception | None = None):
        self.holidays = holidays or []
        self.error = error
        self.calls: list[tuple[int, str]] = []
        self.closed = False

    async def fetch_holidays(self, year: int, region: str) -> list[Holiday]:
        self.calls.append((year, region))
        if self.error:
            raise self.error
        return list(self.holidays)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_lookup():
    return FakeHolidayLookup()


@pytest.fixture
def fake_repository():
    return FakeHolidayRepository()


@pytest.fixture
def hari_raya_2024():
    return [
        Holiday(date=date(2024, 4, 10), region="National", name="Hari Raya Aidilfitri"),
        Holiday(date=date(2024, 4, 11), region="National", name="Hari Raya Aidilfitri (Day 2)"),
    ]
