from datetime import date
from unittest.mock import AsyncMock

import pytest

from leavesync.services.holidays import holiday_repository


@pytest.mark.asyncio
async def test_count_holidays_only_counts_rows_scoped_to_region(monkeypatch):
    fetch_val_mock = AsyncMock(return_value=3)
    monkeypatch.setattr(holiday_repository, "fetch_val", fetch_val_mock)

    assert await holiday_repository.count_holidays(2024, "Johor") == 3

    query, params = fetch_val_mock.await_args.args
    assert "National" not in params
    assert params == ("Johor", date(2024, 1, 1), date(2025, 1, 1))
    assert " OR " not in query


@pytest.mark.asyncio
async def test_holiday_exists_matches_region_or_universal_scope(monkeypatch):
    fetch_one_mock = AsyncMock(return_value={"id": 1})
    monkeypatch.setattr(holiday_repository, "fetch_one", fetch_one_mock)

    assert await holiday_repository.holiday_exists(date(2024, 4, 10), "Johor") is True

    _, params = fetch_one_mock.await_args.args
    assert params == (date(2024, 4, 10), "Johor", "National")
