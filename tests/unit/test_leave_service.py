from datetime import UTC, date, datetime
from unittest.mock import AsyncMock

import pytest

from leavesync.models.domain.leave_domain import (
    InvalidIntervalError,
    LeaveFilters,
    LeaveRecord,
    LeaveType,
)
from leavesync.models.domain.user_domain import User
from leavesync.services import leave_service
from leavesync.services.leave.classifier import ConnectedLeaveClassifier
from leavesync.services.leave_service import (
    LeaveNotFoundError,
    UserNotFoundError,
    build_leave_query,
    create_leave,
    delete_leave,
)
from tests.conftest import FakeHolidayLookup


def _user(state: str = "Selangor") -> User:
    return User(id=1, name="Ahmad Bin Ali", email="ahmad@company.com", department="Engineering", state=state)


def _record(leave_type: LeaveType, start: date, end: date, state: str = "Selangor") -> LeaveRecord:
    return LeaveRecord(
        id=42,
        user_id=1,
        start_date=start,
        end_date=end,
        leave_type=leave_type,
        notes=None,
        created_at=datetime(2024, 7, 1, tzinfo=UTC),
        user_name="Ahmad Bin Ali",
        department="Engineering",
        state=state,
    )


@pytest.fixture
def patched_store(monkeypatch):
    insert_mock = AsyncMock(return_value={"id": 42})
    get_leave_mock = AsyncMock()
    monkeypatch.setattr("leavesync.services.leave_service._insert_leave", insert_mock)
    monkeypatch.setattr("leavesync.services.leave_service.get_leave", get_leave_mock)
    monkeypatch.setattr(
        "leavesync.services.leave_service.classifier",
        ConnectedLeaveClassifier(FakeHolidayLookup({(date(2024, 4, 11), "National")})),
    )
    return insert_mock, get_leave_mock


@pytest.mark.asyncio
async def test_create_leave_stores_connected_classification(monkeypatch, patched_store):
    insert_mock, get_leave_mock = patched_store
    monkeypatch.setattr("leavesync.services.leave_service.get_user", AsyncMock(return_value=_user()))
    get_leave_mock.return_value = _record(LeaveType.CONNECTED, date(2024, 4, 10), date(2024, 4, 10))

    leave = await create_leave(1, date(2024, 4, 10), date(2024, 4, 10), "Family trip")

    insert_mock.assert_awaited_once_with(1, date(2024, 4, 10), date(2024, 4, 10), "Connected", "Family trip")
    get_leave_mock.assert_awaited_once_with(42)
    assert leave.leave_type is LeaveType.CONNECTED


@pytest.mark.asyncio
async def test_create_leave_uses_users_region(monkeypatch, patched_store):
    insert_mock, get_leave_mock = patched_store
    monkeypatch.setattr(
        "leavesync.services.leave_service.get_user", AsyncMock(return_value=_user("Johor"))
    )
    get_leave_mock.return_value = _record(
        LeaveType.CONNECTED, date(2024, 7, 10), date(2024, 7, 11), "Johor"
    )

    await create_leave(1, date(2024, 7, 10), date(2024, 7, 11))

    # Friday after the leave is a weekend day in Johor; empty notes are stored as NULL
    insert_mock.assert_awaited_once_with(1, date(2024, 7, 10), date(2024, 7, 11), "Connected", None)


@pytest.mark.asyncio
async def test_create_leave_normal(monkeypatch, patched_store):
    insert_mock, get_leave_mock = patched_store
    monkeypatch.setattr("leavesync.services.leave_service.get_user", AsyncMock(return_value=_user()))
    get_leave_mock.return_value = _record(LeaveType.NORMAL, date(2024, 7, 9), date(2024, 7, 11))

    await create_leave(1, date(2024, 7, 9), date(2024, 7, 11), "")

    insert_mock.assert_awaited_once_with(1, date(2024, 7, 9), date(2024, 7, 11), "Normal", None)


@pytest.mark.asyncio
async def test_create_leave_rejects_inverted_interval_without_touching_store(monkeypatch, patched_store):
    insert_mock, _ = patched_store
    get_user_mock = AsyncMock(return_value=_user())
    monkeypatch.setattr("leavesync.services.leave_service.get_user", get_user_mock)

    with pytest.raises(InvalidIntervalError):
        await create_leave(1, date(2024, 7, 12), date(2024, 7, 5))

    get_user_mock.assert_not_awaited()
    insert_mock.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_leave_unknown_user(monkeypatch, patched_store):
    insert_mock, _ = patched_store
    monkeypatch.setattr("leavesync.services.leave_service.get_user", AsyncMock(return_value=None))

    with pytest.raises(UserNotFoundError):
        await create_leave(99, date(2024, 7, 9), date(2024, 7, 9))

    insert_mock.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_leave_missing(monkeypatch):
    monkeypatch.setattr(
        "leavesync.services.leave_service.execute_query", AsyncMock(return_value=0)
    )

    with pytest.raises(LeaveNotFoundError):
        await delete_leave(7)


@pytest.mark.asyncio
async def test_delete_leave(monkeypatch):
    execute_mock = AsyncMock(return_value=1)
    monkeypatch.setattr("leavesync.services.leave_service.execute_query", execute_mock)

    await delete_leave(7)

    execute_mock.assert_awaited_once_with("DELETE FROM leave_record WHERE id = %s", (7,))


def test_build_leave_query_without_filters():
    query, params = build_leave_query(LeaveFilters())

    assert params == ()
    assert query.rstrip().endswith("ORDER BY l.start_date ASC")


def test_build_leave_query_with_all_filters():
    filters = LeaveFilters(
        user_id=1,
        department="Engineering",
        leave_type=LeaveType.CONNECTED,
        state="Selangor",
        start_date=date(2024, 7, 1),
        end_date=date(2024, 7, 31),
    )

    query, params = build_leave_query(filters)

    assert "l.start_date <= %s AND l.end_date >= %s" in query
    assert params == (1, "Engineering", "Connected", "Selangor", date(2024, 7, 31), date(2024, 7, 1))


def test_build_leave_query_ignores_half_open_window():
    query, params = build_leave_query(LeaveFilters(start_date=date(2024, 7, 1)))

    assert "l.start_date <=" not in query
    assert params == ()


@pytest.mark.asyncio
async def test_list_leaves_maps_rows(monkeypatch):
    row = _record(LeaveType.NORMAL, date(2024, 7, 9), date(2024, 7, 11)).model_dump()
    row["leave_type"] = "Normal"
    monkeypatch.setattr(
        "leavesync.services.leave_service.fetch_all", AsyncMock(return_value=[row])
    )

    leaves = await leave_service.list_leaves(LeaveFilters(state="Selangor"))

    assert len(leaves) == 1
    assert leaves[0].leave_type is LeaveType.NORMAL
