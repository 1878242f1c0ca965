"""
Leave service: the leave-record workflow around the classifier.

Creating a leave reads the employee's state, classifies the interval as
Normal or Connected, and stores the classification with the record.
"""

from datetime import date

from leavesync.db.helpers import execute_query, fetch_all, fetch_one, with_db_retry
from leavesync.infrastructure.observability.logging import get_logger
from leavesync.models.domain.leave_domain import (
    InvalidIntervalError,
    LeaveFilters,
    LeaveRecord,
)
from leavesync.services.holidays.holiday_lookup import holiday_lookup
from leavesync.services.leave.classifier import ConnectedLeaveClassifier
from leavesync.services.user_service import get_user

logger = get_logger(__name__)

LEAVE_SELECT = """
SELECT
    l.id,
    l.user_id,
    l.start_date,
    l.end_date,
    l.leave_type,
    l.notes,
    l.created_at,
    u.name AS user_name,
    u.department,
    u.state
FROM leave_record l
JOIN users u ON l.user_id = u.id
"""

classifier = ConnectedLeaveClassifier(holiday_lookup)


class LeaveServiceError(Exception):
    """Base error for leave operations."""


class UserNotFoundError(LeaveServiceError):
    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class LeaveNotFoundError(LeaveServiceError):
    def __init__(self, leave_id: int):
        super().__init__(f"Leave {leave_id} not found")
        self.leave_id = leave_id


async def create_leave(
    user_id: int, start_date: date, end_date: date, notes: str | None = None
) -> LeaveRecord:
    """
    Classify and store a leave for a user.

    Raises:
        InvalidIntervalError: end_date before start_date
        UserNotFoundError: no such user
    """
    if end_date < start_date:
        raise InvalidIntervalError(start_date, end_date)

    user = await get_user(user_id)
    if user is None:
        raise UserNotFoundError(user_id)

    leave_type = await classifier.classify(start_date, end_date, user.state)

    row = await _insert_leave(user_id, start_date, end_date, leave_type.value, notes or None)
    leave = await get_leave(row["id"])

    logger.info(
        "Leave created",
        leave_id=leave.id,
        user_id=user_id,
        state=user.state,
        start_date=start_date.isoformat(),
        end_date=end_date.isoformat(),
        leave_type=leave_type.value,
    )
    return leave


@with_db_retry(max_retries=3, base_delay=0.1)
async def _insert_leave(
    user_id: int, start_date: date, end_date: date, leave_type: str, notes: str | None
) -> dict:
    query = """
    INSERT INTO leave_record (user_id, start_date, end_date, leave_type, notes)
    VALUES (%s, %s, %s, %s, %s)
    RETURNING id
    """
    return await fetch_one(query, (user_id, start_date, end_date, leave_type, notes))


@with_db_retry(max_retries=3, base_delay=0.1)
async def get_leave(leave_id: int) -> LeaveRecord:
    row = await fetch_one(LEAVE_SELECT + " WHERE l.id = %s", (leave_id,))
    if not row:
        raise LeaveNotFoundError(leave_id)
    return LeaveRecord(**row)


def build_leave_query(filters: LeaveFilters) -> tuple[str, tuple]:
    """SQL and parameters for listing leaves matching `filters`."""
    query = LEAVE_SELECT + " WHERE 1=1"
    params: list = []

    if filters.user_id is not None:
        query += " AND l.user_id = %s"
        params.append(filters.user_id)

    if filters.department:
        query += " AND u.department = %s"
        params.append(filters.department)

    if filters.leave_type is not None:
        query += " AND l.leave_type = %s"
        params.append(filters.leave_type.value)

    if filters.state:
        query += " AND u.state = %s"
        params.append(filters.state)

    # Overlap with the requested window; only applied when both bounds are given
    if filters.start_date and filters.end_date:
        query += " AND l.start_date <= %s AND l.end_date >= %s"
        params.extend([filters.end_date, filters.start_date])

    query += " ORDER BY l.start_date ASC"
    return query, tuple(params)


@with_db_retry(max_retries=3, base_delay=0.1)
async def list_leaves(filters: LeaveFilters | None = None) -> list[LeaveRecord]:
    query, params = build_leave_query(filters or LeaveFilters())
    rows = await fetch_all(query, params)
    return [LeaveRecord(**row) for row in rows]


async def delete_leave(leave_id: int) -> None:
    """
    Raises:
        LeaveNotFoundError: nothing was deleted
    """
    deleted = await execute_query("DELETE FROM leave_record WHERE id = %s", (leave_id,))
    if deleted == 0:
        raise LeaveNotFoundError(leave_id)
    logger.info("Leave deleted", leave_id=leave_id)
