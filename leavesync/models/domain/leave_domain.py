# leavesync/models/domain/leave_domain.py
"""
Leave Domain Models
Leave intervals, classification results and stored leave records.
"""

import enum
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

# Jurisdiction identifier (a Malaysian state name in practice). Opaque to the core.
Region = str


class InvalidIntervalError(ValueError):
    """Raised when a leave ends before it starts."""

    def __init__(self, start_date: date, end_date: date):
        super().__init__(
            f"Leave end date {end_date.isoformat()} is before start date {start_date.isoformat()}"
        )
        self.start_date = start_date
        self.end_date = end_date


class LeaveType(str, enum.Enum):
    """Classification stored alongside every leave record."""

    NORMAL = "Normal"
    CONNECTED = "Connected"


class LeaveInterval(BaseModel):
    """Closed calendar-date range [start_date, end_date]; build with LeaveInterval.of."""

    model_config = ConfigDict(frozen=True)

    start_date: date
    end_date: date

    @classmethod
    def of(cls, start_date: date, end_date: date) -> "LeaveInterval":
        """Build an interval, raising InvalidIntervalError (not a pydantic error) on bad order."""
        if end_date < start_date:
            raise InvalidIntervalError(start_date, end_date)
        return cls(start_date=start_date, end_date=end_date)


class LeaveRecord(BaseModel):
    """Leave row joined with the owning user's details."""

    id: int
    user_id: int
    start_date: date
    end_date: date
    leave_type: LeaveType
    notes: str | None = None
    created_at: datetime
    user_name: str
    department: str | None = None
    state: Region


class LeaveFilters(BaseModel):
    """Optional filters for listing leaves."""

    user_id: int | None = None
    department: str | None = None
    leave_type: LeaveType | None = None
    state: Region | None = None
    start_date: date | None = None
    end_date: date | None = None
