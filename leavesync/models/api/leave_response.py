# leavesync/models/api/leave_response.py
"""
Leave, user and holiday API response models.
Used by routes for output formatting.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from leavesync.models.domain.holiday_domain import Holiday
from leavesync.models.domain.leave_domain import LeaveRecord, LeaveType
from leavesync.models.domain.user_domain import User


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    department: str | None = None
    state: str

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(**user.model_dump())


class LeaveResponse(BaseModel):
    """Response model for a stored leave."""

    id: int = Field(..., description="Leave ID")
    user_id: int = Field(..., description="Employee ID")
    start_date: date
    end_date: date
    leave_type: LeaveType = Field(..., description="Normal or Connected")
    notes: str | None = None
    created_at: datetime
    user_name: str
    department: str | None = None
    state: str

    @classmethod
    def from_domain(cls, leave: LeaveRecord) -> "LeaveResponse":
        return cls(**leave.model_dump())


class PublicHolidayResponse(BaseModel):
    date: date
    state: str = Field(..., description="Region or the universal scope")
    holiday_name: str
    type: str

    @classmethod
    def from_domain(cls, holiday: Holiday) -> "PublicHolidayResponse":
        return cls(
            date=holiday.date,
            state=holiday.region,
            holiday_name=holiday.name,
            type=holiday.holiday_type,
        )


class MessageResponse(BaseModel):
    message: str
