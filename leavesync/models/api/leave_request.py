# leavesync/models/api/leave_request.py
"""
Leave and holiday API request models.
Used by routes for input validation.
"""

from datetime import date

from pydantic import BaseModel, Field


class CreateLeaveRequest(BaseModel):
    """Request for recording a leave."""

    user_id: int = Field(..., gt=0, description="Employee taking leave")
    start_date: date = Field(..., description="First day of leave")
    end_date: date = Field(..., description="Last day of leave (inclusive)")
    notes: str | None = Field(default=None, max_length=1000, description="Free-text note")


class RefreshHolidaysRequest(BaseModel):
    """Request for re-fetching a region's holidays from the holiday source."""

    state: str = Field(..., min_length=1, description="Region to refresh")
    year: int = Field(..., ge=1900, le=2200, description="Calendar year")
