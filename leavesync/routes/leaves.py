"""
Leave API Routes
HTTP endpoints for recording, listing and deleting leaves.
"""

from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from leavesync.infrastructure.observability.logging import get_logger
from leavesync.models.api.leave_request import CreateLeaveRequest
from leavesync.models.api.leave_response import LeaveResponse, MessageResponse
from leavesync.models.domain.leave_domain import InvalidIntervalError, LeaveFilters, LeaveType
from leavesync.services.leave_service import (
    LeaveNotFoundError,
    UserNotFoundError,
    create_leave,
    delete_leave,
    list_leaves,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/leaves", tags=["leaves"])


@router.get("", response_model=list[LeaveResponse])
async def get_leaves(
    user_id: int | None = Query(None),
    department: str | None = Query(None),
    leave_type: LeaveType | None = Query(None),
    state: str | None = Query(None),
    start_date: date | None = Query(None, description="Window start, used with end_date"),
    end_date: date | None = Query(None, description="Window end, used with start_date"),
):
    """List leaves, optionally filtered; window filters match overlapping leaves."""
    filters = LeaveFilters(
        user_id=user_id,
        department=department,
        leave_type=leave_type,
        state=state,
        start_date=start_date,
        end_date=end_date,
    )
    try:
        leaves = await list_leaves(filters)
        return [LeaveResponse.from_domain(leave) for leave in leaves]
    except Exception as e:
        logger.error("Error fetching leaves", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch leaves"
        )


@router.post("", response_model=LeaveResponse, status_code=status.HTTP_201_CREATED)
async def post_leave(request: CreateLeaveRequest):
    """Record a leave; its type is decided from the adjacent days."""
    try:
        leave = await create_leave(
            request.user_id, request.start_date, request.end_date, request.notes
        )
        return LeaveResponse.from_domain(leave)

    except InvalidIntervalError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error("Error creating leave", user_id=request.user_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create leave"
        )


@router.delete("/{leave_id}", response_model=MessageResponse)
async def remove_leave(leave_id: int):
    try:
        await delete_leave(leave_id)
        return MessageResponse(message="Leave deleted successfully")

    except LeaveNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error("Error deleting leave", leave_id=leave_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete leave"
        )
