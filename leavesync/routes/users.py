"""
User API Routes
"""

from fastapi import APIRouter, HTTPException, status

from leavesync.infrastructure.observability.logging import get_logger
from leavesync.models.api.leave_response import UserResponse
from leavesync.services.user_service import get_user, list_users

logger = get_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def get_users():
    try:
        users = await list_users()
    except Exception as e:
        logger.error("Error fetching users", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch users"
        )
    return [UserResponse.from_domain(user) for user in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user_by_id(user_id: int):
    try:
        user = await get_user(user_id)
    except Exception as e:
        logger.error("Error fetching user", user_id=user_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch user"
        )

    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse.from_domain(user)
