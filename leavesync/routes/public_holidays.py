"""
Public Holiday API Routes
Listing cached holidays per state and forcing a refresh from the holiday source.
"""

from fastapi import APIRouter, HTTPException, Query, status

from leavesync.infrastructure.observability.logging import get_logger
from leavesync.models.api.leave_request import RefreshHolidaysRequest
from leavesync.models.api.leave_response import MessageResponse, PublicHolidayResponse
from leavesync.services.holidays.base import HolidayLookupError
from leavesync.services.holidays.holiday_lookup import holiday_lookup

logger = get_logger(__name__)

router = APIRouter(prefix="/api/public-holidays", tags=["public-holidays"])


@router.get("/{state}", response_model=list[PublicHolidayResponse])
async def get_public_holidays(state: str, year: int | None = Query(None, ge=1900, le=2200)):
    """Holidays for a state plus national ones, fetched on first use when none are cached."""
    try:
        holidays = await holiday_lookup.get_holidays(state, year)
    except Exception as e:
        logger.error("Error fetching public holidays", state=state, year=year, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch public holidays",
        )
    return [PublicHolidayResponse.from_domain(h) for h in holidays]


@router.post("/refresh", response_model=MessageResponse)
async def refresh_public_holidays(request: RefreshHolidaysRequest):
    try:
        count = await holiday_lookup.refresh(request.year, request.state)
    except HolidayLookupError as e:
        logger.error(
            "Error refreshing public holidays",
            state=request.state,
            year=request.year,
            error=str(e),
            error_code=e.error_code,
        )
        if e.error_code == "unknown_region":
            code = status.HTTP_400_BAD_REQUEST
        elif e.error_code == "no_api_key":
            code = status.HTTP_503_SERVICE_UNAVAILABLE
        else:
            code = status.HTTP_502_BAD_GATEWAY
        raise HTTPException(
            status_code=code,
            detail=f"Failed to refresh public holidays: {e}",
        )

    return MessageResponse(
        message=f"Public holidays refreshed for {request.state} ({request.year}): {count} stored"
    )
