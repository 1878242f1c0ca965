from datetime import date

from pydantic import BaseModel, Field

NATIONAL_HOLIDAY_TYPE = "National"
STATE_HOLIDAY_TYPE = "State"


class Holiday(BaseModel):
    """A public holiday on a single calendar date.

    `region` is either a specific region or the universal scope
    (settings.HOLIDAY_UNIVERSAL_REGION).
    """

    date: date
    region: str
    name: str = Field(..., min_length=1)
    holiday_type: str = NATIONAL_HOLIDAY_TYPE
