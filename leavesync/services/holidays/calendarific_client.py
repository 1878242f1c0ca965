"""
Calendarific API client for public holiday data.
Handles HTTP client setup, retries and mapping API payloads to Holiday models.
"""

import asyncio
from datetime import date
from typing import Any

import httpx

from leavesync.config import settings
from leavesync.infrastructure.observability.logging import get_logger
from leavesync.models.domain.holiday_domain import (
    NATIONAL_HOLIDAY_TYPE,
    STATE_HOLIDAY_TYPE,
    Holiday,
)
from leavesync.services.holidays.base import HolidayLookupError

logger = get_logger(__name__)

RETRY_STATUS_CODES = {429, 500, 502, 503, 504}
NATIONAL_HOLIDAY_MARKER = "National holiday"

# Malaysian states to ISO 3166-2 subdivision codes used by Calendarific
STATE_LOCATION_MAP: dict[str, str] = {
    "Johor": "my-01",
    "Kedah": "my-02",
    "Kelantan": "my-03",
    "Melaka": "my-04",
    "Negeri Sembilan": "my-05",
    "Pahang": "my-06",
    "Penang": "my-07",
    "Perak": "my-08",
    "Perlis": "my-09",
    "Selangor": "my-10",
    "Terengganu": "my-11",
    "Sabah": "my-12",
    "Sarawak": "my-13",
    "Kuala Lumpur": "my-14",
    "Labuan": "my-15",
    "Putrajaya": "my-16",
}


class CalendarificClient:
    """
    Client for the Calendarific holidays endpoint.

    Retries rate-limit and server errors with exponential backoff; every other
    failure surfaces as HolidayLookupError.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        country: str | None = None,
        universal_region: str | None = None,
        max_retries: int | None = None,
        backoff: float | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.CALENDARIFIC_API_KEY
        self.base_url = (base_url or settings.CALENDARIFIC_BASE_URL).rstrip("/")
        self.country = country or settings.HOLIDAY_COUNTRY
        self.universal_region = universal_region or settings.HOLIDAY_UNIVERSAL_REGION
        self.max_retries = max_retries if max_retries is not None else settings.HOLIDAY_FETCH_MAX_RETRIES
        self.backoff = backoff if backoff is not None else settings.HOLIDAY_FETCH_BACKOFF
        self._client = self._create_client()

    def _create_client(self) -> httpx.AsyncClient:
        timeout = httpx.Timeout(settings.HOLIDAY_FETCH_TIMEOUT)
        limits = httpx.Limits(max_keepalive_connections=5, max_connections=10)
        return httpx.AsyncClient(timeout=timeout, limits=limits)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    def location_for(self, region: str) -> str:
        """Calendarific location code for a region, falling back to the whole country."""
        return STATE_LOCATION_MAP.get(region, self.country.lower())

    async def fetch_holidays(self, year: int, region: str) -> list[Holiday]:
        """
        Fetch the holidays observed in a region for a year.

        Args:
            year: Calendar year
            region: Region name, e.g. "Selangor"

        Returns:
            Holidays scoped to the universal region when national, else to `region`

        Raises:
            HolidayLookupError: missing API key, HTTP failure or malformed payload
        """
        if not self.api_key:
            raise HolidayLookupError("Calendarific API key is not configured", error_code="no_api_key")

        params = {
            "api_key": self.api_key,
            "country": self.country,
            "year": year,
            "location": self.location_for(region),
        }

        try:
            response = await self._request_with_retry("GET", f"{self.base_url}/holidays", params=params)
        except httpx.HTTPError as e:
            logger.error("Calendarific request failed", year=year, region=region, error=str(e))
            raise HolidayLookupError(f"Holiday source unreachable: {e}", error_code="transport") from e

        data = self._handle_api_response(response)

        try:
            holidays = [self._to_holiday(item, region) for item in data["response"]["holidays"]]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise HolidayLookupError("Unexpected holiday payload shape", error_code="bad_payload") from e

        logger.info(
            "Fetched holidays from Calendarific",
            year=year,
            region=region,
            holiday_count=len(holidays),
        )
        return holidays

    async def _request_with_retry(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with retry and backoff."""
        for attempt in range(1, self.max_retries + 1):
            try:
                response = await self._client.request(method, url, **kwargs)
                if response.status_code in RETRY_STATUS_CODES and attempt < self.max_retries:
                    delay = self.backoff * (2 ** (attempt - 1))
                    logger.debug(
                        "Calendarific retrying request",
                        attempt=attempt,
                        status_code=response.status_code,
                        backoff_seconds=delay,
                    )
                    await asyncio.sleep(delay)
                    continue
                return response
            except httpx.RequestError as e:
                if attempt >= self.max_retries:
                    raise
                delay = self.backoff * (2 ** (attempt - 1))
                logger.debug(
                    "Calendarific request error, retrying",
                    attempt=attempt,
                    error=str(e),
                    backoff_seconds=delay,
                )
                await asyncio.sleep(delay)
        raise RuntimeError("Calendarific retry loop exhausted")

    def _handle_api_response(self, response: httpx.Response) -> dict[str, Any]:
        """
        Validate a Calendarific response.

        Raises:
            HolidayLookupError: non-2xx status, error meta code or invalid JSON
        """
        try:
            data = response.json() if response.text else {}
        except ValueError as e:
            logger.error(
                "Calendarific returned non-JSON response",
                status_code=response.status_code,
                response_text=response.text[:200],
            )
            raise HolidayLookupError(
                f"Invalid holiday response (HTTP {response.status_code})",
                status_code=response.status_code,
            ) from e

        meta = data.get("meta", {}) if isinstance(data, dict) else {}
        meta_code = meta.get("code", response.status_code)

        if response.is_success and meta_code == 200:
            return data

        error_detail = meta.get("error_detail") or meta.get("error_type") or "Unknown holiday API error"
        logger.error(
            "Calendarific request rejected",
            status_code=response.status_code,
            meta_code=meta_code,
            error_detail=error_detail,
        )
        raise HolidayLookupError(
            f"Holiday source error: {error_detail}",
            status_code=response.status_code,
            error_code=str(meta_code),
        )

    def _to_holiday(self, item: dict[str, Any], region: str) -> Holiday:
        iso = item["date"]["iso"]
        is_national = NATIONAL_HOLIDAY_MARKER in (item.get("type") or [])
        return Holiday(
            date=date.fromisoformat(iso.split("T")[0]),
            region=self.universal_region if is_national else region,
            name=item["name"],
            holiday_type=NATIONAL_HOLIDAY_TYPE if is_national else STATE_HOLIDAY_TYPE,
        )
