from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import httpx
from fastapi import status
from pydantic import TypeAdapter

from leave_service.config import get_settings
from leave_service.exceptions import AppError, NotFoundError
from leave_service.schemas.holiday import PublicHoliday, PublicHolidayListResponse

logger = logging.getLogger(__name__)

_holidays_adapter: TypeAdapter[list[PublicHoliday]] = TypeAdapter(list[PublicHoliday])


@runtime_checkable
class HolidayProvider(Protocol):
    """Interface for the public-holiday lookup."""

    async def get_public_holidays(self, year: int, country_code: str) -> list[PublicHoliday]:
        """Fetch public holidays for a year and two-letter country code."""
        ...


class NagerHolidayProvider:
    """Public holidays from the Nager.Date API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.holidays_api_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.holidays_timeout_seconds
        self._transport = transport

    async def get_public_holidays(self, year: int, country_code: str) -> list[PublicHoliday]:
        """Fetch public holidays. Raises 404 for unknown countries, 502 for upstream failures."""
        url = f"{self._base_url}/PublicHolidays/{year}/{country_code}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("Holiday lookup failed for %s/%s: %s", year, country_code, exc)
            raise AppError("Failed to fetch public holidays", status_code=status.HTTP_502_BAD_GATEWAY) from exc

        if response.status_code == status.HTTP_404_NOT_FOUND:
            raise NotFoundError(f"No public holidays found for country code: {country_code}")
        if response.is_error:
            logger.warning(
                "Holiday lookup for %s/%s returned %d", year, country_code, response.status_code
            )
            raise AppError(
                f"Failed to fetch public holidays: upstream returned {response.status_code}",
                status_code=status.HTTP_502_BAD_GATEWAY,
            )
        # Nager.Date answers unknown-but-valid codes with 204 and no body.
        if response.status_code == status.HTTP_204_NO_CONTENT or not response.content:
            raise NotFoundError(f"No public holidays found for country code: {country_code}")

        try:
            return _holidays_adapter.validate_json(response.content)
        except ValueError as exc:
            logger.warning("Holiday lookup for %s/%s returned an unexpected payload", year, country_code)
            raise AppError(
                "Failed to fetch public holidays: unexpected response",
                status_code=status.HTTP_502_BAD_GATEWAY,
            ) from exc


async def list_public_holidays(
    provider: HolidayProvider,
    year: int,
    country_code: str,
) -> PublicHolidayListResponse:
    """Look up public holidays and wrap them in a list response."""
    code = country_code.upper()
    holidays = await provider.get_public_holidays(year, code)
    return PublicHolidayListResponse(year=year, country_code=code, items=holidays, total=len(holidays))


_holiday_provider: HolidayProvider | None = None


def get_holiday_provider() -> HolidayProvider:
    """FastAPI dependency for the holiday provider."""
    global _holiday_provider
    if _holiday_provider is None:
        _holiday_provider = NagerHolidayProvider()
    return _holiday_provider


def set_holiday_provider(provider: HolidayProvider | None) -> None:
    """Override the provider (for testing or production wiring). None restores the default."""
    global _holiday_provider
    _holiday_provider = provider
