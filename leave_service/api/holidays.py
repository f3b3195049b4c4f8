# ruff: noqa: TC001
from __future__ import annotations

from fastapi import APIRouter, Path

from leave_service.api.deps import AuthDep, HolidayProviderDep
from leave_service.exceptions import ValidationError
from leave_service.schemas.holiday import PublicHolidayListResponse
from leave_service.services import holiday as holiday_service
from leave_service.services import rules

MIN_HOLIDAY_YEAR = 2000
MAX_YEARS_AHEAD = 10

holidays_router = APIRouter(prefix="/holidays", tags=["holidays"])


@holidays_router.get("/{year}/{country_code}", response_model=PublicHolidayListResponse)
async def get_public_holidays(
    provider: HolidayProviderDep,
    auth: AuthDep,
    year: int = Path(),
    country_code: str = Path(pattern=r"^[A-Za-z]{2}$"),
) -> PublicHolidayListResponse:
    """List public holidays for a year and two-letter country code."""
    max_year = rules.today_utc().year + MAX_YEARS_AHEAD
    if not MIN_HOLIDAY_YEAR <= year <= max_year:
        raise ValidationError(f"Year must be between {MIN_HOLIDAY_YEAR} and {max_year}")
    return await holiday_service.list_public_holidays(provider, year, country_code)
