# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class PublicHoliday(BaseModel):
    """A public holiday as reported by the upstream calendar API."""

    model_config = ConfigDict(populate_by_name=True)

    date: date
    local_name: str = Field(validation_alias="localName")
    name: str
    country_code: str = Field(validation_alias="countryCode")
    is_global: bool = Field(default=True, validation_alias="global")
    counties: list[str] | None = None
    launch_year: int | None = Field(default=None, validation_alias="launchYear")
    types: list[str] = Field(default_factory=list)


class PublicHolidayListResponse(BaseModel):
    """Public holidays for one country and year."""

    year: int
    country_code: str
    items: list[PublicHoliday]
    total: int
