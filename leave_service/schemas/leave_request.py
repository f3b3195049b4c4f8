# ruff: noqa: TC003
from __future__ import annotations

from datetime import datetime
from typing import Self

from pydantic import BaseModel, Field, model_validator

from leave_service.models.enums import LeaveRequestStatus
from leave_service.services.rules import MIN_REASON_LENGTH, as_utc

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class LeaveRequestPayload(BaseModel):
    """Request body for creating or updating a leave request."""

    start_date: datetime
    end_date: datetime
    reason: str = Field(min_length=MIN_REASON_LENGTH, max_length=2000)

    @model_validator(mode="after")
    def _validate_dates(self) -> Self:
        if as_utc(self.end_date) <= as_utc(self.start_date):
            msg = "end_date must be after start_date"
            raise ValueError(msg)
        return self


class ApprovePayload(BaseModel):
    """Request body for approving a leave request."""

    admin_comment: str | None = Field(default=None, max_length=1000)


class RejectPayload(BaseModel):
    """Request body for rejecting a leave request. The comment is mandatory."""

    admin_comment: str = Field(min_length=1, max_length=1000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class LeaveRequestResponse(BaseModel):
    """Response schema for a single leave request."""

    id: int
    user_id: int
    start_date: datetime
    end_date: datetime
    reason: str
    status: LeaveRequestStatus
    admin_comment: str | None
    created_at: datetime
    updated_at: datetime


class LeaveRequestListResponse(BaseModel):
    """List of leave requests, oldest first."""

    items: list[LeaveRequestResponse]
    total: int


class MessageResponse(BaseModel):
    message: str
