# ruff: noqa: TC003
from __future__ import annotations

from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field

from leave_service.models.base import IntIdBase, TimestampMixin, now_utc
from leave_service.models.enums import LeaveRequestStatus


class LeaveRequest(IntIdBase, TimestampMixin, table=True):
    """An employee's leave request with its approval state."""

    __tablename__ = "leave_requests"
    __table_args__ = (sa.Index("ix_leave_request_user_status", "user_id", "status"),)

    user_id: int = Field(
        sa_column=sa.Column(sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    )
    start_date: datetime = Field(sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    end_date: datetime = Field(sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    reason: str = Field(sa_type=sa.Text)
    status: str = Field(
        default=LeaveRequestStatus.PENDING, max_length=20, index=True, sa_column_kwargs={"server_default": "pending"}
    )
    admin_comment: str | None = Field(default=None, sa_type=sa.Text)
    updated_at: datetime = Field(
        default_factory=now_utc,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs={"server_default": sa.func.now()},
    )
