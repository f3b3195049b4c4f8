"""Business rules for leave-request input.

These checks run inside the lifecycle manager before any store access, so a
request that breaks them never reaches the database.
"""

from __future__ import annotations

from datetime import UTC, date, datetime

from leave_service.exceptions import ValidationError

MIN_REASON_LENGTH = 10


def today_utc() -> date:
    """Return the current UTC calendar date."""
    return datetime.now(UTC).date()


def as_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def validate_leave_window(
    start_date: datetime,
    end_date: datetime,
    reason: str,
    *,
    today: date | None = None,
) -> None:
    """Validate the mutable fields of a leave request.

    - reason must be at least MIN_REASON_LENGTH characters;
    - start_date must not fall before today (calendar date, time ignored);
    - end_date must be strictly after start_date.
    """
    if len(reason) < MIN_REASON_LENGTH:
        raise ValidationError(f"Reason must be at least {MIN_REASON_LENGTH} characters")

    start = as_utc(start_date)
    end = as_utc(end_date)

    if start.date() < (today or today_utc()):
        raise ValidationError("Start date cannot be in the past")
    if end <= start:
        raise ValidationError("End date must be after start date")


def require_rejection_comment(admin_comment: str | None) -> str:
    """Return the rejection comment, refusing absent or blank values."""
    if admin_comment is None or not admin_comment.strip():
        raise ValidationError("Admin comment is required for rejection")
    return admin_comment


def normalize_approval_comment(admin_comment: str | None) -> str | None:
    """Blank approval comments are stored as NULL."""
    if admin_comment is None or not admin_comment.strip():
        return None
    return admin_comment
