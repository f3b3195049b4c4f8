from __future__ import annotations

from sqlmodel import Field

from leave_service.models.base import IntIdBase, TimestampMixin
from leave_service.models.enums import UserRole


class User(IntIdBase, TimestampMixin, table=True):
    """An identity record. The password hash never leaves the service."""

    __tablename__ = "users"

    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: str = Field(max_length=255)
    full_name: str = Field(max_length=255)
    role: str = Field(default=UserRole.EMPLOYEE, max_length=20)
