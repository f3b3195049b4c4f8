# ruff: noqa: TC003
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from leave_service.models.enums import UserRole


class AuthContext(BaseModel):
    """Caller identity resolved from the bearer token."""

    user_id: int
    role: UserRole = UserRole.EMPLOYEE

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class RegisterRequest(BaseModel):
    """Request body for registering a user."""

    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    full_name: str = Field(min_length=2, max_length=255)
    role: UserRole


class LoginRequest(BaseModel):
    """Request body for logging in."""

    email: EmailStr
    password: str = Field(min_length=1)


class UserResponse(BaseModel):
    """Public view of a user."""

    id: int
    email: str
    full_name: str
    role: UserRole
    created_at: datetime


class LoginResponse(BaseModel):
    """Access token plus the authenticated user."""

    token: str
    token_type: str = "bearer"
    user: UserResponse
