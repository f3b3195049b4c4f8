from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from leave_service.exceptions import ConflictError, UnauthorizedError
from leave_service.models.enums import UserRole
from leave_service.models.user import User
from leave_service.schemas.auth import LoginResponse, UserResponse
from leave_service.security import create_access_token, hash_password, verify_password
from leave_service.services.rules import as_utc

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_service.schemas.auth import LoginRequest, RegisterRequest


def _build_user_response(user: User) -> UserResponse:
    """Map a user model to its public schema."""
    return UserResponse(
        id=user.id,  # ty: ignore[invalid-argument-type]
        email=user.email,
        full_name=user.full_name,
        role=UserRole(user.role),
        created_at=as_utc(user.created_at),
    )


async def get_user(session: AsyncSession, user_id: int) -> User | None:
    """Fetch a user by id. Returns None if not found."""
    return await session.get(User, user_id)


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(col(User.email) == email.lower()))
    return result.scalar_one_or_none()


async def register_user(session: AsyncSession, payload: RegisterRequest) -> UserResponse:
    """Create a user with a bcrypt password hash. Emails are unique."""
    email = payload.email.lower()
    if await get_user_by_email(session, email) is not None:
        raise ConflictError("Email already exists")

    user = User(
        email=email,
        password_hash=hash_password(payload.password),
        full_name=payload.full_name,
        role=payload.role.value,
    )
    session.add(user)

    try:
        await session.flush()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        await session.rollback()
        raise ConflictError("Email already exists") from None

    await session.commit()
    await session.refresh(user)
    return _build_user_response(user)


async def login_user(session: AsyncSession, payload: LoginRequest) -> LoginResponse:
    """Check credentials and issue an access token.

    Unknown email and wrong password produce the same error.
    """
    user = await get_user_by_email(session, payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        raise UnauthorizedError("Invalid email or password")

    token = create_access_token(user.id, user.role)  # ty: ignore[invalid-argument-type]
    return LoginResponse(token=token, user=_build_user_response(user))
