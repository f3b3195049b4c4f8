# ruff: noqa: B008
from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from leave_service.db import SessionDep
from leave_service.exceptions import ForbiddenError, UnauthorizedError
from leave_service.models.enums import UserRole
from leave_service.schemas.auth import AuthContext
from leave_service.security import decode_access_token
from leave_service.services.holiday import HolidayProvider, get_holiday_provider
from leave_service.services.leave_request import LeaveRequestManager
from leave_service.services.user import get_user

_bearer = HTTPBearer(auto_error=False)


async def get_auth_context(
    session: SessionDep,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> AuthContext:
    """Resolve the caller from the bearer token.

    The role comes from the stored user record, not the token, so a role
    change takes effect without reissuing tokens.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No token provided")

    claims = decode_access_token(credentials.credentials)
    user = await get_user(session, int(claims["sub"]))
    if user is None:
        raise UnauthorizedError("Invalid or expired token")
    return AuthContext(user_id=user.id, role=UserRole(user.role))  # ty: ignore[invalid-argument-type]


AuthDep = Annotated[AuthContext, Depends(get_auth_context)]


async def require_admin(
    auth: AuthDep,
) -> AuthContext:
    """Require admin role for the request."""
    if not auth.is_admin:
        raise ForbiddenError("Admin access required")
    return auth


AdminDep = Annotated[AuthContext, Depends(require_admin)]


async def get_leave_request_manager(session: SessionDep) -> LeaveRequestManager:
    """Build the lifecycle manager for this request's session."""
    return LeaveRequestManager(session)


ManagerDep = Annotated[LeaveRequestManager, Depends(get_leave_request_manager)]
HolidayProviderDep = Annotated[HolidayProvider, Depends(get_holiday_provider)]
