# ruff: noqa: TC001
from __future__ import annotations

from fastapi import APIRouter, status

from leave_service.db import SessionDep
from leave_service.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from leave_service.services import user as user_service

auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    session: SessionDep,
) -> UserResponse:
    """Register a new user."""
    return await user_service.register_user(session, payload)


@auth_router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    session: SessionDep,
) -> LoginResponse:
    """Exchange email and password for an access token."""
    return await user_service.login_user(session, payload)
