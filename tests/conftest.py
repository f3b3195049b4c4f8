from __future__ import annotations

import os
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from leave_service.db import build_engine, get_session
from leave_service.main import app
from leave_service.models import SQLModel, User, UserRole
from leave_service.security import create_access_token, hash_password

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncEngine

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
TEST_PASSWORD = "correct horse battery"

_password_hash: str | None = None


def _test_password_hash() -> str:
    # bcrypt is slow on purpose; hash once per run.
    global _password_hash
    if _password_hash is None:
        _password_hash = hash_password(TEST_PASSWORD)
    return _password_hash


@dataclass
class SeededUser:
    """A user inserted for a test, with ready-made auth headers."""

    id: int
    email: str
    role: UserRole
    headers: dict[str, str]


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Create an async engine with all tables.

    The default in-memory SQLite database lives on one shared connection
    (StaticPool), so it is rebuilt for each test.
    """
    kwargs: dict[str, Any] = {}
    if TEST_DATABASE_URL.startswith("sqlite"):
        kwargs["poolclass"] = StaticPool
    _engine = build_engine(TEST_DATABASE_URL, **kwargs)
    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield _engine
    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await _engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Yield a database session wrapped in a transaction that rolls back after each test."""
    async with engine.connect() as conn:
        txn = await conn.begin()
        session = AsyncSession(bind=conn, expire_on_commit=False)
        yield session
        await session.close()
        await txn.rollback()


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """Async HTTP client with the database session dependency overridden."""

    async def _override_get_session() -> AsyncIterator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_session] = _override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[SeededUser]]:
    """Factory inserting a user directly and returning its bearer headers."""
    counter = 0

    async def _make_user(role: UserRole = UserRole.EMPLOYEE, email: str | None = None) -> SeededUser:
        nonlocal counter
        counter += 1
        user = User(
            email=email or f"{role.value}{counter}@example.com",
            password_hash=_test_password_hash(),
            full_name=f"Test {role.value.title()} {counter}",
            role=role.value,
        )
        db_session.add(user)
        await db_session.flush()
        assert user.id is not None
        token = create_access_token(user.id, user.role)
        return SeededUser(
            id=user.id,
            email=user.email,
            role=role,
            headers={"Authorization": f"Bearer {token}"},
        )

    return _make_user


@pytest.fixture
async def employee(make_user: Callable[..., Awaitable[SeededUser]]) -> SeededUser:
    return await make_user(UserRole.EMPLOYEE)


@pytest.fixture
async def other_employee(make_user: Callable[..., Awaitable[SeededUser]]) -> SeededUser:
    return await make_user(UserRole.EMPLOYEE)


@pytest.fixture
async def admin(make_user: Callable[..., Awaitable[SeededUser]]) -> SeededUser:
    return await make_user(UserRole.ADMIN)
