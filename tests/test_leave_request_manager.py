"""Tests for LeaveRequestManager used directly against a session, without HTTP."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import select
from sqlmodel import col

from leave_service.exceptions import ConflictError, NotFoundError, ValidationError
from leave_service.models.enums import LeaveRequestStatus
from leave_service.models.leave_request import LeaveRequest
from leave_service.models.user import User
from leave_service.services.leave_request import LeaveRequestManager

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from tests.conftest import SeededUser

REASON = "valid reason text"


def _day(offset: int) -> datetime:
    return datetime.now(UTC).replace(hour=9, minute=0, second=0, microsecond=0) + timedelta(days=offset)


@pytest.fixture
def manager(db_session: AsyncSession) -> LeaveRequestManager:
    return LeaveRequestManager(db_session)


async def test_create_and_get(manager: LeaveRequestManager, employee: SeededUser) -> None:
    created = await manager.create(employee.id, _day(7), _day(14), REASON)
    assert created.status == LeaveRequestStatus.PENDING

    fetched = await manager.get_by_id(employee.id, created.id)
    assert fetched == created
    assert fetched.reason == REASON


async def test_create_validates_before_touching_store(
    manager: LeaveRequestManager,
    db_session: AsyncSession,
    employee: SeededUser,
) -> None:
    with pytest.raises(ValidationError):
        await manager.create(employee.id, _day(-1), _day(3), REASON)
    with pytest.raises(ValidationError):
        await manager.create(employee.id, _day(5), _day(4), REASON)
    with pytest.raises(ValidationError):
        await manager.create(employee.id, _day(5), _day(6), "short")

    result = await db_session.execute(select(LeaveRequest))
    assert result.scalars().all() == []


async def test_create_for_unknown_user(manager: LeaveRequestManager) -> None:
    with pytest.raises(NotFoundError):
        await manager.create(987_654, _day(1), _day(2), REASON)


async def test_second_pending_conflicts(manager: LeaveRequestManager, employee: SeededUser) -> None:
    await manager.create(employee.id, _day(7), _day(14), REASON)
    with pytest.raises(ConflictError):
        await manager.create(employee.id, _day(20), _day(21), REASON)


async def test_foreign_and_missing_ids_raise_identical_errors(
    manager: LeaveRequestManager,
    employee: SeededUser,
    other_employee: SeededUser,
) -> None:
    created = await manager.create(employee.id, _day(7), _day(14), REASON)

    with pytest.raises(NotFoundError) as foreign:
        await manager.get_by_id(other_employee.id, created.id)
    with pytest.raises(NotFoundError) as missing:
        await manager.get_by_id(other_employee.id, created.id + 1000)
    assert foreign.value.message == missing.value.message

    with pytest.raises(NotFoundError):
        await manager.update(other_employee.id, created.id, _day(8), _day(9), REASON)
    with pytest.raises(NotFoundError):
        await manager.delete(other_employee.id, created.id)


async def test_update_keeps_identity_and_status(manager: LeaveRequestManager, employee: SeededUser) -> None:
    created = await manager.create(employee.id, _day(7), _day(14), REASON)

    updated = await manager.update(employee.id, created.id, _day(10), _day(17), "updated reason text")
    assert updated.id == created.id
    assert updated.user_id == employee.id
    assert updated.status == LeaveRequestStatus.PENDING
    assert updated.reason == "updated reason text"
    assert updated.created_at == created.created_at


async def test_update_validation_runs_first(manager: LeaveRequestManager, employee: SeededUser) -> None:
    # Bad input is reported as a validation failure even for an unknown id.
    with pytest.raises(ValidationError):
        await manager.update(employee.id, 123_456, _day(3), _day(1), REASON)


async def test_transitions_are_one_shot(manager: LeaveRequestManager, employee: SeededUser) -> None:
    created = await manager.create(employee.id, _day(7), _day(14), REASON)

    approved = await manager.approve(created.id, "ok")
    assert approved.status == LeaveRequestStatus.APPROVED
    assert approved.admin_comment == "ok"

    with pytest.raises(ConflictError):
        await manager.approve(created.id, "again")
    with pytest.raises(ConflictError):
        await manager.reject(created.id, "too late")
    with pytest.raises(ConflictError):
        await manager.update(employee.id, created.id, _day(8), _day(9), REASON)
    with pytest.raises(ConflictError):
        await manager.delete(employee.id, created.id)

    still = await manager.get_by_id(employee.id, created.id)
    assert still.status == LeaveRequestStatus.APPROVED
    assert still.admin_comment == "ok"


async def test_reject_without_comment_leaves_request_pending(
    manager: LeaveRequestManager,
    employee: SeededUser,
) -> None:
    created = await manager.create(employee.id, _day(7), _day(14), REASON)

    for comment in (None, "", "  "):
        with pytest.raises(ValidationError):
            await manager.reject(created.id, comment)

    fetched = await manager.get_by_id(employee.id, created.id)
    assert fetched.status == LeaveRequestStatus.PENDING
    assert fetched.admin_comment is None
    assert fetched.updated_at == created.updated_at


async def test_reject_missing_comment_checked_before_lookup(manager: LeaveRequestManager) -> None:
    with pytest.raises(ValidationError):
        await manager.reject(999_999, "")


async def test_approve_and_reject_unknown_id(manager: LeaveRequestManager) -> None:
    with pytest.raises(NotFoundError):
        await manager.approve(999_999)
    with pytest.raises(NotFoundError):
        await manager.reject(999_999, "no such request")


async def test_list_for_user_and_list_all(
    manager: LeaveRequestManager,
    employee: SeededUser,
    other_employee: SeededUser,
) -> None:
    assert (await manager.list_for_user(employee.id)).total == 0

    first = await manager.create(employee.id, _day(7), _day(14), REASON)
    await manager.reject(first.id, "Overlaps with release week")
    second = await manager.create(employee.id, _day(30), _day(31), REASON)
    third = await manager.create(other_employee.id, _day(7), _day(8), REASON)

    mine = await manager.list_for_user(employee.id)
    assert [r.id for r in mine.items] == [first.id, second.id]

    everyone = await manager.list_all()
    assert [r.id for r in everyone.items] == [first.id, second.id, third.id]
    assert everyone.total == 3


async def test_deleting_user_cascades_to_requests(
    manager: LeaveRequestManager,
    db_session: AsyncSession,
    employee: SeededUser,
) -> None:
    created = await manager.create(employee.id, _day(7), _day(14), REASON)
    db_session.expunge_all()

    user = await db_session.get(User, employee.id)
    await db_session.delete(user)
    await db_session.flush()

    result = await db_session.execute(select(LeaveRequest).where(col(LeaveRequest.id) == created.id))
    assert result.scalar_one_or_none() is None
