# ruff: noqa: TC003
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from leave_service.exceptions import ConflictError, NotFoundError
from leave_service.models.base import now_utc
from leave_service.models.enums import LeaveRequestStatus
from leave_service.models.leave_request import LeaveRequest
from leave_service.models.user import User
from leave_service.schemas.leave_request import LeaveRequestListResponse, LeaveRequestResponse
from leave_service.services import rules

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_leave_request_response(leave_request: LeaveRequest) -> LeaveRequestResponse:
    """Map a leave request model to its response schema."""
    return LeaveRequestResponse(
        id=leave_request.id,  # ty: ignore[invalid-argument-type]
        user_id=leave_request.user_id,
        start_date=rules.as_utc(leave_request.start_date),
        end_date=rules.as_utc(leave_request.end_date),
        reason=leave_request.reason,
        status=LeaveRequestStatus(leave_request.status),
        admin_comment=leave_request.admin_comment,
        created_at=rules.as_utc(leave_request.created_at),
        updated_at=rules.as_utc(leave_request.updated_at),
    )


def _build_list_response(leave_requests: list[LeaveRequest]) -> LeaveRequestListResponse:
    return LeaveRequestListResponse(
        items=[_build_leave_request_response(r) for r in leave_requests],
        total=len(leave_requests),
    )


def _ensure_pending(leave_request: LeaveRequest, action: str) -> None:
    if leave_request.status != LeaveRequestStatus.PENDING.value:
        raise ConflictError(f"Only pending leave requests can be {action}")


# ---------------------------------------------------------------------------
# Lifecycle manager
# ---------------------------------------------------------------------------


class LeaveRequestManager:
    """Owns every read and write of leave requests.

    Each public method is one unit of work on the session it was built with:
    reads, rule checks and the mutation happen in a single transaction that
    is committed at the end. Rows that a decision depends on are read with
    ``FOR UPDATE`` so concurrent callers serialize on them.

    Owner-scoped lookups match on ``id`` and ``user_id`` together, so a
    request owned by someone else is reported exactly like a missing one.
    Role checks are the caller's job; this class only knows about owners.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    # -- owner operations ---------------------------------------------------

    async def create(
        self,
        caller_id: int,
        start_date: datetime,
        end_date: datetime,
        reason: str,
    ) -> LeaveRequestResponse:
        """Create a pending request; a user may hold only one pending request."""
        rules.validate_leave_window(start_date, end_date, reason)

        # Lock the owner row so concurrent creates for one user run one at a time.
        owner = await self._session.execute(select(User.id).where(col(User.id) == caller_id).with_for_update())
        if owner.scalar_one_or_none() is None:
            raise NotFoundError("User not found")

        pending = await self._session.execute(
            select(LeaveRequest.id)
            .where(
                col(LeaveRequest.user_id) == caller_id,
                col(LeaveRequest.status) == LeaveRequestStatus.PENDING.value,
            )
            .limit(1)
        )
        if pending.scalar_one_or_none() is not None:
            raise ConflictError(
                "You already have a pending leave request. "
                "Wait for it to be processed or delete it before creating a new one."
            )

        now = now_utc()
        leave_request = LeaveRequest(
            user_id=caller_id,
            start_date=rules.as_utc(start_date),
            end_date=rules.as_utc(end_date),
            reason=reason,
            status=LeaveRequestStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        self._session.add(leave_request)
        await self._session.commit()
        await self._session.refresh(leave_request)
        return _build_leave_request_response(leave_request)

    async def list_for_user(self, caller_id: int) -> LeaveRequestListResponse:
        """List the caller's requests, oldest first."""
        result = await self._session.execute(
            select(LeaveRequest)
            .where(col(LeaveRequest.user_id) == caller_id)
            .order_by(col(LeaveRequest.created_at), col(LeaveRequest.id))
        )
        return _build_list_response(list(result.scalars().all()))

    async def get_by_id(self, caller_id: int, request_id: int) -> LeaveRequestResponse:
        """Get one of the caller's requests."""
        leave_request = await self._get_owned_or_404(caller_id, request_id)
        return _build_leave_request_response(leave_request)

    async def update(
        self,
        caller_id: int,
        request_id: int,
        start_date: datetime,
        end_date: datetime,
        reason: str,
    ) -> LeaveRequestResponse:
        """Overwrite dates and reason of a pending request. Status is untouched."""
        rules.validate_leave_window(start_date, end_date, reason)

        leave_request = await self._get_owned_or_404(caller_id, request_id, for_update=True)
        _ensure_pending(leave_request, "updated")

        leave_request.start_date = rules.as_utc(start_date)
        leave_request.end_date = rules.as_utc(end_date)
        leave_request.reason = reason
        leave_request.updated_at = now_utc()

        await self._session.commit()
        await self._session.refresh(leave_request)
        return _build_leave_request_response(leave_request)

    async def delete(self, caller_id: int, request_id: int) -> None:
        """Permanently remove a pending request."""
        leave_request = await self._get_owned_or_404(caller_id, request_id, for_update=True)
        _ensure_pending(leave_request, "deleted")

        await self._session.delete(leave_request)
        await self._session.commit()

    # -- admin operations ---------------------------------------------------

    async def list_all(self) -> LeaveRequestListResponse:
        """List every request across all users, oldest first."""
        result = await self._session.execute(
            select(LeaveRequest).order_by(col(LeaveRequest.created_at), col(LeaveRequest.id))
        )
        return _build_list_response(list(result.scalars().all()))

    async def approve(self, request_id: int, admin_comment: str | None = None) -> LeaveRequestResponse:
        """Move a pending request to approved. The comment is optional."""
        return await self._decide(
            request_id,
            LeaveRequestStatus.APPROVED,
            rules.normalize_approval_comment(admin_comment),
            action="approved",
        )

    async def reject(self, request_id: int, admin_comment: str | None) -> LeaveRequestResponse:
        """Move a pending request to rejected. A non-blank comment is required."""
        comment = rules.require_rejection_comment(admin_comment)
        return await self._decide(request_id, LeaveRequestStatus.REJECTED, comment, action="rejected")

    # -- helpers --------------------------------------------------------------

    async def _get_owned_or_404(
        self,
        caller_id: int,
        request_id: int,
        *,
        for_update: bool = False,
    ) -> LeaveRequest:
        query = select(LeaveRequest).where(
            col(LeaveRequest.id) == request_id,
            col(LeaveRequest.user_id) == caller_id,
        )
        if for_update:
            query = query.with_for_update()
        result = await self._session.execute(query)
        leave_request = result.scalar_one_or_none()
        if leave_request is None:
            raise NotFoundError("Leave request not found")
        return leave_request

    async def _decide(
        self,
        request_id: int,
        new_status: LeaveRequestStatus,
        admin_comment: str | None,
        *,
        action: str,
    ) -> LeaveRequestResponse:
        result = await self._session.execute(
            select(LeaveRequest).where(col(LeaveRequest.id) == request_id).with_for_update()
        )
        leave_request = result.scalar_one_or_none()
        if leave_request is None:
            raise NotFoundError("Leave request not found")
        _ensure_pending(leave_request, action)

        leave_request.status = new_status.value
        leave_request.admin_comment = admin_comment
        leave_request.updated_at = now_utc()

        await self._session.commit()
        await self._session.refresh(leave_request)
        return _build_leave_request_response(leave_request)
