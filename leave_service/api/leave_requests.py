# ruff: noqa: TC001
from __future__ import annotations

from fastapi import APIRouter, Path, status

from leave_service.api.deps import AdminDep, AuthDep, ManagerDep
from leave_service.schemas.leave_request import (
    ApprovePayload,
    LeaveRequestListResponse,
    LeaveRequestPayload,
    LeaveRequestResponse,
    MessageResponse,
    RejectPayload,
)

RequestId = Path(ge=1, description="Leave request ID")

leave_requests_router = APIRouter(prefix="/leave-requests", tags=["leave-requests"])
admin_leave_requests_router = APIRouter(prefix="/admin/leave-requests", tags=["admin"])


# ---------------------------------------------------------------------------
# Owner routes
# ---------------------------------------------------------------------------


@leave_requests_router.post("", response_model=LeaveRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_leave_request(
    payload: LeaveRequestPayload,
    manager: ManagerDep,
    auth: AuthDep,
) -> LeaveRequestResponse:
    """Create a leave request for the caller."""
    return await manager.create(auth.user_id, payload.start_date, payload.end_date, payload.reason)


@leave_requests_router.get("", response_model=LeaveRequestListResponse)
async def list_my_leave_requests(
    manager: ManagerDep,
    auth: AuthDep,
) -> LeaveRequestListResponse:
    """List the caller's leave requests."""
    return await manager.list_for_user(auth.user_id)


@leave_requests_router.get("/{request_id}", response_model=LeaveRequestResponse)
async def get_leave_request(
    manager: ManagerDep,
    auth: AuthDep,
    request_id: int = RequestId,
) -> LeaveRequestResponse:
    """Get one of the caller's leave requests."""
    return await manager.get_by_id(auth.user_id, request_id)


@leave_requests_router.put("/{request_id}", response_model=LeaveRequestResponse)
async def update_leave_request(
    payload: LeaveRequestPayload,
    manager: ManagerDep,
    auth: AuthDep,
    request_id: int = RequestId,
) -> LeaveRequestResponse:
    """Update dates and reason of a pending leave request."""
    return await manager.update(auth.user_id, request_id, payload.start_date, payload.end_date, payload.reason)


@leave_requests_router.delete("/{request_id}", response_model=MessageResponse)
async def delete_leave_request(
    manager: ManagerDep,
    auth: AuthDep,
    request_id: int = RequestId,
) -> MessageResponse:
    """Delete a pending leave request."""
    await manager.delete(auth.user_id, request_id)
    return MessageResponse(message="Leave request deleted successfully")


# ---------------------------------------------------------------------------
# Admin routes
# ---------------------------------------------------------------------------


@admin_leave_requests_router.get("", response_model=LeaveRequestListResponse)
async def list_all_leave_requests(
    manager: ManagerDep,
    auth: AdminDep,
) -> LeaveRequestListResponse:
    """List every leave request (admin only)."""
    return await manager.list_all()


@admin_leave_requests_router.patch("/{request_id}/approve", response_model=LeaveRequestResponse)
async def approve_leave_request(
    manager: ManagerDep,
    auth: AdminDep,
    request_id: int = RequestId,
    payload: ApprovePayload | None = None,
) -> LeaveRequestResponse:
    """Approve a pending leave request (admin only)."""
    return await manager.approve(request_id, payload.admin_comment if payload else None)


@admin_leave_requests_router.patch("/{request_id}/reject", response_model=LeaveRequestResponse)
async def reject_leave_request(
    payload: RejectPayload,
    manager: ManagerDep,
    auth: AdminDep,
    request_id: int = RequestId,
) -> LeaveRequestResponse:
    """Reject a pending leave request with a comment (admin only)."""
    return await manager.reject(request_id, payload.admin_comment)
