from sqlmodel import SQLModel

from leave_service.models.base import IntIdBase, TimestampMixin
from leave_service.models.enums import LeaveRequestStatus, UserRole
from leave_service.models.leave_request import LeaveRequest
from leave_service.models.user import User

__all__ = [
    "IntIdBase",
    "LeaveRequest",
    "LeaveRequestStatus",
    "SQLModel",
    "TimestampMixin",
    "User",
    "UserRole",
]
