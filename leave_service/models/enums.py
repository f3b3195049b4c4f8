from __future__ import annotations

import enum


class UserRole(enum.StrEnum):
    """Role carried by a user and its access token."""

    EMPLOYEE = "employee"
    ADMIN = "admin"


class LeaveRequestStatus(enum.StrEnum):
    """State machine for leave requests.

    A request starts PENDING and moves exactly once, to APPROVED or REJECTED.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
