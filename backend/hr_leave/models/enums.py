from __future__ import annotations

import enum


class LeaveType(enum.StrEnum):
    """Paid-leave categories that carry an accrued balance."""

    CASUAL = "casual"
    VACATION = "vacation"


class RequestStatus(enum.StrEnum):
    """State machine for leave requests."""

    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"
    CANCELLED = "cancelled"


class EmployeeStatus(enum.StrEnum):
    """Employment status of an employee record."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    TERMINATED = "terminated"


class NotificationType(enum.StrEnum):
    """Severity or purpose of an admin notification."""

    INFO = "info"
    WARNING = "warning"
    URGENT = "urgent"
    ANNOUNCEMENT = "announcement"


class PayType(enum.StrEnum):
    """Kind of payment a pay record describes."""

    REGULAR = "regular"
    BONUS = "bonus"
    OVERTIME = "overtime"


class AuditEntityType(enum.StrEnum):
    """Entity type recorded in the audit log."""

    EMPLOYEE = "EMPLOYEE"
    LEAVE_REQUEST = "LEAVE_REQUEST"
    LEAVE_BALANCE = "LEAVE_BALANCE"
    NOTIFICATION = "NOTIFICATION"
    PAY_RECORD = "PAY_RECORD"


class AuditAction(enum.StrEnum):
    """Action recorded in the audit log."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    SUBMIT = "SUBMIT"
    APPROVE = "APPROVE"
    DENY = "DENY"
    CANCEL = "CANCEL"
    DEDUCT = "DEDUCT"
