from sqlmodel import SQLModel

from hr_leave.models.accrual import LeaveAccrual
from hr_leave.models.audit import AuditLog
from hr_leave.models.balance import LeaveBalance
from hr_leave.models.base import TimestampMixin, UpdatedAtMixin, UUIDBase
from hr_leave.models.employee import Employee
from hr_leave.models.enums import (
    AuditAction,
    AuditEntityType,
    EmployeeStatus,
    LeaveType,
    NotificationType,
    PayType,
    RequestStatus,
)
from hr_leave.models.notification import Notification, NotificationReceipt
from hr_leave.models.pay import PayRecord
from hr_leave.models.request import LeaveRequest

__all__ = [
    "AuditAction",
    "AuditEntityType",
    "AuditLog",
    "Employee",
    "EmployeeStatus",
    "LeaveAccrual",
    "LeaveBalance",
    "LeaveRequest",
    "LeaveType",
    "Notification",
    "NotificationReceipt",
    "NotificationType",
    "PayRecord",
    "PayType",
    "RequestStatus",
    "SQLModel",
    "TimestampMixin",
    "UUIDBase",
    "UpdatedAtMixin",
]
