# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

import sqlalchemy as sa
from sqlmodel import Field

from hr_leave.models.base import TimestampMixin, UpdatedAtMixin, UUIDBase
from hr_leave.models.enums import EmployeeStatus


class Employee(UUIDBase, TimestampMixin, UpdatedAtMixin, table=True):
    """An employee profile linked to an identity-provider subject."""

    __tablename__ = "employee"

    user_id: str = Field(max_length=255, unique=True, index=True)
    employee_number: str = Field(max_length=50, unique=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    email: str = Field(max_length=255)
    department: str = Field(max_length=100, index=True)
    position: str = Field(max_length=100)
    start_date: date
    status: str = Field(
        default=EmployeeStatus.ACTIVE, max_length=50, sa_column_kwargs={"server_default": "active"}
    )
    is_admin: bool = Field(default=False, sa_column_kwargs={"server_default": sa.false()})
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=500)
