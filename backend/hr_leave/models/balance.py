# ruff: noqa: TC003
from __future__ import annotations

import uuid
from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field

from hr_leave.models.base import UpdatedAtMixin, UUIDBase


class LeaveBalance(UUIDBase, UpdatedAtMixin, table=True):
    """Per-year cache of an employee's available leave days.

    The ``*_accrued`` columns hold the entitlement already granted into this
    row; reconciliation only adds growth beyond them, so deductions stick.
    """

    __tablename__ = "leave_balance"
    __table_args__ = (sa.UniqueConstraint("employee_id", "year", name="uq_leave_balance_employee_year"),)

    employee_id: uuid.UUID = Field(
        sa_column=sa.Column(sa.Uuid, sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=False, index=True),
    )
    year: int
    casual_leave_balance: Decimal = Field(
        default=Decimal(0), max_digits=8, decimal_places=2, sa_column_kwargs={"server_default": "0"}
    )
    vacation_leave_balance: Decimal = Field(
        default=Decimal(0), max_digits=8, decimal_places=2, sa_column_kwargs={"server_default": "0"}
    )
    version: int = Field(default=1, sa_column_kwargs={"server_default": "1"})
    casual_leave_accrued: Decimal = Field(
        default=Decimal(0), max_digits=8, decimal_places=2, sa_column_kwargs={"server_default": "0"}
    )
    vacation_leave_accrued: Decimal = Field(
        default=Decimal(0), max_digits=8, decimal_places=2, sa_column_kwargs={"server_default": "0"}
    )
