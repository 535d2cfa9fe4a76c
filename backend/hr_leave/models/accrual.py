# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field

from hr_leave.models.base import TimestampMixin, UUIDBase


class LeaveAccrual(UUIDBase, TimestampMixin, table=True):
    """Append-only record of leave days granted by reconciliation."""

    __tablename__ = "leave_accrual"
    __table_args__ = (sa.Index("ix_leave_accrual_employee_date", "employee_id", "accrual_date"),)

    employee_id: uuid.UUID = Field(
        sa_column=sa.Column(sa.Uuid, sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=False, index=True),
    )
    accrual_type: str = Field(max_length=50)
    accrual_amount: Decimal = Field(max_digits=8, decimal_places=2)
    accrual_date: date
    reason: str = Field(max_length=500)
