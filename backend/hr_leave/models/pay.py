# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import Any

import sqlalchemy as sa
from sqlmodel import Field

from hr_leave.models.base import TimestampMixin, UUIDBase
from hr_leave.models.enums import PayType


class PayRecord(UUIDBase, TimestampMixin, table=True):
    """One payslip: gross and net pay for a pay period."""

    __tablename__ = "pay_record"
    __table_args__ = (sa.Index("ix_pay_record_employee_pay_date", "employee_id", "pay_date"),)

    employee_id: uuid.UUID = Field(
        sa_column=sa.Column(sa.Uuid, sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=False, index=True),
    )
    pay_period_start: date
    pay_period_end: date
    pay_date: date
    gross_pay: Decimal = Field(max_digits=10, decimal_places=2)
    net_pay: Decimal = Field(max_digits=10, decimal_places=2)
    # Itemised deductions keyed by name, amounts as decimal strings.
    deductions: dict[str, Any] | None = Field(default=None, sa_type=sa.JSON)
    pay_type: str = Field(default=PayType.REGULAR, max_length=50, sa_column_kwargs={"server_default": "regular"})
