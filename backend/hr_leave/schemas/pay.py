# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Self

from pydantic import BaseModel, Field, model_validator

from hr_leave.models.enums import PayType


class CreatePayRecordRequest(BaseModel):
    """Request body for recording a payslip."""

    employee_id: uuid.UUID
    pay_period_start: date
    pay_period_end: date
    pay_date: date
    gross_pay: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    net_pay: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    deductions: dict[str, Decimal] | None = None
    pay_type: PayType = PayType.REGULAR

    @model_validator(mode="after")
    def _validate_amounts(self) -> Self:
        if self.pay_period_end < self.pay_period_start:
            msg = "pay_period_end must be on or after pay_period_start"
            raise ValueError(msg)
        if self.net_pay > self.gross_pay:
            msg = "net_pay cannot exceed gross_pay"
            raise ValueError(msg)
        return self


class PayRecordResponse(BaseModel):
    """Response schema for a pay record."""

    id: uuid.UUID
    employee_id: uuid.UUID
    pay_period_start: date
    pay_period_end: date
    pay_date: date
    gross_pay: Decimal
    net_pay: Decimal
    deductions: dict[str, Decimal] | None
    pay_type: PayType
    created_at: datetime


class PayRecordListResponse(BaseModel):
    """Pay records, most recent pay date first."""

    items: list[PayRecordResponse]
    total: int
