# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel

from hr_leave.models.enums import LeaveType

# ---------------------------------------------------------------------------
# Balance response schemas
# ---------------------------------------------------------------------------


class BalanceResponse(BaseModel):
    """Current-year leave balance for one employee."""

    id: uuid.UUID
    employee_id: uuid.UUID
    year: int
    casual_leave_balance: Decimal
    vacation_leave_balance: Decimal
    casual_leave_accrued: Decimal
    vacation_leave_accrued: Decimal
    updated_at: datetime | None


# ---------------------------------------------------------------------------
# Accrual history schemas
# ---------------------------------------------------------------------------


class AccrualResponse(BaseModel):
    """A single accrual history row."""

    id: uuid.UUID
    employee_id: uuid.UUID
    accrual_type: LeaveType
    accrual_amount: Decimal
    accrual_date: date
    reason: str
    created_at: datetime


class AccrualListResponse(BaseModel):
    """Paginated accrual history."""

    items: list[AccrualResponse]
    total: int


class AccrualRunResponse(BaseModel):
    """Result of reconciling one employee's balance."""

    employee_id: uuid.UUID
    year: int
    casual_entitlement: int
    vacation_entitlement: int
    accruals: list[AccrualResponse]
