# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Self

from pydantic import BaseModel, Field, model_validator

from hr_leave.models.enums import LeaveType, RequestStatus

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class SubmitLeaveRequestPayload(BaseModel):
    """Request body for submitting a new leave request."""

    leave_type: LeaveType
    start_date: date
    end_date: date
    days: Decimal = Field(gt=0, max_digits=8, decimal_places=2)
    reason: str | None = Field(default=None, max_length=1000)

    @model_validator(mode="after")
    def _validate_dates(self) -> Self:
        if self.end_date < self.start_date:
            msg = "end_date must be on or after start_date"
            raise ValueError(msg)
        return self


class DecisionPayload(BaseModel):
    """Request body for approve/deny actions."""

    note: str | None = Field(default=None, max_length=1000)


class ValidateLeavePayload(BaseModel):
    """Request body for a dry-run balance check."""

    leave_type: LeaveType
    days: Decimal = Field(gt=0, max_digits=8, decimal_places=2)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class LeaveRequestResponse(BaseModel):
    """Response schema for a single leave request."""

    id: uuid.UUID
    employee_id: uuid.UUID
    leave_type: LeaveType
    start_date: date
    end_date: date
    days: Decimal
    reason: str | None
    status: RequestStatus
    approver_id: uuid.UUID | None
    decided_at: datetime | None
    decision_note: str | None
    created_at: datetime


class LeaveRequestListResponse(BaseModel):
    """Paginated list of leave requests."""

    items: list[LeaveRequestResponse]
    total: int


class LeaveValidationResponse(BaseModel):
    """Outcome of validating a leave request against the current balance."""

    valid: bool
    message: str
