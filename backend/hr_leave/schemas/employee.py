# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Self

from pydantic import BaseModel, Field, field_validator, model_validator

from hr_leave.models.enums import EmployeeStatus

# Fields an update may explicitly clear with null.
_CLEARABLE_FIELDS = frozenset({"phone", "address"})


def _reject_future_start(value: date | None) -> date | None:
    # Entitlement is undefined before the hire date.
    if value is not None and value > date.today():
        msg = "start_date cannot be in the future"
        raise ValueError(msg)
    return value


class _PartialUpdate(BaseModel):
    @model_validator(mode="after")
    def _reject_null_required(self) -> Self:
        for name in sorted(self.model_fields_set - _CLEARABLE_FIELDS):
            if getattr(self, name) is None:
                msg = f"{name} cannot be null"
                raise ValueError(msg)
        return self


# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class CreateEmployeeRequest(BaseModel):
    """Request body for creating an employee profile."""

    user_id: str = Field(min_length=1, max_length=255)
    employee_number: str = Field(min_length=1, max_length=50)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=1, max_length=255)
    department: str = Field(min_length=1, max_length=100)
    position: str = Field(min_length=1, max_length=100)
    start_date: date
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    is_admin: bool = False
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=500)

    @field_validator("start_date")
    @classmethod
    def _validate_start_date(cls, value: date | None) -> date | None:
        return _reject_future_start(value)


class UpdateEmployeeRequest(_PartialUpdate):
    """Partial update of an employee profile by an admin.

    Omitted fields are left unchanged. Only ``phone`` and ``address`` may be
    set to null.
    """

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    email: str | None = Field(default=None, min_length=1, max_length=255)
    department: str | None = Field(default=None, min_length=1, max_length=100)
    position: str | None = Field(default=None, min_length=1, max_length=100)
    start_date: date | None = None
    status: EmployeeStatus | None = None
    is_admin: bool | None = None
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=500)

    @field_validator("start_date")
    @classmethod
    def _validate_start_date(cls, value: date | None) -> date | None:
        return _reject_future_start(value)


class UpdateProfileRequest(_PartialUpdate):
    """Self-service profile update: contact details only."""

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    email: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=500)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class EmployeeResponse(BaseModel):
    """Response schema for an employee."""

    id: uuid.UUID
    user_id: str
    employee_number: str
    first_name: str
    last_name: str
    email: str
    department: str
    position: str
    start_date: date
    status: EmployeeStatus
    is_admin: bool
    phone: str | None
    address: str | None
    created_at: datetime


class EmployeeListResponse(BaseModel):
    """List of employees."""

    items: list[EmployeeResponse]
    total: int
