"""Accrual engine: entitlement formulas and balance reconciliation.

Entitlement is a pure function of hire date and evaluation date. Reconciliation
compares it with the entitlement already granted into the current-year balance
row and, for every leave type whose entitlement has grown, credits the growth to
the balance and appends a LeaveAccrual row for it. Days already deducted are
never handed back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from hr_leave.exceptions import LeaveInputError
from hr_leave.models.accrual import LeaveAccrual
from hr_leave.models.enums import LeaveType
from hr_leave.schemas.balance import AccrualListResponse, AccrualResponse, AccrualRunResponse
from hr_leave.services.balance import get_or_create_balance_for_update
from hr_leave.services.employee import get_employee_or_404

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_leave.models.balance import LeaveBalance
    from hr_leave.models.employee import Employee

logger = logging.getLogger(__name__)

WORKING_DAYS_PER_WEEK = 5
WORKING_DAYS_PER_CASUAL_DAY = 20
MONTHS_PER_QUARTER = 3
VACATION_DAYS_PER_QUARTER = 5

# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LeaveEntitlement:
    """Days earned since the hire date, per leave type."""

    casual: int
    vacation: int
    working_days: int
    completed_quarters: int

    def for_type(self, leave_type: LeaveType) -> int:
        if leave_type == LeaveType.CASUAL:
            return self.casual
        return self.vacation


@dataclass
class AccrualRunResult:
    """Summary of one reconciliation pass."""

    employee_id: uuid.UUID
    year: int
    entitlement: LeaveEntitlement
    accruals: list[LeaveAccrual] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Pure computation helpers (no DB)
# ---------------------------------------------------------------------------


def _check_hire_date(start_date: date, as_of: date) -> None:
    if start_date > as_of:
        msg = f"Hire date {start_date.isoformat()} is after the evaluation date {as_of.isoformat()}"
        raise LeaveInputError(msg)


def working_days_since(start_date: date, as_of: date) -> int:
    """Working days in the completed weeks between two dates.

    Every completed week counts as five working days; the remainder of a
    partial week is ignored.
    """
    _check_hire_date(start_date, as_of)
    weeks = (as_of - start_date).days // 7
    return weeks * WORKING_DAYS_PER_WEEK


def months_since(start_date: date, as_of: date) -> int:
    """Calendar-month difference, ignoring the day of month."""
    _check_hire_date(start_date, as_of)
    return (as_of.year - start_date.year) * 12 + (as_of.month - start_date.month)


def compute_casual_entitlement(start_date: date, as_of: date) -> int:
    """One casual day per twenty working days since the hire date."""
    return working_days_since(start_date, as_of) // WORKING_DAYS_PER_CASUAL_DAY


def compute_vacation_entitlement(start_date: date, as_of: date) -> int:
    """Five vacation days per completed quarter since the hire date. Uncapped."""
    completed_quarters = months_since(start_date, as_of) // MONTHS_PER_QUARTER
    return completed_quarters * VACATION_DAYS_PER_QUARTER


def compute_entitlement(start_date: date, as_of: date) -> LeaveEntitlement:
    """Compute both entitlements. Raises LeaveInputError for a future hire date."""
    working_days = working_days_since(start_date, as_of)
    completed_quarters = months_since(start_date, as_of) // MONTHS_PER_QUARTER
    return LeaveEntitlement(
        casual=compute_casual_entitlement(start_date, as_of),
        vacation=compute_vacation_entitlement(start_date, as_of),
        working_days=working_days,
        completed_quarters=completed_quarters,
    )


def _accrual_reason(leave_type: LeaveType, entitlement: LeaveEntitlement, start_date: date) -> str:
    if leave_type == LeaveType.CASUAL:
        return (
            f"Casual leave: {entitlement.working_days} working days since {start_date.isoformat()} "
            f"earn {entitlement.casual} day(s) at 1 day per {WORKING_DAYS_PER_CASUAL_DAY} working days"
        )
    return (
        f"Vacation leave: {entitlement.completed_quarters} completed quarter(s) since {start_date.isoformat()} "
        f"earn {entitlement.vacation} day(s) at {VACATION_DAYS_PER_QUARTER} days per quarter"
    )


def _granted(balance: LeaveBalance, leave_type: LeaveType) -> Decimal:
    if leave_type == LeaveType.CASUAL:
        return balance.casual_leave_accrued
    return balance.vacation_leave_accrued


def _grant(balance: LeaveBalance, leave_type: LeaveType, entitlement: Decimal, amount: Decimal) -> None:
    if leave_type == LeaveType.CASUAL:
        balance.casual_leave_balance += amount
        balance.casual_leave_accrued = entitlement
    else:
        balance.vacation_leave_balance += amount
        balance.vacation_leave_accrued = entitlement


def build_accrual_response(accrual: LeaveAccrual) -> AccrualResponse:
    """Map an accrual model to its response schema."""
    return AccrualResponse(
        id=accrual.id,
        employee_id=accrual.employee_id,
        accrual_type=LeaveType(accrual.accrual_type),
        accrual_amount=accrual.accrual_amount,
        accrual_date=accrual.accrual_date,
        reason=accrual.reason,
        created_at=accrual.created_at,
    )


def build_accrual_run_response(result: AccrualRunResult) -> AccrualRunResponse:
    """Map a reconciliation result to its response schema."""
    return AccrualRunResponse(
        employee_id=result.employee_id,
        year=result.year,
        casual_entitlement=result.entitlement.casual,
        vacation_entitlement=result.entitlement.vacation,
        accruals=[build_accrual_response(a) for a in result.accruals],
    )


# ---------------------------------------------------------------------------
# Reconciliation
# ---------------------------------------------------------------------------


async def reconcile_balance(
    session: AsyncSession,
    employee: Employee,
    today: date,
) -> AccrualRunResult:
    """Bring the current-year balance up to the computed entitlement.

    Locks the balance row, credits each leave type whose entitlement exceeds
    the granted snapshot and appends one accrual row per credit. Does not commit.
    """
    entitlement = compute_entitlement(employee.start_date, today)
    balance = await get_or_create_balance_for_update(session, employee.id, today.year)

    result = AccrualRunResult(employee_id=employee.id, year=today.year, entitlement=entitlement)

    for leave_type in LeaveType:
        earned = Decimal(entitlement.for_type(leave_type))
        granted = _granted(balance, leave_type)
        if earned <= granted:
            continue

        accrual = LeaveAccrual(
            employee_id=employee.id,
            accrual_type=leave_type.value,
            accrual_amount=earned - granted,
            accrual_date=today,
            reason=_accrual_reason(leave_type, entitlement, employee.start_date),
        )
        session.add(accrual)
        _grant(balance, leave_type, earned, accrual.accrual_amount)
        result.accruals.append(accrual)

        logger.info(
            "Accrued %s %s day(s) for employee=%s (entitlement now %s)",
            accrual.accrual_amount,
            leave_type.value,
            employee.id,
            earned,
        )

    if result.accruals:
        balance.version += 1

    await session.flush()
    return result


async def process_leave_accruals(
    session: AsyncSession,
    employee_id: uuid.UUID,
    today: date | None = None,
) -> AccrualRunResult:
    """Reconcile one employee's current-year balance and commit.

    Idempotent: a second call with no elapsed time posts nothing.

    Args:
        session: Database session.
        employee_id: Employee to reconcile. Raises 404 if unknown.
        today: Evaluation date (defaults to today).
    """
    if today is None:
        today = date.today()

    employee = await get_employee_or_404(session, employee_id)
    result = await reconcile_balance(session, employee, today)

    await session.commit()
    return result


# ---------------------------------------------------------------------------
# Read path
# ---------------------------------------------------------------------------


async def list_accruals(
    session: AsyncSession,
    employee_id: uuid.UUID,
    offset: int = 0,
    limit: int = 50,
) -> AccrualListResponse:
    """Get paginated accrual history for an employee, newest first."""
    base_filter = col(LeaveAccrual.employee_id) == employee_id

    count_result = await session.execute(select(func.count()).select_from(LeaveAccrual).where(base_filter))
    total = count_result.scalar_one()

    result = await session.execute(
        select(LeaveAccrual)
        .where(base_filter)
        .order_by(col(LeaveAccrual.accrual_date).desc(), col(LeaveAccrual.created_at).desc())
        .offset(offset)
        .limit(limit)
    )
    accruals = list(result.scalars().all())

    return AccrualListResponse(
        items=[build_accrual_response(a) for a in accruals],
        total=total,
    )
