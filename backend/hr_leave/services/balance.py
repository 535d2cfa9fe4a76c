# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from hr_leave.exceptions import LeaveInputError, NotFoundError
from hr_leave.models.balance import LeaveBalance
from hr_leave.models.enums import AuditAction, AuditEntityType, LeaveType
from hr_leave.schemas.balance import BalanceResponse
from hr_leave.services.audit import model_to_audit_dict, write_audit_log

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _balance_column(leave_type: LeaveType) -> InstrumentedAttribute[Decimal]:
    if leave_type == LeaveType.CASUAL:
        return col(LeaveBalance.casual_leave_balance)  # type: ignore[return-value]
    return col(LeaveBalance.vacation_leave_balance)  # type: ignore[return-value]


def available_days(balance: LeaveBalance, leave_type: LeaveType) -> Decimal:
    """Return the stored balance for one leave type."""
    if leave_type == LeaveType.CASUAL:
        return balance.casual_leave_balance
    return balance.vacation_leave_balance


def build_balance_response(balance: LeaveBalance) -> BalanceResponse:
    """Map a balance model to its response schema."""
    return BalanceResponse(
        id=balance.id,
        employee_id=balance.employee_id,
        year=balance.year,
        casual_leave_balance=balance.casual_leave_balance,
        vacation_leave_balance=balance.vacation_leave_balance,
        casual_leave_accrued=balance.casual_leave_accrued,
        vacation_leave_accrued=balance.vacation_leave_accrued,
        updated_at=balance.updated_at,
    )


async def get_leave_balance(
    session: AsyncSession,
    employee_id: uuid.UUID,
    year: int,
) -> LeaveBalance | None:
    """Fetch the balance row for (employee, year). Returns None if absent."""
    result = await session.execute(
        select(LeaveBalance).where(
            col(LeaveBalance.employee_id) == employee_id,
            col(LeaveBalance.year) == year,
        )
    )
    return result.scalar_one_or_none()


async def get_or_create_balance_for_update(
    session: AsyncSession,
    employee_id: uuid.UUID,
    year: int,
) -> LeaveBalance:
    """Get the balance row with a FOR UPDATE lock, creating a zeroed row if absent."""
    query = (
        select(LeaveBalance)
        .where(
            col(LeaveBalance.employee_id) == employee_id,
            col(LeaveBalance.year) == year,
        )
        .with_for_update()
    )
    result = await session.execute(query)
    balance = result.scalar_one_or_none()

    if balance is None:
        balance = LeaveBalance(employee_id=employee_id, year=year)
        try:
            async with session.begin_nested():
                session.add(balance)
                await session.flush()
        except IntegrityError:
            # A concurrent transaction created the row first; lock theirs.
            result = await session.execute(query)
            balance = result.scalar_one()

    return balance


# ---------------------------------------------------------------------------
# Deduction
# ---------------------------------------------------------------------------


async def apply_deduction(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type: LeaveType,
    days: Decimal,
    *,
    actor_id: uuid.UUID | None = None,
    today: date | None = None,
) -> bool:
    """Decrement one leave-type balance if it covers ``days``. Does not commit.

    The floor check and the decrement are a single conditional UPDATE, so a
    concurrent deduction that already spent the days makes this one match no
    row instead of driving the balance negative.

    Returns False when no current-year balance exists or it is insufficient.
    """
    if days <= 0:
        raise LeaveInputError("Requested days must be greater than zero")
    if today is None:
        today = date.today()

    # Re-read under lock so the audit snapshot is not a stale identity-map copy.
    result = await session.execute(
        select(LeaveBalance)
        .where(
            col(LeaveBalance.employee_id) == employee_id,
            col(LeaveBalance.year) == today.year,
        )
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    balance = result.scalar_one_or_none()
    if balance is None:
        logger.info("Deduction refused for employee=%s: no %d balance", employee_id, today.year)
        return False

    before_dict = model_to_audit_dict(balance)
    column = _balance_column(leave_type)

    updated = await session.execute(
        update(LeaveBalance)
        .where(col(LeaveBalance.id) == balance.id, column >= days)
        .values({column.key: column - days, "version": col(LeaveBalance.version) + 1})
        .execution_options(synchronize_session=False)
    )
    if updated.rowcount == 0:
        logger.info(
            "Deduction refused for employee=%s: %s %s day(s) exceeds balance",
            employee_id,
            days,
            leave_type.value,
        )
        return False

    await session.refresh(balance)

    await write_audit_log(
        session,
        actor_id=actor_id,
        entity_type=AuditEntityType.LEAVE_BALANCE,
        entity_id=balance.id,
        action=AuditAction.DEDUCT,
        summary=f"Deducted {days} {leave_type.value} day(s) from the {balance.year} balance",
        before_json=before_dict,
        after_json=model_to_audit_dict(balance, leave_type=leave_type.value, days=days),
    )

    logger.info(
        "Deducted %s %s day(s) for employee=%s (balance now %s)",
        days,
        leave_type.value,
        employee_id,
        available_days(balance, leave_type),
    )
    return True


async def deduct_leave_balance(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type: LeaveType,
    days: Decimal,
    *,
    actor_id: uuid.UUID | None = None,
    today: date | None = None,
) -> bool:
    """Deduct ``days`` from the current-year balance and commit on success.

    Returns False, leaving the balance untouched, when the balance is missing
    or insufficient.
    """
    deducted = await apply_deduction(session, employee_id, leave_type, days, actor_id=actor_id, today=today)
    if deducted:
        await session.commit()
    return deducted


# ---------------------------------------------------------------------------
# Read path
# ---------------------------------------------------------------------------


async def get_balance_response(
    session: AsyncSession,
    employee_id: uuid.UUID,
    year: int,
) -> BalanceResponse:
    """Get the balance for (employee, year). Raises 404 if absent."""
    balance = await get_leave_balance(session, employee_id, year)
    if balance is None:
        raise NotFoundError("Leave balance not found")
    return build_balance_response(balance)
