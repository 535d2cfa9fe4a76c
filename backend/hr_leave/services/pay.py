# ruff: noqa: TC003
"""Pay records: admin-entered payslips, readable by the employee they belong to."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from hr_leave.exceptions import NotFoundError
from hr_leave.models.enums import AuditAction, AuditEntityType, PayType
from hr_leave.models.pay import PayRecord
from hr_leave.schemas.pay import PayRecordListResponse, PayRecordResponse
from hr_leave.services.audit import model_to_audit_dict, write_audit_log
from hr_leave.services.employee import get_employee_or_404

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_leave.schemas.pay import CreatePayRecordRequest


def build_pay_record_response(record: PayRecord) -> PayRecordResponse:
    """Map a pay record model to its response schema."""
    deductions = None
    if record.deductions is not None:
        deductions = {name: Decimal(amount) for name, amount in record.deductions.items()}
    return PayRecordResponse(
        id=record.id,
        employee_id=record.employee_id,
        pay_period_start=record.pay_period_start,
        pay_period_end=record.pay_period_end,
        pay_date=record.pay_date,
        gross_pay=record.gross_pay,
        net_pay=record.net_pay,
        deductions=deductions,
        pay_type=PayType(record.pay_type),
        created_at=record.created_at,
    )


def _newest_first(employee_id: uuid.UUID) -> Select[tuple[PayRecord]]:
    return (
        select(PayRecord)
        .where(col(PayRecord.employee_id) == employee_id)
        .order_by(col(PayRecord.pay_date).desc(), col(PayRecord.created_at).desc())
    )


async def list_pay_records(session: AsyncSession, employee_id: uuid.UUID) -> PayRecordListResponse:
    """All pay records for an employee, most recent pay date first."""
    result = await session.execute(_newest_first(employee_id))
    records = list(result.scalars().all())

    return PayRecordListResponse(
        items=[build_pay_record_response(r) for r in records],
        total=len(records),
    )


async def get_latest_pay_record(session: AsyncSession, employee_id: uuid.UUID) -> PayRecordResponse:
    """The employee's most recent pay record. Raises 404 if there is none."""
    result = await session.execute(_newest_first(employee_id).limit(1))
    record = result.scalar_one_or_none()
    if record is None:
        raise NotFoundError("No pay records found")
    return build_pay_record_response(record)


async def create_pay_record(
    session: AsyncSession,
    actor_id: uuid.UUID,
    payload: CreatePayRecordRequest,
) -> PayRecordResponse:
    """Record a payslip for an existing employee."""
    employee = await get_employee_or_404(session, payload.employee_id)

    record = PayRecord(
        employee_id=employee.id,
        pay_period_start=payload.pay_period_start,
        pay_period_end=payload.pay_period_end,
        pay_date=payload.pay_date,
        gross_pay=payload.gross_pay,
        net_pay=payload.net_pay,
        # JSON cannot carry Decimal; store exact decimal strings.
        deductions=(
            {name: str(amount) for name, amount in payload.deductions.items()}
            if payload.deductions is not None
            else None
        ),
        pay_type=payload.pay_type.value,
    )
    session.add(record)
    await session.flush()

    await write_audit_log(
        session,
        actor_id=actor_id,
        entity_type=AuditEntityType.PAY_RECORD,
        entity_id=record.id,
        action=AuditAction.CREATE,
        summary=f"Recorded {record.pay_type} pay of {record.net_pay} net for {employee.employee_number}",
        after_json=model_to_audit_dict(record),
    )

    await session.commit()
    await session.refresh(record)
    return build_pay_record_response(record)
