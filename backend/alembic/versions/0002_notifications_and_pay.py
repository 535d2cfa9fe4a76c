"""Notifications, read receipts, pay records and employee contact details.

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-18

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0002"
down_revision: str | None = "0001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.add_column("employee", sa.Column("phone", sa.String(length=50), nullable=True))
    op.add_column("employee", sa.Column("address", sa.String(length=500), nullable=True))

    op.create_table(
        "notification",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("message", sa.String(), nullable=False),
        sa.Column("notification_type", sa.String(length=50), server_default="info", nullable=False),
        sa.Column("sender_id", sa.Uuid(), sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=False),
        sa.Column("recipient_id", sa.Uuid(), sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notification_recipient_id", "notification", ["recipient_id"])

    op.create_table(
        "notification_receipt",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column(
            "notification_id", sa.Uuid(), sa.ForeignKey("notification.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("employee_id", sa.Uuid(), sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "notification_id", "employee_id", name="uq_notification_receipt_notification_employee"
        ),
    )
    op.create_index("ix_notification_receipt_employee_id", "notification_receipt", ["employee_id"])

    op.create_table(
        "pay_record",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("employee_id", sa.Uuid(), sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=False),
        sa.Column("pay_period_start", sa.Date(), nullable=False),
        sa.Column("pay_period_end", sa.Date(), nullable=False),
        sa.Column("pay_date", sa.Date(), nullable=False),
        sa.Column("gross_pay", sa.Numeric(10, 2), nullable=False),
        sa.Column("net_pay", sa.Numeric(10, 2), nullable=False),
        sa.Column("deductions", sa.JSON(), nullable=True),
        sa.Column("pay_type", sa.String(length=50), server_default="regular", nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_pay_record_employee_id", "pay_record", ["employee_id"])
    op.create_index("ix_pay_record_employee_pay_date", "pay_record", ["employee_id", "pay_date"])


def downgrade() -> None:
    op.drop_table("pay_record")
    op.drop_table("notification_receipt")
    op.drop_table("notification")
    op.drop_column("employee", "address")
    op.drop_column("employee", "phone")
