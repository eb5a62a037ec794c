"""Initial schema for VerifyDesk

Revision ID: 20261019_000000
Revises: None
Create Date: 2026-10-19 00:00:00.000000

Creates the staff tables (employees, verifiers), verification requests,
their reports and the three report detail tables (character, education,
employment).

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261019_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

WORK_STATUSES = ("pending", "in_progress", "on_hold", "completed", "cancelled")

request_status = sa.Enum(*WORK_STATUSES, name="requeststatus")
report_status = sa.Enum(*WORK_STATUSES, name="reportstatus")
request_priority = sa.Enum("low", "normal", "high", "rush", name="requestpriority")
report_type = sa.Enum("character", "education", "employment", name="reporttype")


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables."""

    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(64), nullable=False),
        sa.Column("last_name", sa.String(64), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("department", sa.String(128), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_employees_email", "employees", ["email"], unique=True)

    op.create_table(
        "verifiers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_verifiers_email", "verifiers", ["email"], unique=True)

    op.create_table(
        "verification_requests",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("reference_number", sa.String(32), nullable=True),
        sa.Column("subject_first_name", sa.String(64), nullable=False),
        sa.Column("subject_last_name", sa.String(64), nullable=False),
        sa.Column("subject_email", sa.String(255), nullable=True),
        sa.Column("position_applied", sa.String(128), nullable=True),
        sa.Column("priority", request_priority, nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("requested_by_id", sa.Integer(), nullable=False),
        sa.Column("verifier_id", sa.Integer(), nullable=True),
        sa.Column("status", request_status, nullable=False),
        sa.Column("received_at", sa.DateTime(), nullable=False),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["requested_by_id"], ["employees.id"]),
        sa.ForeignKeyConstraint(["verifier_id"], ["verifiers.id"]),
    )
    op.create_index(
        "ix_verification_requests_reference_number", "verification_requests", ["reference_number"], unique=True
    )
    op.create_index("ix_verification_requests_subject_last_name", "verification_requests", ["subject_last_name"])
    op.create_index("ix_verification_requests_requested_by_id", "verification_requests", ["requested_by_id"])
    op.create_index("ix_verification_requests_verifier_id", "verification_requests", ["verifier_id"])
    op.create_index("ix_verification_requests_status", "verification_requests", ["status"])
    op.create_index("ix_verification_requests_received_at", "verification_requests", ["received_at"])

    op.create_table(
        "verification_reports",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("request_id", sa.Integer(), nullable=False),
        sa.Column("report_type", report_type, nullable=False),
        sa.Column("status", report_status, nullable=False),
        sa.Column("verifier_id", sa.Integer(), nullable=True),
        sa.Column("hold_reason", sa.String(), nullable=True),
        sa.Column("summary", sa.String(), nullable=True),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["request_id"], ["verification_requests.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["verifier_id"], ["verifiers.id"]),
        sa.UniqueConstraint("request_id", "report_type", name="uq_verification_reports_request_type"),
    )
    op.create_index("ix_verification_reports_request_id", "verification_reports", ["request_id"])
    op.create_index("ix_verification_reports_status", "verification_reports", ["status"])
    op.create_index("ix_verification_reports_verifier_id", "verification_reports", ["verifier_id"])

    op.create_table(
        "character_reports",
        sa.Column("report_id", sa.Integer(), nullable=False),
        sa.Column("reference_name", sa.String(128), nullable=True),
        sa.Column("reference_phone", sa.String(32), nullable=True),
        sa.Column("relation_to_subject", sa.String(64), nullable=True),
        sa.Column("years_known", sa.Integer(), nullable=True),
        sa.Column("recommends", sa.Boolean(), nullable=True),
        sa.Column("comments", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("report_id"),
        sa.ForeignKeyConstraint(["report_id"], ["verification_reports.id"], ondelete="CASCADE"),
    )

    op.create_table(
        "education_reports",
        sa.Column("report_id", sa.Integer(), nullable=False),
        sa.Column("institution", sa.String(255), nullable=True),
        sa.Column("degree", sa.String(128), nullable=True),
        sa.Column("major", sa.String(128), nullable=True),
        sa.Column("attended_from", sa.Date(), nullable=True),
        sa.Column("attended_to", sa.Date(), nullable=True),
        sa.Column("graduated", sa.Boolean(), nullable=True),
        sa.Column("registrar_contact", sa.String(255), nullable=True),
        sa.Column("comments", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("report_id"),
        sa.ForeignKeyConstraint(["report_id"], ["verification_reports.id"], ondelete="CASCADE"),
    )

    op.create_table(
        "employment_reports",
        sa.Column("report_id", sa.Integer(), nullable=False),
        sa.Column("employer", sa.String(255), nullable=True),
        sa.Column("position", sa.String(128), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("supervisor", sa.String(128), nullable=True),
        sa.Column("eligible_for_rehire", sa.Boolean(), nullable=True),
        sa.Column("reason_for_leaving", sa.String(), nullable=True),
        sa.Column("comments", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("report_id"),
        sa.ForeignKeyConstraint(["report_id"], ["verification_reports.id"], ondelete="CASCADE"),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("employment_reports")
    op.drop_table("education_reports")
    op.drop_table("character_reports")
    op.drop_table("verification_reports")
    op.drop_table("verification_requests")
    op.drop_table("verifiers")
    op.drop_table("employees")

    bind = op.get_bind()
    for enum in (report_type, report_status, request_priority, request_status):
        enum.drop(bind, checkfirst=True)
