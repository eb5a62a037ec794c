"""
Report entity models.

This module contains the report table and its three detail variants. A
report is one check within a verification request (a character reference,
an education record or a past employment). The fields specific to each kind
live in a one-to-one detail table keyed by the report id.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Type, Union

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from verifydesk.core.models.domain.enums import ReportStatus, ReportType

from ..base import Base, utc_now


class Report(Base, table=True):
    """A single check belonging to a verification request.

    Table: verification_reports
    """

    __tablename__ = "verification_reports"
    __table_args__ = (
        UniqueConstraint("request_id", "report_type", name="uq_verification_reports_request_type"),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    request_id: int = Field(foreign_key="verification_requests.id", index=True, ondelete="CASCADE")
    report_type: ReportType = Field(description="Which detail table holds the findings")
    status: ReportStatus = Field(default=ReportStatus.pending, index=True)
    verifier_id: Optional[int] = Field(default=None, foreign_key="verifiers.id", index=True)

    hold_reason: Optional[str] = Field(default=None, description="Why the report is on hold")
    summary: Optional[str] = Field(default=None, description="Verifier's conclusion")

    completed_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Report(id={self.id}, type={self.report_type}, status={self.status}, request_id={self.request_id})"


class CharacterReport(Base, table=True):
    """Findings from a personal or professional reference.

    Table: character_reports
    """

    __tablename__ = "character_reports"
    __table_args__ = ({"extend_existing": True},)

    report_id: int = Field(foreign_key="verification_reports.id", primary_key=True, ondelete="CASCADE")

    reference_name: Optional[str] = Field(default=None, max_length=128)
    reference_phone: Optional[str] = Field(default=None, max_length=32)
    relation_to_subject: Optional[str] = Field(default=None, max_length=64, description="How the reference knows the subject")
    years_known: Optional[int] = Field(default=None, ge=0)
    recommends: Optional[bool] = Field(default=None, description="Whether the reference recommends the subject")
    comments: Optional[str] = Field(default=None)


class EducationReport(Base, table=True):
    """Findings from a school or university registrar.

    Table: education_reports
    """

    __tablename__ = "education_reports"
    __table_args__ = ({"extend_existing": True},)

    report_id: int = Field(foreign_key="verification_reports.id", primary_key=True, ondelete="CASCADE")

    institution: Optional[str] = Field(default=None, max_length=255)
    degree: Optional[str] = Field(default=None, max_length=128)
    major: Optional[str] = Field(default=None, max_length=128)
    attended_from: Optional[date] = Field(default=None)
    attended_to: Optional[date] = Field(default=None)
    graduated: Optional[bool] = Field(default=None)
    registrar_contact: Optional[str] = Field(default=None, max_length=255)
    comments: Optional[str] = Field(default=None)


class EmploymentReport(Base, table=True):
    """Findings from a former employer.

    Table: employment_reports
    """

    __tablename__ = "employment_reports"
    __table_args__ = ({"extend_existing": True},)

    report_id: int = Field(foreign_key="verification_reports.id", primary_key=True, ondelete="CASCADE")

    employer: Optional[str] = Field(default=None, max_length=255)
    position: Optional[str] = Field(default=None, max_length=128)
    start_date: Optional[date] = Field(default=None)
    end_date: Optional[date] = Field(default=None)
    supervisor: Optional[str] = Field(default=None, max_length=128)
    eligible_for_rehire: Optional[bool] = Field(default=None)
    reason_for_leaving: Optional[str] = Field(default=None)
    comments: Optional[str] = Field(default=None)


ReportDetail = Union[CharacterReport, EducationReport, EmploymentReport]

REPORT_DETAIL_MODELS: dict[ReportType, Type[ReportDetail]] = {
    ReportType.character: CharacterReport,
    ReportType.education: EducationReport,
    ReportType.employment: EmploymentReport,
}
