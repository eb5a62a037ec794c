"""
Verification request entity model.

A request is one background-check case for a single subject. The work is
split into reports (see ``reports``); the request status follows them.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlmodel import Field

from verifydesk.core.models.domain.enums import RequestPriority, RequestStatus

from ..base import Base, utc_now


class VerificationRequestBase(Base):
    """Base fields for a verification request."""

    subject_first_name: str = Field(max_length=64, description="Subject's given name")
    subject_last_name: str = Field(max_length=64, index=True, description="Subject's family name")
    subject_email: Optional[str] = Field(default=None, max_length=255, description="Subject's contact email")
    position_applied: Optional[str] = Field(default=None, max_length=128, description="Position being hired for")
    priority: RequestPriority = Field(default=RequestPriority.normal, description="Queue priority")
    due_date: Optional[date] = Field(default=None, description="Date the results are promised by")
    notes: Optional[str] = Field(default=None, description="Free-form case notes")


class VerificationRequest(VerificationRequestBase, table=True):
    """Persistent verification request.

    Table: verification_requests
    """

    __tablename__ = "verification_requests"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    reference_number: Optional[str] = Field(default=None, max_length=32, unique=True, index=True)

    requested_by_id: int = Field(foreign_key="employees.id", index=True)
    verifier_id: Optional[int] = Field(default=None, foreign_key="verifiers.id", index=True)

    status: RequestStatus = Field(default=RequestStatus.pending, index=True)

    received_at: datetime = Field(default_factory=utc_now, index=True)
    completed_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def subject_name(self) -> str:
        return f"{self.subject_first_name} {self.subject_last_name}"

    def __repr__(self) -> str:
        return f"VerificationRequest(id={self.id}, reference={self.reference_number}, status={self.status})"


def format_reference_number(request_id: int, received_at: datetime) -> str:
    """Build the human-facing case number, e.g. ``VR-2026-000042``."""
    return f"VR-{received_at.year}-{request_id:06d}"
