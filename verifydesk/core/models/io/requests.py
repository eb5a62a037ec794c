"""
Verification request I/O models for API requests and responses.

These view models define the JSON contract of the request endpoints: the
pending queue, the search screen, the request detail page and the
dashboard counters.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from verifydesk.core.models.domain.enums import (
    ReportStatus,
    ReportType,
    RequestPriority,
    RequestStatus,
)
from verifydesk.core.models.io.staff import normalize_email, reject_null


class RequestCreate(BaseModel):
    """Schema for opening a verification request."""

    subject_first_name: str = Field(min_length=1, max_length=64, examples=["Dana"])
    subject_last_name: str = Field(min_length=1, max_length=64, examples=["Whitfield"])
    subject_email: Optional[EmailStr] = Field(default=None, max_length=255)
    position_applied: Optional[str] = Field(default=None, max_length=128, examples=["Staff Accountant"])
    requested_by_id: int = Field(description="Employee opening the request")
    verifier_id: Optional[int] = Field(default=None, description="Verifier to assign up front")
    priority: RequestPriority = RequestPriority.normal
    due_date: Optional[date] = None
    notes: Optional[str] = None
    report_types: List[ReportType] = Field(
        description="Reports to run. Each type at most once.",
        examples=[["character", "employment"]],
    )

    @field_validator("subject_email", mode="before")
    @classmethod
    def _lowercase_email(cls, value: Any) -> Any:
        return normalize_email(value)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "subject_first_name": "Dana",
                "subject_last_name": "Whitfield",
                "position_applied": "Staff Accountant",
                "requested_by_id": 1,
                "priority": "high",
                "due_date": "2026-11-02",
                "report_types": ["character", "education", "employment"],
            }
        }
    )


class RequestUpdate(BaseModel):
    """Schema for a partial update of an open request.

    Subject name, priority and verifier may be left out but not sent as null.
    A new verifier is also given the unassigned reports that are still open.
    """

    subject_first_name: Optional[str] = Field(default=None, min_length=1, max_length=64)
    subject_last_name: Optional[str] = Field(default=None, min_length=1, max_length=64)
    subject_email: Optional[EmailStr] = Field(default=None, max_length=255)
    position_applied: Optional[str] = Field(default=None, max_length=128)
    priority: Optional[RequestPriority] = None
    due_date: Optional[date] = None
    notes: Optional[str] = None
    verifier_id: Optional[int] = Field(default=None, description="Active verifier to take over the request")

    @field_validator("subject_email", mode="before")
    @classmethod
    def _lowercase_email(cls, value: Any) -> Any:
        return normalize_email(value)

    @field_validator("subject_first_name", "subject_last_name", "priority", "verifier_id")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        return reject_null(value)


class AssignVerifier(BaseModel):
    """Schema for assigning a verifier to a request."""

    verifier_id: int


class CancelRequest(BaseModel):
    """Schema for cancelling a request."""

    reason: str = Field(min_length=1, description="Why the check is no longer needed")


class ReportSummary(BaseModel):
    """A report as listed on the request detail page."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    report_type: ReportType
    status: ReportStatus
    verifier_id: Optional[int] = None
    hold_reason: Optional[str] = None
    summary: Optional[str] = None
    completed_at: Optional[datetime] = None
    updated_at: datetime


class RequestRead(BaseModel):
    """Schema for reading a request without its reports."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    reference_number: str
    subject_first_name: str
    subject_last_name: str
    subject_email: Optional[str] = None
    position_applied: Optional[str] = None
    requested_by_id: int
    verifier_id: Optional[int] = None
    status: RequestStatus
    priority: RequestPriority
    due_date: Optional[date] = None
    notes: Optional[str] = None
    received_at: datetime
    completed_at: Optional[datetime] = None
    updated_at: datetime


class RequestDetail(RequestRead):
    """Schema for the request detail page: the request and all its reports."""

    reports: List[ReportSummary] = Field(default_factory=list)


class ReportProgress(BaseModel):
    """Per-request report counters shown in queue and search rows."""

    total: int = 0
    completed: int = 0
    on_hold: int = 0
    outstanding: int = 0


class RequestListItem(BaseModel):
    """A row of the pending queue or of the search results."""

    id: int
    reference_number: str
    subject_name: str
    position_applied: Optional[str] = None
    status: RequestStatus
    priority: RequestPriority
    verifier_id: Optional[int] = None
    requested_by_id: int
    received_at: datetime
    due_date: Optional[date] = None
    is_overdue: bool = False
    report_types: List[ReportType] = Field(default_factory=list)
    progress: ReportProgress = Field(default_factory=ReportProgress)


class RequestPage(BaseModel):
    """A page of request rows with the total number of matches."""

    items: List[RequestListItem]
    total: int
    limit: int
    offset: int


class RequestSearchCriteria(BaseModel):
    """Criteria accepted by the search endpoint. All are optional and combine with AND."""

    name: Optional[str] = Field(default=None, description="Partial first or last name of the subject")
    reference_number: Optional[str] = Field(default=None, description="Partial case number")
    status: Optional[List[RequestStatus]] = Field(default=None, description="Any of these statuses")
    verifier_id: Optional[int] = None
    requested_by_id: Optional[int] = None
    received_from: Optional[date] = None
    received_to: Optional[date] = None
    limit: Optional[int] = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_date_range(self) -> "RequestSearchCriteria":
        if self.received_from and self.received_to and self.received_from > self.received_to:
            raise ValueError("received_from must not be after received_to")
        return self


class DashboardSummary(BaseModel):
    """Counters for the landing page."""

    by_status: Dict[RequestStatus, int]
    open_total: int
    overdue: int
