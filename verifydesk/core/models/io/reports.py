"""
Report I/O models for API requests and responses.

Each report type has a detail schema (what the verifier recorded) and an
update schema with every field optional. ``ReportRead`` wraps the common
report fields and the typed details.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from verifydesk.core.models.domain.enums import ReportStatus, ReportType


class CharacterDetails(BaseModel):
    """What a character reference said about the subject."""

    model_config = ConfigDict(from_attributes=True)

    reference_name: Optional[str] = Field(default=None, max_length=128)
    reference_phone: Optional[str] = Field(default=None, max_length=32)
    relation_to_subject: Optional[str] = Field(default=None, max_length=64, examples=["former manager"])
    years_known: Optional[int] = Field(default=None, ge=0)
    recommends: Optional[bool] = None
    comments: Optional[str] = None


class EducationDetails(BaseModel):
    """What the school or registrar confirmed."""

    model_config = ConfigDict(from_attributes=True)

    institution: Optional[str] = Field(default=None, max_length=255)
    degree: Optional[str] = Field(default=None, max_length=128)
    major: Optional[str] = Field(default=None, max_length=128)
    attended_from: Optional[date] = None
    attended_to: Optional[date] = None
    graduated: Optional[bool] = None
    registrar_contact: Optional[str] = Field(default=None, max_length=255)
    comments: Optional[str] = None

    @model_validator(mode="after")
    def _check_attendance(self) -> "EducationDetails":
        if self.attended_from and self.attended_to and self.attended_from > self.attended_to:
            raise ValueError("attended_from must not be after attended_to")
        return self


class EmploymentDetails(BaseModel):
    """What the former employer confirmed."""

    model_config = ConfigDict(from_attributes=True)

    employer: Optional[str] = Field(default=None, max_length=255)
    position: Optional[str] = Field(default=None, max_length=128)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    supervisor: Optional[str] = Field(default=None, max_length=128)
    eligible_for_rehire: Optional[bool] = None
    reason_for_leaving: Optional[str] = None
    comments: Optional[str] = None

    @model_validator(mode="after")
    def _check_dates(self) -> "EmploymentDetails":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


ReportDetails = Union[CharacterDetails, EducationDetails, EmploymentDetails]

REPORT_DETAIL_SCHEMAS: Dict[ReportType, Type[BaseModel]] = {
    ReportType.character: CharacterDetails,
    ReportType.education: EducationDetails,
    ReportType.employment: EmploymentDetails,
}


class ReportRead(BaseModel):
    """A report together with its typed details."""

    id: int
    request_id: int
    reference_number: str
    subject_name: str
    report_type: ReportType
    status: ReportStatus
    verifier_id: Optional[int] = None
    hold_reason: Optional[str] = None
    summary: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    details: ReportDetails


class ReportTransition(BaseModel):
    """Optional body of a report action.

    ``reason`` is required by ``hold``. ``summary`` is recorded by ``complete``.
    Other actions ignore both.
    """

    reason: Optional[str] = Field(default=None, examples=["Reference on vacation until the 14th"])
    summary: Optional[str] = Field(default=None, description="Verifier's conclusion")
