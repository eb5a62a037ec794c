"""Unit tests for API I/O schemas."""

from datetime import date

import pytest
from pydantic import ValidationError

from verifydesk.core.models.domain.enums import ReportType, RequestPriority
from verifydesk.core.models.io import (
    REPORT_DETAIL_SCHEMAS,
    CharacterDetails,
    EducationDetails,
    EmployeeCreate,
    EmployeeUpdate,
    EmploymentDetails,
    RequestCreate,
    RequestSearchCriteria,
    RequestUpdate,
    VerifierUpdate,
)


class TestStaffSchemas:
    def test_email_is_normalized(self):
        employee = EmployeeCreate(first_name="A", last_name="B", email="  A.B@Example.COM ")

        assert employee.email == "a.b@example.com"

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            EmployeeCreate(first_name="A", last_name="B", email="not-an-email")

    def test_update_email_optional(self):
        assert VerifierUpdate(name="New name").email is None

    @pytest.mark.parametrize("field", ["name", "email", "is_active"])
    def test_verifier_update_rejects_null(self, field):
        with pytest.raises(ValidationError):
            VerifierUpdate(**{field: None})

    @pytest.mark.parametrize("field", ["first_name", "last_name", "email", "is_active"])
    def test_employee_update_rejects_null(self, field):
        with pytest.raises(ValidationError):
            EmployeeUpdate(**{field: None})

    def test_nullable_fields_may_be_cleared(self):
        assert EmployeeUpdate(department=None).model_dump(exclude_unset=True) == {"department": None}
        assert VerifierUpdate(phone=None).model_dump(exclude_unset=True) == {"phone": None}


class TestRequestCreate:
    def test_defaults(self):
        data = RequestCreate(
            subject_first_name="Dana",
            subject_last_name="Whitfield",
            requested_by_id=1,
            report_types=["character"],
        )

        assert data.priority == RequestPriority.normal
        assert data.report_types == [ReportType.character]

    def test_unknown_report_type_rejected(self):
        with pytest.raises(ValidationError):
            RequestCreate(
                subject_first_name="Dana",
                subject_last_name="Whitfield",
                requested_by_id=1,
                report_types=["credit"],
            )

    def test_subject_email_validated_and_normalized(self):
        data = RequestCreate(
            subject_first_name="Dana",
            subject_last_name="Whitfield",
            subject_email=" Dana.W@Example.com",
            requested_by_id=1,
            report_types=["character"],
        )

        assert data.subject_email == "dana.w@example.com"
        with pytest.raises(ValidationError):
            RequestCreate(
                subject_first_name="Dana",
                subject_last_name="Whitfield",
                subject_email="dana.w",
                requested_by_id=1,
                report_types=["character"],
            )

    def test_blank_subject_rejected(self):
        with pytest.raises(ValidationError):
            RequestCreate(subject_first_name="", subject_last_name="W", requested_by_id=1, report_types=[])


class TestSearchCriteria:
    def test_reversed_date_range_rejected(self):
        with pytest.raises(ValidationError):
            RequestSearchCriteria(received_from=date(2026, 3, 2), received_to=date(2026, 3, 1))

    def test_negative_offset_rejected(self):
        with pytest.raises(ValidationError):
            RequestSearchCriteria(offset=-1)


class TestDetailSchemas:
    def test_schema_per_type(self):
        assert REPORT_DETAIL_SCHEMAS[ReportType.character] is CharacterDetails
        assert REPORT_DETAIL_SCHEMAS[ReportType.education] is EducationDetails
        assert REPORT_DETAIL_SCHEMAS[ReportType.employment] is EmploymentDetails

    def test_employment_dates_ordered(self):
        with pytest.raises(ValidationError):
            EmploymentDetails(start_date=date(2024, 1, 1), end_date=date(2023, 1, 1))

    def test_education_dates_ordered(self):
        with pytest.raises(ValidationError):
            EducationDetails(attended_from=date(2020, 9, 1), attended_to=date(2016, 6, 1))

    def test_years_known_not_negative(self):
        with pytest.raises(ValidationError):
            CharacterDetails(years_known=-1)


class TestRequestUpdate:
    @pytest.mark.parametrize("field", ["subject_first_name", "subject_last_name", "priority", "verifier_id"])
    def test_required_columns_reject_null(self, field):
        with pytest.raises(ValidationError):
            RequestUpdate(**{field: None})

    def test_optional_columns_may_be_cleared(self):
        patch = RequestUpdate(due_date=None, notes=None, subject_email=None)

        assert patch.model_dump(exclude_unset=True) == {"due_date": None, "notes": None, "subject_email": None}

    def test_omitted_fields_are_not_set(self):
        assert RequestUpdate(verifier_id=3).model_dump(exclude_unset=True) == {"verifier_id": 3}
