"""
Database entity models.

This package contains all database entity models organized by table.
Importing it registers every table on ``Base.metadata``.

Modules:
- employees: Staff members who open requests
- verifiers: Staff members who work the reports
- requests: Verification requests (one background-check case each)
- reports: Reports and their character/education/employment detail tables
"""

from .employees import Employee
from .reports import (
    REPORT_DETAIL_MODELS,
    CharacterReport,
    EducationReport,
    EmploymentReport,
    Report,
    ReportDetail,
)
from .requests import VerificationRequest, format_reference_number
from .verifiers import Verifier

__all__ = [
    "REPORT_DETAIL_MODELS",
    "CharacterReport",
    "EducationReport",
    "Employee",
    "EmploymentReport",
    "Report",
    "ReportDetail",
    "VerificationRequest",
    "Verifier",
    "format_reference_number",
]
