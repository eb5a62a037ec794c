"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- staff: Employee and verifier I/O models
- requests: Verification request I/O models (queue, search, detail)
- reports: Report I/O models and per-type detail schemas
"""

from .reports import (
    REPORT_DETAIL_SCHEMAS,
    CharacterDetails,
    EducationDetails,
    EmploymentDetails,
    ReportDetails,
    ReportRead,
    ReportTransition,
)
from .requests import (
    AssignVerifier,
    CancelRequest,
    DashboardSummary,
    ReportProgress,
    ReportSummary,
    RequestCreate,
    RequestDetail,
    RequestListItem,
    RequestPage,
    RequestRead,
    RequestSearchCriteria,
    RequestUpdate,
)
from .staff import (
    EmployeeCreate,
    EmployeeRead,
    EmployeeUpdate,
    VerifierCreate,
    VerifierRead,
    VerifierUpdate,
)

__all__ = [
    "REPORT_DETAIL_SCHEMAS",
    "AssignVerifier",
    "CancelRequest",
    "CharacterDetails",
    "DashboardSummary",
    "EducationDetails",
    "EmployeeCreate",
    "EmployeeRead",
    "EmployeeUpdate",
    "EmploymentDetails",
    "ReportDetails",
    "ReportProgress",
    "ReportRead",
    "ReportTransition",
    "ReportSummary",
    "RequestCreate",
    "RequestDetail",
    "RequestListItem",
    "RequestPage",
    "RequestRead",
    "RequestSearchCriteria",
    "RequestUpdate",
    "VerifierCreate",
    "VerifierRead",
    "VerifierUpdate",
]
