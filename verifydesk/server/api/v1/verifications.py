"""
Verification Endpoints.

Endpoints for the verification workflow: the pending work queue, search,
the dashboard counters, verification requests and their character,
education and employment reports.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Body, Query, status

from verifydesk.core.models.domain.enums import ReportAction, ReportType
from verifydesk.core.models.io import (
    AssignVerifier,
    CancelRequest,
    DashboardSummary,
    ReportRead,
    ReportTransition,
    RequestCreate,
    RequestDetail,
    RequestPage,
    RequestSearchCriteria,
    RequestUpdate,
)
from verifydesk.server.services.deps import VerificationServiceDep

router = APIRouter()


_NOT_FOUND = {404: {"description": "Object not found"}}
_CONFLICT = {409: {"description": "Not allowed in the current status"}}
_UNPROCESSABLE = {422: {"description": "Invalid input or business rule violation"}}


# =====================================================================
# Queue, search and dashboard
# =====================================================================


@router.get(
    "/pending",
    response_model=RequestPage,
    summary="Pending Queue",
    description="List open verification requests, most urgent first.",
    response_description="A page of pending request rows.",
)
async def list_pending(
    service: VerificationServiceDep,
    verifier_id: Optional[int] = Query(None, description="Only requests assigned to this verifier"),
    limit: Optional[int] = Query(None, ge=1, description="Page size, capped by the server"),
    offset: int = Query(0, ge=0),
) -> RequestPage:
    """
    Get the pending work queue.

    Every request that is neither completed nor cancelled, ordered by priority
    (rush first), then due date (undated last), then the time it was received.

    - **verifier_id**: Restrict the queue to one verifier.
    - **limit**: Maximum rows to return.
    - **offset**: Rows to skip.
    """
    return await service.list_pending(limit=limit, offset=offset, verifier_id=verifier_id)


@router.get(
    "/search",
    response_model=RequestPage,
    summary="Search Requests",
    description="Search verification requests by subject name, case number, status, staff and received date.",
    response_description="A page of matching request rows, newest first.",
    responses=_UNPROCESSABLE,
)
async def search_requests(
    service: VerificationServiceDep,
    criteria: Annotated[RequestSearchCriteria, Query()],
) -> RequestPage:
    """
    Search verification requests.

    All criteria are optional and combine with AND.

    - **name**: Part of the subject's first or last name. Several words must all match.
    - **reference_number**: Part of the case number, e.g. `VR-2026`.
    - **status**: One or more statuses; repeat the parameter for several.
    - **verifier_id**, **requested_by_id**: Staff filters.
    - **received_from**, **received_to**: Inclusive received date range.
    """
    return await service.search(criteria)


@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Dashboard Summary",
    description="Number of requests in each status and how many open requests are overdue.",
)
async def get_summary(service: VerificationServiceDep) -> DashboardSummary:
    return await service.summary()


# =====================================================================
# Requests
# =====================================================================


@router.post(
    "/request",
    response_model=RequestDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Open Verification Request",
    description="Open a verification request for a job applicant with one report per requested check.",
    response_description="The new request with its reports.",
    responses={**_NOT_FOUND, **_UNPROCESSABLE},
)
async def open_request(data: RequestCreate, service: VerificationServiceDep) -> RequestDetail:
    """
    Open a new verification request.

    The request receives a case number of the form `VR-<year>-<number>` and
    starts as `pending`, as do its reports.

    - **subject_first_name**, **subject_last_name**: The applicant.
    - **requested_by_id**: Active employee opening the request.
    - **verifier_id**: Optional active verifier to assign straight away.
    - **priority**: `low`, `normal`, `high` or `rush`.
    - **report_types**: Any of `character`, `education`, `employment`, each once.
    """
    return await service.open_request(data)


@router.get(
    "/request/{request_id}",
    response_model=RequestDetail,
    summary="Get Verification Request",
    description="Retrieve a verification request with all of its reports.",
    responses=_NOT_FOUND,
)
async def get_request(request_id: int, service: VerificationServiceDep) -> RequestDetail:
    return await service.get_request(request_id)


@router.patch(
    "/request/{request_id}",
    response_model=RequestDetail,
    summary="Update Verification Request",
    description="Change subject details, priority, due date, notes or verifier of an open request.",
    responses={**_NOT_FOUND, **_CONFLICT, **_UNPROCESSABLE},
)
async def update_request(request_id: int, patch: RequestUpdate, service: VerificationServiceDep) -> RequestDetail:
    """
    Partially update a verification request.

    Only the fields sent are changed. Completed and cancelled requests cannot be edited.
    Subject names, priority and verifier cannot be sent as null.

    - **verifier_id**: Hand the request to another active verifier. Unassigned reports
      that are still open go with it.
    """
    return await service.update_request(request_id, patch)


@router.post(
    "/request/{request_id}/assign",
    response_model=RequestDetail,
    summary="Assign Verifier",
    description="Assign a verifier to an open request and to its unassigned, unfinished reports.",
    responses={**_NOT_FOUND, **_CONFLICT, **_UNPROCESSABLE},
)
async def assign_verifier(
    request_id: int, body: AssignVerifier, service: VerificationServiceDep
) -> RequestDetail:
    return await service.assign_verifier(request_id, body.verifier_id)


@router.post(
    "/request/{request_id}/cancel",
    response_model=RequestDetail,
    summary="Cancel Verification Request",
    description="Cancel an open request. Reports that are not completed are cancelled with it.",
    responses={**_NOT_FOUND, **_CONFLICT},
)
async def cancel_request(request_id: int, body: CancelRequest, service: VerificationServiceDep) -> RequestDetail:
    """
    Cancel a verification request.

    - **reason**: Why the check is no longer needed. It is appended to the request notes.
    """
    return await service.cancel_request(request_id, body.reason)


# =====================================================================
# Reports
# =====================================================================


@router.get(
    "/{report_type}/report/{report_id}",
    response_model=ReportRead,
    summary="Get Report",
    description="Retrieve a character, education or employment report with its findings.",
    responses=_NOT_FOUND,
)
async def get_report(report_type: ReportType, report_id: int, service: VerificationServiceDep) -> ReportRead:
    """
    Get a report.

    A report id used with the wrong type is reported as not found.
    """
    return await service.get_report(report_type, report_id)


@router.patch(
    "/{report_type}/report/{report_id}",
    response_model=ReportRead,
    summary="Update Report Findings",
    description="Record findings on a report that is not completed or cancelled.",
    responses={**_NOT_FOUND, **_CONFLICT, **_UNPROCESSABLE},
)
async def update_report(
    report_type: ReportType,
    report_id: int,
    service: VerificationServiceDep,
    patch: Dict[str, Any] = Body(
        ...,
        examples=[{"reference_name": "Sam Ortiz", "relation_to_subject": "former manager", "recommends": True}],
    ),
) -> ReportRead:
    """
    Partially update a report's findings.

    The accepted fields depend on the report type:

    - **character**: reference_name, reference_phone, relation_to_subject, years_known, recommends, comments.
    - **education**: institution, degree, major, attended_from, attended_to, graduated, registrar_contact, comments.
    - **employment**: employer, position, start_date, end_date, supervisor, eligible_for_rehire,
      reason_for_leaving, comments.
    """
    return await service.update_report_details(report_type, report_id, patch)


@router.post(
    "/{report_type}/report/{report_id}/{action}",
    response_model=ReportRead,
    summary="Report Action",
    description="Move a report through its lifecycle: start, hold, release, complete or reopen.",
    responses={**_NOT_FOUND, **_CONFLICT, **_UNPROCESSABLE},
)
async def report_action(
    report_type: ReportType,
    report_id: int,
    action: ReportAction,
    service: VerificationServiceDep,
    body: Optional[ReportTransition] = Body(None),
) -> ReportRead:
    """
    Apply a lifecycle action to a report.

    - **start**: pending → in_progress.
    - **hold**: pending or in_progress → on_hold. Requires `reason`.
    - **release**: on_hold → in_progress.
    - **complete**: pending or in_progress → completed. Records `summary` if given.
    - **reopen**: completed → in_progress.

    The request status follows its reports after every action.
    """
    body = body or ReportTransition()
    return await service.transition_report(
        report_type, report_id, action, reason=body.reason, summary=body.summary
    )
