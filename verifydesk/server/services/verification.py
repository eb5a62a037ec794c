"""
Verification service.

Business rules for verification requests and their reports. The service sits
between the HTTP routers and the repositories: it validates references
between rows, applies the report lifecycle, keeps the request status in step
with its reports and turns entities into view models.

Every public method is one unit of work. Changes are committed when the
method returns and rolled back if it raises.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from verifydesk.core.database.base import utc_now
from verifydesk.core.database.entities import (
    REPORT_DETAIL_MODELS,
    Report,
    VerificationRequest,
    format_reference_number,
)
from verifydesk.core.database.utils import build_sql_repos
from verifydesk.core.errors import (
    EmployeeNotFoundError,
    InvalidStateError,
    ReportNotFoundError,
    RequestNotFoundError,
    ValidationFailedError,
    VerifierNotFoundError,
)
from verifydesk.core.logging_config import get_logger
from verifydesk.core.models.domain.enums import (
    FINISHED_REPORT_STATUSES,
    FINISHED_REQUEST_STATUSES,
    ReportAction,
    ReportStatus,
    ReportType,
    RequestStatus,
)
from verifydesk.core.models.io import (
    REPORT_DETAIL_SCHEMAS,
    DashboardSummary,
    ReportProgress,
    ReportRead,
    ReportSummary,
    RequestCreate,
    RequestDetail,
    RequestListItem,
    RequestPage,
    RequestRead,
    RequestSearchCriteria,
    RequestUpdate,
)
from verifydesk.server.core.config import settings

logger = get_logger(__name__)


# Allowed source statuses and resulting status of each report action.
REPORT_TRANSITIONS: Dict[ReportAction, Tuple[Tuple[ReportStatus, ...], ReportStatus]] = {
    ReportAction.start: ((ReportStatus.pending,), ReportStatus.in_progress),
    ReportAction.hold: ((ReportStatus.pending, ReportStatus.in_progress), ReportStatus.on_hold),
    ReportAction.release: ((ReportStatus.on_hold,), ReportStatus.in_progress),
    ReportAction.complete: ((ReportStatus.pending, ReportStatus.in_progress), ReportStatus.completed),
    ReportAction.reopen: ((ReportStatus.completed,), ReportStatus.in_progress),
}


def derive_request_status(report_statuses: Iterable[ReportStatus]) -> RequestStatus:
    """Compute a request's status from the statuses of its reports.

    Cancelled reports do not count. When every remaining report is completed
    the request is completed. Otherwise a single report on hold puts the whole
    request on hold, and any started or finished report means work is under way.
    """
    statuses = [ReportStatus(status) for status in report_statuses]
    active = [status for status in statuses if status != ReportStatus.cancelled]
    if statuses and not active:
        return RequestStatus.cancelled
    if not active:
        return RequestStatus.pending
    if all(status == ReportStatus.completed for status in active):
        return RequestStatus.completed
    if any(status == ReportStatus.on_hold for status in active):
        return RequestStatus.on_hold
    if any(status in (ReportStatus.in_progress, ReportStatus.completed) for status in active):
        return RequestStatus.in_progress
    return RequestStatus.pending


def summarize_progress(reports: Iterable[Report]) -> ReportProgress:
    progress = ReportProgress()
    for report in reports:
        if report.status == ReportStatus.cancelled:
            continue
        progress.total += 1
        if report.status == ReportStatus.completed:
            progress.completed += 1
        else:
            progress.outstanding += 1
            if report.status == ReportStatus.on_hold:
                progress.on_hold += 1
    return progress


def resolve_page_size(limit: Optional[int]) -> int:
    """Clamp a client-supplied page size to the configured bounds."""
    if limit is None:
        limit = settings.default_page_size
    return max(1, min(limit, settings.max_page_size))


class VerificationService:
    """Service layer for verification requests and reports."""

    def __init__(self, session: AsyncSession, today: Optional[Callable[[], date]] = None) -> None:
        """Initialize the service with a database session.

        Args:
            session: The session shared by every repository of this unit of work
            today: Clock used for overdue checks, UTC date by default
        """
        self.session = session
        self.repos = build_sql_repos(session)
        self._today = today or (lambda: utc_now().date())

    @asynccontextmanager
    async def _transaction(self):
        try:
            yield
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    # =====================================================================
    # Lookups
    # =====================================================================

    async def _get_request(self, request_id: int) -> VerificationRequest:
        request = await self.repos.requests.get_by_id(request_id)
        if request is None:
            raise RequestNotFoundError(request_id)
        return request

    async def _get_open_request(self, request_id: int) -> VerificationRequest:
        request = await self._get_request(request_id)
        if request.status in FINISHED_REQUEST_STATUSES:
            raise InvalidStateError(
                f"Verification request {request.reference_number} is {request.status.value} and cannot be changed"
            )
        return request

    async def _get_report(self, report_type: ReportType, report_id: int) -> Report:
        report = await self.repos.reports.get_by_id(report_id)
        if report is None or report.report_type != report_type:
            raise ReportNotFoundError(report_id, report_type.value)
        return report

    async def _require_active_employee(self, employee_id: int) -> None:
        employee = await self.repos.employees.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        if not employee.is_active:
            raise ValidationFailedError(f"Employee {employee_id} is inactive and cannot open requests")

    async def _require_active_verifier(self, verifier_id: int) -> None:
        verifier = await self.repos.verifiers.get_by_id(verifier_id)
        if verifier is None:
            raise VerifierNotFoundError(verifier_id)
        if not verifier.is_active:
            raise ValidationFailedError(f"Verifier {verifier_id} is inactive and cannot receive assignments")

    async def _assign(self, request: VerificationRequest, verifier_id: int) -> None:
        """Give the request and its unassigned, unfinished reports to a verifier."""
        await self._require_active_verifier(verifier_id)
        request.verifier_id = verifier_id
        for report in await self.repos.reports.list_for_request(request.id):
            if report.verifier_id is None and report.status not in FINISHED_REPORT_STATUSES:
                report.verifier_id = verifier_id
                await self.repos.reports.update(report)

    # =====================================================================
    # View model builders
    # =====================================================================

    def _is_overdue(self, request: VerificationRequest) -> bool:
        return (
            request.due_date is not None
            and request.status not in FINISHED_REQUEST_STATUSES
            and request.due_date < self._today()
        )

    def _list_item(self, request: VerificationRequest, reports: List[Report]) -> RequestListItem:
        return RequestListItem(
            id=request.id,
            reference_number=request.reference_number,
            subject_name=request.subject_name,
            position_applied=request.position_applied,
            status=request.status,
            priority=request.priority,
            verifier_id=request.verifier_id,
            requested_by_id=request.requested_by_id,
            received_at=request.received_at,
            due_date=request.due_date,
            is_overdue=self._is_overdue(request),
            report_types=[ReportType(report.report_type) for report in reports],
            progress=summarize_progress(reports),
        )

    async def _page(
        self, requests: List[VerificationRequest], total: int, limit: int, offset: int
    ) -> RequestPage:
        reports = await self.repos.reports.list_for_requests(request.id for request in requests)
        return RequestPage(
            items=[self._list_item(request, reports[request.id]) for request in requests],
            total=total,
            limit=limit,
            offset=offset,
        )

    async def _detail(self, request: VerificationRequest) -> RequestDetail:
        reports = await self.repos.reports.list_for_request(request.id)
        return RequestDetail(
            **RequestRead.model_validate(request).model_dump(),
            reports=[ReportSummary.model_validate(report) for report in reports],
        )

    async def _report_read(self, report: Report) -> ReportRead:
        request = await self._get_request(report.request_id)
        detail = await self.repos.reports.get_detail(report)
        schema = REPORT_DETAIL_SCHEMAS[ReportType(report.report_type)]
        return ReportRead(
            id=report.id,
            request_id=report.request_id,
            reference_number=request.reference_number,
            subject_name=request.subject_name,
            report_type=report.report_type,
            status=report.status,
            verifier_id=report.verifier_id,
            hold_reason=report.hold_reason,
            summary=report.summary,
            completed_at=report.completed_at,
            created_at=report.created_at,
            updated_at=report.updated_at,
            details=schema.model_validate(detail) if detail is not None else schema(),
        )

    async def _sync_request_status(self, request: VerificationRequest) -> VerificationRequest:
        """Recompute the request status after one of its reports changed."""
        if request.status == RequestStatus.cancelled:
            return request
        reports = await self.repos.reports.list_for_request(request.id)
        new_status = derive_request_status(report.status for report in reports)
        if new_status == request.status:
            return request

        logger.info(
            f"Request {request.reference_number} status {request.status.value} -> {new_status.value}"
        )
        request.status = new_status
        request.completed_at = utc_now() if new_status == RequestStatus.completed else None
        return await self.repos.requests.update(request)

    # =====================================================================
    # Requests
    # =====================================================================

    async def open_request(self, data: RequestCreate) -> RequestDetail:
        """Open a new verification request with one report per requested type.

        Raises:
            ValidationFailedError: No report types, a repeated type, or an inactive requester/verifier
            EmployeeNotFoundError: The requesting employee does not exist
            VerifierNotFoundError: The verifier to assign does not exist
        """
        if not data.report_types:
            raise ValidationFailedError("At least one report type is required")
        if len(set(data.report_types)) != len(data.report_types):
            raise ValidationFailedError("Each report type may be requested only once")

        async with self._transaction():
            await self._require_active_employee(data.requested_by_id)
            if data.verifier_id is not None:
                await self._require_active_verifier(data.verifier_id)

            request = VerificationRequest(**data.model_dump(exclude={"report_types"}))
            request = await self.repos.requests.create(request)
            request.reference_number = format_reference_number(request.id, request.received_at)
            request = await self.repos.requests.update(request)

            for report_type in data.report_types:
                await self.repos.reports.create_with_detail(
                    Report(request_id=request.id, report_type=report_type, verifier_id=data.verifier_id)
                )
            detail = await self._detail(request)

        logger.info(
            f"Opened request {request.reference_number} for {request.subject_name} "
            f"with reports {[report_type.value for report_type in data.report_types]}"
        )
        return detail

    async def get_request(self, request_id: int) -> RequestDetail:
        """Get a request with all of its reports."""
        request = await self._get_request(request_id)
        logger.debug(f"Loaded request {request.reference_number}")
        return await self._detail(request)

    async def update_request(self, request_id: int, patch: RequestUpdate) -> RequestDetail:
        """Partially update an open request.

        A new ``verifier_id`` is handled like ``assign_verifier``.

        Raises:
            RequestNotFoundError: No such request
            InvalidStateError: The request is completed or cancelled
            VerifierNotFoundError: No such verifier
            ValidationFailedError: The verifier is inactive
        """
        async with self._transaction():
            request = await self._get_open_request(request_id)
            changes = patch.model_dump(exclude_unset=True)
            verifier_id = changes.pop("verifier_id", None)
            for key, value in changes.items():
                setattr(request, key, value)
            if verifier_id is not None:
                await self._assign(request, verifier_id)
            request = await self.repos.requests.update(request)
            detail = await self._detail(request)

        logger.info(f"Updated request {request.reference_number}: {sorted(patch.model_fields_set)}")
        return detail

    async def assign_verifier(self, request_id: int, verifier_id: int) -> RequestDetail:
        """Assign a verifier to the request and to its unfinished, unassigned reports."""
        async with self._transaction():
            request = await self._get_open_request(request_id)
            await self._assign(request, verifier_id)
            await self.repos.requests.update(request)
            detail = await self._detail(request)

        logger.info(f"Assigned verifier {verifier_id} to request {request.reference_number}")
        return detail

    async def cancel_request(self, request_id: int, reason: str) -> RequestDetail:
        """Cancel an open request and every report that is not completed yet.

        The reason is appended to the request notes.
        """
        async with self._transaction():
            request = await self._get_open_request(request_id)
            for report in await self.repos.reports.list_for_request(request.id):
                if report.status not in FINISHED_REPORT_STATUSES:
                    report.status = ReportStatus.cancelled
                    report.hold_reason = None
                    await self.repos.reports.update(report)

            note = f"Cancelled: {reason}"
            request.notes = f"{request.notes}\n{note}" if request.notes else note
            request.status = RequestStatus.cancelled
            request = await self.repos.requests.update(request)
            detail = await self._detail(request)

        logger.info(f"Cancelled request {request.reference_number}: {reason}")
        return detail

    async def list_pending(
        self,
        limit: Optional[int] = None,
        offset: int = 0,
        verifier_id: Optional[int] = None,
    ) -> RequestPage:
        """Get the open work queue, most urgent first."""
        page_size = resolve_page_size(limit)
        requests, total = await self.repos.requests.list_pending(
            limit=page_size, offset=offset, verifier_id=verifier_id
        )
        logger.debug(f"Pending queue: {len(requests)} of {total} (offset={offset}, verifier_id={verifier_id})")
        return await self._page(requests, total, page_size, offset)

    async def search(self, criteria: RequestSearchCriteria) -> RequestPage:
        """Search requests by the given criteria."""
        page_size = resolve_page_size(criteria.limit)
        requests, total = await self.repos.requests.search(
            name=criteria.name,
            reference_number=criteria.reference_number,
            statuses=criteria.status,
            verifier_id=criteria.verifier_id,
            requested_by_id=criteria.requested_by_id,
            received_from=criteria.received_from,
            received_to=criteria.received_to,
            limit=page_size,
            offset=criteria.offset,
        )
        logger.debug(f"Search matched {total} requests")
        return await self._page(requests, total, page_size, criteria.offset)

    async def summary(self) -> DashboardSummary:
        """Counts of requests by status plus the number of overdue open requests."""
        by_status = await self.repos.requests.count_by_status()
        overdue = await self.repos.requests.count_overdue(self._today())
        open_total = sum(count for status, count in by_status.items() if status not in FINISHED_REQUEST_STATUSES)
        return DashboardSummary(by_status=by_status, open_total=open_total, overdue=overdue)

    # =====================================================================
    # Reports
    # =====================================================================

    async def get_report(self, report_type: ReportType, report_id: int) -> ReportRead:
        """Get a report and its typed details.

        Raises:
            ReportNotFoundError: No report with this id, or it is of another type
        """
        report = await self._get_report(report_type, report_id)
        return await self._report_read(report)

    async def update_report_details(
        self, report_type: ReportType, report_id: int, patch: Mapping[str, Any]
    ) -> ReportRead:
        """Record findings on an unfinished report.

        ``patch`` is validated against the detail schema of ``report_type``;
        only the fields it contains are changed.

        Raises:
            ReportNotFoundError: No such report of this type
            InvalidStateError: The report is completed or cancelled
            ValidationFailedError: The patch does not fit the detail schema
        """
        schema = REPORT_DETAIL_SCHEMAS[report_type]
        unknown = set(patch) - set(schema.model_fields)
        if unknown:
            raise ValidationFailedError(
                f"Unknown fields for {report_type.value} report: {', '.join(sorted(unknown))}"
            )

        async with self._transaction():
            report = await self._get_report(report_type, report_id)
            if report.status in FINISHED_REPORT_STATUSES:
                raise InvalidStateError(f"Report {report_id} is {report.status.value} and cannot be edited")

            detail = await self.repos.reports.get_detail(report)
            if detail is None:
                detail = REPORT_DETAIL_MODELS[report_type](report_id=report.id)
            current = schema.model_validate(detail).model_dump()
            try:
                validated = schema.model_validate({**current, **patch})
            except ValidationError as e:
                raise ValidationFailedError(
                    "; ".join(f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors())
                ) from e

            for key in patch:
                setattr(detail, key, getattr(validated, key))
            self.session.add(detail)
            report.updated_at = utc_now()
            report = await self.repos.reports.update(report)
            result = await self._report_read(report)

        logger.info(f"Updated {report_type.value} report {report_id} fields {sorted(patch)}")
        return result

    async def transition_report(
        self,
        report_type: ReportType,
        report_id: int,
        action: ReportAction,
        *,
        reason: Optional[str] = None,
        summary: Optional[str] = None,
    ) -> ReportRead:
        """Apply a lifecycle action to a report and re-derive the request status.

        Raises:
            ReportNotFoundError: No such report of this type
            InvalidStateError: The action is not allowed from the report's current status
            ValidationFailedError: ``hold`` without a reason
        """
        allowed, target = REPORT_TRANSITIONS[action]
        if action == ReportAction.hold and not (reason and reason.strip()):
            raise ValidationFailedError("A reason is required to put a report on hold")

        async with self._transaction():
            report = await self._get_report(report_type, report_id)
            request = await self._get_request(report.request_id)
            if request.status == RequestStatus.cancelled:
                raise InvalidStateError(f"Verification request {request.reference_number} is cancelled")
            if report.status not in allowed:
                raise InvalidStateError(
                    f"Cannot {action.value} a report that is {ReportStatus(report.status).value}"
                )

            previous = ReportStatus(report.status)
            report.status = target
            if action == ReportAction.hold:
                report.hold_reason = reason.strip()  # type: ignore[union-attr]
            elif action == ReportAction.release:
                report.hold_reason = None
            if action == ReportAction.complete:
                report.completed_at = utc_now()
                report.hold_reason = None
                if summary is not None:
                    report.summary = summary
            elif action == ReportAction.reopen:
                report.completed_at = None
            if report.verifier_id is None and request.verifier_id is not None:
                report.verifier_id = request.verifier_id

            report = await self.repos.reports.update(report)
            await self._sync_request_status(request)
            result = await self._report_read(report)

        logger.info(
            f"{report_type.value.capitalize()} report {report_id} of {request.reference_number}: "
            f"{previous.value} -> {target.value}"
        )
        return result
