"""
Report repository implementation.

This module provides data access for reports and their per-type detail rows.
A report and its detail row are always created together.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from verifydesk.core.models.domain.enums import ReportType

from ..entities.reports import REPORT_DETAIL_MODELS, Report, ReportDetail
from .base import BaseRepository, QueryBuilder


class ReportRepository(BaseRepository[Report]):
    """Repository for report data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Report)

    async def create_with_detail(self, report: Report) -> Report:
        """Create a report together with its empty detail row.

        Args:
            report: Report instance; ``report_type`` selects the detail table

        Returns:
            Persisted Report instance
        """
        self.session.add(report)
        await self.session.flush()
        detail_model = REPORT_DETAIL_MODELS[ReportType(report.report_type)]
        self.session.add(detail_model(report_id=report.id))
        await self.session.flush()
        await self.session.refresh(report)
        return report

    async def get_detail(self, report: Report) -> Optional[ReportDetail]:
        """Get the detail row matching the report's type.

        Args:
            report: A persisted report

        Returns:
            CharacterReport, EducationReport or EmploymentReport instance, or None
        """
        detail_model = REPORT_DETAIL_MODELS[ReportType(report.report_type)]
        return await self.session.get(detail_model, report.id)

    async def list_for_request(self, request_id: int) -> List[Report]:
        """Get all reports of a request in a stable order (by type, then id)."""
        stmt = select(Report).where(Report.request_id == request_id).order_by(Report.report_type, Report.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_requests(self, request_ids: Iterable[int]) -> Dict[int, List[Report]]:
        """Get reports for several requests at once, grouped by request id."""
        ids = list(request_ids)
        grouped: Dict[int, List[Report]] = {request_id: [] for request_id in ids}
        if not ids:
            return grouped
        stmt = select(Report).where(Report.request_id.in_(ids)).order_by(Report.report_type, Report.id)  # type: ignore
        result = await self.session.execute(stmt)
        for report in result.scalars().all():
            grouped[report.request_id].append(report)
        return grouped

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Report]:
        """List reports with optional filtering.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (request_id, report_type, status, verifier_id)

        Returns:
            List of Report instances
        """
        stmt = select(Report).order_by(Report.id)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, Report, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
