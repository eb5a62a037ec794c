"""
Verification request repository implementation.

This module provides data access for verification requests: the pending
work queue, the multi-criteria search used by the request search screen,
and per-status counts for the dashboard.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import case, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from verifydesk.core.models.domain.enums import (
    FINISHED_REQUEST_STATUSES,
    PRIORITY_RANK,
    RequestStatus,
)

from ..entities.requests import VerificationRequest
from .base import BaseRepository, QueryBuilder


def _contains_pattern(text: str) -> str:
    """LIKE pattern matching ``text`` anywhere, with its wildcards taken literally."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _priority_rank():
    """SQL expression ranking priorities so rush requests sort first."""
    return case(
        *[(VerificationRequest.priority == priority, rank) for priority, rank in PRIORITY_RANK.items()],
        else_=len(PRIORITY_RANK),
    )


class RequestRepository(BaseRepository[VerificationRequest]):
    """Repository for verification request data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, VerificationRequest)

    async def get_by_reference(self, reference_number: str) -> Optional[VerificationRequest]:
        stmt = select(VerificationRequest).where(VerificationRequest.reference_number == reference_number)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[VerificationRequest]:
        """List requests, newest first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (status, verifier_id, requested_by_id, priority)

        Returns:
            List of VerificationRequest instances
        """
        stmt = select(VerificationRequest).order_by(VerificationRequest.received_at.desc())  # type: ignore
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, VerificationRequest, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_pending(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        verifier_id: Optional[int] = None,
    ) -> Tuple[List[VerificationRequest], int]:
        """Get the open work queue.

        Open means neither completed nor cancelled. The queue is ordered by
        priority (rush first), then due date with undated requests last, then
        the date the request was received.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            verifier_id: Only requests assigned to this verifier

        Returns:
            Tuple of the requested page and the total number of open requests
        """
        stmt = select(VerificationRequest).where(
            VerificationRequest.status.not_in(FINISHED_REQUEST_STATUSES)  # type: ignore[union-attr]
        )
        if verifier_id is not None:
            stmt = stmt.where(VerificationRequest.verifier_id == verifier_id)
        total = await self.count(stmt)

        stmt = stmt.order_by(
            _priority_rank(),
            VerificationRequest.due_date.is_(None),  # type: ignore[union-attr]
            VerificationRequest.due_date,
            VerificationRequest.received_at,
            VerificationRequest.id,
        )
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def search(
        self,
        *,
        name: Optional[str] = None,
        reference_number: Optional[str] = None,
        statuses: Optional[Sequence[RequestStatus]] = None,
        verifier_id: Optional[int] = None,
        requested_by_id: Optional[int] = None,
        received_from: Optional[date] = None,
        received_to: Optional[date] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Tuple[List[VerificationRequest], int]:
        """Search requests by any combination of criteria.

        ``name`` matches first or last name of the subject, case-insensitive
        and partial. ``reference_number`` is a partial match too. The date
        range is inclusive on both ends.

        Returns:
            Tuple of the requested page (newest first) and the total match count
        """
        stmt = select(VerificationRequest)

        if name:
            for token in name.split():
                pattern = _contains_pattern(token)
                stmt = stmt.where(
                    or_(
                        VerificationRequest.subject_first_name.ilike(pattern, escape="\\"),  # type: ignore[attr-defined]
                        VerificationRequest.subject_last_name.ilike(pattern, escape="\\"),  # type: ignore[attr-defined]
                    )
                )
        if reference_number:
            stmt = stmt.where(
                VerificationRequest.reference_number.ilike(  # type: ignore[union-attr]
                    _contains_pattern(reference_number.strip()), escape="\\"
                )
            )
        if statuses:
            stmt = stmt.where(VerificationRequest.status.in_(list(statuses)))  # type: ignore[attr-defined]
        stmt = QueryBuilder.apply_filters(
            stmt,
            VerificationRequest,
            {"verifier_id": verifier_id, "requested_by_id": requested_by_id},
        )
        if received_from is not None:
            stmt = stmt.where(VerificationRequest.received_at >= datetime.combine(received_from, time.min))
        if received_to is not None:
            stmt = stmt.where(
                VerificationRequest.received_at < datetime.combine(received_to + timedelta(days=1), time.min)
            )

        total = await self.count(stmt)

        stmt = stmt.order_by(VerificationRequest.received_at.desc(), VerificationRequest.id.desc())  # type: ignore
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def count_by_status(self) -> Dict[RequestStatus, int]:
        """Count requests per status. Statuses with no requests are reported as 0."""
        stmt = select(VerificationRequest.status, func.count()).group_by(VerificationRequest.status)
        result = await self.session.execute(stmt)
        counts = {status: 0 for status in RequestStatus}
        for status, count in result.all():
            counts[RequestStatus(status)] = count
        return counts

    async def count_overdue(self, today: date) -> int:
        """Count open requests whose due date has passed."""
        stmt = select(VerificationRequest).where(
            VerificationRequest.status.not_in(FINISHED_REQUEST_STATUSES),  # type: ignore[union-attr]
            VerificationRequest.due_date.is_not(None),  # type: ignore[union-attr]
            VerificationRequest.due_date < today,  # type: ignore[operator]
        )
        return await self.count(stmt)
