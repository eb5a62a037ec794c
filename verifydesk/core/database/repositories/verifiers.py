"""
Verifier repository implementation.

Data access operations for the staff members who work verification reports.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.verifiers import Verifier
from .base import BaseRepository, QueryBuilder


class VerifierRepository(BaseRepository[Verifier]):
    """Repository for verifier data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Verifier)

    async def get_by_email(self, email: str) -> Optional[Verifier]:
        stmt = select(Verifier).where(Verifier.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Verifier]:
        """List verifiers ordered by name.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (is_active)

        Returns:
            List of Verifier instances
        """
        stmt = select(Verifier).order_by(Verifier.name)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, Verifier, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
