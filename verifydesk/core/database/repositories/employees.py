"""
Employee repository implementation.

Data access operations for the staff members who open verification requests.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.employees import Employee
from .base import BaseRepository, QueryBuilder


class EmployeeRepository(BaseRepository[Employee]):
    """Repository for employee data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Employee)

    async def get_by_email(self, email: str) -> Optional[Employee]:
        """Get an employee by email, compared case-insensitively.

        Args:
            email: Work email address

        Returns:
            Employee instance or None
        """
        stmt = select(Employee).where(Employee.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Employee]:
        """List employees ordered by last name.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (is_active, department)

        Returns:
            List of Employee instances
        """
        stmt = select(Employee).order_by(Employee.last_name, Employee.first_name)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, Employee, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
