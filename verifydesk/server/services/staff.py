"""
Staff service.

Management of the employees who open verification requests and the
verifiers who work them. Staff are never deleted because requests keep
referring to them; they are deactivated instead.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from verifydesk.core.database.entities import Employee, Verifier
from verifydesk.core.database.utils import build_sql_repos
from verifydesk.core.errors import (
    DuplicateError,
    EmployeeNotFoundError,
    VerifierNotFoundError,
)
from verifydesk.core.logging_config import get_logger
from verifydesk.core.models.io import (
    EmployeeCreate,
    EmployeeRead,
    EmployeeUpdate,
    VerifierCreate,
    VerifierRead,
    VerifierUpdate,
)

logger = get_logger(__name__)

# SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    """Tell a unique constraint violation apart from other integrity errors."""
    if getattr(error.orig, "sqlstate", None) == UNIQUE_VIOLATION:
        return True
    message = str(error.orig).lower()
    return "unique" in message or "duplicate key" in message


class StaffService:
    """Service layer for employees and verifiers."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repos = build_sql_repos(session)

    @asynccontextmanager
    async def _transaction(self):
        try:
            yield
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if not is_unique_violation(e):
                raise
            # Lost a race with a concurrent insert of the same email.
            raise DuplicateError("Email address is already in use") from e
        except Exception:
            await self.session.rollback()
            raise

    # =====================================================================
    # Employees
    # =====================================================================

    async def _get_employee(self, employee_id: int) -> Employee:
        employee = await self.repos.employees.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    async def _check_employee_email(self, email: str, employee_id: Optional[int] = None) -> None:
        existing = await self.repos.employees.get_by_email(email)
        if existing is not None and existing.id != employee_id:
            raise DuplicateError(f"Employee email {email} is already in use")

    async def create_employee(self, data: EmployeeCreate) -> EmployeeRead:
        """Create an employee.

        Raises:
            DuplicateError: The email belongs to another employee
        """
        async with self._transaction():
            await self._check_employee_email(data.email)
            employee = await self.repos.employees.create(Employee(**data.model_dump()))
        logger.info(f"Created employee {employee.id} ({employee.email})")
        return EmployeeRead.model_validate(employee)

    async def get_employee(self, employee_id: int) -> EmployeeRead:
        return EmployeeRead.model_validate(await self._get_employee(employee_id))

    async def list_employees(
        self, active: Optional[bool] = None, limit: Optional[int] = None, offset: int = 0
    ) -> List[EmployeeRead]:
        employees = await self.repos.employees.list(limit=limit, offset=offset, filters={"is_active": active})
        return [EmployeeRead.model_validate(employee) for employee in employees]

    async def update_employee(self, employee_id: int, patch: EmployeeUpdate) -> EmployeeRead:
        """Partially update an employee.

        Raises:
            EmployeeNotFoundError: No such employee
            DuplicateError: The new email belongs to another employee
        """
        async with self._transaction():
            employee = await self._get_employee(employee_id)
            changes = patch.model_dump(exclude_unset=True)
            if changes.get("email"):
                await self._check_employee_email(changes["email"], employee_id)
            for key, value in changes.items():
                setattr(employee, key, value)
            employee = await self.repos.employees.update(employee)
        logger.info(f"Updated employee {employee_id}: {sorted(changes)}")
        return EmployeeRead.model_validate(employee)

    async def deactivate_employee(self, employee_id: int) -> EmployeeRead:
        """Mark an employee inactive so they can no longer open requests."""
        async with self._transaction():
            employee = await self._get_employee(employee_id)
            employee.is_active = False
            employee = await self.repos.employees.update(employee)
        logger.info(f"Deactivated employee {employee_id}")
        return EmployeeRead.model_validate(employee)

    # =====================================================================
    # Verifiers
    # =====================================================================

    async def _get_verifier(self, verifier_id: int) -> Verifier:
        verifier = await self.repos.verifiers.get_by_id(verifier_id)
        if verifier is None:
            raise VerifierNotFoundError(verifier_id)
        return verifier

    async def _check_verifier_email(self, email: str, verifier_id: Optional[int] = None) -> None:
        existing = await self.repos.verifiers.get_by_email(email)
        if existing is not None and existing.id != verifier_id:
            raise DuplicateError(f"Verifier email {email} is already in use")

    async def create_verifier(self, data: VerifierCreate) -> VerifierRead:
        """Create a verifier.

        Raises:
            DuplicateError: The email belongs to another verifier
        """
        async with self._transaction():
            await self._check_verifier_email(data.email)
            verifier = await self.repos.verifiers.create(Verifier(**data.model_dump()))
        logger.info(f"Created verifier {verifier.id} ({verifier.email})")
        return VerifierRead.model_validate(verifier)

    async def get_verifier(self, verifier_id: int) -> VerifierRead:
        return VerifierRead.model_validate(await self._get_verifier(verifier_id))

    async def list_verifiers(
        self, active: Optional[bool] = None, limit: Optional[int] = None, offset: int = 0
    ) -> List[VerifierRead]:
        verifiers = await self.repos.verifiers.list(limit=limit, offset=offset, filters={"is_active": active})
        return [VerifierRead.model_validate(verifier) for verifier in verifiers]

    async def update_verifier(self, verifier_id: int, patch: VerifierUpdate) -> VerifierRead:
        """Partially update a verifier.

        Raises:
            VerifierNotFoundError: No such verifier
            DuplicateError: The new email belongs to another verifier
        """
        async with self._transaction():
            verifier = await self._get_verifier(verifier_id)
            changes = patch.model_dump(exclude_unset=True)
            if changes.get("email"):
                await self._check_verifier_email(changes["email"], verifier_id)
            for key, value in changes.items():
                setattr(verifier, key, value)
            verifier = await self.repos.verifiers.update(verifier)
        logger.info(f"Updated verifier {verifier_id}: {sorted(changes)}")
        return VerifierRead.model_validate(verifier)

    async def deactivate_verifier(self, verifier_id: int) -> VerifierRead:
        """Mark a verifier inactive so they receive no new assignments.

        Work already assigned stays with them until reassigned.
        """
        async with self._transaction():
            verifier = await self._get_verifier(verifier_id)
            verifier.is_active = False
            verifier = await self.repos.verifiers.update(verifier)
        logger.info(f"Deactivated verifier {verifier_id}")
        return VerifierRead.model_validate(verifier)
