"""
Service Dependencies.

Provides per-request service instances for API endpoints. Each service is
bound to the request's database session.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from verifydesk.core.database import get_session
from verifydesk.server.services.staff import StaffService
from verifydesk.server.services.verification import VerificationService


def get_verification_service(session: AsyncSession = Depends(get_session)) -> VerificationService:
    return VerificationService(session)


def get_staff_service(session: AsyncSession = Depends(get_session)) -> StaffService:
    return StaffService(session)


VerificationServiceDep = Annotated[VerificationService, Depends(get_verification_service)]
StaffServiceDep = Annotated[StaffService, Depends(get_staff_service)]
