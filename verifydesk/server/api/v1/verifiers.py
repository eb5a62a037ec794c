"""
Verifier Endpoints.

CRUD operations for the verifiers who contact references, schools and
former employers. Verifiers are deactivated rather than deleted because
requests and reports keep pointing at them.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status

from verifydesk.core.models.io import VerifierCreate, VerifierRead, VerifierUpdate
from verifydesk.server.services.deps import StaffServiceDep

router = APIRouter()


@router.post(
    "",
    response_model=VerifierRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Verifier",
    description="Register a new verifier.",
    responses={
        201: {"description": "Verifier created successfully"},
        409: {"description": "Email already in use"},
    },
)
async def create_verifier(data: VerifierCreate, service: StaffServiceDep) -> VerifierRead:
    """
    Create a new verifier.

    - **name**: Display name.
    - **email**: Work email, unique among verifiers (stored lowercase).
    - **phone**: Optional phone number.
    """
    return await service.create_verifier(data)


@router.get(
    "",
    response_model=List[VerifierRead],
    summary="List Verifiers",
    description="List verifiers ordered by name, optionally only active or inactive ones.",
)
async def list_verifiers(
    service: StaffServiceDep,
    active: Optional[bool] = Query(None, description="Filter by active flag"),
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
) -> List[VerifierRead]:
    return await service.list_verifiers(active=active, limit=limit, offset=offset)


@router.get(
    "/{verifier_id}",
    response_model=VerifierRead,
    summary="Get Verifier",
    responses={404: {"description": "Verifier not found"}},
)
async def get_verifier(verifier_id: int, service: StaffServiceDep) -> VerifierRead:
    return await service.get_verifier(verifier_id)


@router.patch(
    "/{verifier_id}",
    response_model=VerifierRead,
    summary="Update Verifier",
    description="Partially update a verifier. Only the fields sent are changed.",
    responses={
        404: {"description": "Verifier not found"},
        409: {"description": "Email already in use"},
    },
)
async def update_verifier(verifier_id: int, patch: VerifierUpdate, service: StaffServiceDep) -> VerifierRead:
    return await service.update_verifier(verifier_id, patch)


@router.delete(
    "/{verifier_id}",
    response_model=VerifierRead,
    summary="Deactivate Verifier",
    description="Deactivate a verifier. Existing assignments are kept; no new ones are accepted.",
    responses={404: {"description": "Verifier not found"}},
)
async def deactivate_verifier(verifier_id: int, service: StaffServiceDep) -> VerifierRead:
    return await service.deactivate_verifier(verifier_id)
