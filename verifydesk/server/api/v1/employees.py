"""
Employee Endpoints.

CRUD operations for the employees who open verification requests.
Employees are deactivated rather than deleted.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status

from verifydesk.core.models.io import EmployeeCreate, EmployeeRead, EmployeeUpdate
from verifydesk.server.services.deps import StaffServiceDep

router = APIRouter()


@router.post(
    "",
    response_model=EmployeeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Employee",
    description="Register an employee who may open verification requests.",
    responses={
        201: {"description": "Employee created successfully"},
        409: {"description": "Email already in use"},
    },
)
async def create_employee(data: EmployeeCreate, service: StaffServiceDep) -> EmployeeRead:
    """
    Create a new employee.

    - **first_name**, **last_name**: The employee's name.
    - **email**: Work email, unique among employees (stored lowercase).
    - **department**: Optional department, e.g. 'Human Resources'.
    """
    return await service.create_employee(data)


@router.get(
    "",
    response_model=List[EmployeeRead],
    summary="List Employees",
    description="List employees ordered by last name, optionally only active or inactive ones.",
)
async def list_employees(
    service: StaffServiceDep,
    active: Optional[bool] = Query(None, description="Filter by active flag"),
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
) -> List[EmployeeRead]:
    return await service.list_employees(active=active, limit=limit, offset=offset)


@router.get(
    "/{employee_id}",
    response_model=EmployeeRead,
    summary="Get Employee",
    responses={404: {"description": "Employee not found"}},
)
async def get_employee(employee_id: int, service: StaffServiceDep) -> EmployeeRead:
    return await service.get_employee(employee_id)


@router.patch(
    "/{employee_id}",
    response_model=EmployeeRead,
    summary="Update Employee",
    description="Partially update an employee. Only the fields sent are changed.",
    responses={
        404: {"description": "Employee not found"},
        409: {"description": "Email already in use"},
    },
)
async def update_employee(employee_id: int, patch: EmployeeUpdate, service: StaffServiceDep) -> EmployeeRead:
    return await service.update_employee(employee_id, patch)


@router.delete(
    "/{employee_id}",
    response_model=EmployeeRead,
    summary="Deactivate Employee",
    description="Deactivate an employee so they can no longer open requests.",
    responses={404: {"description": "Employee not found"}},
)
async def deactivate_employee(employee_id: int, service: StaffServiceDep) -> EmployeeRead:
    return await service.deactivate_employee(employee_id)
