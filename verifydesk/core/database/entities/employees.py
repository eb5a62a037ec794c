"""
Employee entity model.

Employees are the internal staff members who open verification requests on
behalf of a hiring manager or department.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class EmployeeBase(Base):
    """Base fields for an employee."""

    first_name: str = Field(max_length=64, description="Given name")
    last_name: str = Field(max_length=64, description="Family name")
    email: str = Field(max_length=255, unique=True, index=True, description="Work email address")
    department: Optional[str] = Field(default=None, max_length=128, description="Department or cost center")
    is_active: bool = Field(default=True, description="Whether the employee may open requests")


class Employee(EmployeeBase, table=True):
    """Persistent employee record.

    Table: employees
    """

    __tablename__ = "employees"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"Employee(id={self.id}, email={self.email})"
