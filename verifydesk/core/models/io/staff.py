"""
Staff I/O models for API requests and responses.

This module contains Pydantic-based I/O schemas for the employee and
verifier endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def normalize_email(value: Any) -> Any:
    """Strip and lowercase an email address before it is validated."""
    return value.strip().lower() if isinstance(value, str) else value


def reject_null(value: Any) -> Any:
    """Refuse an explicit null for a field whose column is NOT NULL."""
    if value is None:
        raise ValueError("must not be null")
    return value


class EmployeeCreate(BaseModel):
    """Schema for creating an employee via API."""

    first_name: str = Field(min_length=1, max_length=64)
    last_name: str = Field(min_length=1, max_length=64)
    email: EmailStr = Field(max_length=255, description="Work email address, unique")
    department: Optional[str] = Field(default=None, max_length=128)
    is_active: bool = True

    @field_validator("email", mode="before")
    @classmethod
    def _lowercase_email(cls, value: Any) -> Any:
        return normalize_email(value)


class EmployeeUpdate(BaseModel):
    """Schema for updating an employee via API.

    All fields optional. Only ``department`` may be sent as null.
    """

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=64)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=64)
    email: Optional[EmailStr] = Field(default=None, max_length=255)
    department: Optional[str] = Field(default=None, max_length=128)
    is_active: Optional[bool] = None

    @field_validator("email", mode="before")
    @classmethod
    def _lowercase_email(cls, value: Any) -> Any:
        return normalize_email(value)

    @field_validator("first_name", "last_name", "email", "is_active")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        return reject_null(value)


class EmployeeRead(BaseModel):
    """Schema for reading an employee from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    department: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class VerifierCreate(BaseModel):
    """Schema for creating a verifier via API."""

    name: str = Field(min_length=1, max_length=128)
    email: EmailStr = Field(max_length=255, description="Work email address, unique")
    phone: Optional[str] = Field(default=None, max_length=32)
    is_active: bool = True

    @field_validator("email", mode="before")
    @classmethod
    def _lowercase_email(cls, value: Any) -> Any:
        return normalize_email(value)


class VerifierUpdate(BaseModel):
    """Schema for updating a verifier via API. All fields optional; only ``phone`` may be null."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    email: Optional[EmailStr] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)
    is_active: Optional[bool] = None

    @field_validator("email", mode="before")
    @classmethod
    def _lowercase_email(cls, value: Any) -> Any:
        return normalize_email(value)

    @field_validator("name", "email", "is_active")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        return reject_null(value)


class VerifierRead(BaseModel):
    """Schema for reading a verifier from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
