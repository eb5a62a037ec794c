"""
Verifier entity model.

Verifiers perform the actual checks: calling references, registrars and
former employers, then recording what they found on each report.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class VerifierBase(Base):
    """Base fields for a verifier."""

    name: str = Field(max_length=128, description="Display name")
    email: str = Field(max_length=255, unique=True, index=True, description="Work email address")
    phone: Optional[str] = Field(default=None, max_length=32, description="Direct phone line")
    is_active: bool = Field(default=True, description="Whether the verifier can receive assignments")


class Verifier(VerifierBase, table=True):
    """Persistent verifier record.

    Table: verifiers
    """

    __tablename__ = "verifiers"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Verifier(id={self.id}, name={self.name})"
