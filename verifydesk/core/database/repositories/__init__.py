"""
Database repository layer using SQLModel.

This package contains all repository classes organized by aggregate.
Each module provides type-safe async data access operations for its
corresponding SQLModel entity models.

Modules:
- base: BaseRepository interface and QueryBuilder utilities
- employees: Employee repository operations
- verifiers: Verifier repository operations
- requests: Verification request queue, search and counts
- reports: Reports and their per-type detail rows
"""

from .base import BaseRepository, QueryBuilder
from .employees import EmployeeRepository
from .reports import ReportRepository
from .requests import RequestRepository
from .verifiers import VerifierRepository

__all__ = [
    "BaseRepository",
    "EmployeeRepository",
    "QueryBuilder",
    "ReportRepository",
    "RequestRepository",
    "VerifierRepository",
]
