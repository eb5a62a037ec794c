"""
Service layer of the VerifyDesk server.

- verification: requests, reports and their lifecycle
- staff: employees and verifiers
- deps: FastAPI dependencies that build services per request
"""

from .staff import StaffService
from .verification import VerificationService, derive_request_status

__all__ = ["StaffService", "VerificationService", "derive_request_status"]
