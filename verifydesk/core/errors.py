"""Error types for the verification service.

Defines a small hierarchy of exceptions raised by the service layer. Each
error carries the HTTP status code the API reports for it, so routers never
translate errors by hand and internal runtime messages never reach clients.
"""

from __future__ import annotations

from typing import Any


class VerifyDeskError(Exception):
    """Base error for all domain exceptions."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(VerifyDeskError):
    """Raised when a referenced object does not exist."""

    status_code = 404
    entity: str = "Object"

    def __init__(self, entity_id: Any) -> None:
        super().__init__(f"{self.entity} {entity_id} not found")
        self.entity_id = entity_id


class RequestNotFoundError(NotFoundError):
    entity = "Verification request"


class ReportNotFoundError(NotFoundError):
    entity = "Report"

    def __init__(self, entity_id: Any, report_type: str | None = None) -> None:
        if report_type:
            self.entity = f"{report_type.capitalize()} report"
        super().__init__(entity_id)


class VerifierNotFoundError(NotFoundError):
    entity = "Verifier"


class EmployeeNotFoundError(NotFoundError):
    entity = "Employee"


class InvalidStateError(VerifyDeskError):
    """Raised when an operation is not allowed in the object's current status."""

    status_code = 409


class DuplicateError(VerifyDeskError):
    """Raised when a unique value is already taken."""

    status_code = 409


class ValidationFailedError(VerifyDeskError):
    """Raised when input is well-formed but violates a business rule."""

    status_code = 422
