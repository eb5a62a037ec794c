"""VerifyDesk.

This package contains the verification-request tracking service that replaces
the legacy desktop database used to run background checks.

High-level architecture
-----------------------

The codebase is a layered web application:

- **Entities**: SQLModel table classes for employees, verifiers, verification
  requests, their reports and the per-type report details.
- **Repositories**: async data access over ``AsyncSession``, one per aggregate.
- **Service**: ``VerificationService`` owns the business rules (report
  lifecycle, derived request status, referential checks).
- **API**: FastAPI routers returning JSON view models consumed by the browser UI.

Core subpackages
----------------

- ``verifydesk.core``:

  - Logging configuration and the domain error hierarchy.
  - The database layer (entities, repositories, engine/session management).
  - Domain enums and I/O view models.

- ``verifydesk.server``:

  - Settings, exception handlers, the service layer and the HTTP routers.

Typical workflow
----------------

1. An employee opens a ``Request`` for a subject, choosing which reports to run.
2. A verifier is assigned and works each report: start, hold, release, complete.
3. The request status follows its reports and the request drops out of the
   pending queue once every report is completed.
"""
