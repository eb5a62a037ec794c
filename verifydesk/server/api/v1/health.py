"""
Liveness and Version Endpoints.

Load balancers poll ``/health``; the desk's client checks ``/version`` to
know which API and database schema revision it is talking to.
"""

from fastapi import APIRouter

from verifydesk.server.core import constant

router = APIRouter()


@router.get(
    "/health",
    summary="Liveness",
    description="Answer as long as the VerifyDesk process is serving requests.",
    response_description="Always `{\"status\": \"ok\"}`.",
)
async def health_check():
    """Liveness probe. Does not touch the database."""
    return {"status": "ok"}


@router.get(
    "/version",
    summary="API and Schema Version",
    description="Report the VerifyDesk API version and the Alembic revision the tables are expected at.",
    response_description="API version and schema revision.",
)
async def version():
    """
    Version information.

    - **version**: VerifyDesk API version.
    - **schema_version**: Alembic revision of the verification tables.
    """
    return {"version": constant.API_VERSION, "schema_version": constant.SCHEMA_VERSION}
