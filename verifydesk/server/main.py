"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS),
registers exception handlers and includes all API routers. It serves as the
root of the web server.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from verifydesk.core.database import init_db
from verifydesk.core.logging_config import get_logger, setup_logging

from .api.v1 import employees, health, verifications, verifiers
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates missing tables on startup when configured to. A database that
    cannot be initialized stops the server from starting.
    """
    logger.info("Starting up VerifyDesk Server...")
    await init_db()
    logger.info("Database initialized successfully")

    yield

    logger.info("Shutting down VerifyDesk Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    VerifyDesk Server API

    Tracks pre-employment verification requests: character references,
    education records and past employment. Staff open requests, verifiers
    work the pending queue and record their findings per report.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)

setup_exception_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(
    verifications.router, prefix=f"{constant.API_V1_STR}/verifications", tags=["verifications"]
)
app.include_router(verifiers.router, prefix=f"{constant.API_V1_STR}/verifiers", tags=["verifiers"])
app.include_router(employees.router, prefix=f"{constant.API_V1_STR}/employees", tags=["employees"])


def run() -> None:
    """Run the server with uvicorn using the configured host and port."""
    uvicorn.run(
        "verifydesk.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
