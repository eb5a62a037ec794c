"""
Unit tests for server exception handlers.

Tests cover the mapping of domain errors to status codes and the global
handler for unexpected failures, which must never expose the exception text.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from httpx import ASGITransport, AsyncClient

from verifydesk.core.errors import (
    DuplicateError,
    InvalidStateError,
    RequestNotFoundError,
    ValidationFailedError,
    VerifyDeskError,
)
from verifydesk.server.exception_handlers import setup_exception_handlers
from verifydesk.server.exception_handlers.global_handler import (
    domain_exception_handler,
    global_exception_handler,
)

HANDLER_LOGGER = "verifydesk.server.exception_handlers.global_handler.logger"


@pytest.fixture
def mock_request():
    """Create a mock request object."""
    request = Mock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/verifications/request/1"
    request.query_params = {}
    request.client = Mock()
    request.client.host = "127.0.0.1"
    return request


class TestDomainExceptionHandler:
    """Test suite for the domain error handler."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc,expected_status",
        [
            (RequestNotFoundError(1), 404),
            (InvalidStateError("Cannot start a report that is completed"), 409),
            (DuplicateError("Email taken"), 409),
            (ValidationFailedError("At least one report type is required"), 422),
        ],
    )
    async def test_status_code_and_body(self, mock_request, exc, expected_status):
        with patch(HANDLER_LOGGER):
            response = await domain_exception_handler(mock_request, exc)

        body = json.loads(response.body.decode())
        assert response.status_code == expected_status
        assert body == {"detail": exc.message, "error_type": type(exc).__name__}

    @pytest.mark.asyncio
    async def test_logs_at_info(self, mock_request):
        with patch(HANDLER_LOGGER) as mock_logger:
            await domain_exception_handler(mock_request, RequestNotFoundError(1))

        mock_logger.info.assert_called_once()
        mock_logger.error.assert_not_called()


class TestGlobalExceptionHandler:
    """Test suite for global exception handler."""

    @pytest.mark.asyncio
    async def test_exception_handler_logs_error(self, mock_request):
        exc = ValueError("Test error")

        with patch(HANDLER_LOGGER) as mock_logger:
            await global_exception_handler(mock_request, exc)

            mock_logger.error.assert_called_once()
            call_args = mock_logger.error.call_args
            assert "Unhandled exception" in call_args[0][0]
            assert call_args[1]["extra"]["error_type"] == "ValueError"
            assert call_args[1]["exc_info"] is True

    @pytest.mark.asyncio
    async def test_returns_500_without_exception_text(self, mock_request):
        exc = RuntimeError("connection refused to db-primary:5432 user=admin")

        with patch(HANDLER_LOGGER):
            response = await global_exception_handler(mock_request, exc)

        body = json.loads(response.body.decode())
        assert isinstance(response, JSONResponse)
        assert response.status_code == 500
        assert body == {"detail": "Internal server error", "error_id": id(exc), "error_type": "RuntimeError"}
        assert "db-primary" not in response.body.decode()

    @pytest.mark.asyncio
    async def test_handles_missing_client(self, mock_request):
        mock_request.client = None

        with patch(HANDLER_LOGGER) as mock_logger:
            response = await global_exception_handler(mock_request, KeyError("k"))

        assert response.status_code == 500
        assert mock_logger.error.call_args[1]["extra"]["client"] == "unknown"


class TestSetupExceptionHandlers:
    """Test handler registration."""

    def test_registers_both_handlers(self):
        app = FastAPI()

        setup_exception_handlers(app)

        assert app.exception_handlers[VerifyDeskError] is domain_exception_handler
        assert app.exception_handlers[Exception] is global_exception_handler


class TestHandlersInApplication:
    """Test the handlers through a running application."""

    @pytest.fixture
    def app(self) -> FastAPI:
        app = FastAPI()
        setup_exception_handlers(app)

        @app.get("/missing")
        async def missing():
            raise RequestNotFoundError(7)

        @app.get("/boom")
        async def boom():
            raise RuntimeError("secret internals")

        return app

    @pytest.mark.asyncio
    async def test_domain_error_response(self, app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            response = await client.get("/missing")

        assert response.status_code == 404
        assert response.json()["detail"] == "Verification request 7 not found"

    @pytest.mark.asyncio
    async def test_unexpected_error_response(self, app):
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://localhost") as client:
            with patch(HANDLER_LOGGER):
                response = await client.get("/boom")

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal server error"
        assert "secret internals" not in response.text
