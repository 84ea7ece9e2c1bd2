"""
Unit tests for server exception handlers.

Tests cover the domain error mapping and the global handler for unexpected
exceptions.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from aerotravel.core.errors import (
    InsufficientPointsError,
    InsufficientStockError,
    InvalidOperationError,
    NotFoundError,
    PriceLockError,
)
from aerotravel.server.exception_handlers import setup_exception_handlers
from aerotravel.server.exception_handlers.domain_handler import domain_exception_handler
from aerotravel.server.exception_handlers.global_handler import global_exception_handler


@pytest.fixture
def mock_request():
    request = Mock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/test"
    request.query_params = {}
    request.client = Mock()
    request.client.host = "127.0.0.1"
    return request


class TestGlobalExceptionHandler:
    """Test suite for global exception handler."""

    async def test_exception_handler_logs_error(self, mock_request):
        exc = ValueError("Test error")

        with patch("aerotravel.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, exc)

        mock_logger.error.assert_called_once()
        call_args = mock_logger.error.call_args
        assert "Unhandled exception" in call_args[0][0]
        assert call_args[1]["extra"]["error_type"] == "ValueError"
        assert call_args[1]["extra"]["client"] == "127.0.0.1"

    async def test_exception_handler_response(self, mock_request):
        exc = RuntimeError("Test error")

        with patch("aerotravel.server.exception_handlers.global_handler.logger"):
            response = await global_exception_handler(mock_request, exc)

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body == {"detail": "Internal server error", "error_id": id(exc), "error_type": "RuntimeError"}

    async def test_missing_client(self, mock_request):
        mock_request.client = None

        with patch("aerotravel.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, KeyError("x"))

        assert mock_logger.error.call_args[1]["extra"]["client"] == "unknown"

    async def test_forwards_to_logfire(self, mock_request):
        with (
            patch("aerotravel.server.exception_handlers.global_handler.logger"),
            patch("aerotravel.server.exception_handlers.global_handler.log_error") as mock_log_error,
        ):
            await global_exception_handler(mock_request, ValueError("bad"))

        mock_log_error.assert_called_once()
        assert mock_log_error.call_args[0][:2] == ("ValueError", "bad")


class TestDomainExceptionHandler:
    @pytest.mark.parametrize(
        "exc,status_code",
        [
            (NotFoundError("Vendor", "v-1"), 404),
            (InvalidOperationError("Quantity must be positive"), 422),
            (InsufficientStockError("item-1", 5, 2), 409),
            (InsufficientPointsError("guide-1", 100, 10), 409),
            (PriceLockError("v-1", "branch_manager"), 403),
        ],
    )
    async def test_status_codes(self, mock_request, exc, status_code):
        response = await domain_exception_handler(mock_request, exc)

        assert response.status_code == status_code
        body = json.loads(response.body)
        assert body["detail"] == str(exc)
        assert body["error_type"] == type(exc).__name__

    def test_messages(self):
        assert str(NotFoundError("Vendor", "v-1")) == "Vendor 'v-1' not found"
        assert "anonymous" in str(PriceLockError("v-1", None))


class TestSetupExceptionHandlers:
    async def test_registered_handlers_used_by_app(self):
        app = FastAPI()
        setup_exception_handlers(app)

        @app.get("/missing")
        async def missing():
            raise NotFoundError("Guide", "g-9")

        @app.get("/boom")
        async def boom():
            raise RuntimeError("kaboom")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://localhost") as client:
            missing_response = await client.get("/missing")
            with patch("aerotravel.server.exception_handlers.global_handler.logger"):
                boom_response = await client.get("/boom")

        assert missing_response.status_code == 404
        assert missing_response.json()["error_type"] == "NotFoundError"
        assert boom_response.status_code == 500
        assert boom_response.json()["detail"] == "Internal server error"
