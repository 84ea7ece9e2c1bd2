"""
Unit tests for Logfire middleware.

This test suite covers:
- Request metrics forwarded to Logfire
- The X-Process-Time header
- Slow request detection
- Failed requests
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from aerotravel.server.middleware.logfire_middleware import LogfireMiddleware


@pytest.fixture
def mock_request():
    request = AsyncMock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/inventory"
    request.state = MagicMock()
    return request


@pytest.fixture
def middleware():
    return LogfireMiddleware(app=AsyncMock())


class TestLogfireMiddlewareDispatch:
    async def test_successful_request(self, middleware, mock_request):
        async def call_next(request):
            return Response(content="ok", status_code=200)

        with patch("aerotravel.server.middleware.logfire_middleware.log_api_request") as mock_log:
            response = await middleware.dispatch(mock_request, call_next)

        assert response.status_code == 200
        mock_log.assert_called_once()
        kwargs = mock_log.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["path"] == "/api/v1/inventory"
        assert kwargs["status_code"] == 200
        assert kwargs["duration_ms"] >= 0
        assert float(response.headers["X-Process-Time"]) >= 0

    async def test_slow_request_warning(self, middleware, mock_request):
        async def call_next(request):
            return Response(status_code=201)

        with (
            patch("aerotravel.server.middleware.logfire_middleware.log_api_request"),
            patch("aerotravel.server.middleware.logfire_middleware.SLOW_REQUEST_THRESHOLD_MS", -1),
            patch("aerotravel.server.middleware.logfire_middleware.logger") as mock_logger,
        ):
            await middleware.dispatch(mock_request, call_next)

        mock_logger.warning.assert_called_once()
        assert "Slow API request" in mock_logger.warning.call_args[0][0]

    async def test_fast_request_no_warning(self, middleware, mock_request):
        async def call_next(request):
            return Response(status_code=200)

        with (
            patch("aerotravel.server.middleware.logfire_middleware.log_api_request"),
            patch("aerotravel.server.middleware.logfire_middleware.SLOW_REQUEST_THRESHOLD_MS", 60_000),
            patch("aerotravel.server.middleware.logfire_middleware.logger") as mock_logger,
        ):
            await middleware.dispatch(mock_request, call_next)

        mock_logger.warning.assert_not_called()

    async def test_failed_request_logged_and_reraised(self, middleware, mock_request):
        async def call_next(request):
            raise RuntimeError("handler crashed")

        with (
            patch("aerotravel.server.middleware.logfire_middleware.log_api_request") as mock_log,
            patch("aerotravel.server.middleware.logfire_middleware.logger") as mock_logger,
        ):
            with pytest.raises(RuntimeError, match="handler crashed"):
                await middleware.dispatch(mock_request, call_next)

        assert mock_log.call_args.kwargs["status_code"] == 500
        mock_logger.error.assert_called_once()
