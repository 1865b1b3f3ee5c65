"""Unit tests for request middleware (tutorguard/core/middleware.py)."""

from unittest.mock import MagicMock, patch

import pytest
from starlette.requests import Request
from starlette.responses import Response

from tutorguard.core.middleware import (
    CorrelationIDMiddleware,
    RequestLoggingMiddleware,
    get_correlation_id,
)


def _request(headers: dict) -> MagicMock:
    request = MagicMock(spec=Request)
    request.state = MagicMock()
    request.headers = headers
    request.method = "POST"
    request.url.path = "/api/v1/moderation/check"
    return request


class TestCorrelationIDMiddleware:
    """Tests for CorrelationIDMiddleware."""

    @pytest.fixture
    def middleware(self):
        return CorrelationIDMiddleware(MagicMock())

    @pytest.mark.unit
    async def test_uses_incoming_request_id(self, middleware):
        seen = {}

        async def call_next(request):
            seen["id"] = get_correlation_id()
            return Response(status_code=200)

        response = await middleware.dispatch(_request({"X-Request-ID": "req-42"}), call_next)

        assert seen["id"] == "req-42"
        assert response.headers["X-Request-ID"] == "req-42"

    @pytest.mark.unit
    async def test_falls_back_to_correlation_header(self, middleware):
        async def call_next(request):
            return Response(status_code=200)

        request = _request({"X-Correlation-ID": "corr-7"})
        response = await middleware.dispatch(request, call_next)

        assert response.headers["X-Request-ID"] == "corr-7"
        assert request.state.correlation_id == "corr-7"

    @pytest.mark.unit
    async def test_generates_id_when_missing(self, middleware):
        async def call_next(request):
            return Response(status_code=200)

        response = await middleware.dispatch(_request({}), call_next)

        assert len(response.headers["X-Request-ID"]) == 36

    @pytest.mark.unit
    async def test_context_is_reset_after_request(self, middleware):
        async def call_next(request):
            return Response(status_code=200)

        await middleware.dispatch(_request({"X-Request-ID": "req-1"}), call_next)

        assert get_correlation_id() == ""


class TestRequestLoggingMiddleware:
    """Tests for RequestLoggingMiddleware."""

    @pytest.mark.unit
    async def test_logs_method_path_and_status(self):
        middleware = RequestLoggingMiddleware(MagicMock())

        async def call_next(request):
            return Response(status_code=201)

        with patch("tutorguard.core.middleware.logger") as mock_logger:
            response = await middleware.dispatch(_request({}), call_next)

        assert response.status_code == 201
        mock_logger.debug.assert_called_once()
        extra = mock_logger.debug.call_args.kwargs["extra"]
        assert extra == {
            "method": "POST",
            "path": "/api/v1/moderation/check",
            "status_code": 201,
        }
