"""Tests for rate limiting configuration."""

import json
from unittest.mock import MagicMock

from fastapi import Request

from tutorguard.core.rate_limit import _get_rate_limit_key, rate_limit_exceeded_handler


class TestGetRateLimitKey:
    def test_client_host_returns_ip_key(self):
        request = MagicMock(spec=Request)
        request.headers = {}
        request.client.host = "192.168.1.1"

        assert _get_rate_limit_key(request) == "ip:192.168.1.1"

    def test_first_forwarded_hop_wins(self):
        request = MagicMock(spec=Request)
        request.headers = {"X-Forwarded-For": "203.0.113.7, 10.0.0.2"}
        request.client.host = "10.0.0.2"

        assert _get_rate_limit_key(request) == "ip:203.0.113.7"

    def test_no_client_returns_unknown(self):
        request = MagicMock(spec=Request)
        request.headers = {}
        request.client = None

        assert _get_rate_limit_key(request) == "ip:unknown"


class TestRateLimitExceededHandler:
    def test_returns_429_with_code(self):
        response = rate_limit_exceeded_handler(MagicMock(spec=Request), MagicMock())

        assert response.status_code == 429
        body = json.loads(response.body)
        assert body["code"] == "RATE_LIMIT_EXCEEDED"
        assert "Rate limit exceeded" in body["detail"]
