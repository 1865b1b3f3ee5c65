"""Tests for global exception handlers."""

import json

from fastapi import FastAPI
from fastapi.testclient import TestClient

from tutorguard.core.exceptions import error_response, register_exception_handlers
from tutorguard.models.moderation import AuditLogError, ModerationError, PatternTableError


def _make_app_with_route(exc_to_raise: Exception):
    """Create a minimal FastAPI app that raises the given exception."""
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/test")
    async def trigger():
        raise exc_to_raise

    return TestClient(app, raise_server_exceptions=False)


class TestErrorResponse:
    def test_includes_code_when_given(self):
        resp = error_response(418, "teapot", "TEAPOT")
        assert resp.status_code == 418
        assert json.loads(resp.body) == {"detail": "teapot", "code": "TEAPOT"}

    def test_omits_code_when_missing(self):
        assert json.loads(error_response(400, "bad").body) == {"detail": "bad"}


class TestModerationExceptionHandlers:
    def test_pattern_table_error(self):
        client = _make_app_with_route(PatternTableError("Duplicate pattern group"))
        resp = client.get("/test")
        assert resp.status_code == 503
        assert resp.json()["code"] == "MODERATION_RULES_INVALID"
        # Internal detail stays in the logs
        assert "Duplicate" not in resp.json()["detail"]

    def test_generic_moderation_error(self):
        client = _make_app_with_route(ModerationError("unexpected"))
        resp = client.get("/test")
        assert resp.status_code == 500
        assert resp.json()["code"] == "MODERATION_ERROR"

    def test_audit_log_error_falls_back_to_base_handler(self):
        client = _make_app_with_route(AuditLogError("store down"))
        resp = client.get("/test")
        assert resp.status_code == 500
        assert resp.json()["code"] == "MODERATION_ERROR"
