"""
Global exception handlers for FastAPI.

Maps moderation domain exceptions to HTTP responses. Register with
register_exception_handlers(app).
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tutorguard.models.moderation import ModerationError, PatternTableError

logger = logging.getLogger(__name__)


def error_response(status_code: int, detail: str, code: Optional[str] = None) -> JSONResponse:
    """Build a standardized error JSON response."""
    content: dict = {"detail": detail}
    if code:
        content["code"] = code
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all domain exception handlers on the FastAPI app."""

    @app.exception_handler(PatternTableError)
    async def _pattern_table(request: Request, exc: PatternTableError) -> JSONResponse:
        logger.error("Moderation rules failed to load: %s", exc)
        return error_response(503, "Moderation rules are unavailable.", "MODERATION_RULES_INVALID")

    @app.exception_handler(ModerationError)
    async def _moderation_error(request: Request, exc: ModerationError) -> JSONResponse:
        logger.error("Unhandled moderation error: %s", exc)
        return error_response(500, "Moderation failed.", "MODERATION_ERROR")
