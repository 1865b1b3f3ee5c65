"""
Rate limiting configuration using slowapi.

Keyed on client IP. In-memory storage by default; point
RATE_LIMIT_STORAGE_URI at Redis for multi-process deployments.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded

from tutorguard.core.config import get_settings
from tutorguard.core.constants import CHECK_RATE_LIMIT


def _get_rate_limit_key(request: Request) -> str:
    """
    Extract rate limit key from request.

    Prefers the first X-Forwarded-For hop set by the chat frontend's proxy,
    then the socket peer.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return f"ip:{forwarded.split(',')[0].strip()}"

    client_ip = request.client.host if request.client else "unknown"
    return f"ip:{client_ip}"


limiter = Limiter(
    key_func=_get_rate_limit_key,
    default_limits=[CHECK_RATE_LIMIT],
    enabled=get_settings().rate_limit_enabled,
    storage_uri=get_settings().rate_limit_storage_uri,
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors with a standardized response."""
    return JSONResponse(
        status_code=429,
        content={
            "detail": "Rate limit exceeded. Please try again later.",
            "code": "RATE_LIMIT_EXCEEDED",
        },
    )
