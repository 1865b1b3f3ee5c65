"""
Logging setup for the moderation API.

Production emits one JSON object per line so flagged-message events can be
filtered by category or severity in the log pipeline; debug mode prints a
short readable line instead. Moderation log lines carry the message length
and matched categories, never the message text itself.

setup_logging() runs once from the app lifespan.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from tutorguard.core.config import get_settings

SERVICE_NAME = "tutorguard-api"

DEBUG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s [%(correlation_id)s] %(message)s"

# HTTP client stack used for classifier calls, plus the audit-log client
QUIET_LOGGERS = (
    "uvicorn.access",
    "httpx",
    "httpcore",
    "h11",
    "h2",
    "hpack",
    "postgrest",
    "supabase",
)


class CorrelationIDFilter(logging.Filter):
    """Stamps each record with the request's correlation ID ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        # Deferred: middleware imports would cycle through config at module load
        from tutorguard.core.middleware import get_correlation_id

        record.correlation_id = get_correlation_id() or "-"
        return True


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Moderation context passed through ``extra=`` (categories, severity,
    message length, request path and status) is lifted to top-level keys.
    """

    EXTRA_KEYS = ("path", "method", "status_code", "categories", "severity", "message_length")

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id and correlation_id != "-":
            entry["correlation_id"] = correlation_id
        for key in self.EXTRA_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = value
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        # Non-JSON extras such as frozensets fall back to str()
        return json.dumps(entry, default=str)


def _build_formatter(debug: bool) -> logging.Formatter:
    if debug:
        return logging.Formatter(DEBUG_FORMAT, datefmt="%H:%M:%S")
    return JSONFormatter()


def setup_logging(level: Optional[str] = None) -> None:
    """Route all logging to stdout; ``level`` overrides the debug-derived default."""
    settings = get_settings()
    log_level = level or ("DEBUG" if settings.debug else "INFO")

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.addFilter(CorrelationIDFilter())
    handler.setFormatter(_build_formatter(settings.debug))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(log_level)
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
