import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from tutorguard import __version__
from tutorguard.core.config import get_settings
from tutorguard.core.exceptions import register_exception_handlers
from tutorguard.core.logging_config import setup_logging
from tutorguard.core.middleware import CorrelationIDMiddleware, RequestLoggingMiddleware
from tutorguard.core.rate_limit import limiter, rate_limit_exceeded_handler
from tutorguard.routers import health, moderation
from tutorguard.services.moderation_service import get_moderation_service

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    setup_logging()
    logger.info("Starting %s...", settings.app_name)
    # Compile the rule table now so a broken table fails startup, not the first request
    service = get_moderation_service()
    logger.info(
        "Moderation ready: %d rule categories, classifier %s",
        len(service.rule_engine.categories),
        "enabled" if service.classifier else "disabled",
    )
    yield
    logger.info("Shutting down %s...", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    description="Chat message moderation API for the tutoring marketplace",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)
# Added last so it runs first and the ID is set for every other layer
app.add_middleware(CorrelationIDMiddleware)

# Rate limiting (slowapi)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Global exception handlers (domain exceptions → HTTP responses)
register_exception_handlers(app)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(
    moderation.router, prefix=f"{settings.api_prefix}/moderation", tags=["Moderation"]
)
