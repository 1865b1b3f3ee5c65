from fastapi import APIRouter

from tutorguard.core.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "tutorguard-api"}


@router.get("/health/classifier")
async def classifier_health_check():
    """External classifier configuration health check."""
    if get_settings().classifier_configured:
        return {
            "status": "configured",
            "service": "classifier",
            "message": "External classifier enabled. Messages are checked by rules and AI.",
        }
    else:
        return {
            "status": "not_configured",
            "service": "classifier",
            "message": "OPENAI_API_KEY missing or classifier disabled. Using rule-only moderation.",
        }


@router.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Welcome to the Tutor Chat Moderation API", "docs": "/docs"}
