"""Pydantic models for the moderation API."""

from tutorguard.models.moderation import (
    CATEGORY_DESCRIPTIONS,
    HIGH_SEVERITY_CATEGORIES,
    MEDIUM_SEVERITY_CATEGORIES,
    AuditLogError,
    Category,
    CategoryInfo,
    ClassifierOutput,
    ModerationBatchRequest,
    ModerationBatchResponse,
    ModerationCheckRequest,
    ModerationCheckResponse,
    ModerationError,
    ModerationResult,
    PatternTableError,
    Severity,
)

__all__ = [
    # Taxonomy
    "Category",
    "Severity",
    "CATEGORY_DESCRIPTIONS",
    "HIGH_SEVERITY_CATEGORIES",
    "MEDIUM_SEVERITY_CATEGORIES",
    # Engine models
    "ClassifierOutput",
    "ModerationResult",
    # API models
    "ModerationCheckRequest",
    "ModerationBatchRequest",
    "ModerationCheckResponse",
    "ModerationBatchResponse",
    "CategoryInfo",
    # Exceptions
    "ModerationError",
    "PatternTableError",
    "AuditLogError",
]
