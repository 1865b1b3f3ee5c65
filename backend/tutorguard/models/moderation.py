"""
Chat moderation models.

Two-source moderation: local pattern rules + optional external classifier,
merged into one ModerationResult and a block/warn/allow severity.
"""

from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tutorguard.core.constants import MAX_BATCH_SIZE, MESSAGE_MAX_LENGTH

# ===========================================
# Enums
# ===========================================


class Category(str, Enum):
    """Kinds of unsafe content a chat message can be flagged for."""

    SEXUAL_CONTENT = "sexual-content"
    THREATENING = "threatening"
    HARASSMENT = "harassment"
    HATE_SPEECH = "hate-speech"
    OFF_PLATFORM_PAYMENT = "off-platform-payment"
    CONTACT_EXCHANGE = "contact-exchange"
    EXTERNAL_LINKS = "external-links"
    SPAM = "spam"
    GROOMING = "grooming"
    SENSITIVE_INFO = "sensitive-info"
    # Only ever reported by the external classifier
    SELF_HARM = "self-harm"
    VIOLENCE = "violence"


class Severity(str, Enum):
    """What the chat-send path should do with a message."""

    BLOCK = "block"
    WARN = "warn"
    ALLOW = "allow"


HIGH_SEVERITY_CATEGORIES: frozenset[str] = frozenset(
    {
        Category.SEXUAL_CONTENT.value,
        Category.GROOMING.value,
        Category.THREATENING.value,
        Category.VIOLENCE.value,
        Category.HATE_SPEECH.value,
        Category.HARASSMENT.value,
        Category.OFF_PLATFORM_PAYMENT.value,
        Category.CONTACT_EXCHANGE.value,
        Category.SENSITIVE_INFO.value,
        Category.SELF_HARM.value,
    }
)

MEDIUM_SEVERITY_CATEGORIES: frozenset[str] = frozenset(
    {
        Category.EXTERNAL_LINKS.value,
        Category.SPAM.value,
    }
)

CATEGORY_DESCRIPTIONS: dict[str, str] = {
    Category.SEXUAL_CONTENT.value: "Sexual content or inappropriate advances",
    Category.THREATENING.value: "Threats, violence, or harmful content",
    Category.HARASSMENT.value: "Profanity, insults, bullying, or abusive language",
    Category.HATE_SPEECH.value: "Discrimination, racism, or hate speech",
    Category.OFF_PLATFORM_PAYMENT.value: "Attempting to arrange payment outside the platform",
    Category.CONTACT_EXCHANGE.value: (
        "Attempting to exchange contact information or move off-platform"
    ),
    Category.EXTERNAL_LINKS.value: "Sharing external links or websites",
    Category.SPAM.value: "Spam, scams, or suspicious advertising",
    Category.GROOMING.value: "Grooming behavior or inappropriate boundary crossing",
    Category.SENSITIVE_INFO.value: "Sharing sensitive personal information",
    Category.VIOLENCE.value: "Violent or graphic content",
    Category.SELF_HARM.value: "Content related to self-harm",
}


# ===========================================
# Engine Models
# ===========================================


class ClassifierOutput(BaseModel):
    """External classifier verdict, already mapped onto local categories."""

    model_config = ConfigDict(frozen=True)

    flagged: bool
    categories: frozenset[str] = frozenset()
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0)
    raw: dict[str, Any] = Field(default_factory=dict)


class ModerationResult(BaseModel):
    """Outcome of evaluating one message. Built per call, never persisted here."""

    model_config = ConfigDict(frozen=True)

    allowed: bool
    reasons: frozenset[str] = frozenset()
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0)
    flagged_patterns: Optional[list[str]] = None
    raw_external_response: Optional[dict[str, Any]] = None

    @model_validator(mode="after")
    def check_allowed_matches_reasons(self) -> "ModerationResult":
        if self.allowed != (not self.reasons):
            raise ValueError("allowed must be True exactly when reasons is empty")
        return self


# ===========================================
# Request Models
# ===========================================


class ModerationCheckRequest(BaseModel):
    """A candidate chat message from the send path."""

    message: str = Field(..., max_length=MESSAGE_MAX_LENGTH)
    sender_id: Optional[str] = None
    conversation_id: Optional[str] = None


class ModerationBatchRequest(BaseModel):
    """Several candidate messages screened in one call."""

    messages: list[Annotated[str, Field(max_length=MESSAGE_MAX_LENGTH)]] = Field(
        ..., max_length=MAX_BATCH_SIZE
    )


# ===========================================
# Response Models
# ===========================================


class ModerationCheckResponse(BaseModel):
    """Decision returned to the chat-send path."""

    allowed: bool
    severity: Severity
    reasons: list[str]
    descriptions: list[str]
    confidence: Optional[float] = None
    flagged_patterns: Optional[list[str]] = None


class ModerationBatchResponse(BaseModel):
    results: list[ModerationCheckResponse]
    total: int


class CategoryInfo(BaseModel):
    category: str
    description: str
    severity: Severity
    # Description of the local rule group; None for classifier-only categories
    rule_description: Optional[str] = None


# ===========================================
# Exception Classes
# ===========================================


class ModerationError(Exception):
    """Base exception for moderation errors."""

    pass


class PatternTableError(ModerationError):
    """The rule table is malformed (duplicate category, empty or bad pattern)."""

    pass


class AuditLogError(ModerationError):
    """Writing a moderation decision to the audit store failed."""

    pass
