"""
Moderation service for outgoing chat messages.

Handles:
- Running the local rule engine and the external classifier per message
- Merging both into one ModerationResult
- Block / warn / allow severity for the chat-send path
- Human-readable reasons for user-facing rejections
"""

import asyncio
import logging
from functools import lru_cache
from typing import Any, Optional

from tutorguard.core.config import get_settings
from tutorguard.models.moderation import (
    CATEGORY_DESCRIPTIONS,
    HIGH_SEVERITY_CATEGORIES,
    MEDIUM_SEVERITY_CATEGORIES,
    ModerationResult,
    Severity,
)
from tutorguard.services.classifier_service import ExternalClassifier
from tutorguard.services.rule_engine import RuleEngine

logger = logging.getLogger(__name__)


class ModerationService:
    """Coordinator for rule-based and classifier-based moderation."""

    def __init__(
        self,
        rule_engine: Optional[RuleEngine] = None,
        classifier: Optional[ExternalClassifier] = None,
    ) -> None:
        self.rule_engine = rule_engine or RuleEngine()
        self.classifier = classifier

    @classmethod
    def from_settings(cls) -> "ModerationService":
        return cls(classifier=ExternalClassifier.from_settings(get_settings()))

    async def evaluate(self, text: Any) -> ModerationResult:
        """
        Moderate one message.

        Non-string and blank input fails open (allowed, no reasons) without
        touching either sub-component.
        """
        if not isinstance(text, str):
            logger.warning("Moderation received non-text input (%s); allowing", type(text).__name__)
            return ModerationResult(allowed=True)
        if not text.strip():
            return ModerationResult(allowed=True)

        rule_match = self.rule_engine.evaluate(text)
        reasons = set(rule_match.categories)

        external = None
        if self.classifier is not None:
            external = await self.classifier.classify(text)
            if external is not None:
                reasons |= external.categories

        result = ModerationResult(
            allowed=not reasons,
            reasons=frozenset(reasons),
            confidence=external.confidence if external else None,
            flagged_patterns=rule_match.patterns or None,
            raw_external_response=external.raw if external else None,
        )
        if reasons:
            logger.info(
                "Message flagged: categories=%s",
                ",".join(sorted(reasons)),
                extra={"categories": sorted(reasons), "message_length": len(text)},
            )
        return result

    async def evaluate_all(self, texts: list[Any]) -> list[ModerationResult]:
        """Moderate messages concurrently; results keep the input order."""
        return list(await asyncio.gather(*(self.evaluate(text) for text in texts)))

    @staticmethod
    def classify_severity(result: ModerationResult) -> Severity:
        """Pure function of result.reasons."""
        if result.reasons & HIGH_SEVERITY_CATEGORIES:
            return Severity.BLOCK
        if result.reasons & MEDIUM_SEVERITY_CATEGORIES:
            return Severity.WARN
        return Severity.ALLOW

    @staticmethod
    def should_block(result: ModerationResult) -> bool:
        return ModerationService.classify_severity(result) == Severity.BLOCK

    @staticmethod
    def should_warn(result: ModerationResult) -> bool:
        return ModerationService.classify_severity(result) == Severity.WARN

    @staticmethod
    def describe_category(category: str) -> str:
        """User-facing sentence for a category; unknown categories come back unchanged."""
        return CATEGORY_DESCRIPTIONS.get(category, category)


@lru_cache
def get_moderation_service() -> ModerationService:
    """Process-wide coordinator, built once from settings."""
    return ModerationService.from_settings()
