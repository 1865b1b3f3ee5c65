"""Business logic services for the moderation API."""

from tutorguard.services.audit_service import ModerationAuditService
from tutorguard.services.classifier_service import ExternalClassifier
from tutorguard.services.moderation_service import ModerationService, get_moderation_service
from tutorguard.services.rule_engine import RuleEngine, RuleMatch

__all__ = [
    "ModerationService",
    "get_moderation_service",
    "RuleEngine",
    "RuleMatch",
    "ExternalClassifier",
    "ModerationAuditService",
]
