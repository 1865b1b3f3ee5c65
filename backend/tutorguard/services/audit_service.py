"""
Audit log for moderation decisions.

Writes blocked and warned messages to the moderation_logs table so the admin
moderation queue can review them. Called from a background task after the
response is sent; the moderation engine itself never touches storage.
"""

import logging
from typing import Any, Optional

from supabase import Client

from tutorguard.core.constants import AUDIT_LOG_TABLE
from tutorguard.core.database import get_supabase
from tutorguard.models.moderation import AuditLogError, ModerationResult, Severity

logger = logging.getLogger(__name__)


class ModerationAuditService:
    """Service for persisting moderation decisions."""

    def __init__(self, supabase: Optional[Client] = None) -> None:
        self._supabase = supabase

    @property
    def supabase(self) -> Client:
        if self._supabase is None:
            self._supabase = get_supabase()
        return self._supabase

    def log_decision(
        self,
        content: str,
        result: ModerationResult,
        severity: Severity,
        sender_id: Optional[str] = None,
        conversation_id: Optional[str] = None,
    ) -> dict[str, Any]:
        """Insert one audit row. Raises AuditLogError if the store rejects it."""
        row = {
            "content": content,
            "reasons": sorted(result.reasons),
            "severity": severity.value,
            "flagged_patterns": result.flagged_patterns,
            "confidence": result.confidence,
            "raw_external_response": result.raw_external_response,
            "sender_id": sender_id,
            "conversation_id": conversation_id,
        }
        try:
            response = self.supabase.table(AUDIT_LOG_TABLE).insert(row).execute()
        except Exception as e:
            raise AuditLogError(f"Failed to write moderation audit log: {e}") from e

        logger.info(
            "Moderation decision logged: sender=%s conversation=%s severity=%s",
            sender_id,
            conversation_id,
            severity.value,
        )
        return dict(response.data[0]) if response.data else row
