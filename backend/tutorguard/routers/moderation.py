"""
Moderation router for the chat-send path.

Endpoints:
- POST /check: Moderate one message before it is sent
- POST /check/batch: Moderate several messages, results in input order
- GET /categories: Every category with its description and severity
"""

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from tutorguard.core.config import get_settings
from tutorguard.core.constants import BATCH_RATE_LIMIT, CHECK_RATE_LIMIT
from tutorguard.core.rate_limit import limiter
from tutorguard.models.moderation import (
    CATEGORY_DESCRIPTIONS,
    AuditLogError,
    CategoryInfo,
    ModerationBatchRequest,
    ModerationBatchResponse,
    ModerationCheckRequest,
    ModerationCheckResponse,
    ModerationResult,
    Severity,
)
from tutorguard.services.audit_service import ModerationAuditService
from tutorguard.services.moderation_service import ModerationService, get_moderation_service

logger = logging.getLogger(__name__)
router = APIRouter()


def get_audit_service() -> Optional[ModerationAuditService]:
    if not get_settings().audit_log_enabled:
        return None
    return ModerationAuditService()


def _to_response(result: ModerationResult) -> ModerationCheckResponse:
    reasons = sorted(result.reasons)
    return ModerationCheckResponse(
        allowed=result.allowed,
        severity=ModerationService.classify_severity(result),
        reasons=reasons,
        descriptions=[ModerationService.describe_category(r) for r in reasons],
        confidence=result.confidence,
        flagged_patterns=result.flagged_patterns,
    )


def _write_audit_log(
    audit_service: ModerationAuditService,
    body: ModerationCheckRequest,
    result: ModerationResult,
    severity: Severity,
) -> None:
    """Background task: a failed audit write must not affect the sent response."""
    try:
        audit_service.log_decision(
            content=body.message,
            result=result,
            severity=severity,
            sender_id=body.sender_id,
            conversation_id=body.conversation_id,
        )
    except AuditLogError:
        logger.exception("Moderation audit log write failed")


@router.post("/check", response_model=ModerationCheckResponse)
@limiter.limit(CHECK_RATE_LIMIT)
async def check_message(
    request: Request,
    body: ModerationCheckRequest,
    background_tasks: BackgroundTasks,
    moderation_service: ModerationService = Depends(get_moderation_service),
    audit_service: Optional[ModerationAuditService] = Depends(get_audit_service),
) -> ModerationCheckResponse:
    """Moderate one outgoing chat message."""
    result = await moderation_service.evaluate(body.message)
    response = _to_response(result)

    if audit_service is not None and response.severity != Severity.ALLOW:
        background_tasks.add_task(_write_audit_log, audit_service, body, result, response.severity)

    return response


@router.post("/check/batch", response_model=ModerationBatchResponse)
@limiter.limit(BATCH_RATE_LIMIT)
async def check_batch(
    request: Request,
    body: ModerationBatchRequest,
    moderation_service: ModerationService = Depends(get_moderation_service),
) -> ModerationBatchResponse:
    """Moderate several messages concurrently."""
    results = await moderation_service.evaluate_all(body.messages)
    return ModerationBatchResponse(
        results=[_to_response(r) for r in results],
        total=len(results),
    )


@router.get("/categories", response_model=list[CategoryInfo])
async def list_categories(
    moderation_service: ModerationService = Depends(get_moderation_service),
) -> list[CategoryInfo]:
    """Every known category with its description, severity and local rule coverage."""
    return [
        CategoryInfo(
            category=category,
            description=description,
            severity=ModerationService.classify_severity(
                ModerationResult(allowed=False, reasons=frozenset({category}))
            ),
            rule_description=moderation_service.rule_engine.describe(category),
        )
        for category, description in CATEGORY_DESCRIPTIONS.items()
    ]
