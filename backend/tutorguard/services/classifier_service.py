"""
External text-classifier adapter (OpenAI moderation endpoint).

Best-effort enrichment for the local rules. Every failure mode - missing key,
transport error, timeout, non-2xx, malformed payload - collapses to None so
moderation degrades to rule-only instead of failing the chat send.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from tutorguard.core.config import Settings
from tutorguard.core.constants import CLASSIFIER_TIMEOUT_SECONDS, DEFAULT_MODERATION_API_URL
from tutorguard.models.moderation import Category, ClassifierOutput

logger = logging.getLogger(__name__)

# External category -> local category. Unlisted names pass through unchanged.
EXTERNAL_CATEGORY_MAP: dict[str, str] = {
    "sexual": Category.SEXUAL_CONTENT.value,
    "sexual/minors": Category.SEXUAL_CONTENT.value,
    "hate": Category.HATE_SPEECH.value,
    "hate/threatening": Category.HATE_SPEECH.value,
    "harassment": Category.HARASSMENT.value,
    "harassment/threatening": Category.THREATENING.value,
    "self-harm": Category.SELF_HARM.value,
    "self-harm/intent": Category.SELF_HARM.value,
    "self-harm/instructions": Category.SELF_HARM.value,
    "violence": Category.THREATENING.value,
    "violence/graphic": Category.THREATENING.value,
}


def map_external_category(name: str) -> str:
    return EXTERNAL_CATEGORY_MAP.get(name, name)


def normalize_response(result: Any) -> Optional[ClassifierOutput]:
    """
    Turn one per-input result object into a ClassifierOutput.

    Returns None when the object lacks a boolean ``flagged`` field.
    Categories are only taken when the service flagged the input;
    confidence is the highest numeric category score, clamped to [0, 1].
    """
    if not isinstance(result, dict) or not isinstance(result.get("flagged"), bool):
        return None

    flagged = result["flagged"]
    categories: set[str] = set()
    raw_categories = result.get("categories") or {}
    if flagged and isinstance(raw_categories, dict):
        categories = {
            map_external_category(name) for name, hit in raw_categories.items() if hit is True
        }

    confidence = None
    raw_scores = result.get("category_scores") or {}
    if isinstance(raw_scores, dict):
        scores = [
            float(v)
            for v in raw_scores.values()
            if isinstance(v, (int, float)) and not isinstance(v, bool)
        ]
        if scores:
            confidence = min(max(max(scores), 0.0), 1.0)

    return ClassifierOutput(
        flagged=flagged,
        categories=frozenset(categories),
        confidence=confidence,
        raw=result,
    )


class ExternalClassifier:
    """Single-attempt client for the external moderation service."""

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_MODERATION_API_URL,
        model: Optional[str] = None,
        timeout: float = CLASSIFIER_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._api_url = api_url
        self._model = model
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> Optional["ExternalClassifier"]:
        """Build from settings, or None when the classifier is not configured."""
        if not settings.classifier_configured:
            logger.info("External classifier not configured; using rule-only moderation")
            return None
        return cls(
            api_key=settings.openai_api_key,
            api_url=settings.moderation_api_url,
            model=settings.moderation_model or None,
            timeout=settings.moderation_timeout_seconds,
        )

    async def classify(self, text: str) -> Optional[ClassifierOutput]:
        """
        Classify text. Never raises; None means "no additional signal".

        The timeout is a deadline for the whole call, not per httpx phase.
        """
        try:
            return await asyncio.wait_for(self._classify(text), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "External classifier exceeded %.1fs deadline, falling back to rules", self._timeout
            )
            return None
        except Exception as e:
            logger.warning("External classifier failed, falling back to rules: %s", e)
            return None

    async def _classify(self, text: str) -> Optional[ClassifierOutput]:
        body: dict[str, Any] = {"input": text}
        if self._model:
            body["model"] = self._model

        # New client per call: concurrent classifications share no connection state.
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(
                self._api_url,
                json=body,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )

        if not response.is_success:
            logger.warning("External classifier returned HTTP %s", response.status_code)
            return None

        data = response.json()
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list) or not results:
            logger.warning("External classifier response has no results")
            return None

        output = normalize_response(results[0])
        if output is None:
            logger.warning("External classifier result is malformed")
        return output
