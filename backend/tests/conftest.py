"""Shared pytest fixtures for test suite."""

import asyncio
from typing import Optional

import pytest

from tutorguard.models.moderation import ClassifierOutput
from tutorguard.services.rule_engine import RuleEngine

# =============================================================================
# Rate limiting
# =============================================================================


@pytest.fixture(autouse=True)
def disable_rate_limit():
    """Disable slowapi so handlers can be called directly and repeatedly."""
    from tutorguard.core.rate_limit import limiter

    previous = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = previous


# =============================================================================
# Moderation fixtures
# =============================================================================


@pytest.fixture(scope="session")
def rule_engine() -> RuleEngine:
    """Rule engine over the production rule table (compiled once)."""
    return RuleEngine()


class FakeClassifier:
    """
    Stand-in for ExternalClassifier.

    Returns a fixed output (or None), records every call, and can delay
    individual texts to simulate uneven network latency.
    """

    def __init__(
        self,
        output: Optional[ClassifierOutput] = None,
        delays: Optional[dict[str, float]] = None,
        per_text: Optional[dict[str, ClassifierOutput]] = None,
    ) -> None:
        self.output = output
        self.delays = delays or {}
        self.per_text = per_text or {}
        self.calls: list[str] = []

    async def classify(self, text: str) -> Optional[ClassifierOutput]:
        self.calls.append(text)
        delay = self.delays.get(text)
        if delay:
            await asyncio.sleep(delay)
        return self.per_text.get(text, self.output)


@pytest.fixture
def fake_classifier_factory():
    """Build FakeClassifier instances inside a test."""
    return FakeClassifier


def make_classifier_output(
    categories: set[str],
    confidence: Optional[float] = 0.9,
    flagged: bool = True,
) -> ClassifierOutput:
    """ClassifierOutput with a plausible raw payload."""
    return ClassifierOutput(
        flagged=flagged,
        categories=frozenset(categories),
        confidence=confidence,
        raw={"flagged": flagged, "categories": {c: True for c in categories}},
    )


@pytest.fixture
def make_output():
    """Factory fixture for ClassifierOutput values."""
    return make_classifier_output
