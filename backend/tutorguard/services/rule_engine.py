"""
Local pattern-based message classifier.

Pure and synchronous: compiles the rule table once at construction and only
reads it afterwards, so one instance is safe to share between concurrent
requests.
"""

import logging
import re
from typing import NamedTuple, Optional, Sequence

from tutorguard.models.moderation import PatternTableError
from tutorguard.services.moderation_rules import RULE_TABLE, PatternGroup

logger = logging.getLogger(__name__)


class RuleMatch(NamedTuple):
    """Categories hit by a message plus the pattern sources that matched."""

    categories: set[str]
    patterns: list[str]


class _CompiledGroup(NamedTuple):
    category: str
    description: str
    patterns: tuple[re.Pattern[str], ...]


class RuleEngine:
    """Evaluates every pattern group against a message."""

    def __init__(self, groups: Optional[Sequence[PatternGroup]] = None) -> None:
        self._groups = self._compile(RULE_TABLE if groups is None else groups)

    @staticmethod
    def _compile(groups: Sequence[PatternGroup]) -> tuple[_CompiledGroup, ...]:
        """Validate and compile the table. Raises PatternTableError on bad input."""
        if not groups:
            raise PatternTableError("Rule table has no pattern groups")

        seen: set[str] = set()
        compiled = []
        for group in groups:
            if group.category in seen:
                raise PatternTableError(f"Duplicate pattern group for category '{group.category}'")
            seen.add(group.category)

            if not group.patterns:
                raise PatternTableError(f"Pattern group '{group.category}' has no patterns")

            try:
                patterns = tuple(re.compile(source, re.IGNORECASE) for source in group.patterns)
            except re.error as e:
                raise PatternTableError(
                    f"Invalid pattern in group '{group.category}': {e}"
                ) from e

            compiled.append(_CompiledGroup(group.category, group.description, patterns))

        logger.debug(
            "Compiled %d pattern groups (%d patterns)",
            len(compiled),
            sum(len(g.patterns) for g in compiled),
        )
        return tuple(compiled)

    @property
    def categories(self) -> frozenset[str]:
        return frozenset(group.category for group in self._groups)

    def describe(self, category: str) -> Optional[str]:
        """Rule-group description for a category, or None if no group covers it."""
        for group in self._groups:
            if group.category == category:
                return group.description
        return None

    def evaluate(self, text: str) -> RuleMatch:
        """
        Scan the full text with every pattern of every group.

        No short-circuiting: all matching categories and all matching
        pattern sources are reported.
        """
        categories: set[str] = set()
        patterns: list[str] = []

        if not text or not text.strip():
            return RuleMatch(categories, patterns)

        for group in self._groups:
            for pattern in group.patterns:
                if pattern.search(text):
                    categories.add(group.category)
                    patterns.append(pattern.pattern)

        return RuleMatch(categories, patterns)
