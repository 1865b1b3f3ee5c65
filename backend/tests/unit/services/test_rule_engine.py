"""Unit tests for RuleEngine.

Tests:
- evaluate() - one trigger per category, clean messages, empty input
- evaluate() - case-insensitive search, no short-circuiting, pattern reporting
- evaluate() - bounded runtime on adversarial input
- construction - table integrity checks raise PatternTableError
"""

import time

import pytest

from tutorguard.models.moderation import Category, PatternTableError
from tutorguard.services.moderation_rules import RULE_TABLE, PatternGroup
from tutorguard.services.rule_engine import RuleEngine

CLEAN_MESSAGES = [
    "Thanks, see you at our scheduled session on Friday!",
    "My son finished his algebra worksheet and is ready for the quiz.",
    "Could we move Tuesday's lesson to 4 pm?",
]

TRIGGERS = [
    (Category.SEXUAL_CONTENT, "Send me nudes."),
    (Category.THREATENING, "I will hurt you if you cancel again"),
    (Category.HARASSMENT, "You're an idiot."),
    (Category.HATE_SPEECH, "You people are all the same."),
    (Category.OFF_PLATFORM_PAYMENT, "Can I pay you directly instead?"),
    (Category.CONTACT_EXCHANGE, "Here's my phone: 555-123-4567"),
    (Category.EXTERNAL_LINKS, "Check out my website: http://example.com"),
    (Category.SPAM, "Earn $500 per day with this!"),
    (Category.GROOMING, "Don't tell your parents about this."),
    (Category.SENSITIVE_INFO, "What is your home address?"),
]


# =============================================================================
# TestEvaluate
# =============================================================================


class TestEvaluate:
    """Tests for evaluate()."""

    @pytest.mark.unit
    @pytest.mark.parametrize("category,text", TRIGGERS)
    def test_trigger_reports_category(self, rule_engine, category, text) -> None:
        """A known trigger phrase reports its category."""
        match = rule_engine.evaluate(text)
        assert category.value in match.categories

    @pytest.mark.unit
    @pytest.mark.parametrize("text", CLEAN_MESSAGES)
    def test_clean_message_has_no_categories(self, rule_engine, text) -> None:
        """Ordinary tutoring chat is not flagged."""
        match = rule_engine.evaluate(text)
        assert match.categories == set()
        assert match.patterns == []

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_empty_or_blank_text(self, rule_engine, text) -> None:
        """Blank input returns an empty result when called directly."""
        match = rule_engine.evaluate(text)
        assert match.categories == set()
        assert match.patterns == []

    @pytest.mark.unit
    def test_matching_is_case_insensitive(self, rule_engine) -> None:
        assert Category.SEXUAL_CONTENT.value in rule_engine.evaluate("SEND ME NUDES").categories
        assert Category.SPAM.value in rule_engine.evaluate("bItCoIn giveaway").categories

    @pytest.mark.unit
    def test_search_semantics_finds_trigger_mid_text(self, rule_engine) -> None:
        """Triggers anywhere in the message count, not just a full-string match."""
        text = "Great progress today. By the way, what is your home address? Thanks!"
        assert Category.SENSITIVE_INFO.value in rule_engine.evaluate(text).categories

    @pytest.mark.unit
    def test_reports_every_matching_category(self, rule_engine) -> None:
        """No short-circuiting once the first category is found."""
        match = rule_engine.evaluate("You're an idiot, call me at 555-123-4567")
        assert {Category.HARASSMENT.value, Category.CONTACT_EXCHANGE.value} <= match.categories

    @pytest.mark.unit
    def test_reports_every_matching_pattern(self, rule_engine) -> None:
        """Several contact patterns hit the same message and all are listed."""
        match = rule_engine.evaluate("call me at 555-123-4567")
        contact_sources = set(
            next(g for g in RULE_TABLE if g.category == Category.CONTACT_EXCHANGE.value).patterns
        )
        assert len(contact_sources & set(match.patterns)) >= 2

    @pytest.mark.unit
    def test_matched_patterns_come_from_table(self, rule_engine) -> None:
        all_sources = {source for group in RULE_TABLE for source in group.patterns}
        match = rule_engine.evaluate("Send me nudes or I will hurt you, idiot")
        assert match.patterns
        assert set(match.patterns) <= all_sources

    @pytest.mark.unit
    def test_link_only_message_reports_external_links_only(self, rule_engine) -> None:
        match = rule_engine.evaluate("Check out my website: http://example.com")
        assert match.categories == {Category.EXTERNAL_LINKS.value}

    @pytest.mark.unit
    def test_phone_number_reports_contact_exchange(self, rule_engine) -> None:
        match = rule_engine.evaluate("Can you send me your phone number? 09171234567")
        assert Category.CONTACT_EXCHANGE.value in match.categories

    @pytest.mark.unit
    def test_word_boundaries_avoid_substring_hits(self, rule_engine) -> None:
        """Short app names and slang do not fire inside longer words."""
        match = rule_engine.evaluate("Please ignore the cumulative total and just use the formula.")
        assert match.categories == set()

    @pytest.mark.unit
    def test_evaluate_is_deterministic(self, rule_engine) -> None:
        text = "Let's keep this between us and pay via GCash"
        first = rule_engine.evaluate(text)
        second = rule_engine.evaluate(text)
        assert first.categories == second.categories
        assert first.patterns == second.patterns


# =============================================================================
# TestAdversarialInput
# =============================================================================


class TestAdversarialInput:
    """Long hostile inputs finish in bounded time."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text",
        [
            "a." * 20000 + "@",
            "keep " * 10000,
            "pay " * 10000,
            "1 a " * 10000,
            "don't tell " * 5000,
            "x" * 100000,
        ],
    )
    def test_long_input_is_fast(self, rule_engine, text) -> None:
        started = time.perf_counter()
        rule_engine.evaluate(text)
        assert time.perf_counter() - started < 5.0


# =============================================================================
# TestTableIntegrity
# =============================================================================


class TestTableIntegrity:
    """Tests for table validation at construction."""

    @pytest.mark.unit
    def test_production_table_covers_local_categories(self, rule_engine) -> None:
        """Every category except classifier-only ones has a rule group."""
        expected = {c.value for c in Category} - {
            Category.SELF_HARM.value,
            Category.VIOLENCE.value,
        }
        assert rule_engine.categories == expected

    @pytest.mark.unit
    def test_production_table_categories_are_unique(self) -> None:
        categories = [group.category for group in RULE_TABLE]
        assert len(categories) == len(set(categories))

    @pytest.mark.unit
    def test_duplicate_category_raises(self) -> None:
        groups = [
            PatternGroup("spam", "Spam", (r"\bbuy\s*now\b",)),
            PatternGroup("spam", "More spam", (r"\blottery\b",)),
        ]
        with pytest.raises(PatternTableError, match="Duplicate"):
            RuleEngine(groups)

    @pytest.mark.unit
    def test_empty_pattern_list_raises(self) -> None:
        with pytest.raises(PatternTableError, match="no patterns"):
            RuleEngine([PatternGroup("spam", "Spam", ())])

    @pytest.mark.unit
    def test_invalid_regex_raises(self) -> None:
        with pytest.raises(PatternTableError, match="Invalid pattern"):
            RuleEngine([PatternGroup("spam", "Spam", (r"(unclosed",))])

    @pytest.mark.unit
    def test_empty_table_raises(self) -> None:
        with pytest.raises(PatternTableError):
            RuleEngine([])

    @pytest.mark.unit
    def test_custom_table_is_used(self) -> None:
        engine = RuleEngine([PatternGroup("custom", "Custom rule", (r"\bbanana\b",))])
        assert engine.evaluate("I like BANANA bread").categories == {"custom"}
        assert engine.describe("custom") == "Custom rule"
        assert engine.describe("spam") is None
