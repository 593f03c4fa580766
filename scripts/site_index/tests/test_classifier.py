"""Tests for keyword icon classification."""

from scripts.site_index.classifier import (
    DEFAULT_ICON,
    ICON_RULES,
    IconRule,
    build_rules,
    classification_key,
    classify,
    match_rule,
)


class TestClassify:
    """Tests for choosing icons."""

    def test_barber_page(self):
        assert classify("utilities/barbershop-queue.html", "Services") == "💈"

    def test_category_contributes_to_match(self):
        assert classify("utilities/x.html", "Calendar") == "📅"

    def test_no_match_uses_default(self):
        assert classify("utilities/budget.html", "Finance") == DEFAULT_ICON

    def test_first_rule_wins(self):
        # "pdf" appears before the generic "doc" rule.
        assert classify("utilities/pdf-documents.html", "Other") == "🔎📄"

    def test_substring_match(self):
        assert classify("utilities/dentalcare.html", "Health") == "🦷"

    def test_mixed_case_keyword_matches(self):
        assert classify("utilities/blueParking.html", "Other") == "🅿️🚗"
        assert classify("utilities/Hotel-booking.html", "Other") == "🐶"

    def test_deterministic(self):
        results = {classify("utilities/radio-player.html", "Music") for _ in range(5)}
        assert results == {"📻"}


class TestRules:
    """Tests for the rule table."""

    def test_table_size(self):
        assert len(ICON_RULES) == 38

    def test_every_icon_non_empty(self):
        assert all(rule.icon for rule in ICON_RULES)

    def test_classification_key_lowercases(self):
        assert classification_key("Utilities/A.html", "Tools") == "utilities/a.html tools"

    def test_match_rule_none(self):
        assert match_rule("utilities/zzz.html", "Zzz") is None

    def test_extra_rules_take_priority(self):
        rules = build_rules([IconRule(r"barber", "✂️")])
        assert classify("utilities/barbershop.html", "Services", rules) == "✂️"
        assert rules[1:] == ICON_RULES
