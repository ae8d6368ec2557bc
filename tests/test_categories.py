"""Unit tests for slide title categorisation."""

from __future__ import annotations

import pytest

from proposal_deck.categories import (
    DEFAULT_CATEGORY,
    DEFAULT_CATEGORY_RULES,
    CategoryRule,
    categorize,
    icon_for,
)


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Personalized Introduction", "introduction"),
        ("The Current Situation", "problem"),
        ("Recommended Approach", "solution"),
        ("Projected ROI", "impact"),
        ("Expected Outcomes", "impact"),
        ("Implementation Plan", "plan"),
        ("Why Acme Works", "differentiation"),
        ("NEXT STEPS", "next-steps"),
        ("Contact", "contact"),
        ("Pricing", DEFAULT_CATEGORY),
        ("", DEFAULT_CATEGORY),
    ],
)
def test_default_rules(title: str, expected: str) -> None:
    """Titles map onto the default vocabulary case-insensitively."""
    assert categorize(title) == expected, f"unexpected category for {title!r}"


def test_first_matching_rule_wins() -> None:
    """A title matching several keywords takes the earliest rule."""
    assert categorize("Problem and Solution") == "problem"
    rules = (CategoryRule("plan", "plan"), CategoryRule("next", "next-steps"))
    assert categorize("Next plan", rules) == "plan"
    assert categorize("Next plan", tuple(reversed(rules))) == "next-steps"


def test_default_rule_order_is_stable() -> None:
    """The configured keyword order is part of the contract."""
    keywords = [rule.keyword for rule in DEFAULT_CATEGORY_RULES]
    assert keywords[:4] == ["introduction", "personalized", "problem", "current"]
    assert keywords[-1] == "contact"


def test_icons() -> None:
    """Every category has an icon and unknown labels fall back to a document."""
    assert icon_for("solution") == "lightbulb"
    assert icon_for("next-steps") == "calendar-check"
    assert icon_for("unheard-of") == icon_for(DEFAULT_CATEGORY) == "file-text"
