r"""Classify slide titles into a small icon vocabulary.

Categories only drive decoration in the viewer. Classification is an ordered
keyword containment test where the first matching rule wins, so the order of
``DEFAULT_CATEGORY_RULES`` (or of the ``categories`` list in ``deck.yaml``) is
significant.

Example
-------
>>> from proposal_deck.categories import categorize, icon_for
>>> categorize("Our Recommended Solution")
'solution'
>>> icon_for(categorize("Next Steps"))
'calendar-check'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

DEFAULT_CATEGORY = "document"


@dc.dataclass(frozen=True, slots=True)
class CategoryRule:
    """Map a lower-case keyword to a category label."""

    keyword: str
    category: str


DEFAULT_CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule("introduction", "introduction"),
    CategoryRule("personalized", "introduction"),
    CategoryRule("problem", "problem"),
    CategoryRule("current", "problem"),
    CategoryRule("solution", "solution"),
    CategoryRule("recommended", "solution"),
    CategoryRule("roi", "impact"),
    CategoryRule("impact", "impact"),
    CategoryRule("expected", "impact"),
    CategoryRule("implementation", "plan"),
    CategoryRule("plan", "plan"),
    CategoryRule("why", "differentiation"),
    CategoryRule("works", "differentiation"),
    CategoryRule("next", "next-steps"),
    CategoryRule("step", "next-steps"),
    CategoryRule("contact", "contact"),
)

CATEGORY_ICONS: dict[str, str] = {
    "introduction": "building-2",
    "problem": "target",
    "solution": "lightbulb",
    "impact": "trending-up",
    "plan": "clipboard-list",
    "differentiation": "sparkles",
    "next-steps": "calendar-check",
    "contact": "phone",
    DEFAULT_CATEGORY: "file-text",
}


def categorize(
    title: str, rules: typ.Sequence[CategoryRule] = DEFAULT_CATEGORY_RULES
) -> str:
    """Return the category of the first rule whose keyword occurs in ``title``.

    Parameters
    ----------
    title : str
        Slide title; matching is case-insensitive.
    rules : Sequence[CategoryRule], optional
        Ordered rules to test. Defaults to ``DEFAULT_CATEGORY_RULES``.

    Returns
    -------
    str
        The matched category, or ``"document"`` when nothing matches.
    """
    lowered = title.lower()
    for rule in rules:
        if rule.keyword.lower() in lowered:
            return rule.category
    return DEFAULT_CATEGORY


def icon_for(category: str) -> str:
    """Return the icon name for ``category``, falling back to the document icon."""
    return CATEGORY_ICONS.get(category, CATEGORY_ICONS[DEFAULT_CATEGORY])


__all__ = [
    "CATEGORY_ICONS",
    "DEFAULT_CATEGORY",
    "DEFAULT_CATEGORY_RULES",
    "CategoryRule",
    "categorize",
    "icon_for",
]
