r"""Split proposal HTML into an ordered deck of slides.

The segmenter is a pure function over a single HTML string. BeautifulSoup
(with the ``html.parser`` builder, which records where each start tag begins)
is used only to find heading boundaries; every fragment handed back is a raw
slice of the input so the stored markup reaches the viewer untouched.

Two strategies are available:

``sections``
    Second-level headings start pages. A leading first-level heading (the
    proposal title) and anything else before the first page boundary becomes
    the preamble of the first page.
``headings``
    Every first- or second-level heading starts a page.

Boundary headings are collected at any nesting depth and the input is cut at
their start tags, so every character of the input lands in the preamble, a
heading, or a fragment. A fragment cut from inside a wrapper element can
therefore carry an unmatched open or close tag of that wrapper.

Example
-------
>>> from proposal_deck.segmenter import segment
>>> pages = segment("<h1>Acme</h1><h2>Problem</h2><p>Pain</p>")
>>> pages[0].title, pages[0].preamble, pages[0].content_fragment
('Problem', '<h1>Acme</h1>', '<p>Pain</p>')
"""

from __future__ import annotations

import dataclasses as dc
import enum
import logging
import re
import typing as typ

from bs4 import BeautifulSoup

from .categories import DEFAULT_CATEGORY_RULES, categorize
from .models import Page

if typ.TYPE_CHECKING:
    from bs4 import Tag

    from .categories import CategoryRule

logger = logging.getLogger(__name__)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


class SegmentStrategy(enum.StrEnum):
    """Heading granularity used to cut pages."""

    SECTIONS = "sections"
    HEADINGS = "headings"


class _BoundaryError(ValueError):
    """Raised when a parsed boundary cannot be mapped back onto the source."""


@dc.dataclass(slots=True)
class _Draft:
    title: str
    fragment: str


def segment(
    html: str,
    *,
    strategy: SegmentStrategy | str = SegmentStrategy.SECTIONS,
    primary_tag: str = "h1",
    secondary_tag: str = "h2",
    rules: typ.Sequence[CategoryRule] = DEFAULT_CATEGORY_RULES,
) -> list[Page]:
    """Return the ordered slides contained in ``html``.

    Parameters
    ----------
    html : str
        Proposal body. Empty or whitespace-only input yields no pages.
    strategy : SegmentStrategy or str, optional
        ``"sections"`` (default) or ``"headings"``.
    primary_tag, secondary_tag : str, optional
        Heading elements treated as the document title rank and the page rank.
    rules : Sequence[CategoryRule], optional
        Ordered keyword rules used to categorize page titles.

    Returns
    -------
    list[Page]
        Pages in source order with contiguous indices. Never empty for
        non-blank input: documents without usable boundaries collapse into a
        single page holding the whole input.
    """
    if not html or not html.strip():
        return []

    mode = SegmentStrategy(strategy)
    primary = primary_tag.lower()
    secondary = secondary_tag.lower()
    try:
        preamble, drafts = _partition(html, mode, primary, secondary)
    except Exception:  # noqa: BLE001 - malformed markup degrades to one page
        logger.warning("Unable to locate slide boundaries; using a single page.")
        preamble, drafts = "", []

    kept = [draft for draft in drafts if draft.fragment.strip()]
    if not kept:
        preamble = ""
        kept = [_Draft(title=_fallback_title(html, primary), fragment=html)]
    logger.debug("Segmented proposal into %d page(s).", len(kept))

    last = len(kept) - 1
    return [
        Page(
            index=idx,
            title=draft.title,
            content_fragment=draft.fragment,
            preamble=preamble if idx == 0 else "",
            is_first=idx == 0,
            is_last=idx == last,
            category=categorize(draft.title, rules),
        )
        for idx, draft in enumerate(kept)
    ]


def _partition(
    html: str, strategy: SegmentStrategy, primary: str, secondary: str
) -> tuple[str, list[_Draft]]:
    """Return the preamble and one draft per boundary heading."""
    soup = BeautifulSoup(html, "html.parser")
    boundaries = _boundaries(soup, strategy, primary, secondary)
    if not boundaries:
        return "", []

    line_starts = _line_starts(html)
    offsets = [_offset(tag, html, line_starts) for tag in boundaries]
    if any(left >= right for left, right in zip(offsets, offsets[1:], strict=False)):
        msg = "Heading offsets are not in document order."
        raise _BoundaryError(msg)

    drafts: list[_Draft] = []
    for idx, tag in enumerate(boundaries):
        start = offsets[idx]
        stop = offsets[idx + 1] if idx + 1 < len(offsets) else len(html)
        closing = _end_tag_pattern(tag.name).search(html, start, stop)
        body_start = closing.end() if closing else stop
        drafts.append(_Draft(title=_heading_text(tag), fragment=html[body_start:stop]))
    return html[: offsets[0]], drafts


def _boundaries(
    soup: BeautifulSoup, strategy: SegmentStrategy, primary: str, secondary: str
) -> list[Tag]:
    """Return the headings that start pages, in document order.

    Headings are found at any nesting depth. With ``SECTIONS`` the headings
    before the first secondary heading belong to the preamble. Headings nested
    inside another page heading are part of that heading's title.
    """
    headings = [
        tag
        for tag in soup.find_all([primary, secondary])
        if tag.find_parent([primary, secondary]) is None
    ]
    if strategy is SegmentStrategy.SECTIONS:
        first = next(
            (idx for idx, tag in enumerate(headings) if tag.name == secondary), None
        )
        return [] if first is None else headings[first:]
    return headings


def _line_starts(html: str) -> list[int]:
    """Return the character offset at which each source line begins."""
    starts = [0]
    starts.extend(match.end() for match in re.finditer("\n", html))
    return starts


def _offset(tag: Tag, html: str, line_starts: list[int]) -> int:
    """Map a parsed tag back to the offset of its ``<`` in ``html``."""
    if tag.sourceline is None or tag.sourcepos is None:
        msg = f"<{tag.name}> carries no source position."
        raise _BoundaryError(msg)
    offset = line_starts[tag.sourceline - 1] + tag.sourcepos
    opening = html[offset : offset + len(tag.name) + 1]
    if opening.lower() != f"<{tag.name}":
        msg = f"Expected <{tag.name}> at offset {offset}, found {opening!r}."
        raise _BoundaryError(msg)
    return offset


def _end_tag_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"</{re.escape(name)}\s*>", re.IGNORECASE)


def _heading_text(tag: Tag) -> str:
    """Return the heading's text with markup removed and whitespace collapsed."""
    return " ".join(tag.get_text().split())


def _fallback_title(html: str, primary: str) -> str:
    """Return the primary heading text for single-page decks, or ``""``."""
    try:
        heading = BeautifulSoup(html, "html.parser").find(primary)
    except Exception:  # noqa: BLE001 - title extraction is best effort
        return ""
    return _heading_text(heading) if heading is not None else ""


__all__ = ["HEADING_TAGS", "SegmentStrategy", "segment"]
