"""End-to-end tests for rendering proposals into static slide pages.

``DeckBuilder`` is exercised with the default configuration and a temporary
output directory; the written HTML is inspected with BeautifulSoup to confirm
navigation links, counters, the booking call to action on the last slide, and
that proposal markup reaches the page unchanged.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from jinja2 import meta

from proposal_deck.config import DeckConfig, OutputConfig, load_deck_config
from proposal_deck.deck import DeckBuilder
from proposal_deck.proposals import Proposal
from proposal_deck.segmenter import SegmentStrategy

ACME = "<h1>Acme</h1><h2>Problem</h2><p>Pain</p><h2>Solution</h2><p>Fix</p>"


@pytest.fixture
def builder() -> DeckBuilder:
    return DeckBuilder(load_deck_config(None))


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


def test_one_file_per_slide(builder: DeckBuilder, tmp_path: Path) -> None:
    written = builder.build(ACME, title="Acme Deck", output_dir=tmp_path)
    assert [path.name for path in written] == [
        "slide-01-problem.html",
        "slide-02-solution.html",
    ]
    assert all(path.parent == tmp_path for path in written)


def test_navigation_links_and_cta(builder: DeckBuilder, tmp_path: Path) -> None:
    """Only the last slide carries the booking CTA instead of a next link."""
    first_path, last_path = builder.build(ACME, output_dir=tmp_path)
    first = _soup(first_path)
    last = _soup(last_path)

    assert first.select_one("[data-test='previous']") is None
    next_link = first.select_one("[data-test='next']")
    assert next_link is not None, "first slide should link forward"
    assert next_link.get("href") == "slide-02-solution.html"
    assert first.select_one("[data-test='booking-cta']") is None
    assert first.select_one("[data-test='slide-counter']").get_text() == "1 / 2"

    assert last.select_one("[data-test='next']") is None
    previous = last.select_one("[data-test='previous']")
    assert previous is not None
    assert previous.get("href") == "slide-01-problem.html"
    cta = last.select_one("[data-test='booking-cta']")
    assert cta is not None, "last slide must offer the booking CTA"
    assert cta.get_text() == "Book a Meeting"
    assert cta.get("href") == "https://calendar.app.google/MxGJokQVE2bp4uGt8"


def test_content_and_title_rendering(builder: DeckBuilder, tmp_path: Path) -> None:
    """Proposal markup is embedded as-is, titles carry their category icon."""
    first_path, _ = builder.build(ACME, output_dir=tmp_path)
    soup = _soup(first_path)
    content = soup.select_one(".proposal-content")
    assert content is not None
    assert content.find("h1").get_text() == "Acme", "preamble shown on first slide"
    assert content.find("p").get_text() == "Pain"
    assert soup.select_one(".slide-title").get_text() == "Problem"
    assert soup.select_one(".slide-icon").get("data-icon") == "target"
    assert len(soup.select(".slide-dot")) == 2
    assert soup.select_one(".slide-dot--current").get_text() == "1"


def test_titles_are_escaped(builder: DeckBuilder, tmp_path: Path) -> None:
    (path,) = builder.build("<h2>R&amp;D &lt;plan&gt;</h2><p>x</p>", output_dir=tmp_path)
    assert path.name == "slide-01-r-d-plan.html"
    assert _soup(path).select_one(".slide-title").get_text() == "R&D <plan>"


def test_empty_proposal_writes_placeholder(
    builder: DeckBuilder, tmp_path: Path
) -> None:
    (path,) = builder.build("   ", output_dir=tmp_path)
    assert path.name == "slide-empty.html"
    message = _soup(path).select_one("[data-test='empty-deck']")
    assert message is not None
    assert message.get_text() == "No content available"


def test_markdown_source(builder: DeckBuilder, tmp_path: Path) -> None:
    """Markdown proposals are converted before segmentation."""
    body = "# Acme\n\n## Problem\n\nPain\n\n## Solution\n\nFix\n"
    pages = builder.pages_for(body, source_format="markdown")
    assert [page.title for page in pages] == ["Problem", "Solution"]
    assert "<h1>Acme</h1>" in pages[0].preamble
    with pytest.raises(ValueError, match="source format"):
        builder.pages_for(body, source_format="rtf")


def test_configured_strategy_and_output(tmp_path: Path) -> None:
    """Segmenter and output settings come from the deck config."""
    config = DeckConfig(output=OutputConfig(directory=tmp_path, filename_prefix="p-"))
    config.segmenter = dc.replace(config.segmenter, strategy=SegmentStrategy.HEADINGS)
    written = DeckBuilder(config).build("<h1>Intro</h1><p>a</p><h2>Plan</h2><p>b</p>")
    assert [path.name for path in written] == ["p-01-intro.html", "p-02-plan.html"]


def test_build_proposal_uses_display_title(
    builder: DeckBuilder, tmp_path: Path
) -> None:
    proposal = Proposal(
        id=7,
        proposal_data=ACME,
        client_name="Acme",
        created_at=dt.datetime(2025, 1, 5, tzinfo=dt.UTC),
    )
    first_path, _ = builder.build_proposal(proposal, output_dir=tmp_path)
    soup = _soup(first_path)
    assert soup.select_one(".deck-title").get_text() == "Proposal for Acme"
    assert soup.select_one(".deck-date").get_text() == "January 05, 2025"


def test_rerender_removes_stale_pages(builder: DeckBuilder, tmp_path: Path) -> None:
    """A shorter deck replaces the pages of a longer one in the same folder."""
    builder.build(ACME, output_dir=tmp_path)
    (tmp_path / "notes.html").write_text("<p>keep</p>\n", encoding="utf-8")
    (path,) = builder.build("<h2>Contact</h2><p>Call</p>", output_dir=tmp_path)
    assert sorted(item.name for item in tmp_path.iterdir()) == [
        "notes.html",
        "slide-01-contact.html",
    ], "old slides are removed, unrelated files are kept"
    assert _soup(path).select_one("[data-test='next']") is None


def test_empty_render_replaces_previous_deck(
    builder: DeckBuilder, tmp_path: Path
) -> None:
    builder.build(ACME, output_dir=tmp_path)
    builder.build("", output_dir=tmp_path)
    assert [item.name for item in tmp_path.iterdir()] == ["slide-empty.html"]


def test_shared_context_is_used_by_layout(builder: DeckBuilder) -> None:
    """Every deck-wide template variable is read by the page layout."""
    source, _, _ = builder.env.loader.get_source(builder.env, "_layout.jinja")
    referenced = meta.find_undeclared_variables(builder.env.parse(source))
    context = builder.base_context(title="Acme")
    assert set(context) <= referenced, (
        f"unused template variables: {sorted(set(context) - referenced)}"
    )
    assert context["deck_title"] == "Acme"
