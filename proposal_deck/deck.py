"""Render a segmented proposal into static HTML slide pages.

:class:`DeckBuilder` segments a proposal body with the configured strategy and
writes one page per slide from ``templates/slide.jinja``. Every page links to
its neighbours, shows a ``current / total`` counter, and the final page carries
the booking call to action. A proposal with no content produces a single
placeholder page instead of an empty directory.

Example
-------
>>> from pathlib import Path
>>> from proposal_deck.config import load_deck_config
>>> from proposal_deck.deck import DeckBuilder
>>> builder = DeckBuilder(load_deck_config(None))
>>> builder.build("<h2>Problem</h2><p>Pain</p>", output_dir=Path("out"))  # doctest: +SKIP
[PosixPath('out/slide-01-problem.html')]
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import glob
import logging
import re
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown import markdown

from .categories import icon_for
from .navigation import DeckCursor
from .segmenter import segment

if typ.TYPE_CHECKING:
    from .config import DeckConfig
    from .models import Page
    from .proposals import Proposal

logger = logging.getLogger(__name__)

SOURCE_FORMATS = ("html", "markdown")


@dc.dataclass(slots=True)
class SlideLink:
    """Navigation entry pointing at a rendered slide."""

    label: str
    href: str
    current: bool = False


class DeckBuilder:
    """Turn proposal HTML into a directory of navigable slide pages."""

    def __init__(
        self, config: DeckConfig, *, templates_dir: Path | None = None
    ) -> None:
        """Initialize the builder and its Jinja environment.

        Parameters
        ----------
        config : DeckConfig
            Segmentation, theme, booking and output settings.
        templates_dir : Path, optional
            Directory containing ``slide.jinja``; defaults to the package
            templates.
        """
        self.config = config
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.slide_template = self.env.get_template("slide.jinja")
        self.empty_template = self.env.get_template("empty.jinja")

    def pages_for(self, body: str, *, source_format: str = "html") -> list[Page]:
        """Segment ``body`` with the configured strategy and category rules."""
        if source_format not in SOURCE_FORMATS:
            msg = f"Unknown source format {source_format!r}; expected html or markdown."
            raise ValueError(msg)
        html = body
        if source_format == "markdown" and body.strip():
            html = markdown(body, extensions=["sane_lists", "tables"], output_format="html5")
        settings = self.config.segmenter
        return segment(
            html,
            strategy=settings.strategy,
            primary_tag=settings.primary_tag,
            secondary_tag=settings.secondary_tag,
            rules=self.config.categories,
        )

    def build(
        self,
        body: str,
        *,
        title: str | None = None,
        output_dir: Path | None = None,
        source_format: str = "html",
        created_at: dt.datetime | None = None,
    ) -> list[Path]:
        """Render every slide of ``body`` and return the written paths in order.

        Parameters
        ----------
        body : str
            Proposal HTML (or Markdown when ``source_format="markdown"``).
        title : str, optional
            Deck heading; defaults to the configured site name.
        output_dir : Path, optional
            Override for the configured output directory.
        source_format : str, optional
            ``"html"`` (default) or ``"markdown"``.
        created_at : datetime, optional
            Proposal creation time shown under the heading.

        Returns
        -------
        list[Path]
            One path per slide, or a single placeholder page for empty input.
        """
        pages = self.pages_for(body, source_format=source_format)
        out_dir = output_dir or self.config.output.directory
        out_dir.mkdir(parents=True, exist_ok=True)
        self._clear_previous(out_dir)
        context_base = self.base_context(title=title, created_at=created_at)

        if not pages:
            path = out_dir / f"{self.config.output.filename_prefix}empty.html"
            self._write(path, self.empty_template.render(**context_base))
            logger.info("Proposal has no content; wrote placeholder %s.", path)
            return [path]

        filenames = [self._filename(page) for page in pages]
        written: list[Path] = []
        for page, filename in zip(pages, filenames, strict=True):
            cursor = DeckCursor(total=len(pages), current=page.index)
            context = {
                **context_base,
                "page": page,
                "icon": icon_for(page.category),
                "cursor": cursor,
                "previous_href": None if cursor.is_first else filenames[page.index - 1],
                "next_href": None if cursor.is_last else filenames[page.index + 1],
                "dots": self._build_dots(filenames, page.index),
            }
            path = out_dir / filename
            self._write(path, self.slide_template.render(**context))
            written.append(path)
        logger.info("Wrote %d slide page(s) to %s.", len(written), out_dir)
        return written

    def build_proposal(
        self, proposal: Proposal, *, output_dir: Path | None = None
    ) -> list[Path]:
        """Render a stored proposal using its display title and timestamp."""
        return self.build(
            proposal.html,
            title=proposal.display_title,
            output_dir=output_dir,
            created_at=proposal.created_at,
        )

    def base_context(
        self, *, title: str | None = None, created_at: dt.datetime | None = None
    ) -> dict[str, typ.Any]:
        """Return the template variables shared by every page of a deck."""
        return {
            "deck_title": title or self.config.theme.site_name,
            "theme": self.config.theme,
            "booking": self.config.booking,
            "created_at": created_at,
        }

    def _clear_previous(self, out_dir: Path) -> None:
        """Remove pages left by an earlier render that used the same prefix."""
        prefix = glob.escape(self.config.output.filename_prefix)
        patterns = (f"{prefix}[0-9][0-9]*-*.html", f"{prefix}empty.html")
        for stale in [path for pattern in patterns for path in out_dir.glob(pattern)]:
            stale.unlink()
            logger.debug("Removed stale slide page %s.", stale)

    def _filename(self, page: Page) -> str:
        slug = _slugify(page.title) or "slide"
        return f"{self.config.output.filename_prefix}{page.index + 1:02d}-{slug}.html"

    @staticmethod
    def _build_dots(filenames: list[str], current: int) -> list[SlideLink]:
        return [
            SlideLink(label=str(idx + 1), href=name, current=idx == current)
            for idx, name in enumerate(filenames)
        ]

    @staticmethod
    def _write(path: Path, html: str) -> None:
        if not html.endswith("\n"):
            html += "\n"
        path.write_text(html, encoding="utf-8")


def _slugify(value: str) -> str:
    """Convert a string into a lowercase hyphen-separated slug."""
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


__all__ = ["SOURCE_FORMATS", "DeckBuilder", "SlideLink"]
