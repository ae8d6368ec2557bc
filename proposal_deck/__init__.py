"""Segment proposal HTML into slide decks and render them as static pages.

This package exposes the slide segmenter used by the proposal viewer together
with the ``deck`` CLI that renders stored proposals into navigable HTML.

Exports
-------
- ``segment``: Split an HTML proposal body into ordered :class:`Page` records.
- ``Page``: Immutable slide record produced by ``segment``.
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from proposal_deck import segment
>>> [page.title for page in segment("<h2>Problem</h2><p>Pain</p>")]
['Problem']
"""

from __future__ import annotations

from .cli import app, main
from .models import Page
from .segmenter import SegmentStrategy, segment

__all__ = ["Page", "SegmentStrategy", "app", "main", "segment"]
