"""Cyclopts CLI entrypoint for segmenting and rendering proposal decks.

The ``deck`` console script defined here can print the slide breakdown of a
proposal body as JSON, render a proposal into static HTML slide pages, list the
newest proposals of a JSON export or ``get-proposal`` endpoint, and render a
single stored proposal addressed by its id or share id.

Examples
--------
Inspect how a proposal splits into slides:

>>> from proposal_deck.cli import app
>>> app(["segment", "proposal.html"])  # doctest: +SKIP

Render a stored proposal by share id:

>>> app(
...     ["show", "0b7e...", "--source", "proposals.json", "--output-dir", "dist"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_deck_config
from .deck import DeckBuilder
from .logging_config import setup_logging
from .proposals import find_proposal, read_source, recent_proposals
from .segmenter import SegmentStrategy

if typ.TYPE_CHECKING:
    from .config import DeckConfig

DEFAULT_CONFIG = Path("config/deck.yaml")

app = App(name="deck", config=cyclopts.config.Env("DECK_", command=False))  # type: ignore[unknown-argument]

logger = logging.getLogger(__name__)

ConfigOption = typ.Annotated[
    Path | None,
    Parameter(help="Path to deck config (defaults to config/deck.yaml when present)"),
]
StrategyOption = typ.Annotated[
    SegmentStrategy | None,
    Parameter(help="Override the configured segmentation strategy"),
]
VerboseOption = typ.Annotated[bool, Parameter(help="Log at DEBUG level")]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_config(
    config: Path | None, strategy: SegmentStrategy | None = None
) -> DeckConfig:
    """Load the deck config, applying a CLI strategy override when given."""
    if config is None and DEFAULT_CONFIG.exists():
        config = DEFAULT_CONFIG
    deck_config = load_deck_config(config)
    if strategy is not None:
        deck_config.segmenter = dc.replace(deck_config.segmenter, strategy=strategy)
    return deck_config


@app.command(help="Print the slides a proposal body splits into as JSON.")
def segment(
    path: Path,
    *,
    strategy: StrategyOption = None,
    source_format: typ.Annotated[
        str, Parameter(name="--format", help="Input format: html or markdown")
    ] = "html",
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the segmentation of the proposal stored at ``path``.

    Parameters
    ----------
    path : Path
        File holding the proposal body.
    strategy : SegmentStrategy or None, optional
        ``sections`` or ``headings``; defaults to the configured strategy.
    source_format : str, optional
        ``html`` (default) or ``markdown``.
    config : Path or None, optional
        Deck configuration file.
    verbose : bool, optional
        Enable debug logging.
    """
    setup_logging(logging.DEBUG if verbose else logging.INFO)
    builder = DeckBuilder(_load_config(config, strategy))
    pages = builder.pages_for(
        path.read_text(encoding="utf-8"), source_format=source_format
    )
    payload = [
        {
            "index": page.index,
            "title": page.title,
            "category": page.category,
            "is_first": page.is_first,
            "is_last": page.is_last,
            "content": page.content,
        }
        for page in pages
    ]
    print(json.dumps(payload, indent=2))


@app.command(help="Render a proposal body into static HTML slide pages.")
def render(
    path: Path,
    *,
    title: typ.Annotated[str | None, Parameter(help="Deck heading")] = None,
    output_dir: typ.Annotated[
        Path | None, Parameter(help="Override the output folder")
    ] = None,
    strategy: StrategyOption = None,
    source_format: typ.Annotated[
        str, Parameter(name="--format", help="Input format: html or markdown")
    ] = "html",
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Render the proposal body at ``path`` into slide pages.

    Parameters
    ----------
    path : Path
        File holding the proposal body.
    title : str or None, optional
        Heading shown above the slides; defaults to the configured site name.
    output_dir : Path or None, optional
        Directory for the generated pages; defaults to ``output.dir``.
    strategy : SegmentStrategy or None, optional
        Override the configured segmentation strategy.
    source_format : str, optional
        ``html`` (default) or ``markdown``.
    config : Path or None, optional
        Deck configuration file.
    verbose : bool, optional
        Enable debug logging.
    """
    setup_logging(logging.DEBUG if verbose else logging.INFO)
    builder = DeckBuilder(_load_config(config, strategy))
    written = builder.build(
        path.read_text(encoding="utf-8"),
        title=title,
        output_dir=output_dir,
        source_format=source_format,
    )
    for written_path in written:
        print(f"wrote {_format_path(written_path)}")


@app.command(name="list", help="List the newest proposals of a source.")
def list_proposals(
    *,
    source: typ.Annotated[
        str, Parameter(help="JSON export path or get-proposal URL")
    ],
    limit: typ.Annotated[int, Parameter(help="Maximum rows to show")] = 10,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print id, title, status and slide count for the newest proposals."""
    setup_logging(logging.DEBUG if verbose else logging.INFO)
    builder = DeckBuilder(_load_config(config))
    proposals = recent_proposals(read_source(source), limit=limit)
    if not proposals:
        print("no proposals found")
        return
    for proposal in proposals:
        slides = len(builder.pages_for(proposal.html))
        status = proposal.status or "draft"
        print(f"{proposal.id}\t{proposal.display_title}\t{status}\t{slides} slide(s)")


@app.command(help="Render one stored proposal addressed by id or share id.")
def show(
    identifier: str,
    *,
    source: typ.Annotated[
        str, Parameter(help="JSON export path or get-proposal URL")
    ],
    output_dir: typ.Annotated[
        Path | None, Parameter(help="Override the output folder")
    ] = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Render the proposal matching ``identifier`` from ``source``.

    Raises
    ------
    ProposalNotFound
        If no proposal has the given numeric id or share id.
    """
    setup_logging(logging.DEBUG if verbose else logging.INFO)
    builder = DeckBuilder(_load_config(config))
    proposal = find_proposal(read_source(source), identifier)
    logger.info("Rendering proposal %s.", proposal.id)
    for written_path in builder.build_proposal(proposal, output_dir=output_dir):
        print(f"wrote {_format_path(written_path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``deck`` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
