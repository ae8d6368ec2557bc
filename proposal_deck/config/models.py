"""Typed dataclasses describing deck configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from proposal_deck.categories import DEFAULT_CATEGORY_RULES, CategoryRule
from proposal_deck.segmenter import SegmentStrategy

DEFAULT_BOOKING_URL = "https://calendar.app.google/MxGJokQVE2bp4uGt8"


class DeckConfigError(ValueError):
    """Raised when the deck configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SegmenterConfig:
    """Heading ranks and strategy used to cut proposals into slides."""

    strategy: SegmentStrategy = SegmentStrategy.SECTIONS
    primary_tag: str = "h1"
    secondary_tag: str = "h2"


@dc.dataclass(slots=True)
class BookingConfig:
    """Call-to-action shown on the last slide."""

    url: str = DEFAULT_BOOKING_URL
    label: str = "Book a Meeting"


@dc.dataclass(slots=True)
class ThemeConfig:
    """Visual theming applied to rendered slides."""

    site_name: str = "Proposals"
    accent: str = "violet"
    empty_message: str = "No content available"


@dc.dataclass(slots=True)
class OutputConfig:
    """Where rendered slide pages are written."""

    directory: Path = Path("public/proposals")
    filename_prefix: str = "slide-"


@dc.dataclass(slots=True)
class DeckConfig:
    """Fully resolved deck configuration."""

    segmenter: SegmenterConfig = dc.field(default_factory=SegmenterConfig)
    booking: BookingConfig = dc.field(default_factory=BookingConfig)
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)
    output: OutputConfig = dc.field(default_factory=OutputConfig)
    categories: tuple[CategoryRule, ...] = DEFAULT_CATEGORY_RULES


__all__ = [
    "DEFAULT_BOOKING_URL",
    "BookingConfig",
    "DeckConfig",
    "DeckConfigError",
    "OutputConfig",
    "SegmenterConfig",
    "ThemeConfig",
]
