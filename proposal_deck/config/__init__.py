"""Load and validate deck configuration YAML.

This subpackage parses ``deck.yaml``, applies defaults for every omitted
field, validates segmenter settings and category rules, and produces typed
dataclasses (:class:`DeckConfig` and friends) that the segmenter, builder and
CLI consume. The primary entry point is :func:`load_deck_config`.

Examples
--------
>>> from pathlib import Path
>>> from proposal_deck.config import load_deck_config
>>> config = load_deck_config(Path("config/deck.yaml"))  # doctest: +SKIP
>>> config.booking.label  # doctest: +SKIP
'Book a Meeting'
"""

from .loader import load_deck_config
from .models import (
    DEFAULT_BOOKING_URL,
    BookingConfig,
    DeckConfig,
    DeckConfigError,
    OutputConfig,
    SegmenterConfig,
    ThemeConfig,
)

__all__ = [
    "DEFAULT_BOOKING_URL",
    "BookingConfig",
    "DeckConfig",
    "DeckConfigError",
    "OutputConfig",
    "SegmenterConfig",
    "ThemeConfig",
    "load_deck_config",
]
