"""Load deck configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from proposal_deck.categories import DEFAULT_CATEGORY_RULES

from .helpers import (
    _build_booking_config,
    _build_category_rules,
    _build_output_config,
    _build_segmenter_config,
    _build_theme_config,
    _require_mapping,
)
from .models import DeckConfig, DeckConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path


def load_deck_config(path: Path | None) -> DeckConfig:
    """Load the YAML configuration describing segmentation and presentation.

    Parameters
    ----------
    path : Path or None
        Filesystem path to the YAML file (for example ``config/deck.yaml``).
        ``None`` returns the built-in defaults.

    Returns
    -------
    DeckConfig
        Parsed configuration with defaults applied to every omitted field.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    DeckConfigError
        If the document is not a mapping or any section holds invalid values.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from proposal_deck.config import load_deck_config
    >>> load_deck_config(None).segmenter.secondary_tag
    'h2'
    """
    if path is None:
        return DeckConfig()
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise DeckConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    categories_raw = raw.get("categories")
    categories = (
        DEFAULT_CATEGORY_RULES
        if categories_raw is None
        else _build_category_rules(categories_raw)
    )
    return DeckConfig(
        segmenter=_build_segmenter_config(
            _require_mapping(raw.get("segmenter"), "segmenter")
        ),
        booking=_build_booking_config(_require_mapping(raw.get("booking"), "booking")),
        theme=_build_theme_config(_require_mapping(raw.get("theme"), "theme")),
        output=_build_output_config(_require_mapping(raw.get("output"), "output")),
        categories=categories,
    )


__all__ = ["load_deck_config"]
