"""Utility helpers shared by the deck configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from proposal_deck.categories import CategoryRule
from proposal_deck.segmenter import HEADING_TAGS, SegmentStrategy

from .models import (
    BookingConfig,
    DeckConfigError,
    OutputConfig,
    SegmenterConfig,
    ThemeConfig,
)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_mapping(value: object, section: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating ``None`` as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"'{section}' must be a mapping."
        raise DeckConfigError(msg)
    return value


def _heading_tag(value: object, field: str) -> str:
    """Validate and normalise a heading element name such as ``h2``."""
    tag = (_optional_str(value) or "").lower()
    if tag not in HEADING_TAGS:
        msg = f"segmenter.{field} must be one of {', '.join(HEADING_TAGS)}; got {value!r}."
        raise DeckConfigError(msg)
    return tag


def _build_segmenter_config(payload: typ.Mapping[str, typ.Any]) -> SegmenterConfig:
    """Build a SegmenterConfig, validating strategy and heading ranks."""
    base = SegmenterConfig()
    raw_strategy = payload.get("strategy", base.strategy)
    try:
        strategy = SegmentStrategy(str(raw_strategy).lower())
    except ValueError as exc:
        choices = ", ".join(item.value for item in SegmentStrategy)
        msg = f"Unknown segmenter strategy {raw_strategy!r}; expected one of {choices}."
        raise DeckConfigError(msg) from exc
    primary = _heading_tag(payload.get("primary_tag", base.primary_tag), "primary_tag")
    secondary = _heading_tag(
        payload.get("secondary_tag", base.secondary_tag), "secondary_tag"
    )
    if primary == secondary:
        msg = "segmenter.primary_tag and segmenter.secondary_tag must differ."
        raise DeckConfigError(msg)
    return SegmenterConfig(
        strategy=strategy, primary_tag=primary, secondary_tag=secondary
    )


def _build_booking_config(payload: typ.Mapping[str, typ.Any]) -> BookingConfig:
    """Build the booking CTA configuration from the provided mapping."""
    base = BookingConfig()
    return BookingConfig(
        url=_optional_str(payload.get("url")) or base.url,
        label=_optional_str(payload.get("label")) or base.label,
    )


def _build_theme_config(payload: typ.Mapping[str, typ.Any]) -> ThemeConfig:
    """Build a ThemeConfig instance from the provided mapping payload."""
    base = ThemeConfig()
    return ThemeConfig(
        site_name=_optional_str(payload.get("site_name")) or base.site_name,
        accent=_optional_str(payload.get("accent")) or base.accent,
        empty_message=_optional_str(payload.get("empty_message"))
        or base.empty_message,
    )


def _build_output_config(payload: typ.Mapping[str, typ.Any]) -> OutputConfig:
    base = OutputConfig()
    raw_dir = payload.get("dir")
    if raw_dir is not None and not isinstance(raw_dir, str):
        msg = f"output.dir must be a path string; got {raw_dir!r}."
        raise DeckConfigError(msg)
    raw_prefix = payload.get("filename_prefix")
    if raw_prefix is not None and not isinstance(raw_prefix, str):
        msg = f"output.filename_prefix must be a string; got {raw_prefix!r}."
        raise DeckConfigError(msg)
    directory = _optional_str(raw_dir)
    return OutputConfig(
        directory=Path(directory) if directory else base.directory,
        filename_prefix=base.filename_prefix if raw_prefix is None else raw_prefix,
    )


def _build_category_rules(payload: object) -> tuple[CategoryRule, ...]:
    """Build ordered category rules, preserving the configured order."""
    if not isinstance(payload, list):
        msg = "'categories' must be a list of {keyword, category} mappings."
        raise DeckConfigError(msg)
    rules: list[CategoryRule] = []
    for position, entry in enumerate(payload, start=1):
        match entry:
            case {"keyword": keyword, "category": category}:
                keyword_text = _optional_str(keyword)
                category_text = _optional_str(category)
            case _:
                keyword_text = category_text = None
        if not (keyword_text and category_text):
            msg = f"Category rule #{position} needs non-empty 'keyword' and 'category'."
            raise DeckConfigError(msg)
        rules.append(CategoryRule(keyword_text.lower(), category_text))
    return tuple(rules)


__all__ = [
    "_build_booking_config",
    "_build_category_rules",
    "_build_output_config",
    "_build_segmenter_config",
    "_build_theme_config",
    "_optional_str",
    "_require_mapping",
]
