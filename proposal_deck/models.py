"""Immutable records produced by the slide segmenter."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(frozen=True, slots=True)
class Page:
    """One slide of a segmented proposal.

    Attributes
    ----------
    index : int
        Zero-based position of the page in the segmentation result.
    title : str
        Plain-text heading for the page; empty when no heading precedes it.
    content_fragment : str
        Markup sliced verbatim from the source that belongs to this page.
    preamble : str
        Markup that preceded the first page boundary (typically the document
        title); only ever set on the first page.
    is_first : bool
        ``True`` for the first page of the result.
    is_last : bool
        ``True`` for the final page; viewers append the booking CTA here.
    category : str
        Presentation-only classification of ``title``.
    """

    index: int
    title: str
    content_fragment: str
    preamble: str = ""
    is_first: bool = False
    is_last: bool = False
    category: str = "document"

    @property
    def content(self) -> str:
        """Return the markup a viewer displays for this page."""
        return f"{self.preamble}{self.content_fragment}"


__all__ = ["Page"]
