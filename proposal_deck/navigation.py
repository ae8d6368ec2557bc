"""Bounded navigation state for stepping through a slide deck.

:class:`DeckCursor` mirrors what the proposal viewer does with arrow keys,
swipes, dot indicators and the previous/next buttons. Requests that would move
outside ``[0, total - 1]`` are ignored rather than raising.

Example
-------
>>> from proposal_deck.navigation import DeckCursor
>>> cursor = DeckCursor(total=3)
>>> cursor.next(), cursor.next(), cursor.next()
(True, True, False)
>>> cursor.label, cursor.is_last
('Page 3 of 3', True)
"""

from __future__ import annotations

import dataclasses as dc

SWIPE_THRESHOLD = 50
NEXT_KEY = "ArrowRight"
PREVIOUS_KEY = "ArrowLeft"


@dc.dataclass(slots=True)
class DeckCursor:
    """Track the current page of a deck holding ``total`` pages."""

    total: int
    current: int = 0

    def __post_init__(self) -> None:
        if self.total < 0:
            msg = "total must be zero or positive."
            raise ValueError(msg)
        if not self._in_range(self.current):
            self.current = 0

    def _in_range(self, index: int) -> bool:
        return 0 <= index < self.total

    def go_to(self, index: int) -> bool:
        """Move to ``index``; return ``False`` when it is out of range."""
        if not self._in_range(index) or index == self.current:
            return False
        self.current = index
        return True

    def next(self) -> bool:
        """Advance one page unless already on the last one."""
        return self.go_to(self.current + 1)

    def previous(self) -> bool:
        """Go back one page unless already on the first one."""
        return self.go_to(self.current - 1)

    def handle_key(self, key: str) -> bool:
        """Translate arrow keys into navigation; other keys are ignored."""
        if key == NEXT_KEY:
            return self.next()
        if key == PREVIOUS_KEY:
            return self.previous()
        return False

    def handle_swipe(
        self, start_x: float, end_x: float, *, threshold: float = SWIPE_THRESHOLD
    ) -> bool:
        """Advance on a leftward swipe and retreat on a rightward one.

        Swipes no longer than ``threshold`` pixels are ignored.
        """
        distance = start_x - end_x
        if abs(distance) <= threshold:
            return False
        return self.next() if distance > 0 else self.previous()

    @property
    def is_first(self) -> bool:
        return self.total > 0 and self.current == 0

    @property
    def is_last(self) -> bool:
        """Return ``True`` on the final page, where the booking CTA is shown."""
        return self.total > 0 and self.current == self.total - 1

    @property
    def progress(self) -> float:
        """Return completion as a percentage of pages seen."""
        if self.total == 0:
            return 0.0
        return (self.current + 1) / self.total * 100

    @property
    def counter(self) -> str:
        return f"{self.current + 1} / {self.total}" if self.total else "0 / 0"

    @property
    def label(self) -> str:
        return f"Page {self.current + 1} of {self.total}" if self.total else ""


__all__ = ["NEXT_KEY", "PREVIOUS_KEY", "SWIPE_THRESHOLD", "DeckCursor"]
