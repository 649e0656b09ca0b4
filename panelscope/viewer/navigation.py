"""
Panel-by-panel navigation state.

The navigator owns a single index: ``-1`` is the full-page view, ``0..n-1``
is the panel at that array position.  Panels are traversed in array order;
the ``order`` field reported by the detector is never consulted here.
"""

from __future__ import annotations

from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

FULL_PAGE = -1


class PanelNavigator:
    def __init__(self, panel_count: int = 0) -> None:
        self._panel_count = max(panel_count, 0)
        self._index = FULL_PAGE

    @property
    def index(self) -> int:
        return self._index

    @property
    def panel_count(self) -> int:
        return self._panel_count

    @property
    def is_full_page(self) -> bool:
        return self._index == FULL_PAGE

    def next(self) -> int:
        """Advance one panel; past the last panel, wrap back to the full page."""
        if self._index < self._panel_count - 1:
            self._index += 1
        else:
            self._index = FULL_PAGE
        return self._index

    def prev(self) -> int:
        """Step back one panel; the first panel steps back to the full page."""
        if self._index > FULL_PAGE:
            self._index -= 1
        return self._index

    def jump_to_full_page(self) -> int:
        self._index = FULL_PAGE
        return self._index

    def reset(self, panel_count: Optional[int] = None) -> int:
        """Return to the full page, optionally adopting a new panel set size."""
        if panel_count is not None:
            self._panel_count = max(panel_count, 0)
        self._index = FULL_PAGE
        return self._index

    def current(self, panels: Sequence[T]) -> Optional[T]:
        """The focused item of *panels*, or None on the full page."""
        if self.is_full_page or self._index >= len(panels):
            return None
        return panels[self._index]

    def __repr__(self) -> str:
        return f"PanelNavigator(index={self._index}, panel_count={self._panel_count})"
