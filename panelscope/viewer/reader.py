"""
Reader session: page cursor and viewer mode for one opened comic.

The manual view state is owned here and reset whenever the page changes;
the smart viewer resets itself when it is handed a new page image.
"""

from __future__ import annotations

from typing import Optional, Sequence

from panelscope.models import ManualViewState, Page, ReaderMode


class ReaderSession:
    def __init__(self, pages: Sequence[Page], mode: ReaderMode = ReaderMode.manual) -> None:
        self.pages = list(pages)
        self.mode = mode
        self.current_page_index = 0
        self.manual_view = ManualViewState()

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def current_page(self) -> Optional[Page]:
        if not self.pages:
            return None
        return self.pages[self.current_page_index]

    @property
    def page_label(self) -> str:
        return f"Page {self.current_page_index + 1} of {self.page_count}"

    @property
    def has_next(self) -> bool:
        return self.current_page_index < self.page_count - 1

    @property
    def has_prev(self) -> bool:
        return self.current_page_index > 0

    def seek(self, index: int) -> int:
        """Jump to *index*, clamped to the page range."""
        if not self.pages:
            return self.current_page_index
        target = min(max(index, 0), self.page_count - 1)
        if target != self.current_page_index:
            self.current_page_index = target
            self.manual_view.reset()
        return self.current_page_index

    def next_page(self) -> int:
        return self.seek(self.current_page_index + 1)

    def prev_page(self) -> int:
        return self.seek(self.current_page_index - 1)

    def set_mode(self, mode: ReaderMode) -> None:
        self.mode = mode
