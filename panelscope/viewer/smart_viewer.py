"""
Smart (panel-by-panel) viewer session.

Holds the panels detected for the page on screen, the navigator over them and
the loading / error flags the UI displays.  Loading a new page always resets
to the full-page view before detection starts.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from panelscope.config import settings
from panelscope.models import Panel, PanelTransform
from panelscope.pipeline.panel_detection import analyze_page
from panelscope.viewer.navigation import PanelNavigator
from panelscope.viewer.transform import compute_transform

logger = logging.getLogger(__name__)

NO_PANELS_MESSAGE = "Could not detect panels. Switching to full view."

PanelDetector = Callable[[str], Awaitable[list[Panel]]]


class SmartViewer:
    def __init__(self, detector: PanelDetector = analyze_page) -> None:
        self._detector = detector
        self.image: Optional[str] = None
        self.panels: list[Panel] = []
        self.navigator = PanelNavigator()
        self.loading = False
        self.error: Optional[str] = None
        # Bumped on every load so late results for an old page are dropped
        self._generation = 0

    async def load_page(self, image: str) -> list[Panel]:
        """Reset for a new page image and run panel detection on it."""
        self._generation += 1
        generation = self._generation

        self.image = image
        self.panels = []
        self.navigator.reset(0)
        self.error = None
        self.loading = True

        try:
            panels = await self._detector(image)
        finally:
            if generation == self._generation:
                self.loading = False

        if generation != self._generation:
            logger.debug("Discarding stale panel result for generation %d", generation)
            return self.panels

        if not panels:
            self.error = NO_PANELS_MESSAGE
        else:
            self.panels = list(panels)
        self.navigator.reset(len(self.panels))
        return self.panels

    # ── Navigation ────────────────────────────────────────────────────────────

    def next_panel(self) -> int:
        return self.navigator.next()

    def prev_panel(self) -> int:
        return self.navigator.prev()

    def show_full_page(self) -> int:
        return self.navigator.jump_to_full_page()

    @property
    def current_panel(self) -> Optional[Panel]:
        return self.navigator.current(self.panels)

    @property
    def status_label(self) -> str:
        if self.loading:
            return "Analyzing..."
        if self.error:
            return "Error"
        if self.navigator.is_full_page:
            return "Full Page"
        return f"Panel {self.navigator.index + 1}/{len(self.panels)}"

    def transform(
        self,
        rendered_width: Optional[float],
        rendered_height: Optional[float],
        viewport_width: float,
        viewport_height: float,
    ) -> PanelTransform:
        return compute_transform(
            self.current_panel,
            rendered_width,
            rendered_height,
            viewport_width,
            viewport_height,
            padding_factor=settings.panel_padding_factor,
            max_scale=settings.panel_max_scale,
        )
