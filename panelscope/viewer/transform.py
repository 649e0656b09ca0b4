"""
Viewport transform for zooming onto a single panel.

The rendering layer shows the page image centered in the viewport, scaled to
fit (``object-fit: contain``).  ``compute_transform`` returns the extra scale
and pixel translation that put the chosen panel's center on the viewport's
center and make the panel fill the viewport, less a margin.

Panel boxes are percentages of the page, so they are converted against the
image's *rendered* size, not the viewport, which keeps letterboxed images
correct.
"""

from __future__ import annotations

import math
from typing import Optional

from panelscope.models import Panel, PanelTransform

DEFAULT_PADDING_FACTOR = 0.85
DEFAULT_MAX_SCALE = 5.0


def _clamp_pct(value: float) -> float:
    return min(max(value, 0.0), 100.0)


def _known(dimension: Optional[float]) -> bool:
    return dimension is not None and math.isfinite(dimension) and dimension > 0


def compute_transform(
    panel: Optional[Panel],
    rendered_width: Optional[float],
    rendered_height: Optional[float],
    viewport_width: float,
    viewport_height: float,
    padding_factor: float = DEFAULT_PADDING_FACTOR,
    max_scale: float = DEFAULT_MAX_SCALE,
) -> PanelTransform:
    """
    Compute the transform that centers and fills the viewport with *panel*.

    Returns the identity transform for the full-page state (``panel`` is
    None), while the image has not been measured yet, and for boxes or
    viewports that would produce a zero, infinite or NaN scale.
    """
    if panel is None or not _known(rendered_width) or not _known(rendered_height):
        return PanelTransform.identity()
    if not _known(viewport_width) or not _known(viewport_height):
        return PanelTransform.identity()

    left = _clamp_pct(panel.xmin) / 100 * rendered_width
    top = _clamp_pct(panel.ymin) / 100 * rendered_height
    right = _clamp_pct(panel.xmax) / 100 * rendered_width
    bottom = _clamp_pct(panel.ymax) / 100 * rendered_height

    panel_width = right - left
    panel_height = bottom - top
    if panel_width <= 0 or panel_height <= 0:
        return PanelTransform.identity()

    scale = min(viewport_width / panel_width, viewport_height / panel_height) * padding_factor
    scale = min(scale, max_scale)
    if not math.isfinite(scale) or scale <= 0:
        return PanelTransform.identity()

    panel_cx = left + panel_width / 2
    panel_cy = top + panel_height / 2
    image_cx = rendered_width / 2
    image_cy = rendered_height / 2

    # Scaling happens around the image center, so the center delta is
    # measured first and then scaled.
    return PanelTransform(
        scale=scale,
        translate_x=(image_cx - panel_cx) * scale,
        translate_y=(image_cy - panel_cy) * scale,
    )
