"""
Panelscope data models.

All models are plain Pydantic v2 models so they can be serialised to/from
the JSON records stored on disk and returned by the API unchanged.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# ── Enumerations ──────────────────────────────────────────────────────────────

class SourceFormat(str, Enum):
    pdf = "pdf"
    archive = "archive"                     # cbz / cdz / zip


class ReaderMode(str, Enum):
    manual = "manual"
    smart = "smart"


# ── Page ──────────────────────────────────────────────────────────────────────

class Page(BaseModel):
    index: int                              # 0-based, contiguous across the comic
    file_name: str                          # archive entry name or "page-NNN.jpg"
    data: str                               # data:<mime>;base64,<payload>


# ── Panel ─────────────────────────────────────────────────────────────────────

class Panel(BaseModel):
    """Panel bounding box as percentages (0–100) of the page dimensions."""
    id: str                                 # "panel-{array position}"
    order: int                              # 1-based reading order
    xmin: float
    ymin: float
    xmax: float
    ymax: float
    description: Optional[str] = None

    @property
    def is_well_formed(self) -> bool:
        coords = (self.xmin, self.ymin, self.xmax, self.ymax)
        return (
            all(0 <= c <= 100 for c in coords)
            and self.xmin < self.xmax
            and self.ymin < self.ymax
        )


class PanelTransform(BaseModel):
    """Scale and pixel translation applied around the image's own center."""
    scale: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0

    @classmethod
    def identity(cls) -> PanelTransform:
        return cls()


# ── Comic (library record) ────────────────────────────────────────────────────

class Comic(BaseModel):
    comic_id: str                           # ULID
    name: str                               # display name, extension stripped
    file_name: str = ""                     # original upload name
    content_type: str = ""
    # Raw source bytes; stored next to the JSON record, never inside it
    blob: bytes = Field(default=b"", exclude=True, repr=False)
    cover: Optional[str] = None             # data URI copied from page 0
    page_count: int = 0
    created_at: str = ""                    # ISO-8601 UTC


# ── API payloads ──────────────────────────────────────────────────────────────

class TransformRequest(BaseModel):
    panel: Optional[Panel] = None
    rendered_width: Optional[float] = None  # None until the image is measured
    rendered_height: Optional[float] = None
    viewport_width: float
    viewport_height: float


# ── Manual view state (frontend uses this; not persisted) ────────────────────

class ManualViewState(BaseModel):
    scale: float = 1.0
    x: float = 0.0                          # pan offset in pixels
    y: float = 0.0

    def reset(self) -> None:
        self.scale = 1.0
        self.x = 0.0
        self.y = 0.0
