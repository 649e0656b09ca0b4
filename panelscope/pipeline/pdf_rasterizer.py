"""
Stage 1b — PDF to pages.

Renders every page of an in-memory PDF to a JPEG data URI:

  page 1 → Page(index=0, file_name="page-001.jpg", data="data:image/jpeg;base64,...")

The blob is written once to a temp file that every poppler call reads from.
Pages are rendered one at a time in document order so only one bitmap is
alive at once.  A page that fails to render aborts the whole extraction;
callers never receive a partial page list.
"""

from __future__ import annotations

import io
import logging
import tempfile
from pathlib import Path

from pdf2image import convert_from_path, pdfinfo_from_path
from pdf2image.exceptions import PDFPageCountError, PDFSyntaxError
from PIL import Image

from panelscope.config import settings
from panelscope.exceptions import CorruptPdfError
from panelscope.models import Page
from panelscope.pipeline.data_uri import to_data_uri

logger = logging.getLogger(__name__)

# PDF user space is 72 units per inch
PDF_POINTS_PER_INCH = 72


def _render_dpi() -> int:
    return round(PDF_POINTS_PER_INCH * settings.pdf_render_scale)


def _page_count(pdf_path: str) -> int:
    try:
        info = pdfinfo_from_path(pdf_path)
        return int(info["Pages"])
    except (PDFPageCountError, PDFSyntaxError, KeyError, ValueError) as exc:
        raise CorruptPdfError(f"Could not read PDF page count: {exc}") from exc


def _encode_jpeg(image: Image.Image) -> str:
    buf = io.BytesIO()
    image.convert("RGB").save(buf, format="JPEG", quality=settings.pdf_jpeg_quality)
    return to_data_uri(buf.getvalue(), "image/jpeg")


def _render_page(pdf_path: str, page_number: int, dpi: int) -> Image.Image:
    """Render a single 1-based page; raises CorruptPdfError on any failure."""
    try:
        images = convert_from_path(
            pdf_path,
            dpi=dpi,
            first_page=page_number,
            last_page=page_number,
            thread_count=1,
            strict=True,   # raise on pdftoppm syntax errors
        )
    except (PDFPageCountError, PDFSyntaxError) as exc:
        raise CorruptPdfError(f"Page {page_number} failed to render: {exc}") from exc

    if len(images) != 1:
        raise CorruptPdfError(f"Page {page_number} failed to render.")
    return images[0]


def extract_pdf(blob: bytes) -> list[Page]:
    """
    Rasterize every page of *blob* at the configured render scale.

    Raises
    ------
    CorruptPdfError
        When the document cannot be parsed, has no pages, or any page fails
        to render.
    """
    with tempfile.TemporaryDirectory(prefix="panelscope-pdf-") as tmp_dir:
        pdf_path = Path(tmp_dir) / "source.pdf"
        pdf_path.write_bytes(blob)
        return _rasterize(str(pdf_path))


def _rasterize(pdf_path: str) -> list[Page]:
    total_pages = _page_count(pdf_path)
    if total_pages < 1:
        raise CorruptPdfError("PDF has no pages.")

    dpi = _render_dpi()
    pages: list[Page] = []

    for page_number in range(1, total_pages + 1):
        image = _render_page(pdf_path, page_number, dpi)
        try:
            data = _encode_jpeg(image)
        except OSError as exc:
            raise CorruptPdfError(f"Page {page_number} could not be encoded: {exc}") from exc
        finally:
            image.close()

        pages.append(
            Page(
                index=page_number - 1,
                file_name=f"page-{page_number:03d}.jpg",
                data=data,
            )
        )

    logger.info("Rendered %d PDF page(s) at %d DPI", len(pages), dpi)
    return pages
