"""
Single entry point for turning a comic file into pages.

Detects the format, then runs the matching extractor on a worker thread so
the event loop is not blocked while archives are read or PDFs rendered.
Nothing is cached: the same blob is re-extracted on every call and always
yields identical pages.
"""

from __future__ import annotations

import asyncio
import logging

from panelscope.models import Page, SourceFormat
from panelscope.pipeline.archive_reader import extract_archive
from panelscope.pipeline.format_detect import detect_format
from panelscope.pipeline.pdf_rasterizer import extract_pdf

logger = logging.getLogger(__name__)


async def extract_pages(
    blob: bytes,
    file_name: str = "",
    content_type: str = "",
) -> list[Page]:
    """
    Extract the ordered page list of a comic file.

    Parameters
    ----------
    blob:
        Raw bytes of the uploaded file.
    file_name, content_type:
        Optional upload metadata used only for the PDF fast-path.

    Raises
    ------
    ExtractionError
        Any subclass, for the whole file; no partial results.
    """
    source_format = detect_format(blob, file_name=file_name, content_type=content_type)
    logger.debug("Extracting %r as %s (%d bytes)", file_name, source_format.value, len(blob))

    if source_format == SourceFormat.pdf:
        return await asyncio.to_thread(extract_pdf, blob)
    return await asyncio.to_thread(extract_archive, blob)
