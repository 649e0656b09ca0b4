"""
Decide whether an uploaded blob is a PDF or an archive.

Checks run in priority order: declared content type, ``.pdf`` file name,
then the ``%PDF-`` magic number.  Anything else is treated as an archive;
if it is not one, the archive reader reports the error.
"""

from __future__ import annotations

from panelscope.models import SourceFormat

PDF_CONTENT_TYPE = "application/pdf"
PDF_SIGNATURE = b"%PDF-"


def detect_format(blob: bytes, file_name: str = "", content_type: str = "") -> SourceFormat:
    if content_type == PDF_CONTENT_TYPE:
        return SourceFormat.pdf
    if file_name.lower().endswith(".pdf"):
        return SourceFormat.pdf
    # A blob shorter than the signature simply fails this comparison
    if blob[: len(PDF_SIGNATURE)] == PDF_SIGNATURE:
        return SourceFormat.pdf
    return SourceFormat.archive
