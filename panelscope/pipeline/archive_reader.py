"""
Stage 1a — Archive to pages.

Reads a ZIP-family archive (.cbz, .cdz, .zip) held in memory and returns its
image entries as ``Page`` objects in natural reading order.  Entry bytes are
passed through untouched, wrapped in a data URI whose mime type comes from
the entry's extension.
"""

from __future__ import annotations

import io
import logging
import re
import zipfile
import zlib

from panelscope.exceptions import EmptyArchiveError, UnsupportedFormatError
from panelscope.models import Page
from panelscope.pipeline.data_uri import mime_type_for, to_data_uri
from panelscope.pipeline.natural_sort import natural_key

logger = logging.getLogger(__name__)

IMAGE_ENTRY = re.compile(r"\.(jpe?g|png|webp|gif)$", re.IGNORECASE)


def _image_entries(zf: zipfile.ZipFile) -> list[zipfile.ZipInfo]:
    entries = [
        info
        for info in zf.infolist()
        if not info.is_dir() and IMAGE_ENTRY.search(info.filename)
    ]
    entries.sort(key=lambda info: natural_key(info.filename))
    return entries


def extract_archive(blob: bytes) -> list[Page]:
    """
    Extract every image entry of an in-memory archive.

    Raises
    ------
    UnsupportedFormatError
        The blob is not a readable archive (or a member fails to decompress).
    EmptyArchiveError
        The archive holds no image entries.
    """
    try:
        with zipfile.ZipFile(io.BytesIO(blob)) as zf:
            entries = _image_entries(zf)
            if not entries:
                raise EmptyArchiveError()

            pages = [
                Page(
                    index=idx,
                    file_name=info.filename,
                    data=to_data_uri(zf.read(info), mime_type_for(info.filename)),
                )
                for idx, info in enumerate(entries)
            ]
    except (zipfile.BadZipFile, RuntimeError, NotImplementedError, zlib.error, EOFError) as exc:
        # RuntimeError: encrypted member; NotImplementedError: unknown compression;
        # zlib.error and EOFError: damaged or truncated member data
        logger.warning("Archive could not be read: %s", exc)
        raise UnsupportedFormatError(f"File is not a readable archive: {exc}") from exc

    logger.info("Extracted %d page(s) from archive", len(pages))
    return pages
