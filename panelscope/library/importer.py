"""
Import an uploaded comic file into the library.

Extraction runs once at import time to prove the file is readable and to take
page 0 as the cover; the pages themselves are discarded and re-extracted from
the stored blob whenever the comic is opened.
"""

from __future__ import annotations

import logging
import re

from panelscope.exceptions import UnsupportedFormatError
from panelscope.library import store
from panelscope.models import Comic
from panelscope.pipeline.extraction import extract_pages

logger = logging.getLogger(__name__)

ACCEPTED_EXTENSIONS = (".cdz", ".cbz", ".zip", ".pdf")

_ACCEPTED_SUFFIX = re.compile(r"\.(cdz|cbz|zip|pdf)$", re.IGNORECASE)


def is_accepted_file(file_name: str) -> bool:
    return bool(_ACCEPTED_SUFFIX.search(file_name))


def display_name(file_name: str) -> str:
    """``"Saga #1.CBZ"`` → ``"Saga #1"``."""
    return _ACCEPTED_SUFFIX.sub("", file_name)


async def import_comic(blob: bytes, file_name: str, content_type: str = "") -> Comic:
    """
    Extract, derive the cover and persist a new Comic.

    Raises
    ------
    UnsupportedFormatError
        When *file_name* does not carry an accepted extension.
    ExtractionError
        When the file cannot be read; nothing is saved in that case.
    """
    if not is_accepted_file(file_name):
        raise UnsupportedFormatError(
            f"Unsupported file {file_name!r}; expected one of {', '.join(ACCEPTED_EXTENSIONS)}"
        )

    pages = await extract_pages(blob, file_name=file_name, content_type=content_type)
    cover = pages[0].data if pages else None

    comic = store.create_comic(
        name=display_name(file_name),
        blob=blob,
        file_name=file_name,
        content_type=content_type,
        cover=cover,
        page_count=len(pages),
    )
    store.save_comic(comic)
    logger.info("Imported %r as %s (%d pages)", file_name, comic.comic_id, len(pages))
    return comic
