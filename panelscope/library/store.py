"""
Comic library.

Responsibilities:
- Persist a Comic record and its raw source blob under its comic_id.
- Load a single record (with or without the blob) and list the library.
- Delete a comic on request.

Pages are never stored: they are re-extracted from the blob whenever a comic
is opened.

Layout on disk:
  storage/
    {comic_id}/
      comic.json                     ← Comic record (blob excluded)
      source.bin                     ← raw uploaded file
"""

from __future__ import annotations

import logging
import re
import shutil
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError
from ulid import ULID

from panelscope.config import settings
from panelscope.models import Comic

logger = logging.getLogger(__name__)

# ULIDs and test ids alike; rejects path separators and ".."
_COMIC_ID = re.compile(r"[\w-]+")


# ── Helpers ───────────────────────────────────────────────────────────────────

def _is_valid_id(comic_id: str) -> bool:
    return bool(_COMIC_ID.fullmatch(comic_id))


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _storage_root() -> Path:
    return Path(settings.storage_root)


def _comic_dir(comic_id: str) -> Path:
    return _storage_root() / comic_id


def _record_path(comic_id: str) -> Path:
    return _comic_dir(comic_id) / "comic.json"


def _blob_path(comic_id: str) -> Path:
    return _comic_dir(comic_id) / "source.bin"


# ── Public API ────────────────────────────────────────────────────────────────

def new_comic_id() -> str:
    return str(ULID())


def create_comic(
    name: str,
    blob: bytes,
    file_name: str = "",
    content_type: str = "",
    cover: str | None = None,
    page_count: int = 0,
) -> Comic:
    """
    Build a new Comic with a fresh id and import timestamp.

    Returns the new comic (not yet persisted — call save_comic() after).
    """
    return Comic(
        comic_id=new_comic_id(),
        name=name,
        file_name=file_name,
        content_type=content_type,
        blob=blob,
        cover=cover,
        page_count=page_count,
        created_at=_now_iso(),
    )


def save_comic(comic: Comic) -> None:
    """Persist the Comic record and its source blob to disk."""
    directory = _comic_dir(comic.comic_id)
    directory.mkdir(parents=True, exist_ok=True)
    _blob_path(comic.comic_id).write_bytes(comic.blob)
    _record_path(comic.comic_id).write_text(comic.model_dump_json(indent=2))


def load_comic(comic_id: str, with_blob: bool = True) -> Comic | None:
    """Load a Comic from disk, or None if not found."""
    if not _is_valid_id(comic_id):
        return None
    path = _record_path(comic_id)
    if not path.exists():
        return None
    comic = Comic.model_validate_json(path.read_text())
    if with_blob:
        comic.blob = load_blob(comic_id) or b""
    return comic


def load_blob(comic_id: str) -> bytes | None:
    """Return the raw source bytes of a comic, or None if not found."""
    if not _is_valid_id(comic_id):
        return None
    path = _blob_path(comic_id)
    if not path.exists():
        return None
    return path.read_bytes()


def list_comics() -> list[Comic]:
    """All library records without blobs, newest import first."""
    root = _storage_root()
    if not root.exists():
        return []

    comics: list[Comic] = []
    for record_path in root.glob("*/comic.json"):
        try:
            comic = load_comic(record_path.parent.name, with_blob=False)
        except ValidationError as exc:
            logger.warning("Skipping unreadable comic record %s: %s", record_path, exc)
            continue
        if comic is not None:
            comics.append(comic)
    comics.sort(key=lambda c: c.created_at, reverse=True)
    return comics


def delete_comic(comic_id: str) -> bool:
    """Remove a comic and its blob. Returns False if it did not exist."""
    if not _is_valid_id(comic_id):
        return False
    directory = _comic_dir(comic_id)
    if not _record_path(comic_id).exists():
        return False
    shutil.rmtree(directory)
    logger.info("Deleted comic %s", comic_id)
    return True
