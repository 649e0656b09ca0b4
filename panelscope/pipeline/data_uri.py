"""Helpers for ``data:<mime>;base64,<payload>`` image strings."""

from __future__ import annotations

import base64
import binascii
import re

_MIME_BY_EXTENSION = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
    "gif": "image/gif",
}

DEFAULT_MIME_TYPE = "image/jpeg"

_DATA_URI = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.*)$", re.DOTALL)


def mime_type_for(file_name: str) -> str:
    """Derive an image mime type from a file extension (JPEG when unknown)."""
    _, dot, ext = file_name.rpartition(".")
    if not dot:
        return DEFAULT_MIME_TYPE
    return _MIME_BY_EXTENSION.get(ext.lower(), DEFAULT_MIME_TYPE)


def to_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def split_data_uri(uri: str) -> tuple[str, bytes]:
    """
    Return ``(mime_type, raw_bytes)`` for a base64 data URI.

    Raises
    ------
    ValueError
        When *uri* is not a base64 data URI or the payload does not decode.
    """
    match = _DATA_URI.match(uri)
    if not match:
        raise ValueError(f"Not a base64 data URI: {uri[:40]!r}")
    try:
        payload = base64.b64decode(match.group("payload"), validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 payload in data URI: {exc}") from exc
    return match.group("mime"), payload
