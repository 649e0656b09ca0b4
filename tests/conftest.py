"""Shared pytest fixtures."""

from __future__ import annotations

import io
import struct
import zipfile

import pytest


# Point storage at a temp dir so tests never touch real storage
@pytest.fixture(autouse=True)
def tmp_storage(tmp_path, monkeypatch):
    import panelscope.config as cfg

    monkeypatch.setattr(cfg.settings, "storage_root", str(tmp_path / "storage"))
    monkeypatch.setattr(cfg.settings, "openrouter_api_key", "")
    yield tmp_path / "storage"


def build_zip(entries: dict[str, bytes]) -> bytes:
    """Build an in-memory ZIP; names ending in "/" become directory entries."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, data in entries.items():
            if name.endswith("/"):
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, data)
    return buf.getvalue()


@pytest.fixture
def make_zip():
    return build_zip


def build_damaged_zip(name: str = "p1.jpg") -> bytes:
    """A deflated single-image archive whose compressed member data is garbled."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(name, b"panel artwork " * 2000)
    raw = bytearray(buf.getvalue())

    with zipfile.ZipFile(io.BytesIO(bytes(raw))) as zf:
        offset = zf.getinfo(name).header_offset
    # Local file header: 30 fixed bytes, then name and extra field
    name_len, extra_len = struct.unpack("<HH", raw[offset + 26:offset + 30])
    start = offset + 30 + name_len + extra_len
    for i in range(start, start + 8):
        raw[i] ^= 0xFF
    return bytes(raw)


@pytest.fixture
def damaged_zip():
    return build_damaged_zip()
