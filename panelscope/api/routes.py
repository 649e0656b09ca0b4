"""
FastAPI routes.

POST   /comics                                   Upload a .cbz/.cdz/.zip/.pdf; returns the Comic
GET    /comics                                   Library, newest first
GET    /comics/{comic_id}                        Comic record (cover included, blob excluded)
DELETE /comics/{comic_id}                        Remove from the library
GET    /comics/{comic_id}/pages                  Re-extracted pages as data URIs
GET    /comics/{comic_id}/pages/{index}          One page
POST   /comics/{comic_id}/pages/{index}/panels   Run panel detection on a page
POST   /transform                                Viewport transform for a panel
POST   /api/reload-config                        Hot-reload .env
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Response, UploadFile

from panelscope.config import reload_settings, settings
from panelscope.exceptions import ExtractionError
from panelscope.library import store
from panelscope.library.importer import ACCEPTED_EXTENSIONS, import_comic, is_accepted_file
from panelscope.models import Comic, Page, Panel, PanelTransform, TransformRequest
from panelscope.pipeline.extraction import extract_pages
from panelscope.pipeline.panel_detection import analyze_page
from panelscope.viewer.transform import compute_transform

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Helpers ───────────────────────────────────────────────────────────────────

def _get_comic_or_404(comic_id: str) -> Comic:
    comic = store.load_comic(comic_id)
    if not comic:
        raise HTTPException(status_code=404, detail="Comic not found")
    return comic


async def _pages_or_422(comic: Comic) -> list[Page]:
    try:
        return await extract_pages(
            comic.blob, file_name=comic.file_name, content_type=comic.content_type
        )
    except ExtractionError as exc:
        logger.warning("Failed to extract pages for %s: %s", comic.comic_id, exc)
        raise HTTPException(status_code=422, detail=exc.message) from exc


def _page_or_404(pages: list[Page], index: int) -> Page:
    if not 0 <= index < len(pages):
        raise HTTPException(status_code=404, detail="Page not found")
    return pages[index]


# ── Endpoints ─────────────────────────────────────────────────────────────────

@router.post("/comics", status_code=201)
async def upload_comic(file: UploadFile) -> Comic:
    """
    Import a comic file into the library.

    The file is extracted once to validate it and derive the cover; pages are
    not stored.
    """
    file_name = file.filename or ""
    if not is_accepted_file(file_name):
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported file type. Accepted: {', '.join(ACCEPTED_EXTENSIONS)}",
        )

    blob = await file.read()
    try:
        return await import_comic(blob, file_name, content_type=file.content_type or "")
    except ExtractionError as exc:
        logger.warning("Import of %r failed: %s", file_name, exc)
        raise HTTPException(status_code=422, detail=exc.message) from exc


@router.get("/comics")
async def list_comics() -> list[Comic]:
    return store.list_comics()


@router.get("/comics/{comic_id}")
async def get_comic(comic_id: str) -> Comic:
    return _get_comic_or_404(comic_id)


@router.delete("/comics/{comic_id}", status_code=204)
async def delete_comic(comic_id: str) -> Response:
    if not store.delete_comic(comic_id):
        raise HTTPException(status_code=404, detail="Comic not found")
    return Response(status_code=204)


@router.get("/comics/{comic_id}/pages")
async def get_pages(comic_id: str) -> list[Page]:
    comic = _get_comic_or_404(comic_id)
    return await _pages_or_422(comic)


@router.get("/comics/{comic_id}/pages/{index}")
async def get_page(comic_id: str, index: int) -> Page:
    comic = _get_comic_or_404(comic_id)
    return _page_or_404(await _pages_or_422(comic), index)


@router.post("/comics/{comic_id}/pages/{index}/panels")
async def detect_page_panels(comic_id: str, index: int) -> list[Panel]:
    """
    Detect panels on one page.

    An empty list means detection failed or found nothing; the reader stays
    on the full page in that case.
    """
    comic = _get_comic_or_404(comic_id)
    page = _page_or_404(await _pages_or_422(comic), index)
    return await analyze_page(page.data)


@router.post("/transform")
async def transform(request: TransformRequest) -> PanelTransform:
    return compute_transform(
        request.panel,
        request.rendered_width,
        request.rendered_height,
        request.viewport_width,
        request.viewport_height,
        padding_factor=settings.panel_padding_factor,
        max_scale=settings.panel_max_scale,
    )


@router.post("/api/reload-config")
async def reload_config():
    """
    Hot-reload .env without restarting the server.

    Re-reads the .env file from disk and updates every setting in place so that
    all modules (which imported ``settings`` at startup) immediately see the
    new values.

    Returns a summary of the settings that changed.
    """
    old_model = settings.vision_model
    old_key_set = bool(settings.openrouter_api_key)

    updated = reload_settings()

    changed = {}
    if updated.vision_model != old_model:
        changed["vision_model"] = {"before": old_model, "after": updated.vision_model}
    if bool(updated.openrouter_api_key) != old_key_set:
        changed["openrouter_api_key"] = {
            "before": "set" if old_key_set else "(empty)",
            "after": "set" if updated.openrouter_api_key else "(empty)",
        }

    return {
        "ok": True,
        "vision_model": updated.vision_model,
        "panel_detection_enabled": bool(updated.openrouter_api_key),
        "changed": changed,
    }
