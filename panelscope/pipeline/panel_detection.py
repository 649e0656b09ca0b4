"""
Stage 2 — Panel detection.

Sends a rendered page (as a data URI) to the vision model and asks it to
return panel bounding boxes in reading order as structured JSON.

Expected model response (parsed):
{
  "panels": [
    {"order": 1, "xmin": 0, "ymin": 0, "xmax": 50, "ymax": 48, "description": "..."},
    ...
  ]
}

Coordinates are percentages (0–100) of the page.  Any failure — missing API
key, HTTP error, unparseable output — yields an empty list so the reader
falls back to full-page reading.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from panelscope.config import settings
from panelscope.models import Panel
from panelscope.pipeline.openrouter_client import chat_completion, extract_json

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = """\
You are a comic panel analyser. Given an image of a comic book page, identify
every individual panel and return them in logical reading order (usually
left-to-right, top-to-bottom, but respect the comic's flow).

Respond ONLY with a JSON object of the form {"panels": [...]}. Each element
must have these fields:
  order        – integer, 1-based reading order
  xmin         – left edge as a percentage (0-100) of the page width
  ymin         – top edge as a percentage (0-100) of the page height
  xmax         – right edge as a percentage (0-100) of the page width
  ymax         – bottom edge as a percentage (0-100) of the page height
  description  – optional short description of the panel content

No markdown, no explanation — raw JSON only.
"""

_USER_PROMPT = (
    "Analyze this comic book page. Identify all individual panels. Return "
    "their bounding box coordinates as percentages (0-100)."
)


def parse_panels(raw: str) -> list[Panel]:
    """
    Turn raw model output into Panel objects.

    Keeps the model's array order and assigns positional ids
    (``panel-0``, ``panel-1``, ...).

    Raises
    ------
    ValueError
        When the output is not JSON or an item lacks a required field.
    """
    data = extract_json(raw, context="panel_detection")
    items = data.get("panels", []) if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise ValueError(f"Expected a list of panels, got {type(items).__name__}")

    panels: list[Panel] = []
    for idx, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValueError(f"Panel {idx} is not an object: {item!r}")
        try:
            panel = Panel(id=f"panel-{idx}", **{k: v for k, v in item.items() if k != "id"})
        except ValidationError as exc:
            raise ValueError(f"Panel {idx} is invalid: {exc}") from exc
        if not panel.is_well_formed:
            # Kept as-is; the transform falls back to the full page for it
            logger.warning("Panel %s has a malformed box: %s", panel.id, item)
        panels.append(panel)
    return panels


async def analyze_page(page_data_uri: str) -> list[Panel]:
    """
    Detect panels on a single page image.

    Returns an empty list when detection is unavailable or fails.
    """
    if not settings.openrouter_api_key:
        logger.warning("Panel detection skipped: OPENROUTER_API_KEY is not set")
        return []

    messages = [
        {"role": "system", "content": _SYSTEM_PROMPT},
        {
            "role": "user",
            "content": [
                {"type": "image_url", "image_url": {"url": page_data_uri}},
                {"type": "text", "text": _USER_PROMPT},
            ],
        },
    ]

    try:
        result = await chat_completion(
            settings.vision_model,
            messages,
            temperature=settings.vision_temperature,
            response_format={"type": "json_object"},
        )
        raw = result["choices"][0]["message"]["content"] or ""
        panels = parse_panels(raw)
    except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as exc:
        logger.warning("Panel detection failed: %s", exc)
        return []

    logger.info("Detected %d panel(s)", len(panels))
    return panels
