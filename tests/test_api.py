"""
API integration tests.

Uses FastAPI's TestClient (sync) so no real HTTP calls or OpenRouter
calls are made — panel detection is mocked out.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from panelscope.main import app
from panelscope.models import Panel

client = TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def comic_zip(make_zip) -> bytes:
    return make_zip({
        "page10.jpg": b"ten",
        "page2.jpg": b"two",
        "page1.jpg": b"one",
        "info.txt": b"not a page",
    })


def _upload(blob: bytes, name: str = "Saga.cbz", content_type: str = "application/zip"):
    return client.post("/comics", files={"file": (name, blob, content_type)})


def test_upload_new_comic(comic_zip):
    response = _upload(comic_zip)
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Saga"
    assert data["page_count"] == 3
    assert data["cover"] == "data:image/jpeg;base64,b25l"
    assert "blob" not in data


def test_upload_unaccepted_extension_returns_415(comic_zip):
    response = _upload(comic_zip, name="Saga.cbr")
    assert response.status_code == 415


def test_upload_corrupt_archive_returns_422():
    response = _upload(b"this is not a zip", name="broken.cbz")
    assert response.status_code == 422
    assert "archive" in response.json()["detail"].lower()


def test_upload_damaged_archive_returns_422(damaged_zip):
    response = _upload(damaged_zip, name="damaged.cbz")
    assert response.status_code == 422
    assert "archive" in response.json()["detail"].lower()


def test_upload_empty_archive_returns_422(make_zip):
    response = _upload(make_zip({"notes.txt": b"x"}), name="empty.zip")
    assert response.status_code == 422
    assert response.json()["detail"] == "Archive contains no image files."


def test_library_lists_and_deletes(comic_zip):
    comic_id = _upload(comic_zip).json()["comic_id"]

    listing = client.get("/comics")
    assert listing.status_code == 200
    assert [c["comic_id"] for c in listing.json()] == [comic_id]

    assert client.get(f"/comics/{comic_id}").json()["name"] == "Saga"
    assert client.delete(f"/comics/{comic_id}").status_code == 204
    assert client.get(f"/comics/{comic_id}").status_code == 404
    assert client.delete(f"/comics/{comic_id}").status_code == 404


def test_library_listing_survives_a_corrupt_record(comic_zip, tmp_storage):
    comic_id = _upload(comic_zip).json()["comic_id"]
    (tmp_storage / "broken").mkdir()
    (tmp_storage / "broken" / "comic.json").write_text("{not json")

    listing = client.get("/comics")
    assert listing.status_code == 200
    assert [c["comic_id"] for c in listing.json()] == [comic_id]


def test_comic_not_found():
    assert client.get("/comics/doesnotexist").status_code == 404
    assert client.get("/comics/doesnotexist/pages").status_code == 404


def test_pages_are_reextracted_in_natural_order(comic_zip):
    comic_id = _upload(comic_zip).json()["comic_id"]

    first = client.get(f"/comics/{comic_id}/pages")
    second = client.get(f"/comics/{comic_id}/pages")
    assert first.status_code == 200
    pages = first.json()
    assert [p["file_name"] for p in pages] == ["page1.jpg", "page2.jpg", "page10.jpg"]
    assert [p["index"] for p in pages] == [0, 1, 2]
    assert first.json() == second.json()


def test_single_page_and_out_of_range(comic_zip):
    comic_id = _upload(comic_zip).json()["comic_id"]

    page = client.get(f"/comics/{comic_id}/pages/2")
    assert page.status_code == 200
    assert page.json()["file_name"] == "page10.jpg"
    assert client.get(f"/comics/{comic_id}/pages/3").status_code == 404
    assert client.get(f"/comics/{comic_id}/pages/-1").status_code == 404


def test_detect_panels_for_page(comic_zip):
    comic_id = _upload(comic_zip).json()["comic_id"]
    panels = [Panel(id="panel-0", order=1, xmin=0, ymin=0, xmax=50, ymax=50)]

    with patch("panelscope.api.routes.analyze_page", new_callable=AsyncMock, return_value=panels) as mock_analyze:
        response = client.post(f"/comics/{comic_id}/pages/1/panels")

    assert response.status_code == 200
    assert response.json()[0]["id"] == "panel-0"
    mock_analyze.assert_awaited_once_with("data:image/jpeg;base64,dHdv")  # base64("two")


def test_detect_panels_without_key_returns_empty_list(comic_zip):
    comic_id = _upload(comic_zip).json()["comic_id"]
    response = client.post(f"/comics/{comic_id}/pages/0/panels")
    assert response.status_code == 200
    assert response.json() == []


def test_transform_endpoint():
    response = client.post("/transform", json={
        "panel": {"id": "panel-0", "order": 1, "xmin": 0, "ymin": 0, "xmax": 50, "ymax": 50},
        "rendered_width": 1000,
        "rendered_height": 1000,
        "viewport_width": 800,
        "viewport_height": 600,
    })
    assert response.status_code == 200
    data = response.json()
    assert data["scale"] == pytest.approx(1.02)
    assert data["translate_x"] == pytest.approx(255)
    assert data["translate_y"] == pytest.approx(255)


def test_transform_full_page_is_identity():
    response = client.post("/transform", json={"viewport_width": 800, "viewport_height": 600})
    assert response.json() == {"scale": 1.0, "translate_x": 0.0, "translate_y": 0.0}


def test_transform_malformed_box_is_identity():
    response = client.post("/transform", json={
        "panel": {"id": "panel-0", "order": 1, "xmin": 60, "ymin": 0, "xmax": 40, "ymax": 50},
        "rendered_width": 1000,
        "rendered_height": 1000,
        "viewport_width": 800,
        "viewport_height": 600,
    })
    assert response.json() == {"scale": 1.0, "translate_x": 0.0, "translate_y": 0.0}
