"""
Tests for the FastAPI surface, wired to in-memory services.
Run: pytest tests/test_api.py
"""

import pytest
from fastapi.testclient import TestClient

from fakes import FakeAdapter, dune_pages, trailer_videos

import api
from moviefinder.config import Settings
from moviefinder.local_cache import STORAGE_KEY, MemoryStore, SnapshotCache
from moviefinder.search_controller import SearchController


@pytest.fixture
def wired(monkeypatch):
	"""Install fake services in the api module globals and return (client, adapter, store)."""
	adapter = FakeAdapter(pages=dune_pages(), videos={"1": trailer_videos()})
	store = MemoryStore()
	monkeypatch.setattr(api, "SETTINGS", Settings(image_base_url="https://img.test/w500"))
	monkeypatch.setattr(api, "ADAPTER", adapter)
	monkeypatch.setattr(api, "SEARCH", SearchController(adapter, SnapshotCache(store)))
	return TestClient(api.app), adapter, store


def test_health(wired):
	client, _, _ = wired
	body = client.get("/health").json()
	assert body["status"] == "ok"
	assert body["search_ready"] is True


def test_search_flow(wired):
	client, adapter, store = wired
	body = client.put("/query", json={"query": "dune"}).json()
	assert body["status"] == "idle"
	assert body["results"] == []

	body = client.post("/search").json()
	assert body["status"] == "loaded"
	assert body["query"] == "dune"
	assert body["results"][0] == {
		"id": "1",
		"title": "Dune",
		"release_date": "2021-10-22",
		"poster_url": "https://img.test/w500/p1.jpg",
		"details_url": "/details/1",
	}
	assert body["pagination"] == {
		"visible": True,
		"prev_enabled": False,
		"next_enabled": True,
		"current_page": 1,
		"total_pages": 5,
	}
	assert store.get(STORAGE_KEY)["query"] == "dune"

	body = client.post("/page/2").json()
	assert body["pagination"]["current_page"] == 2
	assert body["pagination"]["prev_enabled"] is True

	assert client.get("/").json() == body


def test_out_of_range_page_is_ignored(wired):
	client, adapter, _ = wired
	client.put("/query", json={"query": "dune"})
	before = client.post("/search").json()
	assert client.post("/page/6").json() == before
	assert client.post("/page/0").json() == before
	assert adapter.search_calls == [("dune", 1)]


def test_errors_are_inline(wired):
	client, adapter, _ = wired
	resp = client.post("/search")
	assert resp.status_code == 200
	assert resp.json()["error"] == "empty_query"
	assert resp.json()["message"] == "Please enter a movie name."

	client.put("/query", json={"query": "zzz"})
	assert client.post("/search").json()["message"] == "No movies found."

	adapter.fail_search = True
	client.put("/query", json={"query": "dune"})
	body = client.post("/search").json()
	assert body["error"] == "fetch_failed"
	assert body["message"] == "Failed to fetch movies."


def test_details_with_trailer(wired):
	client, adapter, _ = wired
	body = client.get("/details/1").json()
	assert body["status"] == "loaded"
	assert body["id"] == "1"
	assert body["title"] == "Dune"
	assert [g["name"] for g in body["genres"]] == ["Science Fiction", "Adventure"]
	assert body["poster_url"] == "https://img.test/w500/dune.jpg"
	assert body["trailer_url"] == "https://www.youtube.com/watch?v=abc"
	assert body["back_url"] == "/"
	assert adapter.detail_calls == ["1"]


def test_details_failure_is_inline(wired):
	client, adapter, _ = wired
	adapter.fail_detail = True
	resp = client.get("/details/42")
	assert resp.status_code == 200
	body = resp.json()
	assert body["status"] == "error"
	assert body["message"] == "Failed to fetch movie details."
	assert body["title"] is None
	assert adapter.video_calls == []


def test_details_video_failure_still_loaded(wired):
	client, adapter, _ = wired
	adapter.fail_videos = True
	body = client.get("/details/1").json()
	assert body["status"] == "loaded"
	assert body["trailer_url"] is None


def test_uninitialized_services_return_empty_screen(monkeypatch):
	monkeypatch.setattr(api, "SEARCH", None)
	body = TestClient(api.app).get("/").json()
	assert body["status"] == "idle"
	assert body["pagination"]["visible"] is False
