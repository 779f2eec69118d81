"""
Tests for DetailsController: detail load, best-effort trailer lookup, failures.
Run: pytest tests/test_details_controller.py
"""

import asyncio

from fakes import FakeAdapter, trailer_videos

from moviefinder.details_controller import DetailsController
from moviefinder.models import ErrorKind, Status, Video


def test_load_sets_movie_and_youtube_trailer():
	adapter = FakeAdapter(videos={"438631": trailer_videos()})
	controller = DetailsController(adapter)
	asyncio.run(controller.load("438631"))

	assert controller.state.status == Status.LOADED
	assert controller.movie.title == "Dune"
	assert [g.name for g in controller.movie.genres] == ["Science Fiction", "Adventure"]
	assert controller.trailer_url == "https://www.youtube.com/watch?v=abc"
	# id forwarded verbatim to both calls, detail first
	assert adapter.detail_calls == ["438631"]
	assert adapter.video_calls == ["438631"]


def test_no_matching_video_leaves_trailer_absent():
	adapter = FakeAdapter(videos={7: [Video(site="YouTube", type="Clip", key="c"), Video(site="Vimeo", type="Trailer", key="v")]})
	controller = DetailsController(adapter)
	asyncio.run(controller.load(7))
	assert controller.state.status == Status.LOADED
	assert controller.trailer_url is None


def test_video_failure_is_swallowed():
	adapter = FakeAdapter(fail_videos=True)
	controller = DetailsController(adapter)
	asyncio.run(controller.load(1))

	assert controller.state.status == Status.LOADED
	assert controller.state.error is None
	assert controller.movie is not None
	assert controller.trailer_url is None


def test_detail_failure_skips_video_fetch():
	adapter = FakeAdapter(fail_detail=True)
	controller = DetailsController(adapter)
	asyncio.run(controller.load(1))

	assert controller.state.status == Status.ERROR
	assert controller.state.error == ErrorKind.FETCH_FAILED
	assert controller.state.message == "Failed to fetch movie details."
	assert controller.movie is None
	assert adapter.video_calls == []


def test_reload_starts_fresh():
	adapter = FakeAdapter(videos={1: trailer_videos()})
	controller = DetailsController(adapter)
	asyncio.run(controller.load(1))
	assert controller.trailer_url is not None

	adapter.fail_detail = True
	asyncio.run(controller.load(2))
	assert controller.movie is None
	assert controller.trailer_url is None
	assert adapter.detail_calls == [1, 2]
