"""
In-memory stand-ins for the TMDB adapter used across the tests.
"""

import threading

from moviefinder.errors import FetchFailed
from moviefinder.models import Genre, MovieDetail, MovieSummary, SearchPage, Video


def movie(movie_id, title=None):
	return MovieSummary(id=movie_id, title=title or f"Movie {movie_id}", release_date="2021-10-22", poster_path=f"/p{movie_id}.jpg")


class FakeAdapter:
	"""
	Serves canned pages keyed by (query, page) and records every call.
	Unknown (query, page) pairs return an empty page.
	"""

	def __init__(self, pages=None, fail_search=False, details=None, videos=None, fail_detail=False, fail_videos=False):
		self.pages = pages or {}
		self.fail_search = fail_search
		self.details = details or {}
		self.videos = videos or {}
		self.fail_detail = fail_detail
		self.fail_videos = fail_videos
		self.gates = {}  # (query, page or None) -> threading.Event the search waits on
		self.search_calls = []
		self.detail_calls = []
		self.video_calls = []

	def search_movies(self, query, page=1):
		self.search_calls.append((query, page))
		gate = self.gates.get((query, page)) or self.gates.get((query, None))
		if gate is not None:
			gate.wait(5)
		if self.fail_search:
			raise FetchFailed("boom")
		return self.pages.get((query, page), SearchPage(results=[], total_pages=0))

	def get_movie_detail(self, movie_id):
		self.detail_calls.append(movie_id)
		if self.fail_detail:
			raise FetchFailed("detail down")
		if movie_id in self.details:
			return self.details[movie_id]
		return MovieDetail(
			id=movie_id,
			title="Dune",
			genres=[Genre(id=878, name="Science Fiction"), Genre(id=12, name="Adventure")],
			release_date="2021-09-15",
			overview="Paul Atreides travels to Arrakis.",
			vote_average=7.8,
			poster_path="/dune.jpg",
		)

	def get_movie_videos(self, movie_id):
		self.video_calls.append(movie_id)
		if self.fail_videos:
			raise FetchFailed("videos down")
		return self.videos.get(movie_id, [])

	def hold(self, query, page=None):
		"""Make searches for `query` (only `page` if given) block until the returned event is set."""
		gate = threading.Event()
		self.gates[(query, page)] = gate
		return gate


def dune_pages():
	return {
		("dune", 1): SearchPage(results=[movie(1, "Dune"), movie(2, "Dune: Part Two")], total_pages=5),
		("dune", 2): SearchPage(results=[movie(3, "Dune World")], total_pages=5),
		("dune", 5): SearchPage(results=[movie(9, "Dune Drifter")], total_pages=5),
		("alien", 1): SearchPage(results=[movie(20, "Alien")], total_pages=1),
	}


def trailer_videos():
	return [
		Video(site="Vimeo", type="Trailer", key="x"),
		Video(site="YouTube", type="Teaser", key="tease"),
		Video(site="YouTube", type="Trailer", key="abc"),
		Video(site="YouTube", type="Trailer", key="second"),
	]
