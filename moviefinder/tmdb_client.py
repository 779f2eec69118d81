"""
TMDB endpoint adapter.
Maps domain calls (search a page, load a movie, list its videos) onto the remote REST API
and normalizes the responses into model records.

Every failure collapses into FetchFailed. Each call is exactly one round trip: no retries.
"""

from typing import Dict, List, Optional  # type hints

# HTTP client for the remote API
import requests  # blocking HTTP with timeouts

from loguru import logger  # console logger

from .config import Settings  # api url/key/timeout
from .errors import FetchFailed  # single failure signal
from .models import Genre, MovieDetail, MovieId, MovieSummary, SearchPage, Video

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v="


class TMDBClient:
	"""
	Thin wrapper around the three TMDB calls the app needs.
	A requests.Session can be injected (tests pass a stub).
	"""

	def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
		self.settings = settings  # endpoint configuration
		self.session = session or requests.Session()  # plain session, no retry adapter mounted

	def search_movies(self, query: str, page: int = 1) -> SearchPage:
		"""Return one page of title matches for `query`."""
		data = self._get("/search/movie", {"query": query, "page": page})
		try:
			results = [self._parse_summary(item) for item in data["results"]]
			total_pages = int(data.get("total_pages") or 0)
		except (KeyError, TypeError, ValueError) as e:
			raise FetchFailed(f"Malformed search response: {e}") from e
		logger.debug(f"[TMDB] search q='{query}' page={page} -> {len(results)} results, {total_pages} pages")
		return SearchPage(results=results, total_pages=total_pages)

	def get_movie_detail(self, movie_id: MovieId) -> MovieDetail:
		"""Return the full record of one movie."""
		data = self._get(f"/movie/{movie_id}")
		try:
			return self._parse_detail(data)
		except (KeyError, TypeError, ValueError) as e:
			raise FetchFailed(f"Malformed detail response for {movie_id}: {e}") from e

	def get_movie_videos(self, movie_id: MovieId) -> List[Video]:
		"""Return the videos attached to one movie, in API order."""
		data = self._get(f"/movie/{movie_id}/videos")
		try:
			return [
				Video(site=str(v.get("site", "")), type=str(v.get("type", "")), key=str(v.get("key", "")))
				for v in data["results"]
			]
		except (KeyError, TypeError, AttributeError) as e:
			raise FetchFailed(f"Malformed videos response for {movie_id}: {e}") from e

	def _get(self, path: str, params: Optional[Dict] = None) -> Dict:
		"""Perform one GET and return the decoded JSON object, or raise FetchFailed."""
		url = f"{self.settings.api_url}{path}"
		query = {"api_key": self.settings.api_key, "language": self.settings.language}
		query.update(params or {})
		try:
			resp = self.session.get(url, params=query, timeout=self.settings.timeout_s)
			resp.raise_for_status()  # 4xx/5xx become errors too
			data = resp.json()
		except (requests.RequestException, ValueError) as e:
			# Network, timeout, HTTP status and JSON errors are all the same to callers
			logger.warning(f"[TMDB] GET {path} failed: {e}")
			raise FetchFailed(str(e)) from e
		if not isinstance(data, dict):
			raise FetchFailed(f"Unexpected payload type from {path}: {type(data).__name__}")
		return data

	@staticmethod
	def _parse_summary(data: Dict) -> MovieSummary:
		return MovieSummary(
			id=data["id"],
			title=data.get("title") or "",
			release_date=data.get("release_date") or None,
			poster_path=data.get("poster_path") or None,
		)

	@staticmethod
	def _parse_detail(data: Dict) -> MovieDetail:
		vote = data.get("vote_average")
		return MovieDetail(
			id=data["id"],
			title=data.get("title") or "",
			genres=[Genre(id=g["id"], name=g["name"]) for g in (data.get("genres") or [])],
			release_date=data.get("release_date") or None,
			overview=data.get("overview") or None,
			vote_average=float(vote) if vote is not None else None,
			poster_path=data.get("poster_path") or None,
		)


def find_trailer_url(videos: List[Video]) -> Optional[str]:
	"""
	Watch URL of the first YouTube trailer in `videos`, or None.
	Other sites and other video types are never used as a fallback.
	"""
	for video in videos:
		if video.site == "YouTube" and video.type == "Trailer":
			return f"{YOUTUBE_WATCH_URL}{video.key}"
	return None
