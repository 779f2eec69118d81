"""
Details controller module.
Loads one movie for the details screen, then looks up its trailer.
The trailer is best-effort: failing to get it never fails the screen.
"""

import asyncio  # run the blocking adapter off the event loop
from typing import Optional  # type hints

from loguru import logger  # console logger

from .errors import DETAILS_FETCH_FAILED_MESSAGE, FetchFailed  # inline text and adapter failure
from .models import ErrorKind, MovieDetail, MovieId, UIState  # screen records
from .tmdb_client import find_trailer_url  # YouTube trailer rule


class DetailsController:
	"""
	State holder for the details screen.
	`adapter` must provide `get_movie_detail(id)` and `get_movie_videos(id)`.
	Nothing here is persisted; a new visit means a new load.
	"""

	def __init__(self, adapter):
		self.adapter = adapter  # endpoint adapter
		self.movie: Optional[MovieDetail] = None  # set once the detail fetch succeeds
		self.trailer_url: Optional[str] = None  # YouTube watch URL, if any
		self.state: UIState = UIState.idle()  # exactly one status at a time

	async def load(self, movie_id: MovieId) -> None:
		"""Fetch the movie record, then its videos; both calls are sequential."""
		self.movie = None  # forget the previous visit
		self.trailer_url = None  # same for its trailer
		self.state = UIState.loading()  # show the spinner
		logger.info(f"[Details] Loading movie {movie_id}")  # log intent

		try:
			movie = await asyncio.to_thread(self.adapter.get_movie_detail, movie_id)  # id forwarded verbatim
		except FetchFailed as e:
			logger.warning(f"[Details] Fetch failed for movie {movie_id}: {e}")  # failure log
			self.state = UIState.failed(ErrorKind.FETCH_FAILED, DETAILS_FETCH_FAILED_MESSAGE)  # inline message
			return  # no video fetch without a movie
		self.movie = movie  # main record is in

		try:
			videos = await asyncio.to_thread(self.adapter.get_movie_videos, movie_id)  # second, dependent call
			self.trailer_url = find_trailer_url(videos)  # None when no YouTube trailer
		except FetchFailed as e:
			logger.warning(f"[Details] No trailer for movie {movie_id}, videos fetch failed: {e}")  # swallowed

		self.state = UIState.loaded()  # loaded with or without trailer
		logger.info(f"[Details] Loaded '{movie.title}' (trailer: {'yes' if self.trailer_url else 'no'})")  # summary
