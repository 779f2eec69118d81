"""
Search controller module.
Owns the search screen: query text, current result page, pagination and
loading/error state. Fetches pages through the endpoint adapter and keeps the
last successful page in the local cache so a restart resumes the same view.
"""

import asyncio  # run the blocking adapter off the event loop
from typing import List  # type hints

from loguru import logger  # console logger

from .errors import SEARCH_MESSAGES, FetchFailed  # inline texts and adapter failure
from .local_cache import SnapshotCache  # last-search persistence
from .models import ErrorKind, MovieSummary, Pagination, SearchSnapshot, UIState  # screen records

FIRST_PAGE = 1  # pages are 1-based


def pagination_for(current_page: int, total_pages: int) -> Pagination:
	"""Pagination row for a page pair: hidden for a single page, disabled at the edges."""
	return Pagination(
		visible=total_pages > 1,  # no row at all for zero or one page
		prev_enabled=current_page > FIRST_PAGE,  # Prev off on the first page
		next_enabled=current_page < total_pages,  # Next off on the last page
		current_page=current_page,
		total_pages=total_pages,
	)


class SearchController:
	"""
	State holder for the search screen.

	`adapter` must provide `search_movies(query, page) -> SearchPage`; it is called in a
	worker thread. Each fetch takes a generation number when it is dispatched; a
	response whose number is no longer the latest (a newer fetch or a query edit
	happened meanwhile) is dropped without touching state or cache.
	"""

	def __init__(self, adapter, cache: SnapshotCache):
		self.adapter = adapter  # endpoint adapter
		self.cache = cache  # last-search persistence
		self.query: str = ''  # text in the search box
		self.results: List[MovieSummary] = []  # movies of current_page
		self.current_page: int = FIRST_PAGE  # 1-based
		self.total_pages: int = 0  # 0 until a search succeeds
		self.state: UIState = UIState.idle()  # exactly one status at a time
		self._generation = 0  # bumped on every dispatch and every query edit

	def restore(self) -> bool:
		"""Load the cached snapshot, if any, without a network call. Returns True if restored."""
		snapshot = self.cache.read()  # None when absent or undecodable
		if snapshot is None:
			logger.debug("[Search] No cached search to restore")  # trace
			return False
		self.query = snapshot.query  # refill the search box
		self.results = list(snapshot.results)  # results of the cached page
		self.current_page = snapshot.current_page  # cached page position
		self.total_pages = snapshot.total_pages  # cached page count
		self.state = UIState.loaded()  # results are on screen
		logger.info(
			f"[Search] Restored q='{self.query}' page={self.current_page}/{self.total_pages} "
			f"({len(self.results)} results)"
		)
		return True

	def set_query(self, text: str) -> None:
		"""
		Replace the query text. An edited query invalidates everything tied to the old one:
		results, pagination, the cached snapshot and any fetch still in flight.
		"""
		self.query = text  # new search box text
		self.results = []  # old results belong to the old query
		self.current_page = FIRST_PAGE  # start over at page 1
		self.total_pages = 0  # unknown until the next search
		self.state = UIState.idle()  # leaves Loading/Loaded/Error alike
		self._generation += 1  # responses to earlier fetches are now stale
		self.cache.clear()  # no cross-query cache

	async def search(self) -> None:
		"""Fetch current_page for the current query."""
		if not self.query.strip():  # blank or whitespace-only
			self._fail(ErrorKind.EMPTY_QUERY)  # no network call
			return
		await self._fetch(self.current_page)  # one round trip

	async def go_to_page(self, page: int) -> None:
		"""Fetch another page of the current query; out-of-range pages are ignored."""
		if page < FIRST_PAGE or page > self.total_pages:  # outside 1..total_pages?
			logger.debug(f"[Search] Ignoring page {page} outside 1..{self.total_pages}")  # trace
			return  # no state change, no network call
		self.current_page = page  # a failed fetch can be retried via search()
		await self._fetch(page)  # same sequence as search()

	def pagination(self) -> Pagination:
		return pagination_for(self.current_page, self.total_pages)

	def snapshot(self) -> SearchSnapshot:
		return SearchSnapshot(
			query=self.query,
			results=list(self.results),
			current_page=self.current_page,
			total_pages=self.total_pages,
		)

	async def _fetch(self, page: int) -> None:
		"""Fetch (query, page) and apply the outcome unless it went stale meanwhile."""
		self._generation += 1  # newest dispatch
		token = self._generation  # identifies this dispatch
		query = self.query  # the literal query at dispatch time
		self.state = UIState.loading()  # show the spinner
		logger.info(f"[Search] Fetching q='{query}' page={page}")  # log intent

		try:
			result = await asyncio.to_thread(self.adapter.search_movies, query, page)  # blocking call in a worker
		except FetchFailed as e:
			if self._is_stale(token):  # a newer dispatch owns the screen
				return
			logger.warning(f"[Search] Fetch failed for q='{query}' page={page}: {e}")  # failure log
			self._fail(ErrorKind.FETCH_FAILED)  # prior results stay on screen
			return

		if self._is_stale(token):  # superseded while in flight
			return

		if not result.results:  # valid query, nothing on this page
			logger.info(f"[Search] No results for q='{query}' page={page}")  # summary
			self._fail(ErrorKind.NO_RESULTS)  # nothing persisted for an empty page
			return

		self.results = list(result.results)  # replace the visible page
		self.total_pages = result.total_pages  # page count may change between pages
		self.current_page = page  # page the results belong to
		self.state = UIState.loaded()  # done
		self._persist(SearchSnapshot(
			query=query,
			results=list(result.results),
			current_page=page,
			total_pages=result.total_pages,
		))
		logger.info(f"[Search] Loaded {len(self.results)} results, page {page} of {self.total_pages}")  # summary

	def _persist(self, snapshot: SearchSnapshot) -> None:
		"""Write the snapshot; a storage failure is logged and the screen keeps its results."""
		try:
			self.cache.write(snapshot)  # overwrite the single slot
		except OSError as e:
			logger.warning(f"[Search] Could not save last search: {e}")  # persistence is best-effort

	def _is_stale(self, token: int) -> bool:
		if token != self._generation:  # a newer fetch or query edit happened
			logger.debug(f"[Search] Dropping stale response (token {token}, latest {self._generation})")
			return True
		return False

	def _fail(self, kind: ErrorKind) -> None:
		self.state = UIState.failed(kind, SEARCH_MESSAGES[kind])  # inline message
