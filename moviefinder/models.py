"""
Data models for the Movie Search app.
Defines the records exchanged with the remote API, the persisted search snapshot,
and the screen state shared by both controllers.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Enum for the closed set of screen statuses and error kinds
from enum import Enum  # named constants
# Import typing helpers for precise and self-documenting types
from typing import List, Optional, Union  # lists, optional values, id types

# TMDB ids are integers, but ids taken from a route are forwarded verbatim as strings
MovieId = Union[int, str]


@dataclass(frozen=True)
class MovieSummary:
	"""
	One row of a search result page.
	Immutable once received; owned by the search snapshot.
	"""
	id: MovieId  # unique identifier from the remote API
	title: str  # display title
	release_date: Optional[str] = None  # "YYYY-MM-DD" when known
	poster_path: Optional[str] = None  # image path relative to the image CDN


@dataclass(frozen=True)
class Genre:
	id: MovieId
	name: str


@dataclass(frozen=True)
class MovieDetail:
	"""
	Full record of a single movie as shown on the details screen.
	Never persisted; fetched fresh on every visit.
	"""
	id: MovieId  # unique identifier
	title: str  # display title
	genres: List[Genre] = field(default_factory=list)  # ordered as the API returns them
	release_date: Optional[str] = None  # release date when known
	overview: Optional[str] = None  # synopsis
	vote_average: Optional[float] = None  # average rating on a 0-10 scale
	poster_path: Optional[str] = None  # image path relative to the image CDN


@dataclass(frozen=True)
class Video:
	site: str  # hosting site, e.g. "YouTube"
	type: str  # "Trailer", "Teaser", "Clip", ...
	key: str  # site-specific video key


@dataclass(frozen=True)
class SearchPage:
	"""Normalized response of one search call."""
	results: List[MovieSummary]  # movies on the requested page
	total_pages: int  # number of pages the remote API reports for the query


@dataclass
class SearchSnapshot:
	"""
	The single persisted record of the last successful search.
	`results` always belongs to (query, current_page) at the time it was fetched.
	"""
	query: str  # query text the results were fetched for
	results: List[MovieSummary]  # results of current_page
	current_page: int = 1  # 1-based page number
	total_pages: int = 0  # total pages reported by the remote API


class Status(str, Enum):
	IDLE = 'idle'
	LOADING = 'loading'
	LOADED = 'loaded'
	ERROR = 'error'


class ErrorKind(str, Enum):
	"""User-visible failure kinds. None of them is fatal."""
	EMPTY_QUERY = 'empty_query'  # search attempted with blank input
	NO_RESULTS = 'no_results'  # valid query, zero matches
	FETCH_FAILED = 'fetch_failed'  # any network or parse failure


@dataclass(frozen=True)
class UIState:
	"""
	Screen state of a controller: exactly one status is active at a time.
	`error` is set only when status is ERROR.
	"""
	status: Status = Status.IDLE
	error: Optional[ErrorKind] = None
	message: Optional[str] = None  # inline text shown to the user

	@classmethod
	def idle(cls) -> 'UIState':
		return cls(Status.IDLE)

	@classmethod
	def loading(cls) -> 'UIState':
		return cls(Status.LOADING)

	@classmethod
	def loaded(cls) -> 'UIState':
		return cls(Status.LOADED)

	@classmethod
	def failed(cls, kind: ErrorKind, message: str) -> 'UIState':
		return cls(Status.ERROR, error=kind, message=message)


@dataclass(frozen=True)
class Pagination:
	"""What the pagination row shows for a (current_page, total_pages) pair."""
	visible: bool  # hidden entirely when there is at most one page
	prev_enabled: bool  # False on the first page
	next_enabled: bool  # False on the last page
	current_page: int
	total_pages: int
