"""
FastAPI server exposing the movie search screens.
Endpoints:
- GET /health: basic health check
- GET /: current search screen state (query, results, pagination, status)
- PUT /query: replace the query text (clears results and the cached search)
- POST /search: fetch the current page for the current query
- POST /page/{page}: fetch another page of the current query
- GET /details/{movie_id}: movie details plus trailer link, fetched fresh

Startup restores the last successful search from the local cache, so the search
screen resumes where it was left without calling TMDB.
Failures are reported inline in the response body, never as HTTP errors.
"""

# Import standard libraries for timing
import time  # measure startup latency
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for request/response models
from fastapi import FastAPI  # FastAPI primitives
from pydantic import BaseModel  # schema definitions

# Import our internal modules for settings, remote access and screen state
from moviefinder.config import Settings, load_settings  # env-based settings
from moviefinder.details_controller import DetailsController  # details screen
from moviefinder.local_cache import JsonFileStore, SnapshotCache  # last-search persistence
from moviefinder.models import MovieSummary, UIState  # domain records
from moviefinder.routes import DETAIL_POSTER_PLACEHOLDER, DETAILS_ROUTE, SEARCH_ROUTE, details_path, poster_url
from moviefinder.search_controller import SearchController  # search screen
from moviefinder.tmdb_client import TMDBClient  # remote API adapter

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Search API", version="1.0.0")  # web app

# Globals that hold the shared services and measured startup time
SETTINGS: Optional[Settings] = None  # runtime configuration
ADAPTER = None  # endpoint adapter shared by both screens
SEARCH: Optional[SearchController] = None  # single search screen, like one browser tab
STARTUP_TIME_S: float = 0.0  # measures how long startup took


# Pydantic model describing one movie in the result grid
class MovieOut(BaseModel):
	id: str  # identifier, as used in the details route
	title: str  # display title
	release_date: Optional[str] = None  # release date if known
	poster_url: str  # poster or placeholder image
	details_url: str  # link to the details screen


class PaginationOut(BaseModel):
	visible: bool  # False when there is at most one page
	prev_enabled: bool  # False on the first page
	next_enabled: bool  # False on the last page
	current_page: int
	total_pages: int


# Pydantic model for the whole search screen
class SearchStateOut(BaseModel):
	query: str  # text in the search box
	status: str  # idle | loading | loaded | error
	error: Optional[str] = None  # error kind when status is error
	message: Optional[str] = None  # inline error text
	results: List[MovieOut]  # movies on the current page
	pagination: PaginationOut  # pagination row


class QueryIn(BaseModel):
	query: str  # new search box text


class GenreOut(BaseModel):
	id: str
	name: str


# Pydantic model for the details screen
class DetailsOut(BaseModel):
	status: str  # loaded | error
	error: Optional[str] = None  # error kind when status is error
	message: Optional[str] = None  # inline error text
	id: str  # movie id from the route
	title: Optional[str] = None
	genres: List[GenreOut] = []
	release_date: Optional[str] = None
	overview: Optional[str] = None
	vote_average: Optional[float] = None
	poster_url: Optional[str] = None
	trailer_url: Optional[str] = None  # YouTube trailer if one exists
	back_url: str = SEARCH_ROUTE  # link back to the search screen


def _image_base() -> str:
	return SETTINGS.image_base_url if SETTINGS is not None else Settings().image_base_url


def _movie_out(m: MovieSummary) -> MovieOut:
	return MovieOut(
		id=str(m.id),
		title=m.title,
		release_date=m.release_date,
		poster_url=poster_url(_image_base(), m.poster_path),
		details_url=details_path(m.id),
	)


def _state_fields(state: UIState) -> dict:
	return {
		"status": state.status.value,
		"error": state.error.value if state.error else None,
		"message": state.message,
	}


def _search_state_out(controller: SearchController) -> SearchStateOut:
	"""Convert the controller state into the response schema."""
	p = controller.pagination()  # pagination view model
	return SearchStateOut(
		query=controller.query,
		results=[_movie_out(m) for m in controller.results],
		pagination=PaginationOut(
			visible=p.visible,
			prev_enabled=p.prev_enabled,
			next_enabled=p.next_enabled,
			current_page=p.current_page,
			total_pages=p.total_pages,
		),
		**_state_fields(controller.state),
	)


def _idle_state_out() -> SearchStateOut:
	"""Empty screen returned while services are not initialized."""
	return SearchStateOut(
		query="",
		status="idle",
		results=[],
		pagination=PaginationOut(visible=False, prev_enabled=False, next_enabled=False, current_page=1, total_pages=0),
	)


# FastAPI startup hook to initialize the services once
@app.on_event("startup")
async def startup_event():
	"""Build adapter and controllers, then restore the last search from the cache."""
	global SETTINGS, ADAPTER, SEARCH, STARTUP_TIME_S  # refer to module-level globals
	if SEARCH is not None:  # already wired (e.g. by tests)
		return
	start = time.time()  # start timer for startup latency

	SETTINGS = load_settings()  # read env and .env
	if not SETTINGS.api_key:
		logger.warning("[API] TMDB_API_KEY is not set; remote calls will fail")  # config hint

	ADAPTER = TMDBClient(SETTINGS)  # one HTTP session for the process
	cache = SnapshotCache(JsonFileStore(SETTINGS.cache_path))  # durable last-search slot
	SEARCH = SearchController(ADAPTER, cache)  # search screen state
	restored = SEARCH.restore()  # no network call

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	mode = 'Restored last search' if restored else 'No cached search'  # mode string
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s. {mode}.")  # summary log


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"search_ready": SEARCH is not None,  # True if services initialized
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


@app.get(SEARCH_ROUTE, response_model=SearchStateOut)
async def search_screen():
	"""Return the search screen as it currently stands."""
	if SEARCH is None:  # services must be ready to serve
		logger.warning("[API] Search screen requested but services not initialized")  # guard log
		return _idle_state_out()  # return empty
	return _search_state_out(SEARCH)


@app.put("/query", response_model=SearchStateOut)
async def set_query(body: QueryIn):
	"""Replace the query text; results, pagination and the cached search are cleared."""
	if SEARCH is None:
		logger.warning("[API] Query edit requested but services not initialized")
		return _idle_state_out()
	logger.debug(f"[API] /query q='{body.query}'")  # debug log of input
	SEARCH.set_query(body.query)
	return _search_state_out(SEARCH)


@app.post("/search", response_model=SearchStateOut)
async def run_search():
	"""Fetch the current page for the current query."""
	if SEARCH is None:
		logger.warning("[API] Search requested but services not initialized")
		return _idle_state_out()
	start = time.time()  # start timer
	await SEARCH.search()  # delegate to the controller
	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /search served status={SEARCH.state.status.value} in {elapsed_ms:.2f} ms")  # summary
	return _search_state_out(SEARCH)


@app.post("/page/{page}", response_model=SearchStateOut)
async def change_page(page: int):
	"""Fetch another page; pages outside 1..total_pages leave the screen unchanged."""
	if SEARCH is None:
		logger.warning("[API] Page change requested but services not initialized")
		return _idle_state_out()
	await SEARCH.go_to_page(page)
	return _search_state_out(SEARCH)


@app.get(DETAILS_ROUTE, response_model=DetailsOut)
async def details_screen(movie_id: str):
	"""Load the details screen for `movie_id`; the id is forwarded verbatim to TMDB."""
	if ADAPTER is None:
		logger.warning("[API] Details requested but services not initialized")
		return DetailsOut(id=movie_id, status="idle")

	controller = DetailsController(ADAPTER)  # fresh state on every visit
	await controller.load(movie_id)
	movie = controller.movie  # None when the detail fetch failed
	if movie is None:
		return DetailsOut(id=movie_id, **_state_fields(controller.state))

	return DetailsOut(
		id=movie_id,
		title=movie.title,
		genres=[GenreOut(id=str(g.id), name=g.name) for g in movie.genres],
		release_date=movie.release_date,
		overview=movie.overview,
		vote_average=movie.vote_average,
		poster_url=poster_url(_image_base(), movie.poster_path, DETAIL_POSTER_PLACEHOLDER),
		trailer_url=controller.trailer_url,
		**_state_fields(controller.state),
	)
