"""
Streamlit UI for Movie Search.
Two screens driven by the same controllers as the API:
- search screen (default): query box, result grid, Prev/Next pagination
- details screen (?id=<movie id>): poster, genres, rating, overview, trailer link

The last successful search is restored from the local cache when a session starts.

Run UI:                streamlit run streamlit_app.py
"""

# Event loop runner for the async controllers
import asyncio  # run one coroutine per user action
# Typing to make function signatures clearer
from typing import Optional  # indicates values can be None

# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives

# Console logging
from loguru import logger  # console logger

from moviefinder.config import Settings, load_settings  # env-based settings
from moviefinder.details_controller import DetailsController  # details screen state
from moviefinder.local_cache import JsonFileStore, SnapshotCache  # last-search persistence
from moviefinder.models import Status  # screen statuses
from moviefinder.routes import DETAIL_POSTER_PLACEHOLDER, poster_url  # image URLs
from moviefinder.search_controller import SearchController  # search screen state
from moviefinder.tmdb_client import TMDBClient  # remote API adapter

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="Movie Search", layout="wide")  # wide layout


# Cache settings and the HTTP adapter so they are built once per server process
@st.cache_resource(show_spinner=False)
def init_services():
	"""Create the settings and the TMDB adapter shared by all sessions."""
	settings = load_settings()  # read env and .env
	if not settings.api_key:
		logger.warning("[UI] TMDB_API_KEY is not set; remote calls will fail")
	return settings, TMDBClient(settings)


settings, adapter = init_services()  # shared services


def get_search_controller(settings: Settings) -> SearchController:
	"""One search controller per browser session, restored from the cache on first use."""
	if "search" not in st.session_state:
		controller = SearchController(adapter, SnapshotCache(JsonFileStore(settings.cache_path)))
		controller.restore()  # no network call
		st.session_state.search = controller  # keep across reruns
		st.session_state.query_input = controller.query  # seed the text box
	return st.session_state.search


def open_details(movie_id) -> None:
	st.query_params["id"] = str(movie_id)  # route: details screen


def go_back() -> None:
	st.query_params.pop("id", None)  # route: search screen
	st.session_state.pop("details", None)  # next visit fetches fresh


def render_search(controller: SearchController) -> None:
	"""Search screen: input, result grid and pagination row."""
	st.title("🎬 Search for Movies")  # main header
	st.caption("Enter a movie title to start your search and discover the latest movies in our collection.")

	# Editing the text invalidates the current results and the cached search
	st.text_input(
		"Movie title",
		key="query_input",
		placeholder="Search for a movie...",
		on_change=lambda: controller.set_query(st.session_state.query_input),
	)
	st.button("Find", type="primary", on_click=lambda: asyncio.run(controller.search()))  # triggers a search

	# Inline status line
	if controller.state.status == Status.LOADING:
		st.info("Loading...")
	elif controller.state.status == Status.ERROR:
		st.error(controller.state.message)

	# Result grid, five posters per row
	cols = st.columns(5)
	for i, movie in enumerate(controller.results):
		with cols[i % 5]:
			st.image(poster_url(settings.image_base_url, movie.poster_path, DETAIL_POSTER_PLACEHOLDER), width='stretch')
			st.button(movie.title, key=f"movie_{movie.id}", on_click=open_details, args=(movie.id,))  # link to details
			st.caption(movie.release_date or "")

	# Pagination row is absent when there is at most one page
	p = controller.pagination()
	if p.visible:
		c1, c2, c3 = st.columns([1, 2, 1])
		with c1:
			st.button(
				"Prev",
				disabled=not p.prev_enabled,
				on_click=lambda: asyncio.run(controller.go_to_page(controller.current_page - 1)),
			)
		with c2:
			st.write(f"Page {p.current_page} of {p.total_pages}")
		with c3:
			st.button(
				"Next",
				disabled=not p.next_enabled,
				on_click=lambda: asyncio.run(controller.go_to_page(controller.current_page + 1)),
			)


def render_details(movie_id: str) -> None:
	"""Details screen for `movie_id`, fetched once per visit."""
	st.button("Go Back", on_click=go_back)

	cached: Optional[tuple] = st.session_state.get("details")  # (movie_id, controller)
	if cached is None or cached[0] != movie_id:
		controller = DetailsController(adapter)
		with st.spinner("Loading movie details..."):
			asyncio.run(controller.load(movie_id))  # detail, then videos
		st.session_state.details = (movie_id, controller)
	else:
		controller = cached[1]

	if controller.state.status == Status.ERROR:
		st.error(controller.state.message)  # inline, the app stays usable
		return

	movie = controller.movie
	st.header("Movie Information")
	c1, c2 = st.columns([1, 2])  # image column + text column
	with c1:
		st.image(poster_url(settings.image_base_url, movie.poster_path, DETAIL_POSTER_PLACEHOLDER), width='stretch')
	with c2:
		st.markdown(f"**Movie Name :** {movie.title}")
		st.markdown(f"**Genres :** {', '.join(g.name for g in movie.genres) or 'N/A'}")
		st.markdown(f"**Release Date :** {movie.release_date or 'N/A'}")
		st.markdown(f"**Overview :** {movie.overview or 'N/A'}")
		st.markdown(f"**Rating :** {movie.vote_average or 'N/A'}")
		if controller.trailer_url:  # only when a YouTube trailer exists
			st.link_button("Watch Trailer", controller.trailer_url)


# Route on the `id` query parameter: present -> details, absent -> search
route_id = st.query_params.get("id")
if route_id:
	render_details(route_id)
else:
	render_search(get_search_controller(settings))
