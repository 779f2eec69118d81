"""
Route table and image URL helpers shared by the HTTP API and the UI.
"""

from typing import Optional

from .models import MovieId

SEARCH_ROUTE = "/"
DETAILS_ROUTE = "/details/{movie_id}"

# Shown in the result grid when a movie has no poster
POSTER_PLACEHOLDER = "/img/no-movie.png"
# Larger placeholder for the details screen
DETAIL_POSTER_PLACEHOLDER = "https://via.placeholder.com/500x750?text=No+Image+Available"


def details_path(movie_id: MovieId) -> str:
	"""Link from a search result to its details screen."""
	return DETAILS_ROUTE.format(movie_id=movie_id)


def poster_url(image_base_url: str, poster_path: Optional[str], placeholder: str = POSTER_PLACEHOLDER) -> str:
	"""Join the image CDN base and a poster path, or return `placeholder` when there is none."""
	if not poster_path:
		return placeholder
	return f"{image_base_url.rstrip('/')}/{poster_path.lstrip('/')}"
