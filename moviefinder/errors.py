"""
Exceptions and user-facing error messages.
"""

from .models import ErrorKind


class MovieSearchError(Exception):
	"""Base class for errors raised inside the app."""


class FetchFailed(MovieSearchError):
	"""
	Any failure of a remote API call: connection error, timeout, HTTP error status,
	undecodable body or missing fields. Callers do not distinguish between them.
	"""


# Inline text shown for each error kind on the search screen
SEARCH_MESSAGES = {
	ErrorKind.EMPTY_QUERY: "Please enter a movie name.",
	ErrorKind.NO_RESULTS: "No movies found.",
	ErrorKind.FETCH_FAILED: "Failed to fetch movies.",
}

DETAILS_FETCH_FAILED_MESSAGE = "Failed to fetch movie details."
