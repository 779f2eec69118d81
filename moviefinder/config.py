"""
Runtime settings.
Values come from environment variables; a local .env file is loaded first if present.
"""

import os  # environment access
from dataclasses import dataclass  # immutable settings record
from pathlib import Path  # cache file location

from dotenv import load_dotenv  # read .env into the environment

DEFAULT_API_URL = "https://api.themoviedb.org/3"  # TMDB v3 root
DEFAULT_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"  # poster CDN
DEFAULT_LANGUAGE = "en-US"
DEFAULT_TIMEOUT_S = 10.0  # client-side timeout per round trip
DEFAULT_CACHE_PATH = ".cache/movie_search.json"  # where the last search is kept


@dataclass(frozen=True)
class Settings:
	api_key: str = ""
	api_url: str = DEFAULT_API_URL
	image_base_url: str = DEFAULT_IMAGE_BASE_URL
	language: str = DEFAULT_LANGUAGE
	timeout_s: float = DEFAULT_TIMEOUT_S
	cache_path: Path = Path(DEFAULT_CACHE_PATH)


def load_settings(env_file: str = ".env") -> Settings:
	"""Build Settings from the environment, loading `env_file` first when it exists."""
	load_dotenv(env_file)  # silently ignored if the file is missing
	return Settings(
		api_key=os.getenv("TMDB_API_KEY", ""),
		api_url=os.getenv("TMDB_API_URL", DEFAULT_API_URL).rstrip("/"),
		image_base_url=os.getenv("TMDB_IMAGE_BASE_URL", DEFAULT_IMAGE_BASE_URL).rstrip("/"),
		language=os.getenv("TMDB_LANGUAGE", DEFAULT_LANGUAGE),
		timeout_s=float(os.getenv("TMDB_TIMEOUT", DEFAULT_TIMEOUT_S)),
		cache_path=Path(os.getenv("MOVIE_SEARCH_CACHE", DEFAULT_CACHE_PATH)),
	)
