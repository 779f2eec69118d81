"""
Show or clear the cached last search.

This script:
1) Loads settings (env and .env) to find the cache file
2) Prints the cached query, page and results
3) With --clear, removes the cached search instead

Usage:
    python -m scripts.inspect_cache
    python -m scripts.inspect_cache --clear
"""

import sys  # command-line flags

from loguru import logger  # console logging

from moviefinder.config import load_settings  # cache location
from moviefinder.local_cache import JsonFileStore, SnapshotCache  # last-search persistence


def main(argv=None):
	argv = sys.argv[1:] if argv is None else argv
	settings = load_settings()
	cache = SnapshotCache(JsonFileStore(settings.cache_path))
	logger.info(f"Cache file: {settings.cache_path}")

	if "--clear" in argv:
		cache.clear()
		logger.info("[OK] Cached search cleared.")
		return 0

	snapshot = cache.read()
	if snapshot is None:
		logger.info("No cached search.")
		return 0

	logger.info(f"Query: '{snapshot.query}' | page {snapshot.current_page} of {snapshot.total_pages}")
	for i, m in enumerate(snapshot.results, 1):
		logger.info(f"  {i}. [{m.id}] {m.title} ({m.release_date or 'N/A'})")
	return 0


if __name__ == '__main__':
	sys.exit(main())  # invoke inspector
