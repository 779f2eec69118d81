"""
Local cache module.
Keeps the last successful search in a small key-value store so the search screen
can resume where the user left off after a restart.
"""

import json  # storage format
from dataclasses import asdict  # record -> dict
from pathlib import Path  # filesystem-safe paths
from typing import Any, Dict, Optional, Union  # type hints

from loguru import logger  # console logger

from .models import MovieSummary, SearchSnapshot

# Single fixed key holding the serialized snapshot
STORAGE_KEY = "movieSearchResults"


class KeyValueStore:
	"""Minimal store interface: JSON-serializable values under string keys."""

	def get(self, key: str) -> Optional[Any]:
		raise NotImplementedError

	def set(self, key: str, value: Any) -> None:
		raise NotImplementedError

	def delete(self, key: str) -> None:
		raise NotImplementedError


class MemoryStore(KeyValueStore):
	"""Process-local store, mainly for tests."""

	def __init__(self, initial: Optional[Dict[str, Any]] = None):
		self.data: Dict[str, Any] = dict(initial or {})

	def get(self, key: str) -> Optional[Any]:
		return self.data.get(key)

	def set(self, key: str, value: Any) -> None:
		self.data[key] = value

	def delete(self, key: str) -> None:
		self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
	"""
	Durable store backed by one JSON object on disk.
	The whole file is rewritten on every change.
	"""

	def __init__(self, path: Union[str, Path]):
		self.path = Path(path)  # normalize path

	def get(self, key: str) -> Optional[Any]:
		return self._load().get(key)

	def set(self, key: str, value: Any) -> None:
		data = self._load()
		data[key] = value
		self._save(data)

	def delete(self, key: str) -> None:
		data = self._load()
		if key in data:
			del data[key]
			self._save(data)

	def _load(self) -> Dict[str, Any]:
		if not self.path.exists():
			return {}
		try:
			with open(self.path, 'r', encoding='utf-8') as f:
				data = json.load(f)
		except (OSError, ValueError) as e:  # JSONDecodeError and UnicodeDecodeError are ValueErrors
			logger.warning(f"[Cache] Ignoring unreadable store {self.path}: {e}")
			return {}
		return data if isinstance(data, dict) else {}

	def _save(self, data: Dict[str, Any]) -> None:
		self.path.parent.mkdir(parents=True, exist_ok=True)  # ensure directory exists
		tmp = self.path.with_suffix(self.path.suffix + '.tmp')
		with open(tmp, 'w', encoding='utf-8') as f:
			json.dump(data, f, ensure_ascii=False)
		tmp.replace(self.path)  # atomic swap so a crash never leaves half a file


class SnapshotCache:
	"""
	Reads and writes the single SearchSnapshot record.
	No expiry and no versioning: the record is overwritten on every successful fetch
	and removed when the query is edited.
	"""

	def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY):
		self.store = store
		self.key = key

	def read(self) -> Optional[SearchSnapshot]:
		"""Return the cached snapshot, or None if absent or undecodable."""
		raw = self.store.get(self.key)
		if raw is None:
			return None
		try:
			return snapshot_from_dict(raw)
		except (KeyError, TypeError, ValueError, AttributeError) as e:
			# A record we cannot decode is as good as no record
			logger.warning(f"[Cache] Dropping undecodable snapshot: {e}")
			self.store.delete(self.key)
			return None

	def write(self, snapshot: SearchSnapshot) -> None:
		self.store.set(self.key, snapshot_to_dict(snapshot))
		logger.debug(
			f"[Cache] Saved q='{snapshot.query}' page={snapshot.current_page}/{snapshot.total_pages} "
			f"({len(snapshot.results)} results)"
		)

	def clear(self) -> None:
		self.store.delete(self.key)
		logger.debug("[Cache] Cleared last search")


def snapshot_to_dict(snapshot: SearchSnapshot) -> Dict[str, Any]:
	"""Serialize using the record layout {query, results, currentPage, totalPages}."""
	return {
		'query': snapshot.query,
		'results': [asdict(m) for m in snapshot.results],  # API field names: id, title, release_date, poster_path
		'currentPage': snapshot.current_page,
		'totalPages': snapshot.total_pages,
	}


def snapshot_from_dict(data: Dict[str, Any]) -> SearchSnapshot:
	"""
	Inverse of snapshot_to_dict; missing page fields default to 1 and 0.
	Raises ValueError for a page position no fetch could have produced.
	"""
	current_page = int(data.get('currentPage') or 1)
	total_pages = int(data.get('totalPages') or 0)
	if total_pages < 0:
		raise ValueError(f"negative totalPages {total_pages}")
	if current_page < 1 or current_page > max(total_pages, 1):
		raise ValueError(f"currentPage {current_page} outside 1..{max(total_pages, 1)}")

	results = [
		MovieSummary(
			id=item['id'],
			title=item.get('title') or '',
			release_date=item.get('release_date'),
			poster_path=item.get('poster_path'),
		)
		for item in data['results']
	]
	return SearchSnapshot(
		query=str(data['query']),
		results=results,
		current_page=current_page,
		total_pages=total_pages,
	)
