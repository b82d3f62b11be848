"""
Session persistence.
Key-value stores for opaque session snapshots, and the snapshot encoding itself.
"""

# Filesystem helpers for the JSON store
import os  # atomic replace
from pathlib import Path  # filesystem-safe paths
# Typing helpers
from typing import Dict, Optional, Protocol  # type hints

# Pydantic validates and serializes the session dataclasses directly
from pydantic import TypeAdapter, ValidationError  # dataclass (de)serialization

# Console logging
from loguru import logger  # console logger

from .errors import CorruptSnapshot  # unreadable snapshot
from .models import GameMode  # key component
from .session import SessionState  # what we persist

# All keys live under this namespace; there is one "latest" key per mode
KEY_NAMESPACE = 'cinedle'

_SESSION_ADAPTER = TypeAdapter(SessionState)


def session_key(mode: GameMode) -> str:
	return f"{KEY_NAMESPACE}:{GameMode(mode).value}"


def encode_session(session: SessionState) -> str:
	"""Serialize the full session (target, history and flags) to JSON."""
	return _SESSION_ADAPTER.dump_json(session).decode('utf-8')


def decode_session(snapshot: str) -> SessionState:
	"""Parse a snapshot back into a SessionState; raises CorruptSnapshot on any failure."""
	try:
		session = _SESSION_ADAPTER.validate_json(snapshot)
	except ValidationError as e:
		raise CorruptSnapshot(f"Snapshot could not be parsed: {e.error_count()} error(s)") from e
	# A session ends exactly one way
	if session.won and session.gave_up:
		raise CorruptSnapshot("Snapshot is marked both won and given up")
	return session


class KeyValueStore(Protocol):
	"""Where snapshots live. Values are opaque strings."""

	def read(self, key: str) -> Optional[str]:
		...

	def write(self, key: str, snapshot: str) -> None:
		...

	def remove(self, key: str) -> None:
		...


class MemoryStore:
	"""Process-local store, used for tests and ephemeral servers."""

	def __init__(self, initial: Optional[Dict[str, str]] = None):
		self.data: Dict[str, str] = dict(initial or {})

	def read(self, key: str) -> Optional[str]:
		return self.data.get(key)

	def write(self, key: str, snapshot: str) -> None:
		self.data[key] = snapshot

	def remove(self, key: str) -> None:
		self.data.pop(key, None)


class JsonFileStore:
	"""
	One JSON file per key under a directory.
	Writes go to a temporary file first and are moved into place, so a crash never leaves half a snapshot.
	"""

	def __init__(self, directory):
		self.directory = Path(directory)  # where snapshot files live
		self.directory.mkdir(parents=True, exist_ok=True)  # ensure exists
		logger.info(f"[Storage] Using snapshot directory {self.directory}")

	def _path(self, key: str) -> Path:
		# ':' is not valid in Windows file names
		return self.directory / f"{key.replace(':', '__')}.json"

	def read(self, key: str) -> Optional[str]:
		path = self._path(key)
		if not path.exists():
			return None
		try:
			return path.read_text(encoding='utf-8')
		except UnicodeDecodeError as e:  # truncated or foreign bytes on disk
			raise CorruptSnapshot(f"Snapshot file {path.name} is not valid UTF-8") from e

	def write(self, key: str, snapshot: str) -> None:
		path = self._path(key)
		tmp = path.with_suffix('.json.tmp')
		tmp.write_text(snapshot, encoding='utf-8')
		os.replace(tmp, path)
		logger.debug(f"[Storage] Wrote {key} ({len(snapshot)} bytes)")

	def remove(self, key: str) -> None:
		path = self._path(key)
		if path.exists():
			path.unlink()
			logger.debug(f"[Storage] Removed {key}")
