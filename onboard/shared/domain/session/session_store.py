"""Session persistence behind a small get/set interface.

The rest of the application only ever sees :class:`SessionStore`; the core
writes the token and user id together through :func:`save_session`.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

TOKEN_KEY = "authToken"
USER_ID_KEY = "user_id"


@dataclass(frozen=True, slots=True)
class SessionRecord:
    """Credentials persisted after a successful login."""

    token: str
    user_id: str


@runtime_checkable
class SessionStore(Protocol):
    """Process-wide, string-only key/value storage."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def set_many(self, items: Mapping[str, str]) -> None:
        ...


class MemorySessionStore:
    """In-process store, lost on exit."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def set_many(self, items: Mapping[str, str]) -> None:
        self._data.update({key: str(value) for key, value in items.items()})

    def snapshot(self) -> Dict[str, str]:
        return dict(self._data)


class FileSessionStore:
    """JSON file store that survives restarts.

    Every write replaces the file through a temp file and ``os.replace`` so a
    reader never sees a token without its user id.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._data: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return {}
        if not isinstance(raw, dict):
            logger.warning(f"Ignoring session file {self.path}: expected an object")
            return {}
        return {str(key): str(value) for key, value in raw.items()}

    def _flush(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".session-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, items: Mapping[str, str]) -> None:
        data = {**self._data, **{key: str(value) for key, value in items.items()}}
        # Memory only changes once the file is written
        self._flush(data)
        self._data = data


def save_session(store: SessionStore, record: SessionRecord) -> None:
    """Persist token and user id in one write."""
    store.set_many({TOKEN_KEY: record.token, USER_ID_KEY: record.user_id})
    logger.info(f"Session stored for user_id={record.user_id}")


def load_session(store: SessionStore) -> Optional[SessionRecord]:
    """Read the persisted session, or None when either half is missing."""
    token = store.get(TOKEN_KEY)
    user_id = store.get(USER_ID_KEY)
    if not token or not user_id:
        return None
    return SessionRecord(token=token, user_id=user_id)


def create_session_store(backend: str, path: Path | str | None = None) -> SessionStore:
    """Build a store for the configured backend.

    Raises:
        ValueError: If the backend is unknown or the file backend has no path
    """
    if backend == "memory":
        return MemorySessionStore()
    if backend == "file":
        if not path:
            raise ValueError("File session backend requires a path")
        return FileSessionStore(path)
    raise ValueError(f"Unsupported session backend: {backend}. Supported: ['memory', 'file']")
