"""Key/value storage backends.

The saved-target store only needs ``get(key)`` and ``set(key, value)``
on strings, the same surface as a browser's ``localStorage``.  Three
implementations are provided:

``MemoryStore``     plain dict, nothing survives the process
``JsonFileStore``   one JSON object in a file
``DatabaseStore``   rows in the SQLite database (``StorageEntry``)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from ..exceptions import ConfigurationError
from ..logger import setup_logger

logger = setup_logger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Dict-backed store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """All keys in a single JSON object on disk.

    The file is re-read on every ``get`` so external edits are seen; an
    unreadable or non-object file reads as empty.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning(f"Ignoring unreadable store {self._path}: {exc}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring store {self._path}: not a JSON object")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


class DatabaseStore:
    """Keys stored as ``StorageEntry`` rows."""

    def get(self, key: str) -> str | None:
        from ..database.db import get_session
        from ..database.models import StorageEntry

        with get_session() as db:
            entry = db.get(StorageEntry, key)
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        from ..database.db import get_session
        from ..database.models import StorageEntry

        with get_session() as db:
            entry = db.get(StorageEntry, key)
            if entry is None:
                db.add(StorageEntry(key=key, value=value))
            else:
                entry.value = value


def open_store(kind: str, json_path: Path | None = None) -> KeyValueStore:
    """Build the backend named by the ``storage_backend`` setting."""
    if kind == "memory":
        return MemoryStore()
    if kind == "json":
        if json_path is None:
            from ..settings import APP_SUPPORT_DIR
            json_path = APP_SUPPORT_DIR / "storage.json"
        return JsonFileStore(json_path)
    if kind == "database":
        from ..database.db import init_db
        init_db()
        return DatabaseStore()
    raise ConfigurationError(f"Unknown storage backend: {kind!r}")
