"""Named date-time targets the user can save and reload.

The whole collection lives under one key of a :class:`KeyValueStore` as
a JSON array::

    [{"id": 1760738400000, "name": "Launch", "date": "2026-12-31T23:59"}]

Every save and delete rewrites the full array.  Entries are never edited
in place.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator

from ..exceptions import InvalidTargetError
from ..logger import setup_logger
from ..timer.target import parse_target
from .backends import KeyValueStore

logger = setup_logger(__name__)

STORAGE_KEY = "countclock.savedTargets"


@dataclass(frozen=True)
class SavedTarget:
    id: int
    name: str
    date: str

    @property
    def target_time(self) -> datetime | None:
        return parse_target(self.date)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "date": self.date}

    @classmethod
    def from_dict(cls, data: object) -> SavedTarget | None:
        """Build from a persisted entry; None if the entry is malformed."""
        if not isinstance(data, dict):
            return None
        target_id = data.get("id")
        name = data.get("name")
        date = data.get("date")
        if isinstance(target_id, bool) or not isinstance(target_id, int):
            return None
        if not isinstance(name, str) or not isinstance(date, str):
            return None
        return cls(id=target_id, name=name, date=date)


class SavedTargetStore:
    """Collection of :class:`SavedTarget` backed by a key/value store."""

    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY) -> None:
        self._store = store
        self._key = key
        self._targets: list[SavedTarget] = self._read()

    # ── reading ───────────────────────────────────────────────────────────

    def _read(self) -> list[SavedTarget]:
        raw = self._store.get(self._key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning(f"Saved targets under {self._key!r} are not valid JSON")
            return []
        if not isinstance(data, list):
            logger.warning(f"Saved targets under {self._key!r} are not a list")
            return []

        targets: list[SavedTarget] = []
        for entry in data:
            target = SavedTarget.from_dict(entry)
            if target is None:
                logger.warning(f"Dropping malformed saved target {entry!r}")
                continue
            targets.append(target)
        return targets

    def _write(self) -> None:
        self._store.set(
            self._key, json.dumps([t.to_dict() for t in self._targets]),
        )

    # ── collection protocol ───────────────────────────────────────────────

    @property
    def targets(self) -> list[SavedTarget]:
        return list(self._targets)

    def __len__(self) -> int:
        return len(self._targets)

    def __iter__(self) -> Iterator[SavedTarget]:
        return iter(list(self._targets))

    def __contains__(self, target_id: object) -> bool:
        return any(t.id == target_id for t in self._targets)

    # ── operations ────────────────────────────────────────────────────────

    def _next_id(self) -> int:
        candidate = int(time.time() * 1000)
        used = {t.id for t in self._targets}
        while candidate in used:
            candidate += 1
        return candidate

    def save(self, name: str, absolute_time: datetime | str) -> SavedTarget:
        """Add a new target and persist the collection."""
        name = (name or "").strip()
        if isinstance(absolute_time, datetime):
            date = absolute_time.isoformat()
        else:
            date = (absolute_time or "").strip()
        if not name:
            raise InvalidTargetError("a saved target needs a name")
        if not date:
            raise InvalidTargetError("a saved target needs a date")

        target = SavedTarget(id=self._next_id(), name=name, date=date)
        self._targets.append(target)
        self._write()
        logger.info(f"Saved target {target.name!r} ({target.date})")
        return target

    def delete(self, target_id: int) -> bool:
        """Remove the target with *target_id*.  False if there was none."""
        remaining = [t for t in self._targets if t.id != target_id]
        if len(remaining) == len(self._targets):
            return False
        self._targets = remaining
        self._write()
        logger.info(f"Deleted saved target {target_id}")
        return True

    def load(self, target_id: int) -> SavedTarget | None:
        for target in self._targets:
            if target.id == target_id:
                return target
        return None
