# Overview: Persistence adapter; JSON snapshots of whole collections under fixed keys.

"""
Key-value persistence for the dashboard collections.

SNAPSHOT PERSISTENCE: every write serializes and stores the entire value
under its key. There is no diffing and no schema migration of stored JSON;
the last writer wins.

Two implementations share one interface:
- SqlKeyValueStore: rows of the kv_entries table (Flask-SQLAlchemy)
- MemoryKeyValueStore: a plain dict, for scripts and unit tests
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..extensions import db
from ..models import KeyValueEntry


logger = logging.getLogger(__name__)


class KeyValueStore:
    """Get/set JSON-serialized values by key."""

    def _read(self, key: str) -> str | None:
        raise NotImplementedError

    def _write(self, key: str, raw: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> list[str]:
        raise NotImplementedError

    def get_json(self, key: str, default: Any = None) -> Any:
        raw = self._read(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set_json(self, key: str, value: Any) -> None:
        raw = json.dumps(value)
        self._write(key, raw)
        logger.debug("Stored %s (%d bytes)", key, len(raw))

    def contains(self, key: str) -> bool:
        return self._read(key) is not None


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._data[key] = json.dumps(value)

    def _read(self, key: str) -> str | None:
        return self._data.get(key)

    def _write(self, key: str, raw: str) -> None:
        self._data[key] = raw

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class SqlKeyValueStore(KeyValueStore):
    """
    Values live in kv_entries, one row per key.

    Requires an application context. Each write commits immediately so a
    mutation is a single collection overwrite.
    """

    def _read(self, key: str) -> str | None:
        entry = db.session.get(KeyValueEntry, key)
        return entry.value_json if entry else None

    def _write(self, key: str, raw: str) -> None:
        entry = db.session.get(KeyValueEntry, key)
        if entry is None:
            entry = KeyValueEntry(key=key, value_json=raw)
            db.session.add(entry)
        else:
            entry.value_json = raw
        db.session.commit()

    def remove(self, key: str) -> None:
        entry = db.session.get(KeyValueEntry, key)
        if entry is not None:
            db.session.delete(entry)
            db.session.commit()

    def keys(self) -> list[str]:
        rows = db.session.query(KeyValueEntry.key).order_by(KeyValueEntry.key.asc()).all()
        return [row.key for row in rows]

    def entries(self) -> list[KeyValueEntry]:
        return db.session.query(KeyValueEntry).order_by(KeyValueEntry.key.asc()).all()
