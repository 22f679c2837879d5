"""Key-value stores and the yearly zone catalog cache built on them."""
from __future__ import annotations

import logging
import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Dict, List

from pydantic import ValidationError

from zonegrid.zones.schemas import YearlyCacheEntry

logger = logging.getLogger("zonegrid.cache")


class KeyValueStore(ABC):
    """Persisted mapping of calendar year to serialized payload."""

    @abstractmethod
    def get(self, key: int) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: int, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def keys(self) -> List[int]:
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Dict[int, str] | None = None) -> None:
        self._data: Dict[int, str] = dict(initial or {})

    def get(self, key: int) -> str | None:
        return self._data.get(key)

    def set(self, key: int, value: str) -> None:
        self._data[key] = value

    def keys(self) -> List[int]:
        return sorted(self._data)

    def clear(self) -> None:
        self._data.clear()


class SqliteKeyValueStore(KeyValueStore):
    """Single-table SQLite store; the connection is opened per call."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._connect()
        try:
            conn.execute(
                "CREATE TABLE IF NOT EXISTS zone_cache (year INTEGER PRIMARY KEY, payload TEXT NOT NULL)"
            )
            conn.commit()
        finally:
            conn.close()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.path)

    def get(self, key: int) -> str | None:
        conn = self._connect()
        try:
            row = conn.execute("SELECT payload FROM zone_cache WHERE year = ?", (key,)).fetchone()
        finally:
            conn.close()
        return row[0] if row else None

    def set(self, key: int, value: str) -> None:
        conn = self._connect()
        try:
            conn.execute(
                "INSERT OR REPLACE INTO zone_cache (year, payload) VALUES (?, ?)",
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()

    def keys(self) -> List[int]:
        conn = self._connect()
        try:
            rows = conn.execute("SELECT year FROM zone_cache ORDER BY year").fetchall()
        finally:
            conn.close()
        return [row[0] for row in rows]

    def clear(self) -> None:
        conn = self._connect()
        try:
            conn.execute("DELETE FROM zone_cache")
            conn.commit()
        finally:
            conn.close()


class ZoneCatalogCache:
    """Session cache of yearly catalog entries backed by a persisted store.

    Entries that fail validation on load invalidate the whole store rather
    than being repaired. Access is serialised by a lock.
    """

    def __init__(self, store: KeyValueStore | None = None) -> None:
        self.store = store or MemoryKeyValueStore()
        self._entries: Dict[int, YearlyCacheEntry] = {}
        self._lock = Lock()

    def get(self, year: int) -> YearlyCacheEntry | None:
        with self._lock:
            entry = self._entries.get(year)
            if entry is not None:
                return entry
            payload = self.store.get(year)
            if payload is None:
                return None
            try:
                entry = YearlyCacheEntry.model_validate_json(payload)
                if entry.year != year:
                    raise ValueError(f"entry for {entry.year} stored under {year}")
            except (ValidationError, ValueError) as exc:
                logger.warning("Discarding corrupted zone cache (year %s): %s", year, exc)
                self._clear_locked()
                return None
            self._entries[year] = entry
            return entry

    def put(self, entry: YearlyCacheEntry) -> None:
        with self._lock:
            self._entries[entry.year] = entry
            self.store.set(entry.year, entry.model_dump_json())

    def years(self) -> List[int]:
        with self._lock:
            return sorted(set(self._entries) | set(self.store.keys()))

    def clear(self) -> None:
        with self._lock:
            self._clear_locked()

    def _clear_locked(self) -> None:
        self._entries.clear()
        self.store.clear()
