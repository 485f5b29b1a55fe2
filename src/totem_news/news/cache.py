"""Time-boxed memoization of news scan results.

Entries live in a pluggable string store under a versioned key namespace as
``{"timestamp": ..., "value": ...}`` JSON blobs. Staleness is checked only on
lookup; expired entries are never swept.
"""

from __future__ import annotations

import json
import logging
import os
import time
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Protocol

from totem_news.news.models import NewsResult

logger = logging.getLogger(__name__)

DEFAULT_TTL = 600.0
DEFAULT_NAMESPACE = "news_cache_v1:"


def cache_key(archetype: str, time_range: str, topics: Iterable[str]) -> str:
    """Compose the cache key for a scan.

    Topics are trimmed, lower-cased and stripped of empties but keep their
    input order, so ``["BTC", "ETH"]`` and ``["ETH", "BTC"]`` do not share
    an entry.
    """
    normalized = [t.strip().lower() for t in topics]
    return f"{archetype}:{time_range}:{'|'.join(t for t in normalized if t)}"


class CacheStore(Protocol):
    """Structural protocol for persistent string key-value stores."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Process-local store backed by a dict."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JSONFileStore:
    """Store every key in a single JSON document on disk.

    A missing or unreadable file behaves as an empty store.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(data))
        os.replace(tmp, self._path)

    def _load(self) -> dict[str, object]:
        try:
            data = json.loads(self._path.read_text())
        except (OSError, ValueError):
            return {}
        return data if isinstance(data, dict) else {}


class ResultCache:
    """Cache :class:`NewsResult` values for ``ttl`` seconds.

    ``clock`` returns the current time in seconds and is injectable so tests
    can control expiry.
    """

    def __init__(
        self,
        store: CacheStore | None = None,
        *,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> None:
        self._store: CacheStore = store if store is not None else MemoryStore()
        self._ttl = ttl
        self._clock = clock
        self._namespace = namespace

    def get(self, key: str) -> NewsResult | None:
        raw = self._store.get(self._namespace + key)
        if raw is None:
            return None
        try:
            entry = json.loads(raw)
            timestamp = float(entry["timestamp"])
            if self._clock() - timestamp > self._ttl:
                return None
            return NewsResult.model_validate(entry["value"])
        except (ValueError, TypeError, KeyError):
            logger.debug("Ignoring corrupt cache entry for %s", key)
            return None

    def put(self, key: str, value: NewsResult) -> None:
        """Store *value* under *key*; a failing store is logged, never raised."""
        entry = {"timestamp": self._clock(), "value": value.model_dump(mode="json", by_alias=True)}
        try:
            self._store.set(self._namespace + key, json.dumps(entry))
        except OSError as exc:
            logger.warning("Could not write news cache entry for %s: %s", key, exc)
