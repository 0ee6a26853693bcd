"""Process-wide identifier cache."""

from __future__ import annotations

import threading
from collections.abc import Mapping


class IdentifierCache:
    """Maps remote resource ids to keys, with a per-kind reverse lookup.

    The cache never fetches; a miss is the caller's cue to query the catalog.
    Entries only leave through ``invalidate``. Safe to share between concurrent
    pipelines and threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._keys_by_id: dict[str, str] = {}
        self._ids_by_key: dict[tuple[str, str], str] = {}

    def lookup_key(self, resource_id: str) -> str | None:
        with self._lock:
            return self._keys_by_id.get(resource_id)

    def lookup_id(self, kind: str, key: str) -> str | None:
        with self._lock:
            return self._ids_by_key.get((kind, key))

    def add(self, kind: str, resource_id: str, key: str) -> None:
        with self._lock:
            self._put(kind, resource_id, key)

    def add_all(self, kind: str, keys_by_id: Mapping[str, str]) -> None:
        with self._lock:
            for resource_id, key in keys_by_id.items():
                self._put(kind, resource_id, key)

    def invalidate(self) -> None:
        with self._lock:
            self._keys_by_id.clear()
            self._ids_by_key.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys_by_id)

    def _put(self, kind: str, resource_id: str, key: str) -> None:
        self._keys_by_id[resource_id] = key
        self._ids_by_key[(kind, key)] = resource_id
