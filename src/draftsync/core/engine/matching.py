"""Draft-to-resource matching by key."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Collection

from draftsync.core.contracts.catalog import Catalog
from draftsync.core.contracts.resource import Resource
from draftsync.core.engine.cache import IdentifierCache

_LOG = logging.getLogger(__name__)


class MatchingService:
    """Resolves draft keys to existing resources, cache first.

    Keys with a cached id are fetched by id. Everything else, including stale cache
    hits, goes into a single bulk fetch by keys. Catalog errors propagate to the
    caller.
    """

    def __init__(
        self,
        catalog: Catalog,
        cache: IdentifierCache,
        kind: str,
        *,
        warn: Callable[[str], None],
        semaphore: asyncio.Semaphore | None = None,
    ) -> None:
        self._catalog = catalog
        self._cache = cache
        self._kind = kind
        self._warn = warn
        self._semaphore = semaphore or asyncio.Semaphore(1)

    async def match(self, keys: Collection[str]) -> dict[str, Resource | None]:
        matched: dict[str, Resource | None] = dict.fromkeys(keys)
        cached = {key: resource_id for key in keys if (resource_id := self._cache.lookup_id(self._kind, key))}

        if cached:
            fetched = await asyncio.gather(*(self._fetch_by_id(resource_id) for resource_id in cached.values()))
            for key, resource in zip(cached, fetched, strict=True):
                if resource is not None and resource.key == key:
                    matched[key] = resource
                else:
                    _LOG.debug("stale cache entry for %s '%s'", self._kind, key)

        misses = [key for key in keys if matched[key] is None]
        if misses:
            for resource in await self._fetch_by_keys(self._kind, misses):
                if resource.key in matched:
                    matched[resource.key] = resource
        return matched

    async def resolve_ids(self, kind: str, keys: Collection[str]) -> dict[str, str]:
        """Resolve *keys* of *kind* to ids; unknown keys are absent from the result."""
        resolved: dict[str, str] = {}
        misses: list[str] = []
        for key in dict.fromkeys(keys):
            resource_id = self._cache.lookup_id(kind, key)
            if resource_id is None:
                misses.append(key)
            else:
                resolved[key] = resource_id

        if misses:
            for resource in await self._fetch_by_keys(kind, misses):
                if resource.key is not None:
                    resolved[resource.key] = resource.id
        return resolved

    async def _fetch_by_id(self, resource_id: str) -> Resource | None:
        async with self._semaphore:
            resource = await self._catalog.fetch_by_id(self._kind, resource_id)
        if resource is not None and resource.key:
            self._cache.add(self._kind, resource.id, resource.key)
        return resource

    async def _fetch_by_keys(self, kind: str, keys: list[str]) -> list[Resource]:
        _LOG.debug("fetching %d %s resource(s) by key", len(keys), kind)
        async with self._semaphore:
            resources = await self._catalog.fetch_by_keys(kind, keys)

        keyed: list[Resource] = []
        keys_by_id: dict[str, str] = {}
        for resource in resources:
            if not resource.key:
                self._warn(
                    f"{kind} with id: '{resource.id}' has no key set. Keys are required for resource matching."
                )
                continue
            keys_by_id[resource.id] = resource.key
            keyed.append(resource)
        self._cache.add_all(kind, keys_by_id)
        return keyed
