from __future__ import annotations

from collections.abc import Collection

import pytest

from draftsync.core.contracts.exceptions import TransientCatalogError
from draftsync.core.contracts.resource import Resource
from draftsync.core.engine.cache import IdentifierCache
from draftsync.core.engine.matching import MatchingService
from tests.fakes.catalog import FakeCatalog


def make_service(catalog: FakeCatalog, cache: IdentifierCache, warnings: list[str] | None = None) -> MatchingService:
    sink = warnings if warnings is not None else []
    return MatchingService(catalog, cache, "categories", warn=sink.append)


@pytest.mark.asyncio
async def test_misses_are_fetched_in_one_bulk_call_and_cached(catalog: FakeCatalog) -> None:
    shoes = catalog.seed("categories", "shoes")
    cache = IdentifierCache()

    matched = await make_service(catalog, cache).match(["shoes", "hats"])

    assert matched == {"shoes": shoes, "hats": None}
    assert catalog.fetch_by_keys_calls == [("categories", ["shoes", "hats"])]
    assert cache.lookup_id("categories", "shoes") == shoes.id


@pytest.mark.asyncio
async def test_cached_keys_are_fetched_by_id(catalog: FakeCatalog) -> None:
    shoes = catalog.seed("categories", "shoes")
    cache = IdentifierCache()
    cache.add("categories", shoes.id, "shoes")

    matched = await make_service(catalog, cache).match(["shoes"])

    assert matched == {"shoes": shoes}
    assert catalog.fetch_by_id_calls == [("categories", shoes.id)]
    assert catalog.fetch_by_keys_calls == []


@pytest.mark.asyncio
async def test_stale_cache_hit_falls_back_to_bulk_fetch(catalog: FakeCatalog) -> None:
    shoes = catalog.seed("categories", "shoes")
    cache = IdentifierCache()
    cache.add("categories", "deleted-id", "shoes")

    matched = await make_service(catalog, cache).match(["shoes"])

    assert matched == {"shoes": shoes}
    assert catalog.fetch_by_keys_calls == [("categories", ["shoes"])]
    assert cache.lookup_id("categories", "shoes") == shoes.id


class _KeylessCatalog(FakeCatalog):
    async def fetch_by_keys(self, kind: str, keys: Collection[str]) -> list[Resource]:
        found = await super().fetch_by_keys(kind, keys)
        return [*found, Resource(id="anon", kind=kind, key=None, version=1)]


@pytest.mark.asyncio
async def test_remote_resource_without_key_warns_and_is_not_matched() -> None:
    catalog = _KeylessCatalog()
    warnings: list[str] = []
    cache = IdentifierCache()

    matched = await make_service(catalog, cache, warnings).match(["shoes"])

    assert matched == {"shoes": None}
    assert warnings == [
        "categories with id: 'anon' has no key set. Keys are required for resource matching."
    ]
    assert cache.lookup_key("anon") is None


@pytest.mark.asyncio
async def test_resolve_ids_uses_cache_first(catalog: FakeCatalog) -> None:
    widget = catalog.seed("product-types", "widget")
    cache = IdentifierCache()
    cache.add("product-types", "cached-id", "gadget")

    resolved = await make_service(catalog, cache).resolve_ids("product-types", ["gadget", "widget", "nope"])

    assert resolved == {"gadget": "cached-id", "widget": widget.id}
    assert catalog.fetch_by_keys_calls == [("product-types", ["widget", "nope"])]


@pytest.mark.asyncio
async def test_catalog_errors_propagate(catalog: FakeCatalog) -> None:
    catalog.fetch_by_keys_error = TransientCatalogError("down")

    with pytest.raises(TransientCatalogError):
        await make_service(catalog, IdentifierCache()).match(["shoes"])
