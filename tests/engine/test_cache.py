from __future__ import annotations

import threading

from draftsync.core.engine.cache import IdentifierCache


def test_add_supports_lookup_both_ways() -> None:
    cache = IdentifierCache()

    cache.add("categories", "id-1", "shoes")

    assert cache.lookup_key("id-1") == "shoes"
    assert cache.lookup_id("categories", "shoes") == "id-1"
    assert cache.lookup_id("product-types", "shoes") is None


def test_add_all_and_len() -> None:
    cache = IdentifierCache()

    cache.add_all("categories", {"id-1": "a", "id-2": "b"})

    assert len(cache) == 2
    assert cache.lookup_id("categories", "b") == "id-2"


def test_invalidate_drops_every_entry() -> None:
    cache = IdentifierCache()
    cache.add("categories", "id-1", "shoes")

    cache.invalidate()

    assert len(cache) == 0
    assert cache.lookup_key("id-1") is None
    assert cache.lookup_id("categories", "shoes") is None


def test_concurrent_writers_do_not_lose_entries() -> None:
    cache = IdentifierCache()

    def writer(offset: int) -> None:
        for i in range(200):
            cache.add("categories", f"id-{offset}-{i}", f"key-{offset}-{i}")

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(cache) == 800
