"""In-memory catalog fake for tests."""

from __future__ import annotations

from collections.abc import Callable, Collection, Sequence

from draftsync.core.contracts.catalog import Catalog
from draftsync.core.contracts.exceptions import CatalogError
from draftsync.core.contracts.outcomes import Applied, Conflict, Missing, UpdateOutcome
from draftsync.core.contracts.resource import ChangeOperation, Draft, Resource, apply_operations


class FakeCatalog(Catalog):
    """In-memory catalog with deterministic ids, version checks and spy tracking.

    Failure injection:
        ``conflicts[id] = n`` answers the next *n* updates of *id* with a conflict and
        runs ``on_conflict(id)`` before each, to simulate a concurrent writer.
        ``fetch_by_keys_error`` / ``fetch_by_id_error`` make the reads raise.
        ``create_errors[key]`` makes the create of that draft key raise.
        ``update_outcomes[id]`` forces the outcome of updates to *id*.
    """

    def __init__(self) -> None:
        self.resources: dict[str, Resource] = {}
        self._next_number = 1

        self.fetch_by_keys_calls: list[tuple[str, list[str]]] = []
        self.fetch_by_id_calls: list[tuple[str, str]] = []
        self.create_calls: list[Draft] = []
        self.update_calls: list[tuple[str, int, list[ChangeOperation]]] = []

        self.conflicts: dict[str, int] = {}
        self.on_conflict: Callable[[str], None] | None = None
        self.fetch_by_keys_error: CatalogError | None = None
        self.fetch_by_id_error: CatalogError | None = None
        self.create_errors: dict[str, CatalogError] = {}
        self.update_outcomes: dict[str, UpdateOutcome] = {}

    async def __aenter__(self) -> FakeCatalog:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore[override]
        return None

    def seed(self, kind: str, key: str | None, fields: dict | None = None, *, version: int = 1) -> Resource:
        resource = Resource(id=self._new_id(kind), kind=kind, key=key, version=version, fields=fields or {})
        self.resources[resource.id] = resource
        return resource

    def edit(self, resource_id: str, **fields: object) -> Resource:
        """Concurrent change by another writer: new field values and a bumped version."""
        current = self.resources[resource_id]
        updated = current.model_copy(update={"version": current.version + 1, "fields": {**current.fields, **fields}})
        self.resources[resource_id] = updated
        return updated

    def by_key(self, kind: str, key: str) -> Resource:
        return next(r for r in self.resources.values() if r.kind == kind and r.key == key)

    def _new_id(self, kind: str) -> str:
        resource_id = f"{kind}-{self._next_number}"
        self._next_number += 1
        return resource_id

    async def fetch_by_keys(self, kind: str, keys: Collection[str]) -> list[Resource]:
        self.fetch_by_keys_calls.append((kind, list(keys)))
        if self.fetch_by_keys_error is not None:
            raise self.fetch_by_keys_error
        wanted = set(keys)
        return [r for r in self.resources.values() if r.kind == kind and r.key in wanted]

    async def fetch_by_id(self, kind: str, resource_id: str) -> Resource | None:
        self.fetch_by_id_calls.append((kind, resource_id))
        if self.fetch_by_id_error is not None:
            raise self.fetch_by_id_error
        resource = self.resources.get(resource_id)
        if resource is None or resource.kind != kind:
            return None
        return resource

    async def create(self, kind: str, draft: Draft) -> Resource:
        self.create_calls.append(draft)
        if draft.key in self.create_errors:
            raise self.create_errors[draft.key]
        resource = Resource(id=self._new_id(kind), kind=kind, key=draft.key, version=1, fields=draft.fields)
        self.resources[resource.id] = resource
        return resource

    async def update(
        self,
        kind: str,
        resource_id: str,
        expected_version: int,
        operations: Sequence[ChangeOperation],
    ) -> UpdateOutcome:
        self.update_calls.append((resource_id, expected_version, list(operations)))
        if resource_id in self.update_outcomes:
            return self.update_outcomes[resource_id]
        if self.conflicts.get(resource_id, 0) > 0:
            self.conflicts[resource_id] -= 1
            if self.on_conflict is not None:
                self.on_conflict(resource_id)
            return Conflict(f"version {expected_version} is stale")

        current = self.resources.get(resource_id)
        if current is None:
            return Missing(f"{kind} '{resource_id}' not found")
        if current.version != expected_version:
            return Conflict(f"expected {expected_version}, found {current.version}")

        updated = current.model_copy(
            update={"version": current.version + 1, "fields": apply_operations(current.fields, operations)}
        )
        self.resources[resource_id] = updated
        return Applied(updated)
