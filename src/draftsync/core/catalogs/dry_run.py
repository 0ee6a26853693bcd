"""Dry-run catalog: real reads, simulated writes."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass
from types import TracebackType
from typing import Any

from draftsync.core.contracts.catalog import Catalog
from draftsync.core.contracts.exceptions import CatalogError, TransientCatalogError
from draftsync.core.contracts.outcomes import Applied, Conflict, Missing, Rejected, Transient, UpdateOutcome
from draftsync.core.contracts.resource import (
    ChangeOperation,
    Draft,
    Resource,
    apply_operations,
    to_json_value,
)


@dataclass(frozen=True)
class DryRunOperation:
    """Deterministic dry-run operation log entry."""

    sequence: int
    name: str
    resource_id: str | None
    payload: dict[str, Any]


class DryRunCatalog(Catalog):
    """Catalog that never writes remotely.

    Reads go to *inner* (or see an empty catalog when there is none). Creates and
    updates are applied to local placeholders that later reads observe, so a run
    behaves as it would against the live catalog.
    """

    def __init__(self, inner: Catalog | None = None) -> None:
        self._inner = inner
        self._counter = 0
        self._local: dict[str, Resource] = {}
        self._operation_counter = 0
        self._operations: list[DryRunOperation] = []

    @property
    def operations(self) -> tuple[DryRunOperation, ...]:
        return tuple(self._operations)

    def _record_operation(self, name: str, resource_id: str | None, payload: dict[str, Any] | None = None) -> None:
        self._operation_counter += 1
        self._operations.append(
            DryRunOperation(
                sequence=self._operation_counter,
                name=name,
                resource_id=resource_id,
                payload=payload or {},
            )
        )

    async def __aenter__(self) -> DryRunCatalog:
        if self._inner is not None:
            await self._inner.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._inner is not None:
            await self._inner.__aexit__(exc_type, exc_val, exc_tb)

    async def fetch_by_keys(self, kind: str, keys: Collection[str]) -> list[Resource]:
        wanted = set(keys)
        remote = await self._inner.fetch_by_keys(kind, keys) if self._inner is not None and wanted else []
        merged = {resource.id: resource for resource in remote}
        for resource in self._local.values():
            if resource.kind == kind and resource.key in wanted:
                merged[resource.id] = resource
        return list(merged.values())

    async def fetch_by_id(self, kind: str, resource_id: str) -> Resource | None:
        local = self._local.get(resource_id)
        if local is not None:
            return local if local.kind == kind else None
        if self._inner is None:
            return None
        return await self._inner.fetch_by_id(kind, resource_id)

    async def create(self, kind: str, draft: Draft) -> Resource:
        self._counter += 1
        resource_id = f"dry-run-{self._counter}"
        self._record_operation(
            "create",
            resource_id,
            {"kind": kind, "key": draft.key, "fields": to_json_value(draft.fields)},
        )
        resource = Resource(id=resource_id, kind=kind, key=draft.key, version=1, fields=draft.fields)
        self._local[resource_id] = resource
        return resource

    async def update(
        self,
        kind: str,
        resource_id: str,
        expected_version: int,
        operations: Sequence[ChangeOperation],
    ) -> UpdateOutcome:
        self._record_operation(
            "update",
            resource_id,
            {
                "kind": kind,
                "version": expected_version,
                "actions": [operation.action for operation in operations],
            },
        )
        try:
            current = await self.fetch_by_id(kind, resource_id)
        except TransientCatalogError as exc:
            return Transient(str(exc), exc)
        except CatalogError as exc:
            return Rejected(str(exc), exc)
        if current is None:
            return Missing(f"{kind} '{resource_id}' not found")
        if current.version != expected_version:
            return Conflict(f"expected version {expected_version}, found {current.version}")

        updated = current.model_copy(
            update={
                "version": current.version + 1,
                "fields": apply_operations(current.fields, operations),
            }
        )
        self._local[resource_id] = updated
        return Applied(updated)
