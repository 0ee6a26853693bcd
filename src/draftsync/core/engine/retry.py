"""Bounded refetch-and-retry around optimistic-concurrency updates."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from draftsync.core.contracts.catalog import Catalog
from draftsync.core.contracts.exceptions import CatalogError
from draftsync.core.contracts.outcomes import (
    Applied,
    Conflict,
    Failed,
    Missing,
    Rejected,
    SyncOutcome,
    Transient,
    Unchanged,
    Updated,
)
from draftsync.core.contracts.resource import ChangeOperation, Resource

_LOG = logging.getLogger(__name__)

CONFLICT_PERSISTED = "conflict persisted after retry"
REFETCH_NOT_FOUND = "not found while retrying after concurrency conflict"
REFETCH_FAILED = "failed to fetch while retrying after concurrency conflict"

Recompute = Callable[[Resource], list[ChangeOperation]]


def update_failed_reason(kind: str, key: str | None, reason: str) -> str:
    return f"Failed to update {kind} with key: '{key}'. Reason: {reason}"


class ConflictRetryCoordinator:
    """Submits an update and resolves version conflicts by refetching.

    A conflict refetches the resource by id, recomputes the operations against the
    fresh state through *recompute* and submits once more. Any other failure is
    terminal immediately.
    """

    def __init__(self, catalog: Catalog, kind: str, *, max_retries: int = 1) -> None:
        self._catalog = catalog
        self._kind = kind
        self._max_retries = max_retries

    async def apply(
        self,
        existing: Resource,
        operations: Sequence[ChangeOperation],
        recompute: Recompute,
    ) -> SyncOutcome:
        current = existing
        pending = list(operations)
        retries = 0

        while True:
            outcome = await self._catalog.update(self._kind, current.id, current.version, pending)

            if isinstance(outcome, Applied):
                return Updated(resource=outcome.resource, operations=tuple(pending))

            if isinstance(outcome, Conflict):
                if retries >= self._max_retries:
                    return self._failed(current, CONFLICT_PERSISTED)
                retries += 1
                _LOG.debug("version conflict on %s '%s', refetching", self._kind, current.key)
                try:
                    fresh = await self._catalog.fetch_by_id(self._kind, current.id)
                except CatalogError as exc:
                    return self._failed(current, REFETCH_FAILED, exc)
                if fresh is None:
                    return self._failed(current, REFETCH_NOT_FOUND)
                pending = recompute(fresh)
                if not pending:
                    return Unchanged()
                current = fresh
                continue

            if isinstance(outcome, Missing):
                return self._failed(current, f"not found: {outcome.message}")
            if isinstance(outcome, Rejected | Transient):
                return self._failed(current, outcome.message, outcome.cause)
            raise TypeError(f"unexpected update outcome: {outcome!r}")

    def _failed(self, resource: Resource, reason: str, cause: BaseException | None = None) -> Failed:
        return Failed(reason=update_failed_reason(self._kind, resource.key, reason), cause=cause)
