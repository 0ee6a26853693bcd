"""Deferral of change operations that reference not-yet-existing siblings."""

from __future__ import annotations

import threading
from collections.abc import Callable, Collection, Sequence
from typing import Any

from draftsync.core.contracts.resource import ChangeOperation, Draft, iter_references
from draftsync.core.contracts.sync import UnresolvedDependencies

PendingOperation = tuple[ChangeOperation, frozenset[str]]


def unresolved_sibling_keys(value: Any, kind: str) -> set[str]:
    """Keys of same-kind references in *value* that carry no id, at any nesting depth."""
    return {ref.key for ref in iter_references(value) if ref.type_id == kind and ref.id is None and ref.key}


def split_operations(
    operations: Sequence[ChangeOperation],
    kind: str,
    missing: Collection[str],
) -> tuple[list[ChangeOperation], list[PendingOperation]]:
    """Separate operations that can be applied now from those waiting on *missing* keys.

    An operation following a deferred one on the same field is deferred with it,
    since it may rely on what the deferred operation establishes.
    """
    immediate: list[ChangeOperation] = []
    deferred: list[PendingOperation] = []
    blocked_fields: dict[str, frozenset[str]] = {}

    for operation in operations:
        keys = frozenset(unresolved_sibling_keys(operation.value, kind) & set(missing))
        keys |= blocked_fields.get(operation.field, frozenset())
        if keys:
            deferred.append((operation, keys))
            blocked_fields[operation.field] = keys
        else:
            immediate.append(operation)
    return immediate, deferred


def strip_references(fields: dict[str, Any], kind: str, missing: Collection[str]) -> dict[str, Any]:
    """Copy of *fields* without the values (or list elements) that hold a missing sibling reference."""
    missing_keys = set(missing)

    def holds_missing(value: Any) -> bool:
        return bool(unresolved_sibling_keys(value, kind) & missing_keys)

    stripped: dict[str, Any] = {}
    for name, value in fields.items():
        if isinstance(value, list):
            stripped[name] = [item for item in value if not holds_missing(item)]
        elif not holds_missing(value):
            stripped[name] = value
    return stripped


class DependencyResolver:
    """Single-run table of deferred operations, owned by the orchestrator.

    Each deferred operation remembers the set of missing keys it waits for. It
    becomes replayable once every one of those keys resolves. The draft that
    produced the operations is kept so a replay can recompute them.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: dict[str, list[PendingOperation]] = {}
        self._drafts: dict[str, Draft] = {}

    def defer(
        self,
        dependent_key: str,
        deferred: Sequence[PendingOperation],
        *,
        draft: Draft,
    ) -> None:
        if not deferred:
            return
        with self._lock:
            self._pending.setdefault(dependent_key, []).extend(deferred)
            self._drafts[dependent_key] = draft

    def draft_for(self, dependent_key: str) -> Draft:
        with self._lock:
            return self._drafts[dependent_key]

    def ready(self, is_resolved: Callable[[str], bool]) -> dict[str, list[ChangeOperation]]:
        """Operations per dependent key whose missing keys all resolve now, in original order."""
        with self._lock:
            snapshot = {key: list(items) for key, items in self._pending.items()}

        replayable: dict[str, list[ChangeOperation]] = {}
        for dependent_key, items in snapshot.items():
            operations = [operation for operation, keys in items if all(is_resolved(key) for key in keys)]
            if operations:
                replayable[dependent_key] = operations
        return replayable

    def remove(self, dependent_key: str, operations: Sequence[ChangeOperation]) -> None:
        done = {id(operation) for operation in operations}
        with self._lock:
            remaining = [item for item in self._pending.get(dependent_key, []) if id(item[0]) not in done]
            if remaining:
                self._pending[dependent_key] = remaining
            else:
                self._pending.pop(dependent_key, None)
                self._drafts.pop(dependent_key, None)

    def unresolved(self) -> UnresolvedDependencies:
        """Missing key -> dependent key -> operations waiting for it."""
        table: UnresolvedDependencies = {}
        with self._lock:
            for dependent_key, items in self._pending.items():
                for operation, keys in items:
                    for missing_key in sorted(keys):
                        table.setdefault(missing_key, {}).setdefault(dependent_key, []).append(operation)
        return table

    def clear(self) -> None:
        with self._lock:
            self._pending.clear()
            self._drafts.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)
