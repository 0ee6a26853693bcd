"""Batch-sequential sync orchestrator."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from draftsync.core.contracts.actions import ActionComputer
from draftsync.core.contracts.catalog import Catalog
from draftsync.core.contracts.config import SyncOptions
from draftsync.core.contracts.exceptions import CatalogError
from draftsync.core.contracts.outcomes import (
    Created,
    Deferred,
    Failed,
    SyncOutcome,
    Unchanged,
    Updated,
)
from draftsync.core.contracts.resource import (
    ChangeOperation,
    Draft,
    Reference,
    Resource,
    iter_references,
    map_references,
)
from draftsync.core.contracts.sync import RunReport
from draftsync.core.engine.batching import divide
from draftsync.core.engine.cache import IdentifierCache
from draftsync.core.engine.dependencies import (
    DependencyResolver,
    PendingOperation,
    split_operations,
    strip_references,
)
from draftsync.core.engine.matching import MatchingService
from draftsync.core.engine.progress import NullSyncProgress, SyncProgress
from draftsync.core.engine.retry import ConflictRetryCoordinator, update_failed_reason
from draftsync.core.engine.statistics import StatisticsAccumulator

_LOG = logging.getLogger(__name__)


@dataclass
class _Run:
    statistics: StatisticsAccumulator = field(default_factory=StatisticsAccumulator)
    resolver: DependencyResolver = field(default_factory=DependencyResolver)
    results: dict[str, SyncOutcome] = field(default_factory=dict)


@dataclass
class _ResolvedDraft:
    draft: Draft
    missing: set[str]
    unknown: list[Reference]


class SyncOrchestrator:
    """Reconciles drafts of one kind against a catalog.

    Batches run strictly one after another so that resources created in batch N are
    visible to batch N+1. Drafts within a batch run concurrently, bounded by
    ``max_concurrency``. Failures are isolated per draft.
    """

    def __init__(
        self,
        catalog: Catalog,
        computer: ActionComputer,
        options: SyncOptions | None = None,
        *,
        cache: IdentifierCache | None = None,
        progress: SyncProgress | None = None,
        dry_run: bool = False,
    ) -> None:
        self._catalog = catalog
        self._computer = computer
        self._kind = computer.kind
        self._options = options or SyncOptions()
        self._cache = cache if cache is not None else IdentifierCache()
        self._progress: SyncProgress = progress or NullSyncProgress()
        self._dry_run = dry_run
        self._semaphore = asyncio.Semaphore(self._options.max_concurrency)
        self._matching = MatchingService(
            catalog,
            self._cache,
            self._kind,
            warn=self._options.apply_warning_callback,
            semaphore=self._semaphore,
        )
        self._coordinator = ConflictRetryCoordinator(catalog, self._kind)

    @property
    def cache(self) -> IdentifierCache:
        return self._cache

    async def sync(self, drafts: Sequence[Draft | None]) -> RunReport:
        run = _Run()
        self._progress.phase_start("Sync", total=len(drafts))
        try:
            valid = self._validate(drafts, run)
            batches = divide(valid, self._options.batch_size)
            for index, batch in enumerate(batches, start=1):
                _LOG.debug("processing %s batch %d/%d (%d drafts)", self._kind, index, len(batches), len(batch))
                await self._process_batch(batch, run)
                await self._replay_deferred(run)
            self._progress.phase_done("Sync")
        except BaseException as exc:
            self._progress.phase_error("Sync", exc)
            raise

        run.statistics.set_unresolved(run.resolver.unresolved())
        run.resolver.clear()
        report = run.statistics.report(run.results, dry_run=self._dry_run)
        _LOG.debug("%s", report.summary)
        return report

    def _validate(self, drafts: Sequence[Draft | None], run: _Run) -> list[Draft]:
        seen: set[str] = set()
        valid: list[Draft] = []
        for draft in drafts:
            if draft is None:
                self._record(run, None, Failed(f"Failed to process null {self._kind} draft."))
            elif not (draft.key or "").strip():
                self._record(
                    run,
                    None,
                    Failed(f"Failed to process {self._kind} draft without key. Key is required for resource matching."),
                )
            elif draft.kind != self._kind:
                self._record(
                    run,
                    draft.key,
                    Failed(
                        f"Failed to process draft with key: '{draft.key}'. "
                        f"Kind '{draft.kind}' is not '{self._kind}'."
                    ),
                )
            elif draft.key in seen:
                self._record(
                    run,
                    None,
                    Failed(f"Failed to process {self._kind} draft with duplicate key: '{draft.key}'."),
                )
            else:
                seen.add(draft.key)
                valid.append(draft)
        return valid

    async def _process_batch(self, batch: list[Draft], run: _Run) -> None:
        keys = [draft.key for draft in batch if draft.key is not None]

        try:
            await self._warm_reference_cache(batch)
        except CatalogError as exc:
            self._fail_batch(batch, run, "Failed to build a cache of keys to ids.", exc)
            return

        try:
            existing = await self._matching.match(keys)
        except CatalogError as exc:
            self._fail_batch(batch, run, f"Failed to fetch existing {self._kind} resources with keys: {keys}.", exc)
            return

        async with asyncio.TaskGroup() as tg:
            for draft in batch:
                tg.create_task(self._sync_draft_guarded(draft, existing.get(draft.key or ""), run))

    async def _warm_reference_cache(self, batch: list[Draft]) -> None:
        keys_by_kind: dict[str, set[str]] = {}
        for draft in batch:
            for ref in iter_references(draft.fields):
                if ref.id is None and ref.key:
                    keys_by_kind.setdefault(ref.type_id, set()).add(ref.key)
        for kind, keys in sorted(keys_by_kind.items()):
            await self._matching.resolve_ids(kind, sorted(keys))

    def _fail_batch(self, batch: list[Draft], run: _Run, reason: str, cause: BaseException) -> None:
        for draft in batch:
            self._record(run, draft.key, Failed(reason, cause))

    async def _sync_draft_guarded(self, draft: Draft, existing: Resource | None, run: _Run) -> None:
        async with self._semaphore:
            try:
                outcome = await self._sync_draft(draft, existing, run)
            except Exception as exc:
                _LOG.debug("%s draft '%s' raised", self._kind, draft.key, exc_info=True)
                outcome = Failed(f"Failed to sync {self._kind} draft with key: '{draft.key}'. Reason: {exc}", exc)
        self._record(run, draft.key, outcome)

    async def _sync_draft(self, draft: Draft, existing: Resource | None, run: _Run) -> SyncOutcome:
        resolved = self._resolve_references(draft)
        if resolved.unknown:
            described = ", ".join(f"{ref.type_id} '{ref.key}'" for ref in resolved.unknown)
            return Failed(
                f"Failed to resolve references on {self._kind} draft with key:'{draft.key}'. "
                f"Reason: no resource found for {described}."
            )
        if existing is None:
            return await self._create(resolved.draft, resolved.missing, run)
        return await self._update(existing, resolved.draft, resolved.missing, run)

    def _resolve_references(self, draft: Draft) -> _ResolvedDraft:
        missing: set[str] = set()
        unknown: list[Reference] = []

        def resolve(ref: Reference) -> Reference:
            if ref.id is None:
                resource_id = self._cache.lookup_id(ref.type_id, ref.key or "")
                if resource_id is not None:
                    return ref.with_id(resource_id)
                if ref.type_id == self._kind:
                    missing.add(ref.key or "")
                else:
                    unknown.append(ref)
                return ref
            if ref.key is None:
                key = self._cache.lookup_key(ref.id)
                if key is not None:
                    return ref.with_key(key)
            return ref

        fields = map_references(draft.fields, resolve)
        return _ResolvedDraft(draft=draft.model_copy(update={"fields": fields}), missing=missing, unknown=unknown)

    async def _create(self, draft: Draft, missing: set[str], run: _Run) -> SyncOutcome:
        payload: Draft | None = draft
        if missing:
            payload = draft.model_copy(update={"fields": strip_references(draft.fields, self._kind, missing)})
        payload = self._options.apply_before_create_callback(payload)
        if payload is None:
            return Unchanged()

        try:
            resource = await self._catalog.create(self._kind, payload)
        except CatalogError as exc:
            return Failed(f"Failed to create {self._kind} with key: '{draft.key}'. Reason: {exc}", exc)

        self._cache.add(self._kind, resource.id, draft.key or resource.key or "")
        if missing:
            _, deferred = split_operations(self._computer.compute(resource, draft), self._kind, missing)
            run.resolver.defer(draft.key or "", deferred, draft=draft)
        return Created(resource=resource)

    async def _update(self, existing: Resource, draft: Draft, missing: set[str], run: _Run) -> SyncOutcome:
        deferred: list[PendingOperation] = []

        def plan(current: Resource) -> list[ChangeOperation]:
            nonlocal deferred
            immediate, deferred = split_operations(self._computer.compute(current, draft), self._kind, missing)
            return self._options.apply_before_update_callback(immediate, draft, current)

        operations = plan(existing)
        if not operations:
            if deferred:
                run.resolver.defer(draft.key or "", deferred, draft=draft)
                return _deferred_outcome(deferred)
            return Unchanged()

        outcome = await self._coordinator.apply(existing, operations, plan)
        if deferred and isinstance(outcome, Updated | Unchanged):
            run.resolver.defer(draft.key or "", deferred, draft=draft)
            if isinstance(outcome, Unchanged):
                return _deferred_outcome(deferred)
        return outcome

    async def _replay_deferred(self, run: _Run) -> None:
        ready = run.resolver.ready(lambda key: self._cache.lookup_id(self._kind, key) is not None)
        if not ready:
            return

        _LOG.debug("replaying deferred operations for %d %s resource(s)", len(ready), self._kind)
        self._progress.phase_start("Resolve", total=len(ready))
        try:
            dependents = await self._matching.match(list(ready))
        except CatalogError as exc:
            self._options.apply_error_callback(
                f"Failed to fetch existing {self._kind} resources with keys: {sorted(ready)}.", exc
            )
            self._progress.phase_error("Resolve", exc)
            return

        async with asyncio.TaskGroup() as tg:
            for dependent_key, operations in ready.items():
                tg.create_task(self._replay(dependent_key, dependents.get(dependent_key), operations, run))
        self._progress.phase_done("Resolve")

    async def _replay(
        self,
        dependent_key: str,
        resource: Resource | None,
        operations: list[ChangeOperation],
        run: _Run,
    ) -> None:
        async with self._semaphore:
            try:
                outcome = await self._apply_deferred(dependent_key, resource, operations, run)
            except Exception as exc:
                _LOG.debug("replay of %s '%s' raised", self._kind, dependent_key, exc_info=True)
                outcome = Failed(update_failed_reason(self._kind, dependent_key, str(exc)), exc)
        run.resolver.remove(dependent_key, operations)
        self._settle_replay(run, dependent_key, outcome)
        self._progress.item_done("Resolve")

    async def _apply_deferred(
        self,
        dependent_key: str,
        resource: Resource | None,
        operations: list[ChangeOperation],
        run: _Run,
    ) -> SyncOutcome:
        if resource is None:
            return Failed(
                update_failed_reason(self._kind, dependent_key, "not found while resolving deferred references")
            )
        draft = run.resolver.draft_for(dependent_key)
        fields = {operation.field for operation in operations}

        def recompute(fresh: Resource) -> list[ChangeOperation]:
            resolved = self._resolve_references(draft)
            computed = self._computer.compute(fresh, resolved.draft)
            wanted = [operation for operation in computed if operation.field in fields]
            immediate, _ = split_operations(wanted, self._kind, resolved.missing)
            return self._options.apply_before_update_callback(immediate, draft, fresh)

        pending = self._options.apply_before_update_callback(
            [self._resolve_operation(operation) for operation in operations], draft, resource
        )
        if not pending:
            return Unchanged()
        return await self._coordinator.apply(resource, pending, recompute)

    def _settle_replay(self, run: _Run, dependent_key: str, outcome: SyncOutcome) -> None:
        previous = run.results.get(dependent_key)
        if isinstance(outcome, Failed):
            self._options.apply_error_callback(outcome.reason, outcome.cause)
            if previous is not None and not isinstance(previous, Failed):
                run.statistics.reclassify(previous, outcome)
                run.results[dependent_key] = outcome
        elif isinstance(outcome, Updated):
            if isinstance(previous, Deferred):
                run.statistics.promote_to_updated()
                run.results[dependent_key] = outcome
            elif isinstance(previous, Created):
                run.results[dependent_key] = Created(resource=outcome.resource)
            elif isinstance(previous, Updated):
                run.results[dependent_key] = Updated(
                    resource=outcome.resource,
                    operations=previous.operations + outcome.operations,
                )
        elif isinstance(previous, Deferred):
            run.results[dependent_key] = Unchanged()

    def _resolve_operation(self, operation: ChangeOperation) -> ChangeOperation:
        def resolve(ref: Reference) -> Reference:
            if ref.id is None:
                resource_id = self._cache.lookup_id(ref.type_id, ref.key or "")
                if resource_id is not None:
                    return ref.with_id(resource_id)
            return ref

        return operation.model_copy(update={"value": map_references(operation.value, resolve)})

    def _record(self, run: _Run, key: str | None, outcome: SyncOutcome) -> None:
        run.statistics.record(outcome)
        if key is not None:
            run.results[key] = outcome
        if isinstance(outcome, Failed):
            self._options.apply_error_callback(outcome.reason, outcome.cause)
        self._progress.item_done("Sync")


def _deferred_outcome(deferred: Sequence[PendingOperation]) -> Deferred:
    return Deferred(missing_keys=tuple(sorted({key for _, keys in deferred for key in keys})))
