"""Thread-safe run statistics."""

from __future__ import annotations

import copy
import threading
import time

from draftsync.core.contracts.outcomes import Created, Failed, SyncOutcome, Updated
from draftsync.core.contracts.sync import RunReport, UnresolvedDependencies


class StatisticsAccumulator:
    """Counts each draft exactly once: ``processed`` plus its outcome counter.

    ``Unchanged`` and ``Deferred`` drafts only increment ``processed``.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._processed = 0
        self._created = 0
        self._updated = 0
        self._failed = 0
        self._unresolved: UnresolvedDependencies = {}
        self._started = time.monotonic()

    def record(self, outcome: SyncOutcome) -> None:
        with self._lock:
            self._processed += 1
            self._count(outcome, 1)

    def reclassify(self, previous: SyncOutcome, outcome: SyncOutcome) -> None:
        """Move an already recorded draft from the *previous* counter to the one of *outcome*."""
        with self._lock:
            self._count(previous, -1)
            self._count(outcome, 1)

    def _count(self, outcome: SyncOutcome, delta: int) -> None:
        if isinstance(outcome, Created):
            self._created += delta
        elif isinstance(outcome, Updated):
            self._updated += delta
        elif isinstance(outcome, Failed):
            self._failed += delta

    def promote_to_updated(self) -> None:
        """A previously deferred draft got its operations applied by a replay."""
        with self._lock:
            self._updated += 1

    def set_unresolved(self, unresolved: UnresolvedDependencies) -> None:
        with self._lock:
            self._unresolved = copy.deepcopy(unresolved)

    @property
    def processed(self) -> int:
        with self._lock:
            return self._processed

    @property
    def created(self) -> int:
        with self._lock:
            return self._created

    @property
    def updated(self) -> int:
        with self._lock:
            return self._updated

    @property
    def failed(self) -> int:
        with self._lock:
            return self._failed

    def report(self, results: dict[str, SyncOutcome] | None = None, *, dry_run: bool = False) -> RunReport:
        with self._lock:
            return RunReport(
                processed=self._processed,
                created=self._created,
                updated=self._updated,
                failed=self._failed,
                unresolved_dependencies=copy.deepcopy(self._unresolved),
                results=dict(results or {}),
                elapsed_seconds=time.monotonic() - self._started,
                dry_run=dry_run,
            )
