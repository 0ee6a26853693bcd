"""Run report contracts."""

from __future__ import annotations

from dataclasses import dataclass, field

from draftsync.core.contracts.outcomes import SyncOutcome
from draftsync.core.contracts.resource import ChangeOperation

UnresolvedDependencies = dict[str, dict[str, list[ChangeOperation]]]


@dataclass(frozen=True)
class RunReport:
    processed: int
    created: int
    updated: int
    failed: int
    unresolved_dependencies: UnresolvedDependencies = field(default_factory=dict)
    results: dict[str, SyncOutcome] = field(default_factory=dict)
    elapsed_seconds: float = 0.0
    dry_run: bool = False

    @property
    def unchanged(self) -> int:
        return self.processed - self.created - self.updated - self.failed

    @property
    def drafts_with_missing_references(self) -> int:
        return len({dependent for dependents in self.unresolved_dependencies.values() for dependent in dependents})

    @property
    def summary(self) -> str:
        return (
            f"Summary: {self.processed} drafts were processed in total "
            f"({self.created} created, {self.updated} updated and {self.failed} failed to sync "
            f"and {self.drafts_with_missing_references} drafts with at least one reference "
            "to a missing sibling)."
        )
