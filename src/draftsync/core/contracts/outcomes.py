"""Explicit result variants for catalog updates and per-draft sync outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field

from draftsync.core.contracts.resource import ChangeOperation, Resource

# Catalog update outcomes, consumed by the conflict-retry state machine.


@dataclass(frozen=True)
class Applied:
    resource: Resource


@dataclass(frozen=True)
class Conflict:
    message: str = "version mismatch"


@dataclass(frozen=True)
class Missing:
    message: str = "resource not found"


@dataclass(frozen=True)
class Rejected:
    message: str
    cause: BaseException | None = None


@dataclass(frozen=True)
class Transient:
    message: str
    cause: BaseException | None = None


UpdateOutcome = Applied | Conflict | Missing | Rejected | Transient

# Per-draft outcomes.


@dataclass(frozen=True)
class Created:
    resource: Resource


@dataclass(frozen=True)
class Updated:
    resource: Resource
    operations: tuple[ChangeOperation, ...] = ()


@dataclass(frozen=True)
class Unchanged:
    pass


@dataclass(frozen=True)
class Failed:
    reason: str
    cause: BaseException | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Deferred:
    missing_keys: tuple[str, ...]


SyncOutcome = Created | Updated | Unchanged | Failed | Deferred
