"""Core contracts-domain exports."""

from draftsync.core.contracts.actions import ActionComputer
from draftsync.core.contracts.catalog import Catalog
from draftsync.core.contracts.config import DraftSyncConfig, SyncOptions
from draftsync.core.contracts.exceptions import (
    AuthenticationError,
    CatalogError,
    CatalogRejectedError,
    ConfigError,
    DraftLoadError,
    DraftSyncError,
    DuplicateFieldError,
    SyncError,
    TransientCatalogError,
)
from draftsync.core.contracts.outcomes import (
    Applied,
    Conflict,
    Created,
    Deferred,
    Failed,
    Missing,
    Rejected,
    SyncOutcome,
    Transient,
    Unchanged,
    Updated,
    UpdateOutcome,
)
from draftsync.core.contracts.resource import ChangeOperation, Draft, OperationType, Reference, Resource
from draftsync.core.contracts.sync import RunReport

__all__ = [
    "ActionComputer",
    "Applied",
    "AuthenticationError",
    "Catalog",
    "CatalogError",
    "CatalogRejectedError",
    "ChangeOperation",
    "ConfigError",
    "Conflict",
    "Created",
    "Deferred",
    "Draft",
    "DraftLoadError",
    "DraftSyncConfig",
    "DraftSyncError",
    "DuplicateFieldError",
    "Failed",
    "Missing",
    "OperationType",
    "Reference",
    "Rejected",
    "Resource",
    "RunReport",
    "SyncError",
    "SyncOptions",
    "SyncOutcome",
    "Transient",
    "TransientCatalogError",
    "Unchanged",
    "UpdateOutcome",
    "Updated",
]
