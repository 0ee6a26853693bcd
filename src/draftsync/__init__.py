"""Public API surface for draftsync."""

__version__ = "0.1.0"

from draftsync.core.auth import create_token_resolver
from draftsync.core.catalogs import DryRunCatalog, HttpCatalog, create_catalog
from draftsync.core.config import load_config
from draftsync.core.contracts import (
    ActionComputer,
    AuthenticationError,
    Catalog,
    CatalogError,
    ChangeOperation,
    ConfigError,
    Created,
    Deferred,
    Draft,
    DraftLoadError,
    DraftSyncConfig,
    DraftSyncError,
    Failed,
    OperationType,
    Reference,
    Resource,
    RunReport,
    SyncError,
    SyncOptions,
    SyncOutcome,
    Unchanged,
    Updated,
)
from draftsync.core.engine import IdentifierCache, SyncOrchestrator, SyncProgress
from draftsync.core.kinds import create_action_computer
from draftsync.sdk import DraftSync, load_drafts

__all__ = [
    "ActionComputer",
    "AuthenticationError",
    "Catalog",
    "CatalogError",
    "ChangeOperation",
    "ConfigError",
    "Created",
    "Deferred",
    "Draft",
    "DraftLoadError",
    "DraftSync",
    "DraftSyncConfig",
    "DraftSyncError",
    "DryRunCatalog",
    "Failed",
    "HttpCatalog",
    "IdentifierCache",
    "OperationType",
    "Reference",
    "Resource",
    "RunReport",
    "SyncError",
    "SyncOptions",
    "SyncOrchestrator",
    "SyncOutcome",
    "SyncProgress",
    "Unchanged",
    "Updated",
    "__version__",
    "create_action_computer",
    "create_catalog",
    "create_token_resolver",
    "load_config",
    "load_drafts",
]
