"""Exception hierarchy for draftsync."""

from __future__ import annotations


class DraftSyncError(Exception):
    """Base exception for all draftsync errors."""


class ConfigError(DraftSyncError):
    """Configuration loading or validation failure."""


class DraftLoadError(DraftSyncError):
    """Draft file loading/parsing failure."""


class SyncError(DraftSyncError):
    """Engine-level synchronization failure."""


class CatalogError(DraftSyncError):
    """Base remote catalog operation failure."""


class AuthenticationError(CatalogError):
    """Authentication/authorization failure."""


class TransientCatalogError(CatalogError):
    """Network, gateway or timeout failure. The caller may re-run later."""


class CatalogRejectedError(CatalogError):
    """The catalog refused a request on business grounds (validation, uniqueness)."""

    def __init__(self, message: str, *, status: int | None = None, detail: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.detail = detail


class DuplicateFieldError(CatalogRejectedError):
    """A unique field value already exists on another resource."""

    def __init__(self, message: str, *, field: str | None = None, status: int | None = None) -> None:
        super().__init__(message, status=status, detail=field)
        self.field = field
