"""SDK composition root for draftsync."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from draftsync.core.auth import create_token_resolver
from draftsync.core.catalogs import DryRunCatalog, create_catalog
from draftsync.core.config import load_config
from draftsync.core.contracts.actions import ActionComputer
from draftsync.core.contracts.catalog import Catalog
from draftsync.core.contracts.config import (
    BeforeCreateCallback,
    BeforeUpdateCallback,
    DraftSyncConfig,
    ErrorCallback,
    SyncOptions,
    WarningCallback,
)
from draftsync.core.contracts.exceptions import CatalogError, DraftSyncError, SyncError
from draftsync.core.contracts.resource import Draft
from draftsync.core.contracts.sync import RunReport
from draftsync.core.drafts import DraftLoader
from draftsync.core.engine import IdentifierCache, SyncOrchestrator
from draftsync.core.engine.progress import SyncProgress
from draftsync.core.kinds import create_action_computer

_LOG = logging.getLogger(__name__)


def load_drafts(path: str | Path, kind: str) -> list[Draft | None]:
    """Load drafts of *kind* from a JSON file."""
    return DraftLoader().load(Path(path), kind)


class DraftSync:
    """draftsync SDK public API.

    One instance owns one ``IdentifierCache`` that is reused across runs until
    ``invalidate_cache`` is called.
    """

    def __init__(
        self,
        *,
        config: DraftSyncConfig,
        computer: ActionComputer,
        catalog: Catalog | None = None,
        options: SyncOptions | None = None,
        cache: IdentifierCache | None = None,
        progress: SyncProgress | None = None,
    ) -> None:
        self._config = config
        self._computer = computer
        self._catalog = catalog
        self._options = options or SyncOptions.from_config(config)
        self._cache = cache if cache is not None else IdentifierCache()
        self._progress = progress

    @classmethod
    async def from_config(
        cls,
        config: DraftSyncConfig | str | Path,
        *,
        progress: SyncProgress | None = None,
        error_callback: ErrorCallback | None = None,
        warning_callback: WarningCallback | None = None,
        before_update_callback: BeforeUpdateCallback | None = None,
        before_create_callback: BeforeCreateCallback | None = None,
    ) -> DraftSync:
        if not isinstance(config, DraftSyncConfig):
            config = load_config(config)
        options = SyncOptions.from_config(
            config,
            error_callback=error_callback,
            warning_callback=warning_callback,
            before_update_callback=before_update_callback,
            before_create_callback=before_create_callback,
        )
        return cls(
            config=config,
            computer=create_action_computer(config.kind),
            options=options,
            progress=progress,
        )

    @property
    def cache(self) -> IdentifierCache:
        return self._cache

    def invalidate_cache(self) -> None:
        """Forget every key/id pair; the next run refetches from the catalog."""
        _LOG.debug("invalidating identifier cache (%d entries)", len(self._cache))
        self._cache.invalidate()

    async def sync(
        self,
        drafts: Sequence[Draft | None] | None = None,
        *,
        dry_run: bool = False,
    ) -> RunReport:
        loaded = list(drafts) if drafts is not None else load_drafts(self._config.drafts_path, self._config.kind)

        catalog = await self._resolve_catalog()
        cache = self._cache
        if dry_run:
            catalog = DryRunCatalog(catalog)
            # placeholder ids must not outlive the preview
            cache = IdentifierCache()
        orchestrator = SyncOrchestrator(
            catalog,
            self._computer,
            self._options,
            cache=cache,
            progress=self._progress,
            dry_run=dry_run,
        )

        try:
            async with catalog:
                return await orchestrator.sync(loaded)
        except DraftSyncError:
            raise
        except ExceptionGroup as group:
            error = _first_error(group)
            if isinstance(error, DraftSyncError):
                raise error from None
            raise SyncError(f"sync run aborted: {error}") from group
        except Exception as exc:
            raise SyncError(f"sync run aborted: {exc}") from exc

    async def _resolve_catalog(self) -> Catalog:
        if self._catalog is not None:
            return self._catalog

        token_resolver = create_token_resolver(self._config)
        token = await token_resolver.resolve()
        return create_catalog(self._config, token=token)


def _first_error(group: BaseExceptionGroup) -> BaseException:
    """First leaf of *group*, preferring catalog errors over anything else."""
    catalog_errors, _ = group.split(CatalogError)
    error: BaseException = (catalog_errors or group).exceptions[0]
    while isinstance(error, BaseExceptionGroup):
        error = error.exceptions[0]
    return error
